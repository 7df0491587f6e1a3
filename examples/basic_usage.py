"""Basic usage example for the federated search engine."""

import asyncio
import json
from pathlib import Path
from typing import Dict

from federated_search import FederatedSearchService, InMemoryRecordProvider

SAMPLE_FILE = Path(__file__).parent / "sample_data" / "sample_records.json"

ORDER_BY = {
    "presentation": "date",
    "event": "date",
    "blog": "published_at",
}


def load_providers(data_file: Path) -> Dict[str, InMemoryRecordProvider]:
    """Build one in-memory provider per entity type from the sample file."""
    with open(data_file) as f:
        data = json.load(f)

    return {
        entity_type: InMemoryRecordProvider(records, order_by=ORDER_BY.get(entity_type))
        for entity_type, records in data.items()
    }


async def basic_search_demo():
    """Demonstrate basic search functionality."""
    print("Federated Search - Basic Usage Demo")
    print("=" * 50)

    print("\n1. Loading sample records...")
    if not SAMPLE_FILE.exists():
        print("   Generating sample data...")
        from sample_data.generate_sample_data import save_sample_records
        save_sample_records(SAMPLE_FILE.parent)

    providers = load_providers(SAMPLE_FILE)
    print(f"   Loaded providers for {len(providers)} entity types")

    print("\n2. Initializing search service...")
    async with FederatedSearchService.create(providers, log_level="WARNING") as service:

        print("\n3. Performing searches...")
        search_examples = [
            ("climate", "Everything about climate"),
            ("recyclng", "Typo-tolerant match for recycling"),
            ("volunteer", "Volunteers, FAQs and resources"),
            ("lincoln", "Presentations and requests for one school"),
        ]

        for query_text, description in search_examples:
            print(f"\n   Query: '{query_text}' ({description})")

            response = await service.search_text(query_text, limit=3)

            print(f"   {response.total} results in {response.query_time:.1f}ms")
            for i, result in enumerate(response.results, 1):
                print(f"     {i}. [{result.type.value}] {result.title} - Score: {result.relevance_score:.3f}")
                print(f"        {result.url}")
                for highlight in result.highlights:
                    print(f"        ...{highlight}...")
            print(f"   Facets by type: {response.facets.types}")

        print("\n4. Filtering and sorting...")

        response = await service.search_text(
            "presentation",
            types=["presentation"],
            filters={"status": "completed"},
            sort_by="date"
        )
        print(f"   Completed presentations, newest first: {response.total}")
        for result in response.results[:3]:
            print(f"     - {result.metadata.get('date')}: {result.title}")

        response = await service.search_text("workshop", sort_by="title", fuzzy_threshold=0.0)
        print(f"   Exact 'workshop' matches by title: {[r.title for r in response.results[:5]]}")

        print("\n5. Suggestions...")
        for partial in ("cl", "recy", "vol"):
            print(f"   '{partial}' -> {await service.suggest(partial)}")
        print(f"   Trending: {await service.trending(5)}")

        print("\n6. Health check...")
        health = await service.health_check()
        print(f"   System status: {health['status']}")

        final_stats = await service.get_stats()
        print(f"   Total searches performed: {final_stats['engine']['total_searches']}")
        print(f"   Average search time: {final_stats['engine']['avg_search_time']:.1f}ms")

    print("\nDemo completed successfully!")


if __name__ == "__main__":
    asyncio.run(basic_search_demo())
