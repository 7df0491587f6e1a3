"""Generate realistic raw records for every searchable entity type."""

import json
import random
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List

from federated_search.models.entity import EntityType

SCHOOLS = [
    {"id": "sch_001", "name": "Lincoln Elementary", "city": "Austin", "state": "TX", "district": "Austin ISD"},
    {"id": "sch_002", "name": "Roosevelt Middle School", "city": "Dallas", "state": "TX", "district": "Dallas ISD"},
    {"id": "sch_003", "name": "Jefferson Academy", "city": "Houston", "state": "TX", "district": "Houston ISD"},
    {"id": "sch_004", "name": "Greenwood Elementary", "city": "Denver", "state": "CO", "district": "Denver Public Schools"},
    {"id": "sch_005", "name": "Lakeside STEM School", "city": "Seattle", "state": "WA", "district": "Seattle Public Schools"},
]

TEAMS = [
    {"id": "team_001", "name": "Green Team", "description": "Climate and recycling presenters", "status": "active", "location": "Austin", "member_count": 6},
    {"id": "team_002", "name": "Blue Team", "description": "Ocean and water conservation", "status": "active", "location": "Houston", "member_count": 4},
    {"id": "team_003", "name": "Solar Squad", "description": "Renewable energy workshops", "status": "forming", "location": "Denver", "member_count": 2},
]

TOPICS = [
    "Climate change basics",
    "Recycling and composting",
    "Ocean pollution",
    "Renewable energy",
    "Water conservation",
    "Biodiversity in your backyard",
]

FIRST_NAMES = ["Alice", "Marcus", "Priya", "Diego", "Hannah", "Kenji", "Fatima", "Liam"]
LAST_NAMES = ["Johnson", "Rivera", "Patel", "Nguyen", "Okafor", "Schmidt", "Garcia", "Kim"]


def _date(days_back: int) -> str:
    return (datetime.now() - timedelta(days=random.randint(0, days_back))).strftime("%Y-%m-%d")


def generate_presentations(count: int = 20) -> List[Dict[str, Any]]:
    """Generate presentations joined with their school and team."""
    presentations = []
    for i in range(count):
        school = random.choice(SCHOOLS)
        team = random.choice(TEAMS)
        presentations.append({
            "id": f"pres_{i + 1:03d}",
            "date": _date(400),
            "status": random.choice(["completed", "scheduled", "pending"]),
            "grade_level": random.choice(["3rd", "5th", "7th", "9th"]),
            "notes": f"{random.choice(TOPICS)} presentation for {school['name']}",
            "schools": {"name": school["name"], "city": school["city"], "state": school["state"]},
            "teams": {"name": team["name"]},
        })
    return presentations


def generate_volunteers(count: int = 15) -> List[Dict[str, Any]]:
    """Generate volunteer profiles; a few admins are mixed in."""
    volunteers = []
    for i in range(count):
        first = random.choice(FIRST_NAMES)
        last = random.choice(LAST_NAMES)
        team = random.choice(TEAMS)
        volunteers.append({
            "id": f"vol_{i + 1:03d}",
            "name": f"{first} {last}",
            "email": f"{first.lower()}.{last.lower()}@example.org",
            "bio": f"Passionate about {random.choice(TOPICS).lower()}",
            "status": random.choice(["active", "active", "inactive"]),
            "role": "admin" if i % 7 == 0 else "volunteer",
            "teams": {"name": team["name"]},
        })
    return volunteers


def generate_teacher_requests(count: int = 10) -> List[Dict[str, Any]]:
    """Generate teacher presentation requests."""
    requests = []
    for i in range(count):
        school = random.choice(SCHOOLS)
        requests.append({
            "id": f"app_{i + 1:03d}",
            "contact_name": f"{random.choice(['Ms.', 'Mr.', 'Dr.'])} {random.choice(LAST_NAMES)}",
            "contact_email": f"teacher{i + 1}@{school['name'].split()[0].lower()}.edu",
            "school_name": school["name"],
            "grade_level": random.choice(["3rd", "5th", "7th"]),
            "message": f"We would love a session on {random.choice(TOPICS).lower()}.",
            "status": random.choice(["pending", "approved"]),
        })
    return requests


def generate_events(count: int = 8) -> List[Dict[str, Any]]:
    """Generate community events."""
    kinds = ["workshop", "cleanup", "fundraiser", "training"]
    events = []
    for i in range(count):
        topic = random.choice(TOPICS)
        kind = random.choice(kinds)
        events.append({
            "id": f"evt_{i + 1:03d}",
            "title": f"{topic} {kind.title()}",
            "description": f"A community {kind} about {topic.lower()}",
            "date": _date(200),
            "type": kind,
            "location": random.choice(SCHOOLS)["city"],
        })
    return events


def generate_faqs() -> List[Dict[str, Any]]:
    return [
        {"id": "faq_001", "question": "How do I become a volunteer?", "answer": "Submit the volunteer application form.", "category": "volunteering", "is_published": True},
        {"id": "faq_002", "question": "How can my school request a presentation?", "answer": "Teachers fill out the presentation request form.", "category": "schools", "is_published": True},
        {"id": "faq_003", "question": "How are volunteer hours tracked?", "answer": "Hours are logged after each presentation.", "category": "volunteering", "is_published": True},
        {"id": "faq_004", "question": "Draft: team formation rules", "answer": "TBD", "category": "teams", "is_published": False},
    ]


def generate_blog_posts(count: int = 6) -> List[Dict[str, Any]]:
    posts = []
    for i in range(count):
        topic = random.choice(TOPICS)
        posts.append({
            "id": f"post_{i + 1:03d}",
            "title": f"What we learned teaching {topic.lower()}",
            "content": f"This month our interns visited classrooms to teach {topic.lower()}. "
                       "Students asked great questions and planned their own projects.",
            "author_name": f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}",
            "published_at": f"{_date(300)}T12:00:00Z",
            "tags": [topic.split()[0].lower(), "interns"],
        })
    return posts


def generate_resources() -> List[Dict[str, Any]]:
    return [
        {"id": "res_001", "title": "Climate presentation slides", "description": "Slide deck for grades 3-5", "category": "presentation materials", "audience": "volunteers", "tags": ["climate", "slides"]},
        {"id": "res_002", "title": "Recycling activity worksheet", "description": "Printable classroom activity", "category": "activities", "audience": "teachers", "tags": ["recycling", "worksheet"]},
        {"id": "res_003", "title": "Volunteer onboarding guide", "description": "Everything new volunteers need", "category": "training", "audience": "volunteers", "tags": ["onboarding"]},
    ]


def generate_all() -> Dict[str, List[Dict[str, Any]]]:
    """Raw records keyed by entity type name."""
    return {
        EntityType.PRESENTATION.value: generate_presentations(),
        EntityType.VOLUNTEER.value: generate_volunteers(),
        EntityType.TEACHER.value: generate_teacher_requests(),
        EntityType.SCHOOL.value: [dict(s) for s in SCHOOLS],
        EntityType.EVENT.value: generate_events(),
        EntityType.FAQ.value: generate_faqs(),
        EntityType.BLOG.value: generate_blog_posts(),
        EntityType.RESOURCE.value: generate_resources(),
        EntityType.TEAM.value: [dict(t) for t in TEAMS],
    }


def save_sample_records(output_dir: Path) -> Path:
    """Generate and save records for every entity type."""
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / "sample_records.json"

    with open(output_file, "w") as f:
        json.dump(generate_all(), f, indent=2)

    return output_file


if __name__ == "__main__":
    random.seed(42)
    path = save_sample_records(Path(__file__).parent)
    print(f"Sample records saved to {path}")
