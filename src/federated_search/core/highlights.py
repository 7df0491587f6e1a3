"""Snippet extraction around matched query terms."""

from typing import List, Optional

from ..utils.text_processing import TextProcessor
from .matcher import FieldMatch

MAX_HIGHLIGHTS = 3

# Tokens this short are too noisy to highlight
MIN_TOKEN_LENGTH = 3


class HighlightExtractor:
    """Builds short human-readable snippets from a record's field matches."""

    def __init__(
        self,
        text_processor: Optional[TextProcessor] = None,
        max_highlights: int = MAX_HIGHLIGHTS
    ):
        self.text_processor = text_processor or TextProcessor()
        self.max_highlights = max_highlights

    def extract(self, matches: List[FieldMatch], query: str) -> List[str]:
        """
        Extract snippets around query tokens found in matched fields.

        Fields are scanned in match order (title, description, content,
        tags). For every query token of at least three characters found
        case-insensitively in a field value, a window of about 40
        characters centered on its first occurrence is taken. Identical
        snippets are kept once.

        Args:
            matches: Field matches produced by the matcher
            query: The original query

        Returns:
            At most three snippets; empty when no token qualifies
        """
        tokens = [
            token for token in self.text_processor.tokenize(query)
            if len(token) >= MIN_TOKEN_LENGTH
        ]
        if not tokens:
            return []

        highlights: List[str] = []
        for match in matches:
            if not match.value:
                continue
            lowered = match.value.lower()
            for token in tokens:
                index = lowered.find(token)
                if index < 0:
                    continue
                snippet = self.text_processor.snippet_around(match.value, index, len(token))
                if snippet not in highlights:
                    highlights.append(snippet)
                if len(highlights) >= self.max_highlights:
                    return highlights

        return highlights
