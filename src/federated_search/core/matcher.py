"""Approximate multi-field string matching over in-memory records."""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..models.record import SearchableRecord
from ..utils.text_processing import TextProcessor

logger = logging.getLogger(__name__)

# Scan order matters: highlights are extracted in this field order.
DEFAULT_FIELD_WEIGHTS: Dict[str, float] = {
    "title": 0.7,
    "description": 0.3,
    "content": 0.2,
    "tags": 0.1,
}

# Exact field matches are floored here so they still carry their weight.
MIN_FIELD_DISTANCE = 0.001


@dataclass(frozen=True)
class MatcherConfig:
    """
    Tuning knobs for FuzzyMatcher.

    Attributes:
        field_weights: Relative weight per field, strictly decreasing
            title > description > content > tags
        threshold: Maximum per-field distance (0.0 = exact substring only,
            1.0 = matches almost anything)
        distance: Longest span, in characters, an approximate occurrence may
            cover; never shorter than the query itself
        min_match_char_length: Shortest query and shortest matched span
    """
    field_weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_FIELD_WEIGHTS))
    threshold: float = 0.3
    distance: int = 100
    min_match_char_length: int = 2

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not 0.0 <= self.threshold <= 1.0:
            raise ValueError("Threshold must be between 0.0 and 1.0")
        if self.distance < 1:
            raise ValueError("Distance must be positive")
        if self.min_match_char_length < 1:
            raise ValueError("Minimum match length must be positive")
        if not self.field_weights:
            raise ValueError("At least one field weight is required")

        unknown = set(self.field_weights) - set(DEFAULT_FIELD_WEIGHTS)
        if unknown:
            raise ValueError(f"Unknown matchable fields: {sorted(unknown)}")
        if any(weight <= 0 for weight in self.field_weights.values()):
            raise ValueError("Field weights must be positive")

        ordered = [self.field_weights[name] for name in DEFAULT_FIELD_WEIGHTS if name in self.field_weights]
        if any(a <= b for a, b in zip(ordered, ordered[1:])):
            raise ValueError("Field weights must decrease: title > description > content > tags")

    def with_threshold(self, threshold: float) -> 'MatcherConfig':
        return replace(self, threshold=threshold)


@dataclass
class FieldMatch:
    """
    Best approximate occurrence of the query inside one field value.

    Attributes:
        field: Field name (title, description, content or tags)
        value: The original, un-lowercased field value
        indices: Half-open (start, end) spans of the occurrence in value
        distance: errors / query length, 0.0 for an exact substring
        errors: Edit operations needed to turn the span into the query
    """
    field: str
    value: str
    indices: List[Tuple[int, int]]
    distance: float
    errors: int


@dataclass
class RecordMatch:
    """A record that matched in at least one field."""
    record: SearchableRecord
    score: float
    raw_distance: float
    matches: List[FieldMatch] = field(default_factory=list)


class FuzzyMatcher:
    """
    Weighted, typo-tolerant substring matcher.

    Builds no persistent state: every call to search() scans the records
    it is given. Per field it finds the span with the fewest edits to the
    query (semi-global edit distance, bit-parallel), accepts it when
    errors / len(query) is within the threshold, and blends the matched
    fields into one score weighted by field weight and field length.

    Example:
        >>> matcher = FuzzyMatcher(MatcherConfig(threshold=0.3))
        >>> matches = matcher.search(records, "climat")
    """

    def __init__(self, config: Optional[MatcherConfig] = None):
        """
        Initialize fuzzy matcher.

        Args:
            config: Matching configuration (defaults apply when omitted)
        """
        self.config = config or MatcherConfig()
        self.text_processor = TextProcessor()

        total_weight = sum(self.config.field_weights.values())
        self._weights = {
            name: weight / total_weight
            for name, weight in self.config.field_weights.items()
        }

    def search(self, records: List[SearchableRecord], query: str) -> List[RecordMatch]:
        """
        Match records against a query.

        Args:
            records: Candidate records, in the order ties should resolve
            query: Free-text query

        Returns:
            Matching records ordered by descending score; equal scores keep
            input order. An empty or too-short query matches nothing.
        """
        pattern = self.text_processor.clean_text(query)
        if len(pattern) < self.config.min_match_char_length:
            return []

        matches: List[RecordMatch] = []
        for record in records:
            match = self.match_record(record, pattern)
            if match is not None:
                matches.append(match)

        if not matches:
            return []

        raw_distances = np.array([match.raw_distance for match in matches])
        order = np.argsort(raw_distances, kind="stable")

        logger.debug(f"Matched {len(matches)}/{len(records)} records for '{pattern[:50]}'")
        return [matches[i] for i in order]

    def match_record(self, record: SearchableRecord, pattern: str) -> Optional[RecordMatch]:
        """
        Match one record against an already cleaned pattern.

        Returns:
            RecordMatch, or None when no field is within the threshold
        """
        field_matches: List[FieldMatch] = []
        distances: List[float] = []
        exponents: List[float] = []

        for name, weight in self._weights.items():
            best: Optional[FieldMatch] = None

            for value in record.field_values(name):
                occurrence = self._best_occurrence(pattern, value.lower())
                if occurrence is None:
                    continue

                errors, start, end = occurrence
                field_match = FieldMatch(
                    field=name,
                    value=value,
                    indices=[(start, end)],
                    distance=errors / len(pattern),
                    errors=errors
                )
                field_matches.append(field_match)

                if best is None or field_match.distance < best.distance:
                    best = field_match

            if best is not None:
                distances.append(max(best.distance, MIN_FIELD_DISTANCE))
                exponents.append(weight * self.text_processor.field_norm(best.value))

        if not field_matches:
            return None

        raw_distance = float(np.prod(np.power(np.array(distances), np.array(exponents))))
        score = float(np.clip(1.0 - raw_distance, 0.0, 1.0))

        return RecordMatch(
            record=record,
            score=score,
            raw_distance=raw_distance,
            matches=field_matches
        )

    def _best_occurrence(self, pattern: str, text: str) -> Optional[Tuple[int, int, int]]:
        """
        Find the span of text closest to pattern.

        Exact substrings are accepted at any length. Approximate spans may
        cover at most `distance` characters, or the query length when the
        query is longer than that.

        Returns:
            (errors, start, end) of the accepted occurrence, or None
        """
        m = len(pattern)
        n = len(text)
        if n == 0:
            return None

        max_errors = int(self.config.threshold * m + 1e-9)

        if m > n:
            # Query longer than the field: compare against the whole field
            errors = _levenshtein(pattern, text)
            if errors > max_errors:
                return None
            return self._accept(errors, 0, n, m)

        index = text.find(pattern)
        if index >= 0:
            return 0, index, index + m
        if max_errors == 0:
            return None

        # Fewest errors first, earliest end among equals
        for errors, end in _candidate_ends(pattern, text, max_errors):
            window_start = max(0, end - m - errors)
            start, errors = _align_start(pattern, text[window_start:end])
            occurrence = self._accept(errors, window_start + start, end, m)
            if occurrence is not None:
                return occurrence
        return None

    def _accept(self, errors: int, start: int, end: int, query_length: int) -> Optional[Tuple[int, int, int]]:
        span = end - start
        if span < self.config.min_match_char_length:
            return None
        if span > max(self.config.distance, query_length):
            return None
        return errors, start, end


def _candidate_ends(pattern: str, text: str, max_errors: int) -> List[Tuple[int, int]]:
    """
    Bit-parallel semi-global edit distance (Myers, 1999).

    Returns:
        (errors, end) for every end position whose best occurrence is
        within max_errors, ordered by errors then end
    """
    m = len(pattern)
    mask = (1 << m) - 1
    high = 1 << (m - 1)

    peq: Dict[str, int] = {}
    for i, char in enumerate(pattern):
        peq[char] = peq.get(char, 0) | (1 << i)

    pv = mask
    mv = 0
    score = m
    scores = np.empty(len(text), dtype=np.int64)

    for j, char in enumerate(text):
        eq = peq.get(char, 0)
        xv = eq | mv
        xh = ((((eq & pv) + pv) ^ pv) | eq) & mask
        ph = (mv | ~(xh | pv)) & mask
        mh = pv & xh

        if ph & high:
            score += 1
        elif mh & high:
            score -= 1

        ph = (ph << 1) & mask
        mh = (mh << 1) & mask
        pv = (mh | ~(xv | ph)) & mask
        mv = ph & xv

        scores[j] = score

    ends = np.flatnonzero(scores <= max_errors)
    order = np.lexsort((ends, scores[ends]))
    return [(int(scores[ends[i]]), int(ends[i]) + 1) for i in order]


def _align_start(pattern: str, window: str) -> Tuple[int, int]:
    """
    Find where the best occurrence ending at the end of window begins.

    Returns:
        (start, errors) with start relative to window
    """
    m = len(pattern)
    prev = list(range(m + 1))
    prev_start = [0] * (m + 1)

    for j, char in enumerate(window, 1):
        cur = [0] * (m + 1)
        cur_start = [j] * (m + 1)
        for i in range(1, m + 1):
            cost = prev[i - 1] + (pattern[i - 1] != char)
            start = prev_start[i - 1]
            if prev[i] + 1 < cost:
                cost = prev[i] + 1
                start = prev_start[i]
            if cur[i - 1] + 1 < cost:
                cost = cur[i - 1] + 1
                start = cur_start[i - 1]
            cur[i] = cost
            cur_start[i] = start
        prev, prev_start = cur, cur_start

    return prev_start[m], prev[m]


def _levenshtein(a: str, b: str) -> int:
    """Classic edit distance between two whole strings."""
    prev = list(range(len(b) + 1))
    for i, char_a in enumerate(a, 1):
        cur = [i] + [0] * len(b)
        for j, char_b in enumerate(b, 1):
            cur[j] = min(
                prev[j] + 1,
                cur[j - 1] + 1,
                prev[j - 1] + (char_a != char_b)
            )
        prev = cur
    return prev[-1]
