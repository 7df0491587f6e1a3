"""Text processing utilities for record normalization and matching."""

import math
import re
from datetime import date, datetime
from typing import Any, List, Optional


class TextProcessor:
    """Text helpers shared by the normalizers, matcher and highlighter."""
    
    def __init__(self, snippet_radius: int = 20):
        """
        Initialize text processor.
        
        Args:
            snippet_radius: Characters kept on each side of a highlighted term
        """
        self.snippet_radius = snippet_radius
        self.whitespace_pattern = re.compile(r'\s+')
    
    def clean_text(self, text: str) -> str:
        """
        Lower-case and collapse whitespace.
        
        Args:
            text: Raw text
            
        Returns:
            Normalized text used for matching
        """
        if not text:
            return ""
        return self.whitespace_pattern.sub(' ', text.lower()).strip()
    
    def tokenize(self, text: str) -> List[str]:
        """Split text on whitespace, lower-cased."""
        if not text:
            return []
        return text.lower().split()
    
    def field_norm(self, text: str) -> float:
        """
        Field-length norm: 1/sqrt(number of tokens).
        
        Short fields that match weigh more than long ones that match.
        """
        num_tokens = len(self.tokenize(text))
        if num_tokens == 0:
            return 1.0
        return round(1.0 / math.sqrt(num_tokens), 3)
    
    def flatten(self, value: Any) -> str:
        """
        Flatten a raw record into one searchable text blob.
        
        Nested mappings and sequences are walked depth first; None values
        are dropped and dates are rendered in ISO format.
        
        Args:
            value: Raw record or any nested value
            
        Returns:
            Space-joined string of all scalar values
        """
        parts: List[str] = []
        self._collect(value, parts)
        return " ".join(parts)
    
    def _collect(self, value: Any, parts: List[str]) -> None:
        if value is None:
            return
        if isinstance(value, dict):
            for item in value.values():
                self._collect(item, parts)
        elif isinstance(value, (list, tuple, set)):
            for item in value:
                self._collect(item, parts)
        elif isinstance(value, (datetime, date)):
            parts.append(value.isoformat())
        else:
            text = str(value).strip()
            if text:
                parts.append(text)
    
    def join_present(self, *values: Any, separator: str = " ") -> str:
        """Join the non-empty values, skipping None and blanks."""
        return separator.join(
            str(v).strip() for v in values if v is not None and str(v).strip()
        )
    
    def snippet_around(self, text: str, index: int, length: int) -> str:
        """
        Cut a window of text centered on an occurrence.
        
        Args:
            text: Original field text
            index: Start of the occurrence
            length: Length of the occurrence
            
        Returns:
            Up to `radius` characters either side of the occurrence
        """
        start = max(0, index - self.snippet_radius)
        end = min(len(text), index + length + self.snippet_radius)
        return text[start:end]
    
    def truncate(self, text: Optional[str], max_length: int) -> str:
        """Return at most max_length characters of text."""
        if not text:
            return ""
        return text[:max_length]
