"""Core value types shared by the analyzer, interpreter, matcher and stores."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class StringProperties:
    """Properties derived from a piece of text. Never recomputed after creation."""
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "length": self.length,
            "is_palindrome": self.is_palindrome,
            "unique_characters": self.unique_characters,
            "word_count": self.word_count,
            "sha256_hash": self.sha256_hash,
            "character_frequency_map": dict(self.character_frequency_map),
        }


@dataclass(frozen=True)
class Document:
    """A stored string. Its id is the SHA-256 hash of the value."""
    id: str
    value: str
    properties: StringProperties
    created_at: datetime


@dataclass(frozen=True)
class StructuredFilter:
    """Optional predicates over document properties; None means unconstrained."""
    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    word_count: Optional[int] = None
    contains_character: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        """Only the fields that constrain something."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def is_empty(self) -> bool:
        return not self.as_dict()

    def has_conflicting_bounds(self) -> bool:
        return (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        )
