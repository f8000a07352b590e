import hashlib
import re
from collections import Counter
from datetime import datetime, timezone
from typing import Dict, Optional

from string_analyzer.domain import Document, StringProperties
from string_analyzer.exceptions import InvalidInputError

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of a string"""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def is_palindrome(text: str) -> bool:
    """Check if string is palindrome (case-insensitive, alphanumerics only)"""
    cleaned = _NON_ALNUM.sub("", text.lower())
    return len(cleaned) > 0 and cleaned == cleaned[::-1]


def count_unique_characters(text: str) -> int:
    """Count distinct characters in string"""
    return len(set(text))


def count_words(text: str) -> int:
    """Count words separated by whitespace"""
    return len(text.split())


def get_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of each character"""
    return dict(Counter(text))


def validate_text(value) -> str:
    if not isinstance(value, str):
        raise InvalidInputError(
            "Value must be a string",
            details={"received_type": type(value).__name__},
        )
    if not value.strip():
        raise InvalidInputError("Value must not be empty")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        # Lone surrogates can be neither hashed nor stored
        raise InvalidInputError(
            "Value must be valid Unicode text",
            details={"position": e.start},
        ) from e
    return value


def analyze_string(value: str) -> StringProperties:
    """Analyze a string and return all computed properties"""
    validate_text(value)

    return StringProperties(
        length=len(value),
        is_palindrome=is_palindrome(value),
        unique_characters=count_unique_characters(value),
        word_count=count_words(value),
        sha256_hash=compute_sha256(value),
        character_frequency_map=get_character_frequency(value),
    )


def build_document(value: str, created_at: Optional[datetime] = None) -> Document:
    """Analyze a string and wrap it into a storable document"""
    properties = analyze_string(value)
    return Document(
        id=properties.sha256_hash,
        value=value,
        properties=properties,
        created_at=created_at or datetime.now(timezone.utc),
    )
