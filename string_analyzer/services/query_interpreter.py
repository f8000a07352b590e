"""
Translate natural language filter queries into structured filters.

Each rule below inspects the normalized query and writes into one shared
dict of filters. Rules run in the order of ``RULES`` and a later rule
overwrites an earlier one on the same field, e.g. the vowel heuristic
replaces a letter captured by the containment rule.

Examples:
- "all single word palindromic strings" -> {word_count: 1, is_palindrome: true}
- "strings longer than 10 characters" -> {min_length: 11}
- "strings that contain the letter z" -> {contains_character: "z"}
- "all strings" -> {} (match everything)
- "racecar" -> None (unparsable)
"""
import logging
import re
from typing import Any, Callable, Dict, List, Optional

from string_analyzer.domain import StructuredFilter
from string_analyzer.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

Filters = Dict[str, Any]

WORD_COUNT_NUMBERS = {
    "single": 1,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
}

PALINDROME_PATTERN = re.compile(r"\bpalindrom(?:e|es|ic)?\b")
WORD_COUNT_PATTERN = re.compile(
    r"\b(single|one|two|three|four|five)\b(?:[\s-]*(word|words|string|strings))?"
)
COMPARATIVE_LENGTH_PATTERN = re.compile(r"\b(longer|shorter|more|less)\s+than\s+(\d+)\b")
CHARACTER_COUNT_PATTERN = re.compile(r"(\d+)\s*(character|characters|chars)\b")
CONTAINS_PATTERN = re.compile(
    r"(contain|contains|with|having|include|includes)\s+(the\s+letter\s+)?([a-z])"
)
UNIVERSAL_PATTERN = re.compile(r"^all\b|\bevery\b")


def normalize_query(query: str) -> str:
    return query.lower().strip()


def _safe_int(digits: str) -> Optional[int]:
    """Convert a digit run, or None when it is too long for int()."""
    try:
        return int(digits)
    except ValueError:
        return None


def apply_palindrome_rule(query: str, filters: Filters) -> None:
    if PALINDROME_PATTERN.search(query):
        filters["is_palindrome"] = True


def apply_word_count_rule(query: str, filters: Filters) -> None:
    match = WORD_COUNT_PATTERN.search(query)
    if match:
        filters["word_count"] = WORD_COUNT_NUMBERS[match.group(1)]

    # "single ... string" always means one word, whatever matched above
    if "single" in query and "string" in query:
        filters["word_count"] = 1


def apply_comparative_length_rule(query: str, filters: Filters) -> None:
    match = COMPARATIVE_LENGTH_PATTERN.search(query)
    if not match:
        return

    operator, number = match.group(1), _safe_int(match.group(2))
    if number is None:
        return

    if operator in ("longer", "more"):
        filters["min_length"] = number + 1
    else:
        filters["max_length"] = number - 1


def apply_character_count_rule(query: str, filters: Filters) -> None:
    match = CHARACTER_COUNT_PATTERN.search(query)
    number = _safe_int(match.group(1)) if match else None
    if number is None:
        return

    # Lower bound only, and only when no comparative phrase set a bound
    if filters.get("min_length") is None and filters.get("max_length") is None:
        filters["min_length"] = number


def apply_contains_rule(query: str, filters: Filters) -> None:
    match = CONTAINS_PATTERN.search(query)
    if match:
        filters["contains_character"] = match.group(3)


def apply_vowel_rule(query: str, filters: Filters) -> None:
    # Fixed heuristic, not real vowel detection
    if "first vowel" in query:
        filters["contains_character"] = "a"
    elif "last vowel" in query:
        filters["contains_character"] = "u"
    elif "vowel" in query:
        filters["contains_character"] = "a"


RULES: List[Callable[[str, Filters], None]] = [
    apply_palindrome_rule,
    apply_word_count_rule,
    apply_comparative_length_rule,
    apply_character_count_rule,
    apply_contains_rule,
    apply_vowel_rule,
]


def is_universal_query(query: str) -> bool:
    return UNIVERSAL_PATTERN.search(query) is not None


def interpret_query(query: str) -> Optional[StructuredFilter]:
    """
    Parse a natural language query into a StructuredFilter.

    Returns an empty filter for queries such as "all strings" or "every
    string", and None when no rule recognised anything.
    """
    if not isinstance(query, str):
        raise InvalidInputError("query must be a string")

    normalized = normalize_query(query)
    filters: Filters = {}

    for rule in RULES:
        rule(normalized, filters)

    if not filters:
        if is_universal_query(normalized):
            return StructuredFilter()
        logger.debug(f"Unable to interpret query: {query!r}")
        return None

    return StructuredFilter(**filters)
