import logging
from typing import Iterable, List

from string_analyzer.domain import Document, StructuredFilter
from string_analyzer.exceptions import ConflictingFilterError

logger = logging.getLogger(__name__)


def validate_filter(filters: StructuredFilter) -> None:
    """Reject filters whose length bounds can never both hold"""
    if filters.has_conflicting_bounds():
        raise ConflictingFilterError(
            "Conflicting filters: min_length cannot be greater than max_length",
            details={"min_length": filters.min_length, "max_length": filters.max_length},
        )


def matches(filters: StructuredFilter, document: Document) -> bool:
    """Check a single document against every filter that is set"""
    props = document.properties

    if filters.is_palindrome is not None and props.is_palindrome != filters.is_palindrome:
        return False

    if filters.min_length is not None and props.length < filters.min_length:
        return False

    if filters.max_length is not None and props.length > filters.max_length:
        return False

    if filters.word_count is not None and props.word_count != filters.word_count:
        return False

    if filters.contains_character is not None:
        # Case-insensitive, checked against the raw value
        if filters.contains_character.lower() not in document.value.lower():
            return False

    return True


def match_documents(filters: StructuredFilter, documents: Iterable[Document]) -> List[Document]:
    """Get documents matching all filters, preserving their original order"""
    validate_filter(filters)
    return [document for document in documents if matches(filters, document)]
