"""Custom exceptions for the String Analyzer service."""

from typing import Optional


class StringAnalyzerError(Exception):
    """Base exception for all String Analyzer errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class InvalidInputError(StringAnalyzerError):
    """Raised when text to analyze is missing, empty or not a string."""
    pass


class ConflictingFilterError(StringAnalyzerError):
    """Raised when a filter asks for min_length greater than max_length."""
    pass


class NotFoundError(StringAnalyzerError):
    """Raised when a string does not exist in the store."""
    pass


class AlreadyExistsError(StringAnalyzerError):
    """Raised when a string with the same hash is already stored."""
    pass


class StorageError(StringAnalyzerError):
    """Raised when the underlying store fails unexpectedly."""
    pass
