from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional
import logging

from string_analyzer.api.dependencies import get_store
from string_analyzer.crud.strings import StringStore
from string_analyzer.domain import StructuredFilter
from string_analyzer.exceptions import ConflictingFilterError
from string_analyzer.schemas.string import (
    ErrorResponse,
    InterpretedQuery,
    NaturalLanguageResponse,
    StringCreate,
    StringListResponse,
    StringResponse,
)
from string_analyzer.services.analyzer import build_document, compute_sha256
from string_analyzer.services.matcher import match_documents
from string_analyzer.services.query_interpreter import interpret_query

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/strings",
    response_model=StringResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def create_string(string_data: StringCreate, store: StringStore = Depends(get_store)):
    """
    Analyze and store a string.
    Returns 409 if string already exists.
    """
    document = build_document(string_data.value)
    store.insert(document)
    return StringResponse.from_document(document)


@router.get("/strings", response_model=StringListResponse, responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}})
def get_all_strings(
    is_palindrome: Optional[str] = Query(None, description="Filter by palindrome (true/false)"),
    min_length: Optional[int] = Query(None, ge=0, description="Minimum string length"),
    max_length: Optional[int] = Query(None, ge=0, description="Maximum string length"),
    word_count: Optional[int] = Query(None, ge=0, description="Exact word count"),
    contains_character: Optional[str] = Query(
        None, min_length=1, max_length=1, description="Single character the string must contain"
    ),
    store: StringStore = Depends(get_store),
):
    """
    Get all strings with optional filtering.
    Returns 422 if min_length is greater than max_length.
    """
    palindrome_flag = None
    if is_palindrome is not None:
        if is_palindrome.lower() not in ("true", "false"):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid query parameter type for 'is_palindrome'. Expected true or false."
            )
        palindrome_flag = is_palindrome.lower() == "true"

    filters = StructuredFilter(
        is_palindrome=palindrome_flag,
        min_length=min_length,
        max_length=max_length,
        word_count=word_count,
        contains_character=contains_character,
    )

    documents = match_documents(filters, store.get_all())
    data = [StringResponse.from_document(d) for d in documents]

    return StringListResponse(
        data=data,
        count=len(data),
        filters_applied=filters.as_dict(),
    )


@router.get(
    "/strings/filter-by-natural-language",
    response_model=NaturalLanguageResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def filter_by_natural_language(
    query: str = Query(..., description="Natural language query, e.g. 'all single word palindromic strings'"),
    store: StringStore = Depends(get_store),
):
    """
    Filter strings using natural language queries.
    Example: "all single word palindromic strings"
    """
    if not query.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query parameter is required"
        )

    filters = interpret_query(query)
    if filters is None:
        logger.warning(f"Unable to parse natural language query: {query!r}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to parse natural language query"
        )

    interpreted = InterpretedQuery(original=query, parsed_filters=filters.as_dict())

    try:
        documents = match_documents(filters, store.get_all())
    except ConflictingFilterError as e:
        logger.warning(f"Conflicting filters for query {query!r}: {e.details}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "Query parsed but resulted in conflicting filters",
                "interpreted_query": interpreted.model_dump(),
            }
        )

    data = [StringResponse.from_document(d) for d in documents]
    return NaturalLanguageResponse(
        data=data,
        count=len(data),
        interpreted_query=interpreted,
    )


@router.get("/strings/{string_value}", response_model=StringResponse, responses={404: {"model": ErrorResponse}})
def get_string(string_value: str, store: StringStore = Depends(get_store)):
    """
    Get analysis for a specific string.
    Returns 404 if string doesn't exist.
    """
    document = store.get(compute_sha256(string_value))
    return StringResponse.from_document(document)


@router.delete(
    "/strings/{string_value}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
def delete_string(string_value: str, store: StringStore = Depends(get_store)):
    """
    Delete a string from the system.
    Returns 404 if string doesn't exist.
    """
    store.delete(compute_sha256(string_value))
    return None
