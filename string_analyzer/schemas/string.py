from pydantic import BaseModel, Field, StrictStr
from typing import Dict, Optional, List, Any
from datetime import datetime

from string_analyzer.domain import Document


class StringCreate(BaseModel):
    value: StrictStr = Field(..., description="String to analyze")


class StringProperties(BaseModel):
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringResponse(BaseModel):
    id: str
    value: str
    properties: StringProperties
    created_at: datetime

    @classmethod
    def from_document(cls, document: Document) -> "StringResponse":
        return cls(
            id=document.id,
            value=document.value,
            properties=StringProperties(**document.properties.to_dict()),
            created_at=document.created_at,
        )


class StringListResponse(BaseModel):
    data: List[StringResponse]
    count: int
    filters_applied: Dict[str, Any] = Field(default_factory=dict)


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: List[StringResponse]
    count: int
    interpreted_query: InterpretedQuery


class ErrorResponse(BaseModel):
    error: str
    interpreted_query: Optional[InterpretedQuery] = None
