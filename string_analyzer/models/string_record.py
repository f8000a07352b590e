from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON, Text
from string_analyzer.database import Base


class StringRecord(Base):
    __tablename__ = "string_records"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)  # insertion order
    sha256_hash = Column(String(64), unique=True, nullable=False, index=True)
    value = Column(Text, nullable=False)
    length = Column(Integer, nullable=False)
    is_palindrome = Column(Boolean, nullable=False)
    unique_characters = Column(Integer, nullable=False)
    word_count = Column(Integer, nullable=False)
    character_frequency_map = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
