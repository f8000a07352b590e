"""Storage for analyzed strings, keyed by SHA-256 hash."""

import logging
import threading
from abc import ABC, abstractmethod
from collections import OrderedDict
from datetime import timezone
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from string_analyzer.domain import Document, StringProperties
from string_analyzer.exceptions import AlreadyExistsError, NotFoundError, StorageError
from string_analyzer.models.string_record import StringRecord

logger = logging.getLogger(__name__)


class StringStore(ABC):
    """Abstract interface for string document storage."""

    @abstractmethod
    def insert(self, document: Document) -> Document:
        """Store a new document. Raises AlreadyExistsError on duplicate id."""
        pass

    @abstractmethod
    def get(self, document_id: str) -> Document:
        """Get document by id. Raises NotFoundError."""
        pass

    @abstractmethod
    def delete(self, document_id: str) -> None:
        """Delete document by id. Raises NotFoundError."""
        pass

    @abstractmethod
    def get_all(self) -> List[Document]:
        """All documents in insertion order."""
        pass


def _already_exists(document_id: str) -> AlreadyExistsError:
    return AlreadyExistsError(
        "String already exists in the system",
        details={"id": document_id},
    )


def _not_found(document_id: str) -> NotFoundError:
    return NotFoundError(
        "String does not exist in the system",
        details={"id": document_id},
    )


class InMemoryStringStore(StringStore):
    """Process-local store. Safe to share between request threads."""

    def __init__(self):
        self._documents: "OrderedDict[str, Document]" = OrderedDict()
        self._lock = threading.Lock()

    def insert(self, document: Document) -> Document:
        with self._lock:
            if document.id in self._documents:
                raise _already_exists(document.id)
            self._documents[document.id] = document
        logger.info(f"Stored string {document.id[:12]}")
        return document

    def get(self, document_id: str) -> Document:
        with self._lock:
            document = self._documents.get(document_id)
        if document is None:
            raise _not_found(document_id)
        return document

    def delete(self, document_id: str) -> None:
        with self._lock:
            if document_id not in self._documents:
                raise _not_found(document_id)
            del self._documents[document_id]
        logger.info(f"Deleted string {document_id[:12]}")

    def get_all(self) -> List[Document]:
        with self._lock:
            return list(self._documents.values())


class SQLStringStore(StringStore):
    """SQLAlchemy-backed store working on one session."""

    def __init__(self, db: Session):
        self.db = db

    def _get_record(self, document_id: str):
        return self.db.query(StringRecord).filter(StringRecord.sha256_hash == document_id).first()

    @staticmethod
    def _to_document(record: StringRecord) -> Document:
        created_at = record.created_at
        if created_at.tzinfo is None:
            # SQLite drops the offset; values are always written in UTC
            created_at = created_at.replace(tzinfo=timezone.utc)

        return Document(
            id=record.sha256_hash,
            value=record.value,
            properties=StringProperties(
                length=record.length,
                is_palindrome=record.is_palindrome,
                unique_characters=record.unique_characters,
                word_count=record.word_count,
                sha256_hash=record.sha256_hash,
                character_frequency_map=dict(record.character_frequency_map),
            ),
            created_at=created_at,
        )

    def insert(self, document: Document) -> Document:
        if self._get_record(document.id) is not None:
            raise _already_exists(document.id)

        props = document.properties
        record = StringRecord(
            sha256_hash=document.id,
            value=document.value,
            length=props.length,
            is_palindrome=props.is_palindrome,
            unique_characters=props.unique_characters,
            word_count=props.word_count,
            character_frequency_map=dict(props.character_frequency_map),
            created_at=document.created_at,
        )

        try:
            self.db.add(record)
            self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent insert of the same string
            self.db.rollback()
            raise _already_exists(document.id) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error storing string {document.id[:12]}: {e}")
            raise StorageError("Could not store string", details={"id": document.id}) from e

        logger.info(f"Stored string {document.id[:12]}")
        return document

    def get(self, document_id: str) -> Document:
        record = self._get_record(document_id)
        if record is None:
            raise _not_found(document_id)
        return self._to_document(record)

    def delete(self, document_id: str) -> None:
        record = self._get_record(document_id)
        if record is None:
            raise _not_found(document_id)

        try:
            self.db.delete(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error deleting string {document_id[:12]}: {e}")
            raise StorageError("Could not delete string", details={"id": document_id}) from e

        logger.info(f"Deleted string {document_id[:12]}")

    def get_all(self) -> List[Document]:
        records = self.db.query(StringRecord).order_by(StringRecord.id).all()
        return [self._to_document(record) for record in records]
