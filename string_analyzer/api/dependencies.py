from fastapi import Depends
from sqlalchemy.orm import Session

from string_analyzer.config import STORAGE_BACKEND
from string_analyzer.crud.strings import InMemoryStringStore, SQLStringStore, StringStore
from string_analyzer.database import get_db

memory_store = InMemoryStringStore()


def get_store(db: Session = Depends(get_db)) -> StringStore:
    """Dependency to provide the configured string store."""
    if STORAGE_BACKEND == "memory":
        return memory_store
    return SQLStringStore(db)
