# taskboard/store/__init__.py
"""
Document store backends.
"""
from .base import DocumentStore, StoreRecord
from .memory import InMemoryDocumentStore

__all__ = ["DocumentStore", "StoreRecord", "InMemoryDocumentStore"]
