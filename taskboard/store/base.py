# taskboard/store/base.py
"""
DocumentStore: boundary to the hosted document database.

The task logic only ever needs four collection-scoped operations:
create, full scan, update-by-id and delete-by-id. No predicate pushdown
is relied upon; filtering happens after a full read.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple


# (document id, document fields without the id)
StoreRecord = Tuple[str, Dict[str, Any]]


class DocumentStore(ABC):
    """Abstract schemaless collection of documents keyed by opaque ids."""

    @abstractmethod
    async def create(self, fields: Dict[str, Any]) -> str:
        """
        Insert a new document.

        Args:
            fields: Document body; must not contain an id

        Returns:
            The id assigned by the store
        """
        pass

    @abstractmethod
    async def read_all(self) -> List[StoreRecord]:
        """Return every document in the collection, in scan order."""
        pass

    @abstractmethod
    async def update(self, doc_id: str, fields: Dict[str, Any]) -> None:
        """
        Merge ``fields`` into an existing document.

        Raises:
            TaskNotFoundError: no document has this id
        """
        pass

    @abstractmethod
    async def delete(self, doc_id: str) -> None:
        """Remove a document. Deleting a missing id is not an error."""
        pass

    async def close(self) -> None:
        """Release backend resources; default is a no-op."""
        return None
