# taskboard/store/memory.py
"""
Process-local document store.

Used for development (TASKBOARD_STORE=memory) and in tests. Ids are
random hex strings, scan order is insertion order.
"""
import copy
import uuid
from typing import Any, Dict, List

from taskboard.core.exceptions import TaskNotFoundError
from taskboard.core.logging import log

from .base import DocumentStore, StoreRecord


class InMemoryDocumentStore(DocumentStore):

    def __init__(self) -> None:
        self._docs: Dict[str, Dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._docs)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._docs

    async def create(self, fields: Dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        self._docs[doc_id] = copy.deepcopy(dict(fields))
        log("STORE", f"memory insert {doc_id}")
        return doc_id

    async def read_all(self) -> List[StoreRecord]:
        # Copies, so callers cannot mutate stored documents in place
        return [(doc_id, copy.deepcopy(fields)) for doc_id, fields in self._docs.items()]

    async def update(self, doc_id: str, fields: Dict[str, Any]) -> None:
        if doc_id not in self._docs:
            raise TaskNotFoundError(doc_id)
        self._docs[doc_id].update(copy.deepcopy(dict(fields)))

    async def delete(self, doc_id: str) -> None:
        self._docs.pop(doc_id, None)
