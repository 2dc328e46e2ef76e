# taskboard/store/mongo.py
"""
MongoDB document store through Beanie.

Requires taskboard.db.connect_db() to have initialised Beanie with
TaskDocument registered.
"""
from typing import Any, Dict, List, Optional, Type

from beanie import Document, PydanticObjectId
from bson.errors import InvalidId

from taskboard.core.exceptions import TaskNotFoundError
from taskboard.core.logging import log
from taskboard.models.task import TaskDocument

from .base import DocumentStore, StoreRecord


class BeanieDocumentStore(DocumentStore):

    def __init__(self, document_model: Type[Document] = TaskDocument) -> None:
        self.document_model = document_model

    async def _get(self, doc_id: str) -> Optional[Document]:
        try:
            object_id = PydanticObjectId(doc_id)
        except (InvalidId, TypeError):
            return None
        return await self.document_model.get(object_id)

    async def create(self, fields: Dict[str, Any]) -> str:
        doc = self.document_model(**fields)
        await doc.insert()
        log("STORE", f"mongo insert {doc.id}")
        return str(doc.id)

    async def read_all(self) -> List[StoreRecord]:
        # Raw documents, not model instances: one malformed row must not fail
        # the scan for every user
        raws = await self.document_model.get_motor_collection().find({}).to_list(length=None)
        records = []
        for raw in raws:
            doc_id = raw.pop("_id")
            raw.pop("revision_id", None)
            records.append((str(doc_id), raw))
        return records

    async def update(self, doc_id: str, fields: Dict[str, Any]) -> None:
        doc = await self._get(doc_id)
        if doc is None:
            raise TaskNotFoundError(doc_id)
        await doc.set(dict(fields))

    async def delete(self, doc_id: str) -> None:
        doc = await self._get(doc_id)
        if doc is None:
            # Deleting a non-existent document is treated as success
            return
        await doc.delete()
