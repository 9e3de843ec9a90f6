import logging
from datetime import datetime, timezone
from typing import List

from pymongo.errors import PyMongoError

from app.exceptions.custom_exception import RegistrationSinkError
from app.schemas.ingestion_schema import SourceKind
from database.db_config import get_documents_collection
from .base import DocumentRegistryStrategy

logger = logging.getLogger(__name__)


class MongoDocumentRegistry(DocumentRegistryStrategy):
    def __init__(self, collection=None):
        self.collection = collection if collection is not None else get_documents_collection()

    async def _insert(self, record: dict):
        try:
            await self.collection.insert_one(record)
        except PyMongoError as e:
            logger.error(f"MongoDB error while registering document {record['document_id']}: {e}", exc_info=True)
            raise RegistrationSinkError(f"Failed to register document: {str(e)}") from e

    async def register_by_link(self, email: str, document_id: str, title: str, url: str):
        await self._insert({
            "document_id": document_id,
            "email": email,
            "title": title,
            "url": url,
            "source_kind": SourceKind.REMOTE_LINK.value,
            "created_at": datetime.now(timezone.utc),
        })
        logger.info(f"Registered link document {document_id} for {email}: {url}")

    async def record_upload(self, email: str, document_id: str, title: str):
        await self._insert({
            "document_id": document_id,
            "email": email,
            "title": title,
            "url": None,
            "source_kind": SourceKind.UPLOADED_FILE.value,
            "created_at": datetime.now(timezone.utc),
        })
        logger.info(f"Recorded uploaded document {document_id} for {email}")

    async def count_documents(self, email: str) -> int:
        return await self.collection.count_documents({"email": email})

    async def list_documents(self, email: str) -> List[dict]:
        cursor = self.collection.find({"email": email}, {"_id": 0, "email": 0}).sort("created_at", -1)
        return await cursor.to_list(length=None)
