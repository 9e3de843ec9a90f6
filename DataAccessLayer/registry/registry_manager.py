import uuid
from typing import List

from DataAccessLayer.registry.base import DocumentRegistryStrategy


class RegistryManager:
    def __init__(self, strategy: DocumentRegistryStrategy):
        self.strategy = strategy

    async def register_by_link(self, email: str, title: str, url: str) -> str:
        document_id = str(uuid.uuid4())
        await self.strategy.register_by_link(email, document_id, title, url)
        return document_id

    async def record_upload(self, email: str, document_id: str, title: str):
        return await self.strategy.record_upload(email, document_id, title)

    async def count(self, email: str) -> int:
        return await self.strategy.count_documents(email)

    async def list(self, email: str) -> List[dict]:
        return await self.strategy.list_documents(email)
