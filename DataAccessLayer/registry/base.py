from abc import ABC, abstractmethod
from typing import List


class DocumentRegistryStrategy(ABC):
    @abstractmethod
    async def register_by_link(self, email: str, document_id: str, title: str, url: str):
        pass

    @abstractmethod
    async def record_upload(self, email: str, document_id: str, title: str):
        pass

    @abstractmethod
    async def count_documents(self, email: str) -> int:
        pass

    @abstractmethod
    async def list_documents(self, email: str) -> List[dict]:
        pass
