from abc import ABC, abstractmethod
from typing import List, Optional


class StorageStrategy(ABC):
    @abstractmethod
    def upload_file(self, email: str, document_id: str, file, max_file_size_bytes: Optional[int] = None) -> dict: pass

    @abstractmethod
    def delete_file(self, email: str, document_id: str, keys: List[str]): pass
