import asyncio
import logging
import uuid
from functools import partial
from typing import List, Optional

from DataAccessLayer.registry.registry_manager import RegistryManager
from DataAccessLayer.storage.base import StorageStrategy
from app.exceptions.custom_exception import UploadSinkError

logger = logging.getLogger(__name__)


class StorageManager:
    def __init__(self, strategy: StorageStrategy, registry: Optional[RegistryManager] = None):
        self.strategy = strategy
        self.registry = registry

    def generate_document_id(self):
        return str(uuid.uuid4())

    async def upload(self, email: str, files: List, max_file_size_bytes: Optional[int] = None) -> dict:
        if len(files) != 1:
            raise UploadSinkError("Exactly one file can be uploaded per call.")
        file = files[0]
        document_id = self.generate_document_id()

        # boto3 blocks, keep it off the event loop
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(
            None, partial(self.strategy.upload_file, email, document_id, file, max_file_size_bytes)
        )

        # Stored uploads count toward the workspace quota
        if self.registry is not None:
            try:
                await self.registry.record_upload(email, document_id, file.filename)
            except Exception as e:
                logger.error(f"Recording upload {document_id} failed, removing stored objects: {e}")
                keys = list((result.get("s3_keys") or {}).values()) if isinstance(result, dict) else []
                await loop.run_in_executor(None, partial(self.strategy.delete_file, email, document_id, keys))
                raise
        return result
