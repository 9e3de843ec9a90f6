import json
import logging
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import List, Optional

from botocore.exceptions import ClientError

from DataAccessLayer.storage.base import StorageStrategy
from app.exceptions.custom_exception import UploadSinkError
from database.db_config import s3_client

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class S3Storage(StorageStrategy):
    def __init__(self, bucket_name: str):
        self.bucket_name = bucket_name

    def _get_metadata_key(self, email: str, document_id: str) -> str:
        return str(PurePosixPath(email, "metadata/data", f"{document_id}.json"))

    def _get_pdf_key(self, email: str, document_id: str, filename: str) -> str:
        return str(PurePosixPath(email, "files", document_id, filename))

    def upload_file(self, email: str, document_id: str, file, max_file_size_bytes: Optional[int] = None) -> dict:
        if not getattr(file, "filename", None):
            raise UploadSinkError("Uploaded file must have a valid filename.")

        # Read file content
        file.file.seek(0, 2)
        file_size = file.file.tell()
        file.file.seek(0)

        if max_file_size_bytes is not None and file_size > max_file_size_bytes:
            raise UploadSinkError(
                f"File '{file.filename}' is {file_size} bytes, plan allows {max_file_size_bytes} bytes."
            )

        file_content = file.file.read()
        content_type = getattr(file, "content_type", None) or "application/pdf"
        pdf_key = self._get_pdf_key(email, document_id, file.filename)
        metadata_key = self._get_metadata_key(email, document_id)
        last_modified = datetime.now(timezone.utc).isoformat()

        logger.info(f"Uploading: {file.filename}, size: {file_size} bytes to {pdf_key}")

        try:
            s3_client.put_object(
                Body=file_content,
                Bucket=self.bucket_name,
                Key=pdf_key,
                ContentType=content_type,
                Metadata={"document_id": document_id, "created_at": last_modified},
            )

            metadata = {
                "document_id": document_id,
                "fileName": file.filename,
                "fileSizeBytes": file_size,
                "contentType": content_type,
                "last_modified": last_modified,
                "created_by": {"email": email},
            }
            s3_client.put_object(
                Body=json.dumps(metadata),
                Bucket=self.bucket_name,
                Key=metadata_key,
                ContentType="application/json",
            )
        except ClientError as ce:
            logger.exception("S3 ClientError during file upload.")
            raise UploadSinkError(f"S3 ClientError: {str(ce)}") from ce

        return {
            "uploaded": True,
            "document_id": document_id,
            "fileName": file.filename,
            "size": file_size,
            "s3_keys": {"pdf": pdf_key, "metadata": metadata_key},
        }

    def delete_file(self, email: str, document_id: str, keys: List[str]):
        deleted = []
        for key in keys:
            try:
                s3_client.delete_object(Bucket=self.bucket_name, Key=key)
                deleted.append(key)
            except ClientError as ce:
                logger.warning(f"Failed to delete {key} for document_id: {document_id}. Reason: {ce}")
        logger.info(f"Deleted {len(deleted)} object(s) for {email}, document_id: {document_id}")
        return deleted
