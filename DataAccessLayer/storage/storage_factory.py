from DataAccessLayer.storage.s3_storage import S3Storage
from config import config


def get_storage_strategy(storage_type: str):
    if storage_type == "s3":
        return S3Storage(bucket_name=config.S3_BUCKET)
    else:
        raise ValueError(f"Unsupported storage type: {storage_type}")
