import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv
from os.path import join, dirname

logging.basicConfig(
    format='%(asctime)s - %(levelname)s - %(message)s',
    level=logging.INFO,
    handlers=[logging.StreamHandler(sys.stdout)]  # Only console output
)
dotenv_path = join(dirname(__file__), ".env")
load_dotenv(dotenv_path)


def read_key_from_file(file_path: Optional[str]) -> Optional[str]:
    """Reads the content of a file if the path exists."""
    if file_path and os.path.exists(file_path):
        with open(file_path, "r") as file:
            return file.read().strip()
    return None


class Config():
    S3_BUCKET: Optional[str] = os.getenv("S3_BUCKET")
    AWS_ACCESS_KEY: Optional[str] = os.getenv("AWS_ACCESS_KEY")
    AWS_SECRET_KEY: Optional[str] = os.getenv("AWS_SECRET_KEY")
    AWS_REGION: Optional[str] = os.getenv("AWS_REGION", "us-east-1")
    MONGO_URI: Optional[str] = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DB: str = os.getenv("MONGO_DB", "doculan")
    STORAGE_TYPE: str = os.getenv("STORAGE_TYPE", "s3")
    PROBE_TIMEOUT_SECONDS: float = float(os.getenv("PROBE_TIMEOUT_SECONDS", 10))
    # Dropzone intake ceiling, applied before the plan's own file size bound
    DROPZONE_MAX_FILE_SIZE_BYTES: int = int(os.getenv("DROPZONE_MAX_FILE_SIZE_BYTES", 8 * 1024 * 1024))
    HOSTS: Optional[str] = os.getenv("ALLOWED_HOSTS")
    ALLOWED_HOSTS: list[str] = ["*"]
    ENV: Optional[str] = os.getenv("ENV", "dev")

    def __init__(self):
        """If AWS credentials are stored as file paths, read them."""
        if self.AWS_ACCESS_KEY and os.path.exists(self.AWS_ACCESS_KEY):
            self.AWS_ACCESS_KEY = read_key_from_file(self.AWS_ACCESS_KEY)
        if self.AWS_SECRET_KEY and os.path.exists(self.AWS_SECRET_KEY):
            self.AWS_SECRET_KEY = read_key_from_file(self.AWS_SECRET_KEY)
        if self.MONGO_URI and os.path.exists(self.MONGO_URI):
            self.MONGO_URI = read_key_from_file(self.MONGO_URI)
        if self.HOSTS:
            self.ALLOWED_HOSTS = [host.strip() for host in self.HOSTS.split(",") if host.strip()]


config = Config()
