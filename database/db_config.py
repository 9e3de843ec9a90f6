import boto3
from botocore.config import Config
from motor.motor_asyncio import AsyncIOMotorClient

from config import config

s3_client = boto3.client(
    "s3",
    aws_access_key_id=config.AWS_ACCESS_KEY,
    aws_secret_access_key=config.AWS_SECRET_KEY,
    region_name=config.AWS_REGION,
    config=Config(signature_version='s3v4')
)

# Motor connects lazily, so building the client here performs no I/O
async_client = AsyncIOMotorClient(config.MONGO_URI)
db = async_client[config.MONGO_DB]


def get_users_collection():
    return db.get_collection("users")


def get_documents_collection():
    return db.get_collection("documents")
