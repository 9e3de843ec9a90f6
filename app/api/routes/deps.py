from fastapi import Depends, Header, HTTPException

from DataAccessLayer.registry.mongo_registry import MongoDocumentRegistry
from DataAccessLayer.registry.registry_manager import RegistryManager
from DataAccessLayer.storage.storage_factory import get_storage_strategy
from DataAccessLayer.storage.storage_manager import StorageManager
from app.schemas.ingestion_schema import Plan
from app.services.subscription_service import get_user_plan
from config import config


async def get_email_from_header(x_user_email: str = Header(None)) -> str:
    # Session retrieval happens upstream; the gateway forwards the account email
    if not x_user_email:
        raise HTTPException(status_code=401, detail="Missing X-User-Email header")
    return x_user_email.strip().lower()


def get_registry() -> RegistryManager:
    return RegistryManager(MongoDocumentRegistry())


def get_storage(registry: RegistryManager = Depends(get_registry)) -> StorageManager:
    strategy = get_storage_strategy(config.STORAGE_TYPE)
    return StorageManager(strategy, registry)


async def get_current_plan(email: str = Depends(get_email_from_header)) -> Plan:
    return await get_user_plan(email)
