from pymongo.errors import PyMongoError

from app.schemas.ingestion_schema import Plan
from app.utils.plan_limits import to_plan
from database.db_config import get_users_collection
from utils.logger import logger


async def get_user_plan(email: str, collection=None) -> Plan:
    """Read the account's plan. Missing users or missing plan fields fall back to FREE."""
    users = collection if collection is not None else get_users_collection()
    try:
        user = await users.find_one({"email": email}, {"plan": 1})
    except PyMongoError as e:
        logger.error(f"MongoDB error while fetching plan for {email}: {e}")
        raise
    if not user or not user.get("plan"):
        return Plan.FREE
    return to_plan(user["plan"])
