from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import PyMongoError

from app.exceptions.custom_exception import UnknownPlanError
from app.schemas.ingestion_schema import Plan
from app.services.subscription_service import get_user_plan


def users_returning(user):
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=user)
    return collection


@pytest.mark.asyncio
async def test_plan_read_from_user_record():
    collection = users_returning({"email": "a@example.com", "plan": "PRO"})
    assert await get_user_plan("a@example.com", collection) == Plan.PRO
    collection.find_one.assert_awaited_once_with({"email": "a@example.com"}, {"plan": 1})


@pytest.mark.asyncio
@pytest.mark.parametrize("user", [None, {"email": "a@example.com"}, {"plan": ""}])
async def test_missing_plan_defaults_to_free(user):
    assert await get_user_plan("a@example.com", users_returning(user)) == Plan.FREE


@pytest.mark.asyncio
async def test_lowercase_plan_is_accepted():
    assert await get_user_plan("a@example.com", users_returning({"plan": "pro"})) == Plan.PRO


@pytest.mark.asyncio
async def test_unknown_plan_in_record_raises():
    with pytest.raises(UnknownPlanError):
        await get_user_plan("a@example.com", users_returning({"plan": "platinum"}))


@pytest.mark.asyncio
async def test_database_error_propagates():
    collection = MagicMock()
    collection.find_one = AsyncMock(side_effect=PyMongoError("down"))
    with pytest.raises(PyMongoError):
        await get_user_plan("a@example.com", collection)
