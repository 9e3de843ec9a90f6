from enum import Enum
from typing import Optional

from app.schemas.ingestion_schema import PlanLimits


class QuotaStatus(str, Enum):
    ADMITTED = "admitted"
    QUOTA_EXCEEDED = "quota_exceeded"


def check_quota(current_document_count: int, limits: PlanLimits) -> QuotaStatus:
    limit = limits.max_document_count
    if limit is None:
        return QuotaStatus.ADMITTED  # Unlimited plan

    if current_document_count < limit:
        return QuotaStatus.ADMITTED
    return QuotaStatus.QUOTA_EXCEEDED


def remaining_documents(current_document_count: int, limits: PlanLimits) -> Optional[int]:
    """
    Returns how many more documents the plan admits.
    If the plan has an unlimited document count, returns None.
    """
    limit = limits.max_document_count
    if limit is None:
        return None
    return max(limit - current_document_count, 0)
