from types import MappingProxyType
from typing import Mapping, Union

from app.exceptions.custom_exception import UnknownPlanError
from app.schemas.ingestion_schema import Plan, PlanLimits

MIB = 1024 * 1024

PLAN_LIMITS: Mapping[Plan, PlanLimits] = MappingProxyType({
    Plan.FREE: PlanLimits(
        title="Free",
        price=0,
        max_document_count=1,
        max_pages_per_document=12,
        max_file_size_bytes=7 * MIB,
        max_collaborators=0,
        max_questions_per_doc=5,
        max_research_per_doc=5,
    ),
    Plan.PRO: PlanLimits(
        title="Pro",
        price=9.99,
        max_document_count=None,  # unlimited
        max_pages_per_document=50,
        max_file_size_bytes=10 * MIB,
        max_collaborators=5,
        max_questions_per_doc=30,
        max_research_per_doc=30,
    ),
})


def to_plan(plan: Union[Plan, str]) -> Plan:
    if isinstance(plan, Plan):
        return plan
    try:
        return Plan(str(plan).upper())
    except ValueError:
        raise UnknownPlanError(plan)


def limits_for(plan: Union[Plan, str], table: Mapping[Plan, PlanLimits] = PLAN_LIMITS) -> PlanLimits:
    """Return the quota limits for ``plan``. Raises UnknownPlanError for values outside the plan set."""
    resolved = to_plan(plan)
    try:
        return table[resolved]
    except KeyError:
        raise UnknownPlanError(plan)
