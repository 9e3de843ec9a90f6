from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Plan(str, Enum):
    FREE = "FREE"
    PRO = "PRO"


class SourceKind(str, Enum):
    UPLOADED_FILE = "uploaded_file"
    REMOTE_LINK = "remote_link"


class RejectionReason(str, Enum):
    QUOTA_EXCEEDED = "quota_exceeded"
    INVALID_COMBINATION = "invalid_combination"
    INVALID_URL_SYNTAX = "invalid_url_syntax"
    URL_UNREACHABLE_OR_WRONG_TYPE = "url_unreachable_or_wrong_type"
    UPLOAD_FAILED = "upload_failed"
    REGISTRATION_FAILED = "registration_failed"


class PlanLimits(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    price: float
    max_document_count: Optional[int] = None  # None means unlimited
    max_pages_per_document: int
    max_file_size_bytes: int
    max_collaborators: int
    max_questions_per_doc: int
    max_research_per_doc: int


class IngestionRequest(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    workspace: str
    file_candidate: Optional[Any] = None
    url_candidate: Optional[str] = None
    plan: Plan
    current_document_count: int = Field(ge=0)


class IngestionSuccess(BaseModel):
    status: Literal["success"] = "success"
    title: str
    source_kind: SourceKind
    document_id: Optional[str] = None


class IngestionRejected(BaseModel):
    status: Literal["rejected"] = "rejected"
    reason: RejectionReason
    message: str
    upgrade_required: bool = False


IngestionOutcome = Annotated[Union[IngestionSuccess, IngestionRejected], Field(discriminator="status")]


class QuotaSummary(BaseModel):
    plan: Plan
    limits: PlanLimits
    current_document_count: int
    remaining_documents: Optional[int] = None


class DocumentRecord(BaseModel):
    document_id: str
    title: str
    source_kind: SourceKind
    url: Optional[str] = None
    created_at: Optional[datetime] = None
