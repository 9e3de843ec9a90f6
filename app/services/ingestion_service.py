from enum import Enum
from typing import Mapping, Optional

from app.schemas.ingestion_schema import (
    IngestionOutcome, IngestionRejected, IngestionRequest, IngestionSuccess, Plan, PlanLimits, RejectionReason,
    SourceKind,
)
from app.services.input_mode_service import FileMode, InvalidCombination, resolve_mode
from app.services.quota_service import QuotaStatus, check_quota
from app.services.url_validator_service import UNTITLED, UrlValidationStatus, UrlValidator
from app.utils.plan_limits import PLAN_LIMITS, limits_for
from config import config
from utils.logger import logger

UPLOAD_ERROR_MESSAGE = "Error occurred while uploading. Please make sure the PDF is accessible."

REJECTION_MESSAGES = {
    RejectionReason.QUOTA_EXCEEDED: (
        "You've reached the maximum number of documents for your current plan. "
        "Upgrade to Pro to upload more documents and access additional features."
    ),
    RejectionReason.INVALID_COMBINATION: "Please upload a file or enter a URL.",
    RejectionReason.INVALID_URL_SYNTAX: "Invalid URL",
    RejectionReason.URL_UNREACHABLE_OR_WRONG_TYPE: "URL is not a PDF",
    RejectionReason.UPLOAD_FAILED: UPLOAD_ERROR_MESSAGE,
    RejectionReason.REGISTRATION_FAILED: UPLOAD_ERROR_MESSAGE,
}


class IngestionStage(str, Enum):
    IDLE = "idle"
    QUOTA_CHECKED = "quota_checked"
    MODE_RESOLVED = "mode_resolved"
    UPLOADING = "uploading"
    VALIDATING = "validating"
    REGISTERING = "registering"
    SUCCEEDED = "succeeded"
    REJECTED = "rejected"


def rejected(reason: RejectionReason) -> IngestionRejected:
    return IngestionRejected(
        reason=reason,
        message=REJECTION_MESSAGES[reason],
        upgrade_required=reason == RejectionReason.QUOTA_EXCEEDED,
    )


class IngestionService:
    """
    Runs one ingestion attempt: quota first, then input mode, then URL validation
    when needed, and finally exactly one sink call. Sink failures become rejections.
    """

    def __init__(self, storage, registry, plan_table: Mapping[Plan, PlanLimits] = PLAN_LIMITS,
                 url_validator: Optional[UrlValidator] = None,
                 intake_max_file_size_bytes: Optional[int] = None):
        self.storage = storage
        self.registry = registry
        self.plan_table = plan_table
        self.url_validator = url_validator or UrlValidator()
        self.intake_max_file_size_bytes = (
            intake_max_file_size_bytes if intake_max_file_size_bytes is not None
            else config.DROPZONE_MAX_FILE_SIZE_BYTES
        )

    def _reject(self, request: IngestionRequest, stage: IngestionStage, reason: RejectionReason):
        logger.info(f"Ingestion for {request.workspace} rejected at {stage.value}: {reason.value}")
        return rejected(reason)

    async def ingest(self, request: IngestionRequest) -> IngestionOutcome:
        limits = limits_for(request.plan, self.plan_table)

        if check_quota(request.current_document_count, limits) == QuotaStatus.QUOTA_EXCEEDED:
            return self._reject(request, IngestionStage.QUOTA_CHECKED, RejectionReason.QUOTA_EXCEEDED)

        mode = resolve_mode(request.file_candidate, request.url_candidate)
        if isinstance(mode, InvalidCombination):
            logger.warning(f"Invalid source combination for {request.workspace}: {mode.supplied} supplied")
            return self._reject(request, IngestionStage.MODE_RESOLVED, RejectionReason.INVALID_COMBINATION)

        if isinstance(mode, FileMode):
            return await self._ingest_file(request, mode.file, limits)
        return await self._ingest_url(request, mode.url)

    async def _ingest_file(self, request: IngestionRequest, file, limits: PlanLimits):
        size = getattr(file, "size", None)
        if size is not None and size > self.intake_max_file_size_bytes:
            logger.warning(f"{file.filename} is {size} bytes, over the intake ceiling of "
                           f"{self.intake_max_file_size_bytes} bytes")
            return self._reject(request, IngestionStage.MODE_RESOLVED, RejectionReason.UPLOAD_FAILED)

        title = getattr(file, "filename", None) or UNTITLED
        try:
            result = await self.storage.upload(
                request.workspace, [file], max_file_size_bytes=limits.max_file_size_bytes
            )
        except Exception as e:
            logger.error(f"Upload failed for {title}: {e}")
            return self._reject(request, IngestionStage.UPLOADING, RejectionReason.UPLOAD_FAILED)

        document_id = result.get("document_id") if isinstance(result, dict) else None
        logger.info(f"Ingested uploaded file {title} for {request.workspace}")
        return IngestionSuccess(title=title, source_kind=SourceKind.UPLOADED_FILE, document_id=document_id)

    async def _ingest_url(self, request: IngestionRequest, url: str):
        validation = await self.url_validator.validate_url(url)
        if validation.status == UrlValidationStatus.INVALID_SYNTAX:
            return self._reject(request, IngestionStage.VALIDATING, RejectionReason.INVALID_URL_SYNTAX)
        if validation.status == UrlValidationStatus.UNREACHABLE_OR_WRONG_TYPE:
            return self._reject(request, IngestionStage.VALIDATING, RejectionReason.URL_UNREACHABLE_OR_WRONG_TYPE)

        title = validation.resolved_file_name
        try:
            document_id = await self.registry.register_by_link(request.workspace, title, url)
        except Exception as e:
            logger.error(f"Link registration failed for {url}: {e}")
            return self._reject(request, IngestionStage.REGISTERING, RejectionReason.REGISTRATION_FAILED)

        logger.info(f"Ingested remote link {url} as {title} for {request.workspace}")
        return IngestionSuccess(title=title, source_kind=SourceKind.REMOTE_LINK, document_id=document_id)
