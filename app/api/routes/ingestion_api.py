from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from starlette.responses import JSONResponse

from DataAccessLayer.registry.registry_manager import RegistryManager
from DataAccessLayer.storage.storage_manager import StorageManager
from app.api.routes.deps import get_current_plan, get_email_from_header, get_registry, get_storage
from app.exceptions.custom_exception import UnknownPlanError
from app.schemas.ingestion_schema import (
    DocumentRecord, IngestionRequest, IngestionSuccess, Plan, PlanLimits, QuotaSummary, RejectionReason,
)
from app.services.ingestion_service import IngestionService, rejected
from app.services.quota_service import QuotaStatus, check_quota, remaining_documents
from app.utils.plan_limits import limits_for
from utils.logger import logger

router = APIRouter()

REJECTION_STATUS_CODES = {
    RejectionReason.QUOTA_EXCEEDED: status.HTTP_403_FORBIDDEN,
    RejectionReason.INVALID_COMBINATION: status.HTTP_400_BAD_REQUEST,
    RejectionReason.INVALID_URL_SYNTAX: status.HTTP_400_BAD_REQUEST,
    RejectionReason.URL_UNREACHABLE_OR_WRONG_TYPE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    RejectionReason.UPLOAD_FAILED: status.HTTP_502_BAD_GATEWAY,
    RejectionReason.REGISTRATION_FAILED: status.HTTP_502_BAD_GATEWAY,
}


def is_pdf(file: UploadFile) -> bool:
    return file.content_type == "application/pdf" or (file.filename or "").lower().endswith(".pdf")


@router.post("/documents/ingest")
async def ingest_document(
    files: Optional[List[UploadFile]] = File(None),
    url: Optional[str] = Form(None),
    email: str = Depends(get_email_from_header),
    plan: Plan = Depends(get_current_plan),
    storage: StorageManager = Depends(get_storage),
    registry: RegistryManager = Depends(get_registry),
):
    current_count = await registry.count(email)
    if check_quota(current_count, limits_for(plan)) == QuotaStatus.QUOTA_EXCEEDED:
        logger.info(f"Quota reached for {email} on plan {plan.value}")
        return JSONResponse(
            status_code=REJECTION_STATUS_CODES[RejectionReason.QUOTA_EXCEEDED],
            content=rejected(RejectionReason.QUOTA_EXCEEDED).model_dump(mode="json"),
        )

    # Browsers post an empty part when no file is chosen
    files = [f for f in (files or []) if f.filename]
    if len(files) > 1:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please upload a single file.")
    if files and not is_pdf(files[0]):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Only PDF files are allowed.", "invalid_files": [files[0].filename]}
        )

    request = IngestionRequest(
        workspace=email,
        file_candidate=files[0] if files else None,
        url_candidate=url,
        plan=plan,
        current_document_count=current_count,
    )

    service = IngestionService(storage, registry)
    outcome = await service.ingest(request)

    if isinstance(outcome, IngestionSuccess):
        return JSONResponse(status_code=status.HTTP_201_CREATED, content=outcome.model_dump(mode="json"))
    return JSONResponse(status_code=REJECTION_STATUS_CODES[outcome.reason], content=outcome.model_dump(mode="json"))


@router.get("/plans/{plan}/limits", response_model=PlanLimits)
def get_plan_limits(plan: str):
    try:
        return limits_for(plan)
    except UnknownPlanError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/documents/quota", response_model=QuotaSummary)
async def get_quota(
    email: str = Depends(get_email_from_header),
    plan: Plan = Depends(get_current_plan),
    registry: RegistryManager = Depends(get_registry),
):
    limits = limits_for(plan)
    current_count = await registry.count(email)
    return QuotaSummary(
        plan=plan,
        limits=limits,
        current_document_count=current_count,
        remaining_documents=remaining_documents(current_count, limits),
    )


@router.get("/documents", response_model=List[DocumentRecord])
async def list_documents(
    email: str = Depends(get_email_from_header),
    registry: RegistryManager = Depends(get_registry),
):
    documents = await registry.list(email)
    logger.info(f"Listed {len(documents)} document(s) for {email}")
    return documents
