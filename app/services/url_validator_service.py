from enum import Enum
from typing import Optional
from urllib.parse import unquote, urlsplit

from pydantic import AnyUrl, BaseModel, TypeAdapter, ValidationError

from app.exceptions.custom_exception import ContentProbeError
from app.services.content_probe_service import HttpContentProbe, ProbeHeaders
from utils.logger import logger

PDF_CONTENT_TYPE = "application/pdf"
UNTITLED = "Untitled"

_url_adapter = TypeAdapter(AnyUrl)


class UrlValidationStatus(str, Enum):
    VALID = "valid"
    INVALID_SYNTAX = "invalid_syntax"
    UNREACHABLE_OR_WRONG_TYPE = "unreachable_or_wrong_type"


class UrlValidationResult(BaseModel):
    status: UrlValidationStatus
    resolved_file_name: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.status == UrlValidationStatus.VALID


def is_well_formed_url(candidate: str) -> bool:
    try:
        _url_adapter.validate_python(candidate)
    except ValidationError:
        return False
    return True


def media_type(content_type: Optional[str]) -> str:
    return (content_type or "").split(";")[0].strip().lower()


def file_name_from_disposition(content_disposition: Optional[str]) -> Optional[str]:
    # Best-effort display text; no RFC 6266 decoding
    if not content_disposition or "filename=" not in content_disposition:
        return None
    name = content_disposition.split("filename=")[1].split(";")[0]
    return name.strip().strip('"').strip() or None


def file_name_from_url(url: str) -> Optional[str]:
    try:
        path = urlsplit(url).path
    except ValueError:
        return None
    return unquote(path.split("/")[-1]) or None


def resolve_file_name(url: str, headers: ProbeHeaders) -> str:
    return (
        file_name_from_disposition(headers.content_disposition)
        or file_name_from_url(url)
        or UNTITLED
    )


class UrlValidator:
    def __init__(self, probe=None):
        self.probe = probe or HttpContentProbe()

    async def validate_url(self, candidate: str) -> UrlValidationResult:
        if not is_well_formed_url(candidate):
            logger.info(f"Rejected malformed URL: {candidate!r}")
            return UrlValidationResult(status=UrlValidationStatus.INVALID_SYNTAX)

        try:
            headers = await self.probe.fetch_headers(candidate)
        except ContentProbeError as e:
            logger.warning(f"URL probe failed for {candidate}: {e}")
            return UrlValidationResult(status=UrlValidationStatus.UNREACHABLE_OR_WRONG_TYPE)
        except Exception as e:
            logger.exception(f"Unexpected error while probing {candidate}: {e}")
            return UrlValidationResult(status=UrlValidationStatus.UNREACHABLE_OR_WRONG_TYPE)

        if media_type(headers.content_type) != PDF_CONTENT_TYPE:
            logger.info(f"URL {candidate} is not a PDF (content-type={headers.content_type!r})")
            return UrlValidationResult(status=UrlValidationStatus.UNREACHABLE_OR_WRONG_TYPE)

        return UrlValidationResult(
            status=UrlValidationStatus.VALID,
            resolved_file_name=resolve_file_name(candidate, headers),
        )
