from typing import Optional

import httpx
from pydantic import BaseModel

from app.exceptions.custom_exception import ContentProbeError
from config import config
from utils.logger import logger


class ProbeHeaders(BaseModel):
    content_type: Optional[str] = None
    content_disposition: Optional[str] = None


class HttpContentProbe:
    """
    Fetches the response headers of a remote URL with a single streamed GET.
    The body is never read; the stream is closed once the headers arrive.
    """

    def __init__(self, timeout: float = None, transport: httpx.AsyncBaseTransport = None):
        self.timeout = timeout if timeout is not None else config.PROBE_TIMEOUT_SECONDS
        self.transport = transport

    async def fetch_headers(self, url: str) -> ProbeHeaders:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, follow_redirects=True, transport=self.transport
            ) as client:
                async with client.stream("GET", url) as resp:
                    status_code = resp.status_code
                    is_success = resp.is_success
                    headers = resp.headers
        except httpx.TimeoutException as e:
            raise ContentProbeError(f"Probe timed out for {url}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ContentProbeError(f"Error connecting to {url}: {str(e)}") from e

        if not is_success:
            raise ContentProbeError(f"Probe for {url} returned status {status_code}")

        logger.info(f"Probed {url}: status={status_code}, content-type={headers.get('content-type')}")
        return ProbeHeaders(
            content_type=headers.get("content-type"),
            content_disposition=headers.get("content-disposition"),
        )
