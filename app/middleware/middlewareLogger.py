import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse

from utils.logger import logger


class LoggerMiddleware(BaseHTTPMiddleware):
    """Record request log middleware"""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"Unhandled error: {str(e)}")
            return JSONResponse(
                status_code=500,
                content={"error": "A server error occurred", "details": "An unexpected error occurred"},
            )
        finally:
            duration = round(time.perf_counter() - start_time, 4)
            logger.info(f'{request.method} {request.url} completed in {duration}s')
        return response
