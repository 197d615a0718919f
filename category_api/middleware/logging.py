import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from category_api.core.request_context import HDR_PROCESS_TIME, HDR_REQUEST_ID, get_request_context

logger = logging.getLogger("access")

class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        context = get_request_context(request)

        logger.info(
            f"🌐 [{context['request_id']}] {context['endpoint']} - "
            f"Client: {context['client'] or 'unknown'} - "
            f"User-Agent: {context['user_agent'] or 'unknown'}"
        )

        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"{'❌' if response.status_code >= 500 else '✅'} [{context['request_id']}] {context['endpoint']} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        response.headers[HDR_PROCESS_TIME] = f"{process_time:.4f}"
        response.headers[HDR_REQUEST_ID] = context["request_id"]
        return response
