import uuid
from typing import Optional, Dict
from fastapi import Request

HDR_REQUEST_ID = "X-Request-Id"
HDR_PROCESS_TIME = "X-Process-Time"


def resolve_request_id(request: Request) -> str:
    """Reuse the caller's request id when sent, otherwise mint one and keep it on request.state"""
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        request_id = request.headers.get(HDR_REQUEST_ID) or uuid.uuid4().hex
        request.state.request_id = request_id
    return request_id


def get_request_context(request: Request) -> Dict[str, Optional[str]]:
    return {
        "request_id": resolve_request_id(request),
        "endpoint": f"{request.method} {request.url.path}",
        "client": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
    }
