from typing import Optional
from datetime import datetime, timezone
from pydantic import ValidationError as PydanticValidationError
from category_api.core.security import verify_token
from category_api.schemas.auth.token import TokenPayload

def decode_access_token(token: str) -> Optional[TokenPayload]:
    """Decode and validate access token"""
    payload = verify_token(token)
    if payload is None:
        return None

    try:
        token_data = TokenPayload(**payload)
    except PydanticValidationError:
        return None

    # Check token type
    if token_data.type != "access":
        return None

    # Check expiration
    if token_data.exp is None or datetime.now(timezone.utc).timestamp() > token_data.exp:
        return None

    if not token_data.sub:
        return None

    return token_data
