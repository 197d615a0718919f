from typing import Optional
from pydantic import BaseModel

class TokenPayload(BaseModel):
    sub: Optional[str] = None  # user_id
    email: Optional[str] = None
    exp: Optional[int] = None
    iat: Optional[int] = None
    type: Optional[str] = None  # always "access"
