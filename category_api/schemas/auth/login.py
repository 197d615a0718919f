from pydantic import BaseModel, EmailStr, validator

from category_api.schemas.auth.user import UserResponse

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @validator('email')
    def normalize_email(cls, v):
        return v.lower()

class AuthResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse
