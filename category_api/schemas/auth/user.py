from typing import Optional
from pydantic import BaseModel, EmailStr, Field, validator
from datetime import datetime

from category_api.core.security import BCRYPT_MAX_PASSWORD_BYTES

class UserBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr

    @validator('name', pre=True)
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @validator('email')
    def normalize_email(cls, v):
        return v.lower()

class UserCreate(UserBase):
    password: str

    @validator('password')
    def validate_password(cls, v):
        if len(v) < 8:
            raise ValueError('Password must be at least 8 characters')
        if len(v.encode('utf-8')) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f'Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes')
        if not any(c.isupper() for c in v):
            raise ValueError('Password must contain at least one uppercase letter')
        if not any(c.islower() for c in v):
            raise ValueError('Password must contain at least one lowercase letter')
        if not any(c.isdigit() for c in v):
            raise ValueError('Password must contain at least one number')
        return v

class UserResponse(BaseModel):
    id: int
    name: str
    email: EmailStr

    class Config:
        from_attributes = True

class UserInDB(UserResponse):
    is_active: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
