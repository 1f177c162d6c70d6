"""Type definitions for the Auth API and the persisted session"""

from typing import Optional

from pydantic import EmailStr, Field

from ._base import CamelModel


class UserProfile(CamelModel):
    """Profile of the signed-in user and the tenant they belong to"""

    id: str
    full_name: str
    email: str
    role: str
    tenant_id: str
    tenant_name: str


class Session(CamelModel):
    """Credential pair plus user profile, as returned by login/register/refresh"""

    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: Optional[int] = Field(None, description="Access token lifetime in seconds")
    user: UserProfile


class LoginRequest(CamelModel):
    """Schema for login"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1)


class RegisterRequest(CamelModel):
    """Schema for tenant + owner registration"""

    full_name: str = Field(..., min_length=1)
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    organization_name: str = Field(..., min_length=1)


class RefreshRequest(CamelModel):
    """Schema for session renewal"""

    refresh_token: str
