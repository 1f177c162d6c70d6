"""Type definitions for the API Keys API"""

from datetime import datetime
from typing import Optional

from pydantic import Field, SecretStr

from ._base import CamelModel


class ApiKey(CamelModel):
    """API key metadata; the raw secret is never part of it"""

    id: str
    name: str
    key_prefix: str = Field(..., alias="prefix", description="Display prefix, e.g. ctx_a1b2c3")
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    last_used_at: Optional[datetime] = None


class CreatedApiKey(ApiKey):
    """Response of key creation; ``key`` is only ever returned here"""

    key: SecretStr = Field(..., description="Raw API key (save this - only shown once!)")
