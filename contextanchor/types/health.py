"""Type definitions for the Health API"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import ConfigDict

from ._base import CamelModel


class HealthStatus(CamelModel):
    """Service status with subsystem details"""

    model_config = ConfigDict(extra="allow")

    status: str
    service: Optional[str] = None
    timestamp: Optional[datetime] = None
    uptime: Optional[str] = None
    database: Optional[Dict] = None
    ai: Optional[Dict] = None
    runtime: Optional[Dict] = None
    build: Optional[Dict] = None

    @property
    def is_up(self) -> bool:
        return self.status == "UP"
