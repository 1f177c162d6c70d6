"""Health resource implementation"""

from typing import TYPE_CHECKING

from ..types.health import HealthStatus

if TYPE_CHECKING:
    from ..async_client import AsyncClient


class AsyncHealthResource:
    """Asynchronous Health resource"""

    def __init__(self, client: "AsyncClient"):
        self._client = client

    async def check(self) -> HealthStatus:
        """Get service status and subsystem details (no authentication needed)"""
        data = await self._client.gateway.send("/health")
        return HealthStatus.model_validate(data)
