"""Audit resource implementation"""

from typing import TYPE_CHECKING, Optional, Union

from ..types.audit import AuditAction, AuditPage

if TYPE_CHECKING:
    from ..async_client import AsyncClient


class AsyncAuditResource:
    """Asynchronous Audit resource (read-only)"""

    def __init__(self, client: "AsyncClient"):
        self._client = client

    async def list(
        self,
        page: int = 0,
        size: int = 20,
        action: Optional[Union[str, AuditAction]] = None,
    ) -> AuditPage:
        """
        List audit entries of the current tenant, newest first.

        Args:
            page: Zero-based page index
            size: Entries per page
            action: Only entries with this action (e.g. AuditAction.USER_LOGIN)
        """
        params = {"page": page, "size": size}
        if action:
            params["action"] = action.value if isinstance(action, AuditAction) else action

        data = await self._client.gateway.send("/audit", params=params)
        return AuditPage.model_validate(data)

    async def list_by_user(self, user_id: str, page: int = 0, size: int = 20) -> AuditPage:
        """List audit entries of one user in the current tenant"""
        params = {"page": page, "size": size}
        data = await self._client.gateway.send(f"/audit/user/{user_id}", params=params)
        return AuditPage.model_validate(data)
