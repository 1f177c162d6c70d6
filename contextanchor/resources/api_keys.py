"""API Keys resource implementation"""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from ..types.api_keys import ApiKey, CreatedApiKey

if TYPE_CHECKING:
    from ..async_client import AsyncClient


class AsyncApiKeysResource:
    """Asynchronous API Keys resource"""

    def __init__(self, client: "AsyncClient"):
        self._client = client

    async def list(self) -> List[ApiKey]:
        """List active API keys (prefixes only, never the raw keys)"""
        data = await self._client.gateway.send("/api-keys")
        return [ApiKey.model_validate(item) for item in data or []]

    async def create(self, name: str, expires_at: Optional[datetime] = None) -> CreatedApiKey:
        """
        Create an API key.

        **IMPORTANT**: The raw key is only returned once. Save it securely!

        Args:
            name: Human-readable key name
            expires_at: Optional expiry timestamp

        Returns:
            CreatedApiKey: Key metadata plus ``key`` (a SecretStr)

        Example:
            >>> created = await client.api_keys.create("prod")
            >>> raw = created.key.get_secret_value()
        """
        params = {"name": name}
        if expires_at is not None:
            params["expiresAt"] = expires_at.isoformat()

        data = await self._client.gateway.send("/api-keys", "POST", params=params)
        return CreatedApiKey.model_validate(data)

    async def revoke(self, key_id: str) -> None:
        """Revoke an API key; it can no longer be used for authentication"""
        await self._client.gateway.send(f"/api-keys/{key_id}", "DELETE")
