"""Object storage gateway over the Supabase Storage SDK.

Every SDK failure is turned into StorageError here, so callers never see
storage3 or httpx exceptions.
"""

import asyncio

import httpx
from storage3 import AsyncStorageClient
from storage3.exceptions import StorageApiError
from storage3.utils import StorageException
from supabase import AsyncClientOptions, acreate_client

from src.painel.core.config import Settings
from src.painel.core.exceptions import GatewayNotInitializedError
from src.painel.core.logging import get_logger

logger = get_logger(__name__)

UPLOAD_CACHE_SECONDS = "3600"


class StorageError(Exception):
    """A storage call failed; `message` carries the backend's explanation."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _status_code(error: StorageApiError) -> int | None:
    try:
        return int(error.status)
    except (TypeError, ValueError):
        return None


class StorageClient:
    """Upload, sign and check objects in one bucket."""

    def __init__(self, storage: AsyncStorageClient, bucket: str) -> None:
        self._storage = storage
        self.bucket = bucket

    @classmethod
    async def connect(cls, settings: Settings) -> "StorageClient":
        """Build the Supabase client. Raises GatewayNotInitializedError without a service key."""
        if not settings.storage_service_key:
            raise GatewayNotInitializedError("storage")
        client = await acreate_client(
            settings.storage_url,
            settings.storage_service_key,
            options=AsyncClientOptions(
                storage_client_timeout=int(settings.upload_timeout_seconds)
            ),
        )
        return cls(client.storage, settings.storage_bucket)

    async def upload(
        self,
        path: str,
        content: bytes,
        content_type: str = "application/octet-stream",
        timeout: float = 30.0,
    ) -> str:
        """Store content at path without overwriting. Returns the stored path."""
        try:
            await asyncio.wait_for(
                self._storage.from_(self.bucket).upload(
                    path,
                    content,
                    {
                        "content-type": content_type,
                        "cache-control": UPLOAD_CACHE_SECONDS,
                        "upsert": "false",
                    },
                ),
                timeout=timeout,
            )
        except (TimeoutError, httpx.TimeoutException) as e:
            raise StorageError(f"upload timed out after {timeout}s") from e
        except StorageApiError as e:
            logger.warning(
                "Storage upload rejected",
                path=path,
                status_code=e.status,
                error=e.message,
            )
            raise StorageError(e.message, _status_code(e)) from e
        except (StorageException, httpx.HTTPError) as e:
            raise StorageError(str(e)) from e
        return path

    async def create_signed_url(self, path: str, expires_in: int = 3600) -> str | None:
        """Time-limited retrieval URL, or None when the backend refuses."""
        try:
            response = await self._storage.from_(self.bucket).create_signed_url(path, expires_in)
        except (StorageException, httpx.HTTPError) as e:
            logger.warning("Signed URL refused", path=path, error=str(e))
            return None
        return response.get("signedURL") or None

    async def get_public_url(self, path: str) -> str:
        return await self._storage.from_(self.bucket).get_public_url(path)

    async def exists(self, path: str) -> bool:
        """Existence check (HEAD on the object). A failed check counts as missing."""
        try:
            return await self._storage.from_(self.bucket).exists(path)
        except (StorageException, httpx.HTTPError) as e:
            logger.warning("Storage existence check failed", path=path, error=str(e))
            return False

    async def aclose(self) -> None:
        await self._storage.aclose()
