"""Storage upload wrapper: size check, safe unique names, bounded retry with backoff."""

import asyncio
import re
import time
import unicodedata
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol

from src.painel.core.config import Settings
from src.painel.core.logging import get_logger
from src.painel.services.storage_service import StorageError

logger = get_logger(__name__)

MAX_FILE_SIZE_MB = 10
MAX_BASE_NAME_LENGTH = 100

INVALID_KEY_MESSAGE = (
    "Nome de arquivo inválido. Renomeie o arquivo removendo caracteres especiais e espaços."
)
PERMISSION_DENIED_MESSAGE = "Permissão negada para fazer upload. Entre em contato com o suporte."
GENERIC_FAILURE_MESSAGE = "Falha no upload após várias tentativas."

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")
_UNDERSCORE_RUNS = re.compile(r"_+")

ProgressCallback = Callable[[float], None]


@dataclass(frozen=True)
class PendingFile:
    """A file received from the client, held in memory until uploaded."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class UploadResult:
    success: bool
    file_path: str | None = None
    error: str | None = None
    retries: int = 0


class ObjectUploader(Protocol):
    async def upload(
        self,
        path: str,
        content: bytes,
        content_type: str = ...,
        timeout: float = ...,
    ) -> str: ...


def sanitize_file_name(file_name: str) -> str:
    """Storage-safe version of a file name.

    Diacritics are stripped, every other non-alphanumeric character becomes
    an underscore (runs collapsed), the base is lowercased and cut to 100
    characters, and the extension after the last dot is kept lowercased.
    Applying it twice gives the same result.
    """
    if not file_name:
        return ""

    last_dot = file_name.rfind(".")
    extension = file_name[last_dot:] if last_dot >= 0 else ""
    base_name = file_name[:last_dot] if last_dot >= 0 else file_name

    without_accents = _COMBINING_MARKS.sub("", unicodedata.normalize("NFD", base_name))
    sanitized = _UNDERSCORE_RUNS.sub("_", _NON_ALNUM.sub("_", without_accents)).lower()
    return sanitized[:MAX_BASE_NAME_LENGTH] + extension.lower()


def generate_unique_file_path(folder: str, file_name: str, timestamp_ms: int | None = None) -> str:
    """`{folder}/{millisecond timestamp}_{sanitized name}`."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{folder.strip('/')}/{timestamp_ms}_{sanitize_file_name(file_name)}"


def validate_file_size(size: int, max_size_mb: int = MAX_FILE_SIZE_MB) -> bool:
    return size <= max_size_mb * 1024 * 1024


def size_limit_message(max_size_mb: int = MAX_FILE_SIZE_MB) -> str:
    return f"O arquivo excede o tamanho máximo permitido ({max_size_mb}MB)"


def format_file_size(size: int) -> str:
    """Human readable size, e.g. 2621440 -> "2.5 MB"."""
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    index = 0
    while index < len(units) - 1 and size >= 1024 ** (index + 1):
        index += 1
    value = float(f"{size / 1024**index:.2f}")
    return f"{value:g} {units[index]}"


def describe_upload_failure(error: str) -> str:
    lowered = error.lower()
    if "invalid key" in lowered:
        return INVALID_KEY_MESSAGE
    if "permission denied" in lowered:
        return PERMISSION_DENIED_MESSAGE
    return GENERIC_FAILURE_MESSAGE


class FileUploader:
    """Uploads one file at a time with retries.

    A file gets one initial attempt plus up to `max_retries` retries. Before
    retry n the uploader waits min(base * 2**(n-1), cap) seconds and reports
    progress min(n / max_retries * 100, 95); success reports 100.
    """

    def __init__(
        self,
        storage: ObjectUploader,
        max_size_mb: int = MAX_FILE_SIZE_MB,
        max_retries: int = 3,
        timeout: float = 30.0,
        backoff_base: float = 1.0,
        backoff_max: float = 10.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.storage = storage
        self.max_size_mb = max_size_mb
        self.max_retries = max_retries
        self.timeout = timeout
        self.backoff_base = backoff_base
        self.backoff_max = backoff_max
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_settings(cls, storage: ObjectUploader, settings: Settings) -> "FileUploader":
        return cls(
            storage,
            max_size_mb=settings.upload_max_size_mb,
            max_retries=settings.upload_max_retries,
            timeout=settings.upload_timeout_seconds,
            backoff_base=settings.upload_backoff_base_seconds,
            backoff_max=settings.upload_backoff_max_seconds,
        )

    def backoff_delay(self, retry: int) -> float:
        return float(min(self.backoff_base * 2 ** (retry - 1), self.backoff_max))

    async def upload(
        self,
        file: PendingFile,
        folder: str = "",
        on_progress: ProgressCallback | None = None,
    ) -> UploadResult:
        if not validate_file_size(file.size, self.max_size_mb):
            return UploadResult(success=False, error=size_limit_message(self.max_size_mb))

        path = generate_unique_file_path(folder, file.filename, int(self._clock() * 1000))
        last_error = ""

        for retry in range(self.max_retries + 1):
            if retry > 0:
                await self._sleep(self.backoff_delay(retry))
                if on_progress:
                    on_progress(min(retry / self.max_retries * 100, 95))

            try:
                await self.storage.upload(path, file.content, file.content_type, self.timeout)
            except StorageError as e:
                last_error = e.message
                logger.warning(
                    "Upload attempt failed",
                    path=path,
                    attempt=retry + 1,
                    error=e.message,
                )
                continue

            if on_progress:
                on_progress(100)
            if retry:
                logger.info("Upload succeeded after retries", path=path, retries=retry)
            return UploadResult(success=True, file_path=path, retries=retry)

        logger.error(
            "Upload failed after retries",
            path=path,
            retries=self.max_retries,
            error=last_error,
        )
        return UploadResult(
            success=False,
            error=describe_upload_failure(last_error),
            retries=self.max_retries,
        )
