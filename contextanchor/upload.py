"""
Multipart document upload with progress reporting

The whole multipart body is encoded up front, then streamed to the gateway in
fixed-size chunks; progress is reported as the transport consumes them. The
stream can be iterated again, which lets the gateway resend it on its single
401 retry. Uploads are not resumable.
"""

import logging
from pathlib import Path
from typing import AsyncIterator, BinaryIO, Callable, Optional, Tuple, Union

import httpx

from .exceptions import ContextAnchorError
from .gateway import RequestGateway
from .types.documents import Document

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]

FileInput = Union[bytes, str, Path, BinaryIO]


class ProgressReporter:
    """
    Forwards integer percentages to a callback.

    Values never go backwards, 99 is the ceiling while bytes are still in
    flight, and 100 is only ever emitted by complete(). Nothing is emitted
    after close().
    """

    def __init__(self, callback: Optional[ProgressCallback]):
        self._callback = callback
        self._last = -1
        self._closed = False

    @property
    def last(self) -> int:
        return self._last

    def _emit(self, percent: int) -> None:
        if self._closed or percent <= self._last:
            return
        self._last = percent
        if self._callback:
            self._callback(percent)

    def advance(self, sent: int, total: int) -> None:
        if total <= 0:
            return
        self._emit(min(99, round(sent * 100 / total)))

    def complete(self) -> None:
        self._emit(100)
        self._closed = True

    def close(self) -> None:
        self._closed = True


class ProgressStream:
    """Replayable async byte stream that reports consumption progress"""

    def __init__(self, body: bytes, chunk_size: int, reporter: ProgressReporter):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._body = body
        self._chunk_size = chunk_size
        self._reporter = reporter

    def __len__(self) -> int:
        return len(self._body)

    async def __aiter__(self) -> AsyncIterator[bytes]:
        total = len(self._body)
        sent = 0
        for start in range(0, total, self._chunk_size):
            chunk = self._body[start:start + self._chunk_size]
            yield chunk
            sent += len(chunk)
            self._reporter.advance(sent, total)


def read_file_input(file: FileInput, file_name: Optional[str] = None) -> Tuple[str, bytes]:
    """
    Normalize the accepted file inputs to (file name, content).

    Args:
        file: Raw bytes, a path, or a binary file object
        file_name: Name to upload under (required for raw bytes)
    """
    if isinstance(file, (bytes, bytearray)):
        if not file_name:
            raise ValueError("file_name is required when uploading raw bytes")
        return file_name, bytes(file)

    if isinstance(file, (str, Path)):
        path = Path(file)
        return file_name or path.name, path.read_bytes()

    name = file_name or Path(getattr(file, "name", "file")).name
    return name, file.read()


def encode_multipart(file_name: str, content: bytes) -> Tuple[bytes, str]:
    """Build a multipart/form-data body with a single ``file`` field"""
    request = httpx.Request("POST", "http://upload.invalid", files={"file": (file_name, content)})
    return request.read(), request.headers["Content-Type"]


class UploadChannel:
    """Uploads documents through the gateway while reporting progress"""

    def __init__(self, gateway: RequestGateway, chunk_size: int = 64 * 1024):
        self._gateway = gateway
        self.chunk_size = chunk_size

    async def upload(
        self,
        file: FileInput,
        file_name: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
        path: str = "/documents",
    ) -> Document:
        """
        Upload a document as a single multipart request.

        Args:
            file: Raw bytes, file path, or binary file object
            file_name: Name to upload under (defaults to the path/file name)
            on_progress: Called with 0..100; non-decreasing, ends with 100 on success
            path: Upload endpoint

        Returns:
            Document: The created document (status UPLOADED)

        Raises:
            NetworkError: Transport failure (restart the upload from zero)
            ApiError: Upload rejected by the server (size, type, ...)
        """
        name, content = read_file_input(file, file_name)
        body, content_type = encode_multipart(name, content)

        reporter = ProgressReporter(on_progress)
        stream = ProgressStream(body, self.chunk_size, reporter)
        headers = {
            "Content-Type": content_type,
            "Content-Length": str(len(body)),
        }

        logger.debug(f"Uploading {name} ({len(content)} bytes)")
        try:
            data = await self._gateway.send(path, "POST", headers=headers, content=stream)
            document = Document.model_validate(data)
        except ContextAnchorError as e:
            reporter.close()
            logger.warning(f"Upload of {name} failed: {e.message}")
            raise
        except BaseException:
            reporter.close()
            raise

        reporter.complete()
        logger.info(f"Uploaded {name} as document {document.id}")
        return document
