"""Documents resource implementation"""

from typing import TYPE_CHECKING, Iterable, List, Optional

from ..poller import ResourcePoller
from ..types.documents import Document
from ..upload import FileInput, ProgressCallback

if TYPE_CHECKING:
    from ..async_client import AsyncClient


class AsyncDocumentsResource:
    """Asynchronous Documents resource"""

    def __init__(self, client: "AsyncClient"):
        self._client = client

    async def list(self) -> List[Document]:
        """
        List all documents of the current tenant.

        Returns:
            List of documents with their processing status
        """
        data = await self._client.gateway.send("/documents")
        return [Document.model_validate(item) for item in data or []]

    async def get(self, document_id: str) -> Document:
        """
        Get a document by ID.

        Raises:
            NotFoundError: Document not found
        """
        data = await self._client.gateway.send(f"/documents/{document_id}")
        return Document.model_validate(data)

    async def upload(
        self,
        file: FileInput,
        file_name: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Document:
        """
        Upload a document for processing.

        Processing happens asynchronously on the server; use watch() to follow
        the document from UPLOADED to READY (or ERROR).

        Args:
            file: Raw bytes, file path, or binary file object
            file_name: Name to upload under (required for raw bytes)
            on_progress: Called with the upload percentage (0-100)

        Returns:
            Document: Created document

        Raises:
            PayloadTooLargeError: File exceeds the server's size limit
            ValidationError: Unsupported file type
            NetworkError: Transport failure
        """
        return await self._client.uploads.upload(file, file_name, on_progress)

    async def delete(self, document_id: str) -> None:
        """
        Delete a document and all its embeddings.

        Raises:
            NotFoundError: Document not found
        """
        await self._client.gateway.send(f"/documents/{document_id}", "DELETE")

    def poller(self, interval: Optional[float] = None) -> ResourcePoller[Document]:
        """Create a poller that refreshes the document list until processing settles"""
        return ResourcePoller(
            self.list,
            lambda document: document.is_terminal,
            interval=self._client.poll_interval if interval is None else interval,
        )

    def watch(
        self,
        documents: Optional[Iterable[Document]] = None,
        interval: Optional[float] = None,
    ):
        """
        Follow document processing.

        Example:
            >>> doc = await client.documents.upload("report.pdf")
            >>> async for documents in client.documents.watch([doc]):
            ...     print({d.original_name: d.status.value for d in documents})
        """
        return self.poller(interval).watch(documents)
