"""Unit tests for document uploads and progress reporting"""

import io

import httpx
import pytest
import pytest_asyncio

from contextanchor import AsyncClient, NetworkError, PayloadTooLargeError, ValidationError
from contextanchor.types.documents import DocumentStatus
from contextanchor.upload import ProgressReporter, encode_multipart, read_file_input

TEN_KB = b"%PDF-1.7\n" + b"x" * (10 * 1024 - 9)


class RecordingHandler:
    """MockTransport handler that records requests and replays canned responses"""

    def __init__(self, *responses):
        self._responses = list(responses)
        self.requests = []

    def queue(self, *responses):
        self._responses.extend(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(request)
        return response


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest_asyncio.fixture
async def upload_client(base_url, signed_in_store, handler, expired_calls):
    """Client whose transport is a recording MockTransport"""
    client = AsyncClient(
        base_url=base_url,
        credential_store=signed_in_store,
        on_session_expired=lambda: expired_calls.append(True),
        upload_chunk_size=1024,
        transport=httpx.MockTransport(handler),
    )
    yield client
    await client.close()


@pytest.mark.unit
class TestProgressReporter:
    """Test suite for ProgressReporter"""

    def test_caps_at_99_until_complete(self):
        """Test 100 is only emitted on completion"""
        values = []
        reporter = ProgressReporter(values.append)

        reporter.advance(50, 100)
        reporter.advance(100, 100)
        reporter.complete()

        assert values == [50, 99, 100]

    def test_never_goes_backwards(self):
        """Test values are non-decreasing and deduplicated"""
        values = []
        reporter = ProgressReporter(values.append)

        reporter.advance(60, 100)
        reporter.advance(10, 100)
        reporter.advance(60, 100)
        reporter.advance(70, 100)

        assert values == [60, 70]
        assert reporter.last == 70

    def test_silent_after_close(self):
        """Test nothing is emitted once closed"""
        values = []
        reporter = ProgressReporter(values.append)

        reporter.advance(30, 100)
        reporter.close()
        reporter.advance(90, 100)
        reporter.complete()

        assert values == [30]

    def test_no_callback(self):
        """Test reporting without a callback"""
        reporter = ProgressReporter(None)
        reporter.advance(1, 2)
        reporter.complete()
        assert reporter.last == 100


@pytest.mark.unit
class TestFileInput:
    """Test suite for upload input normalization"""

    def test_bytes_require_name(self):
        """Test raw bytes need an explicit file name"""
        with pytest.raises(ValueError, match="file_name is required"):
            read_file_input(b"data")

    def test_bytes(self):
        """Test raw bytes with a name"""
        assert read_file_input(b"data", "notes.txt") == ("notes.txt", b"data")

    def test_path(self, tmp_path):
        """Test a path is read from disk and named after the file"""
        path = tmp_path / "report.pdf"
        path.write_bytes(TEN_KB)

        assert read_file_input(path) == ("report.pdf", TEN_KB)
        assert read_file_input(str(path), "renamed.pdf") == ("renamed.pdf", TEN_KB)

    def test_file_object(self, tmp_path):
        """Test a binary file object is read"""
        path = tmp_path / "report.pdf"
        path.write_bytes(TEN_KB)

        with open(path, "rb") as f:
            assert read_file_input(f) == ("report.pdf", TEN_KB)

        assert read_file_input(io.BytesIO(b"abc"), "a.txt") == ("a.txt", b"abc")

    def test_multipart_body(self):
        """Test the multipart body carries the file field"""
        body, content_type = encode_multipart("report.pdf", b"hello")

        assert content_type.startswith("multipart/form-data; boundary=")
        assert b'name="file"; filename="report.pdf"' in body
        assert b"hello" in body


@pytest.mark.unit
@pytest.mark.asyncio
async def test_upload_reports_progress(upload_client, handler, document_factory):
    """Test a 10 KB upload reports non-decreasing progress ending at 100"""
    handler.queue(httpx.Response(201, json=document_factory("d1", "UPLOADED")))
    progress = []

    document = await upload_client.documents.upload(TEN_KB, "report.pdf", on_progress=progress.append)

    assert document.id == "d1"
    assert document.status == DocumentStatus.UPLOADED
    assert progress[-1] == 100
    assert progress == sorted(progress)
    assert len(progress) > 2
    assert all(p <= 99 for p in progress[:-1])

    request = handler.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/api/v1/documents"
    assert request.headers["Authorization"] == "Bearer access-1"
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    assert int(request.headers["Content-Length"]) == len(request.content)
    assert b'filename="report.pdf"' in request.content


@pytest.mark.unit
@pytest.mark.asyncio
async def test_upload_rejected_too_large(upload_client, handler):
    """Test a size rejection raises with the server body and never reports 100"""
    body = {"message": "File exceeds maximum size of 50MB"}
    handler.queue(httpx.Response(413, json=body))
    progress = []

    with pytest.raises(PayloadTooLargeError, match="maximum size") as exc_info:
        await upload_client.documents.upload(TEN_KB, "huge.pdf", on_progress=progress.append)

    assert exc_info.value.body == body
    assert 100 not in progress


@pytest.mark.unit
@pytest.mark.asyncio
async def test_upload_rejected_type(upload_client, handler):
    """Test an unsupported file type surfaces as a validation error"""
    handler.queue(httpx.Response(400, json={"message": "Unsupported file type"}))

    with pytest.raises(ValidationError, match="Unsupported file type"):
        await upload_client.documents.upload(b"MZ...", "tool.exe")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_upload_network_error(upload_client, handler):
    """Test a dropped connection surfaces as NetworkError"""
    handler.queue(httpx.ConnectError("Connection reset"))
    progress = []

    with pytest.raises(NetworkError):
        await upload_client.documents.upload(TEN_KB, "report.pdf", on_progress=progress.append)

    assert 100 not in progress


@pytest.mark.unit
@pytest.mark.asyncio
async def test_upload_resent_after_renewal(upload_client, handler, session_factory, document_factory):
    """Test the whole body is resent on the renewal retry"""
    handler.queue(
        httpx.Response(401),
        httpx.Response(200, json=session_factory("access-2", "refresh-2")),
        httpx.Response(201, json=document_factory("d1", "UPLOADED")),
    )
    progress = []

    document = await upload_client.documents.upload(TEN_KB, "report.pdf", on_progress=progress.append)

    assert document.id == "d1"
    assert progress == sorted(progress)
    assert progress[-1] == 100

    first, refresh, retry = handler.requests
    assert refresh.url.path == "/api/v1/auth/refresh"
    assert retry.headers["Authorization"] == "Bearer access-2"
    assert retry.content == first.content
