"""
End-to-end example of the ContextAnchor AsyncClient.

This example shows:
- Login with a persisted session
- Document upload with progress reporting
- Watching server-side processing until READY
- Optimistic chat with rollback on failure
- API key management
"""

import asyncio
import logging
import sys
from pathlib import Path

from contextanchor import (
    AsyncClient,
    ContextAnchorError,
    FileCredentialStore,
    LocalValidationError,
)


def print_progress(percent: int):
    print(f"\r  Uploading... {percent:3d}%", end="", flush=True)
    if percent == 100:
        print()


async def upload_and_wait(client: AsyncClient, path: Path):
    """Upload a document and follow it until processing settles"""

    print("=" * 60)
    print("DOCUMENT UPLOAD")
    print("=" * 60)

    document = await client.documents.upload(path, on_progress=print_progress)
    print(f"✓ Uploaded: {document.original_name} (ID: {document.id})")

    async for documents in client.documents.watch([document]):
        current = next((d for d in documents if d.id == document.id), None)
        if current is None:
            print("✗ Document disappeared while processing")
            return None
        print(f"  Status: {current.status.value}")
        document = current

    if document.status.value == "ERROR":
        print(f"✗ Processing failed: {document.error_message}")
        return None

    print(f"✓ Ready: {document.chunk_count} chunks")
    return document


async def chat(client: AsyncClient, document_ids: list[str]):
    """Ask a few questions in one conversation"""

    print("\n" + "=" * 60)
    print("CHAT")
    print("=" * 60)

    conversation = client.chat.conversation()
    for question in ["What is this document about?", "   ", "List its key points."]:
        print(f"\nQ: {question}")
        try:
            reply = await conversation.send(question, document_ids)
        except LocalValidationError as e:
            print(f"✗ Not sent: {e.message}")
            continue
        except ContextAnchorError as e:
            print(f"✗ Failed: {e.message} (draft kept: {conversation.draft!r})")
            continue

        print(f"A: {reply.content}")
        for source in reply.sources or []:
            print(f"   - {source.document_name} p.{source.page_number} (score {source.similarity_score})")

    print(f"\n✓ Conversation {conversation.conversation_id}: {len(conversation.messages)} messages")


async def api_keys(client: AsyncClient):
    """Create, list and revoke an API key"""

    print("\n" + "=" * 60)
    print("API KEYS")
    print("=" * 60)

    created = await client.api_keys.create("example-script")
    print(f"✓ Created key {created.key_prefix}... (save it now, it is shown once)")

    for key in await client.api_keys.list():
        print(f"  - {key.name}: {key.key_prefix}")

    await client.api_keys.revoke(created.id)
    print(f"✓ Revoked {created.key_prefix}")


async def main():
    """Run the example workflow"""

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if len(sys.argv) != 4:
        print("Usage: python async_workflow.py EMAIL PASSWORD FILE")
        sys.exit(1)
    email, password, file_path = sys.argv[1:]

    store = FileCredentialStore(Path.home() / ".contextanchor" / "session.json")

    async with AsyncClient(
        credential_store=store,
        on_session_expired=lambda: print("✗ Session expired, please log in again"),
    ) as client:
        health = await client.health.check()
        print(f"\nContextAnchor service: {health.status}\n")

        if not client.auth.is_authenticated:
            session = await client.auth.login(email, password)
            print(f"✓ Logged in as {session.user.full_name} ({session.user.tenant_name})\n")

        document = await upload_and_wait(client, Path(file_path))
        if document:
            await chat(client, [document.id])

        await api_keys(client)

        print("\n" + "=" * 60)
        print("EXAMPLE COMPLETE!")
        print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
