"""
Credential stores

A credential store holds the one current Session (access token, refresh token,
user profile). It is a pure accessor: no network I/O and no validation of the
tokens themselves. Every read hands out an independent copy so callers can
never mutate the stored record.
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .types.session import Session

logger = logging.getLogger(__name__)

# Fixed key the session is persisted under
SESSION_KEY = "auth"


def encode_session(session: Session) -> str:
    """Serialize a Session to its persisted JSON form (camelCase)"""
    return session.model_dump_json(by_alias=True)


def decode_session(raw: Union[str, bytes, dict]) -> Session:
    """Parse a persisted Session record"""
    if isinstance(raw, dict):
        return Session.model_validate(raw)
    return Session.model_validate_json(raw)


class CredentialStore(ABC):
    """Holds at most one Session, replaced and erased atomically"""

    @abstractmethod
    def read(self) -> Optional[Session]:
        """Return a copy of the current session, or None when signed out"""

    @abstractmethod
    def write(self, session: Session) -> None:
        """Replace the current session"""

    @abstractmethod
    def clear(self) -> None:
        """Erase the current session"""

    @property
    def access_token(self) -> Optional[str]:
        session = self.read()
        return session.access_token if session else None

    @property
    def refresh_token(self) -> Optional[str]:
        session = self.read()
        return session.refresh_token if session else None


class InMemoryCredentialStore(CredentialStore):
    """Keeps the encoded session in process memory"""

    def __init__(self, session: Optional[Session] = None):
        self._snapshot: Optional[str] = encode_session(session) if session else None

    def read(self) -> Optional[Session]:
        snapshot = self._snapshot
        if snapshot is None:
            return None
        return decode_session(snapshot)

    def write(self, session: Session) -> None:
        self._snapshot = encode_session(session)

    def clear(self) -> None:
        self._snapshot = None


class FileCredentialStore(CredentialStore):
    """
    Persists the session as JSON under the ``auth`` key of a file.

    Writes land in a temporary file in the same directory which then replaces
    the target with ``os.replace``, so readers see either the old or the new
    record, never a partial one.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def read(self) -> Optional[Session]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

        try:
            record = json.loads(raw).get(SESSION_KEY)
            if record is None:
                return None
            return decode_session(record)
        except (json.JSONDecodeError, AttributeError, PydanticValidationError) as e:
            logger.warning(f"Discarding unreadable session file {self.path}: {e}")
            self.clear()
            return None

    def write(self, session: Session) -> None:
        payload = '{"%s":%s}' % (SESSION_KEY, encode_session(session))
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
