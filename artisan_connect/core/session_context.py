"""Artisan Connect — Anonymous Session Context.

Auth-modal telemetry is keyed by a per-session anonymous identifier. The
identifier is generated on first access and cached on the context for the
rest of the session; a new session gets a new identifier.
"""

import random
import string
import time
from typing import Optional

from fastapi import Cookie

SESSION_COOKIE_NAME = "modal_session_id"

_BASE36 = string.digits + string.ascii_lowercase


def generate_session_id() -> str:
    """session_<epoch-ms>_<9 base36 chars>"""
    suffix = "".join(random.choices(_BASE36, k=9))
    return f"session_{int(time.time() * 1000)}_{suffix}"


class SessionContext:
    """Holds the anonymous session id: uninitialized → generated-and-cached."""

    def __init__(self, session_id: Optional[str] = None):
        self._session_id = session_id or None
        self.generated = False

    @property
    def initialized(self) -> bool:
        return self._session_id is not None

    @property
    def session_id(self) -> str:
        if self._session_id is None:
            self._session_id = generate_session_id()
            self.generated = True
        return self._session_id

    def __repr__(self) -> str:
        return f"<SessionContext {self._session_id or 'uninitialized'}>"


def get_session_context(
    modal_session_id: Optional[str] = Cookie(None),
) -> SessionContext:
    """Dependency: session context rebuilt from the session cookie."""
    return SessionContext(modal_session_id)
