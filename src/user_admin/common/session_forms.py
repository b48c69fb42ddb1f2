"""Server-side storage for forms that live across several requests.

The Flask cookie session only carries a random token; the form objects
(which may hold uploaded file bytes) stay on the server keyed by that token.
"""
from __future__ import annotations

import logging
import secrets
import threading
import time
from collections import OrderedDict
from datetime import timedelta
from typing import Any, Callable, Dict, Optional, Tuple

from flask import session

from ..core.constants import DEFAULT_FORM_STORE_SESSIONS, DEFAULT_SESSION_DAYS

logger = logging.getLogger(__name__)

FORM_TOKEN_KEY = "form_token"


def form_token() -> str:
    """Return the current browser session's form token, creating one if needed."""
    token = session.get(FORM_TOKEN_KEY)
    if not token:
        token = secrets.token_urlsafe(16)
        session[FORM_TOKEN_KEY] = token
    return token


class FormSessionStore:
    """Forms grouped per session token.

    A token untouched for ``max_age`` is dropped, and at most ``max_sessions``
    tokens are kept (least recently used go first). Both checks run on ``put``.
    """

    def __init__(
        self,
        *,
        max_age: timedelta = timedelta(days=DEFAULT_SESSION_DAYS),
        max_sessions: int = DEFAULT_FORM_STORE_SESSIONS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be >= 1, got {max_sessions}")
        self._max_age = max_age.total_seconds()
        self._max_sessions = max_sessions
        self._clock = clock
        self._lock = threading.Lock()
        # token -> (last touched, {form name: form}); oldest first
        self._sessions: "OrderedDict[str, Tuple[float, Dict[str, Any]]]" = OrderedDict()

    def get(self, token: str, name: str) -> Optional[Any]:
        with self._lock:
            entry = self._sessions.get(token)
            if entry is None:
                return None
            forms = self._touch(token, entry[1])
            return forms.get(name)

    def put(self, token: str, name: str, form: Any) -> None:
        with self._lock:
            entry = self._sessions.get(token)
            forms = self._touch(token, entry[1] if entry else {})
            forms[name] = form
            self._prune()

    def clear(self, token: str, name: str) -> None:
        with self._lock:
            entry = self._sessions.get(token)
            if entry is None:
                return
            entry[1].pop(name, None)
            if not entry[1]:
                del self._sessions[token]

    def discard_session(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def _touch(self, token: str, forms: Dict[str, Any]) -> Dict[str, Any]:
        self._sessions[token] = (self._clock(), forms)
        self._sessions.move_to_end(token)
        return forms

    def _prune(self) -> None:
        now = self._clock()
        while self._sessions:
            token, (touched, _) = next(iter(self._sessions.items()))
            if now - touched <= self._max_age and len(self._sessions) <= self._max_sessions:
                break
            del self._sessions[token]
            logger.debug("evicted stored forms for an idle session")

    def __len__(self) -> int:
        with self._lock:
            return sum(len(forms) for _, forms in self._sessions.values())
