"""
Session and navigation state shared by the HTTP client and controllers.

The bearer token lives in an explicit AuthSession object that is injected
into the client, never in module-level globals. Where the token is
persisted is decided by the TokenStore the session is built with.
"""

import logging
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, List, Optional

from ..common.error_handling import log_on_exception

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"


class TokenStore(ABC):
    """Abstract persistence for the bearer token."""

    @abstractmethod
    def load(self) -> Optional[str]:
        pass

    @abstractmethod
    def save(self, token: str) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass


class MemoryTokenStore(TokenStore):
    """Keeps the token for the lifetime of the process only."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def load(self) -> Optional[str]:
        return self._token

    def save(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStore(TokenStore):
    """Persists the token to a single file (used by the CLI)."""

    def __init__(self, path: str):
        self.path = Path(path).expanduser()

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        token = self.path.read_text(encoding="utf-8").strip()
        return token or None

    def save(self, token: str) -> None:
        with log_on_exception(logger, "save token file", level=logging.ERROR):
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            # an existing file keeps its old mode through os.open
            os.fchmod(fd, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(token)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


class AuthSession:
    """
    Holds the current bearer token.

    Thread-safe: lookups for a page may run in parallel workers.
    """

    def __init__(self, store: Optional[TokenStore] = None):
        self.store = store or MemoryTokenStore()
        self._lock = threading.Lock()
        self._token = self.store.load()

    @property
    def token(self) -> Optional[str]:
        with self._lock:
            return self._token

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def set_token(self, token: str) -> None:
        with self._lock:
            self._token = token
            self.store.save(token)

    def clear(self) -> None:
        with self._lock:
            self._token = None
            self.store.clear()


class Navigator:
    """
    Records the current location and notifies listeners on change.

    A GUI or web shell subscribes to react to redirects; the CLI reads
    ``location`` after a command to tell the user to log in again.
    """

    def __init__(self, location: str = "/"):
        self.location = location
        self.history: List[str] = [location]
        self._listeners: List[Callable[[str], None]] = []

    def subscribe(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    def navigate(self, path: str) -> None:
        logger.debug(f"Navigating to {path}")
        self.location = path
        self.history.append(path)
        for listener in self._listeners:
            listener(path)

    def redirect_to_login(self) -> None:
        self.navigate(LOGIN_PATH)
