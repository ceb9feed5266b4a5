import logging
import threading
from typing import Optional, Tuple

log = logging.getLogger(__name__)

TOKEN_KEY = "adminToken"

# ("set", token) or ("clear", None)
BrowserSync = Tuple[str, Optional[str]]


class InMemoryTokenStorage:
    """Single token slot held in process memory."""

    def __init__(self, token: Optional[str] = None):
        self._token = token or None
        self._lock = threading.Lock()

    def get(self) -> Optional[str]:
        with self._lock:
            return self._token

    def set(self, token: str) -> None:
        with self._lock:
            self._token = token or None

    def clear(self) -> None:
        with self._lock:
            self._token = None


class BrowserTokenStorage(InMemoryTokenStorage):
    """Token slot of one browser session, written through to the browser.

    The instance lives in that browser's `st.session_state`, so sessions never
    share a token. The durable copy is the `adminToken` cookie + localStorage
    entry; it seeds the slot at startup. Writes can come from worker threads
    (a 401 during a joined call), so they are queued here and pushed to the
    browser by the script thread through `take_pending_sync()`.
    """

    def __init__(self, key: str = TOKEN_KEY, token: Optional[str] = None):
        super().__init__(token)
        self.key = key
        self._pending: Optional[BrowserSync] = None

    def set(self, token: str) -> None:
        token = token or None
        with self._lock:
            if token == self._token:
                return
            self._token = token
            self._pending = ("set", token) if token else ("clear", None)

    def clear(self) -> None:
        with self._lock:
            if self._token is None:
                return
            self._token = None
            self._pending = ("clear", None)

    def take_pending_sync(self) -> Optional[BrowserSync]:
        """Pop the last unsynced change; only the latest one matters."""
        with self._lock:
            pending, self._pending = self._pending, None
        return pending
