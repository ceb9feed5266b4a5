"""Session gate: decides whether the login view or the admin area is reachable.

The gate is the only writer of the token slot. Views signal intent through
`login`/`logout`; the API client reports 401s through `evict`. Eviction may be
reported from several pool threads at once, so transitions run under one lock
and `evict` is a no-op once the rejected session is gone.
"""

import logging
import threading
from typing import Any, Callable, List, Optional

from use_cases.session_models import GateState, SessionState

log = logging.getLogger(__name__)

Listener = Callable[[SessionState], Any]


class SessionGate:
    def __init__(
        self,
        token_storage,
        probe: Callable[[], bool],
        remote_logout: Optional[Callable[[], Any]] = None,
    ):
        self._storage = token_storage
        self._probe = probe
        self._remote_logout = remote_logout
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._state = SessionState()
        self._initialized = False
        self._eviction_count = 0

    # --- Read side ---
    @property
    def session_state(self) -> SessionState:
        return self._state

    @property
    def state(self) -> GateState:
        return self._state.gate_state

    @property
    def generation(self) -> int:
        return self._state.generation

    @property
    def is_authenticated(self) -> bool:
        return self._state.gate_state == "AUTHENTICATED"

    @property
    def server_online(self) -> bool:
        return self._state.server_online

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def eviction_count(self) -> int:
        return self._eviction_count

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    # --- Transitions ---
    def initialize(self) -> SessionState:
        """Probe the backend once and resolve LOADING into one of the two views."""
        with self._lock:
            if self._initialized:
                raise RuntimeError("SessionGate.initialize() must run once per session")
            self._initialized = True

        # Probe outside the lock: it is a network call with its own timeout.
        online = bool(self._probe())
        token = self._storage.get()
        log.info(f"Startup: server_online={online}, token_present={bool(token)}")

        with self._lock:
            if token and online:
                self._transition(authenticated=True, server_online=online)
            else:
                if token:
                    log.warning("Backend unreachable at startup, discarding stored session")
                self._transition(authenticated=False, server_online=online)
            return self._state

    def login(self, token: str) -> None:
        if not token:
            raise ValueError("login() needs a non-empty token")
        with self._lock:
            self._storage.set(token)
            self._transition(authenticated=True, server_online=True)
        log.info("Session opened")

    def logout(self) -> None:
        with self._lock:
            was_authenticated = self.is_authenticated
        if was_authenticated and self._remote_logout is not None:
            try:
                self._remote_logout()
            except Exception as e:
                log.warning(f"Remote logout failed, closing local session anyway: {e}")
        with self._lock:
            if not self.is_authenticated:
                self._storage.clear()
                return
            self._transition(authenticated=False, server_online=self._state.server_online)
        log.info("Session closed by user")

    def evict(self, rejected_token: Optional[str] = None) -> bool:
        """Forced eviction after a 401. Returns True only for the call that evicted."""
        with self._lock:
            if not self.is_authenticated:
                return False
            current = self._storage.get()
            if rejected_token is not None and current is not None and rejected_token != current:
                # A newer login replaced the rejected token; the late 401 is stale.
                return False
            self._eviction_count += 1
            self._transition(authenticated=False, server_online=self._state.server_online)
        log.warning("Session evicted: API rejected the admin token")
        return True

    def _transition(self, *, authenticated: bool, server_online: bool) -> None:
        if authenticated:
            if not self._storage.get():
                raise RuntimeError("Cannot enter AUTHENTICATED without a stored token")
        else:
            self._storage.clear()
        self._state = SessionState(
            authenticated=authenticated,
            server_online=server_online,
            loading=False,
            generation=self._state.generation + 1,
        )
        for listener in list(self._listeners):
            listener(self._state)
