"""Startup orchestration: build the admin context once and resolve the session gate."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Tuple

from infrastructure.api.admin_api import AdminAPI
from infrastructure.api.http_client import ApiClient
from infrastructure.settings import ApiSettings, load_settings
from infrastructure.storage.token_storage import BrowserTokenStorage
from use_cases.session_gate import SessionGate
from use_cases.session_models import SessionState
from use_cases.view_state import ViewRequestState
from utils import session_manager

log = logging.getLogger(__name__)

StartupStatus = Literal["CONTINUE", "STOP"]


@dataclass(frozen=True)
class StartupResult:
    """Result contract for startup/bootstrap orchestration."""

    status: StartupStatus
    planned_steps: Tuple[str, ...]


@dataclass
class AdminContext:
    """Everything a view needs, threaded explicitly instead of module globals."""

    settings: ApiSettings
    storage: object
    client: ApiClient
    api: AdminAPI
    gate: SessionGate
    view_states: Dict[str, ViewRequestState] = field(default_factory=dict)

    def view(self, key: str) -> ViewRequestState:
        state = self.view_states.get(key)
        if state is None:
            state = ViewRequestState(ttl=self.settings.flash_ttl)
            self.view_states[key] = state
        return state

    def _on_session_change(self, state: SessionState) -> None:
        if not state.authenticated:
            # Results of calls started by the closed session must not land anywhere.
            self.view_states.clear()


def build_context(settings: Optional[ApiSettings] = None, storage=None) -> AdminContext:
    settings = settings or load_settings()
    if storage is None:
        storage = BrowserTokenStorage(settings.token_key, token=session_manager.read_browser_token(settings.token_key))
    client = ApiClient(
        settings.base_url,
        storage,
        health_url=settings.health_url,
        timeout=settings.timeout,
        health_timeout=settings.health_timeout,
    )
    api = AdminAPI(client)
    gate = SessionGate(storage, probe=client.check_server_status, remote_logout=api.logout)
    client.on_unauthorized = gate.evict
    ctx = AdminContext(settings=settings, storage=storage, client=client, api=api, gate=gate)
    gate.subscribe(ctx._on_session_change)
    return ctx


def run_startup() -> StartupResult:
    """Build the context for this browser session and run the one-time reachability probe."""
    executed_steps = []

    session_manager.init_session_state()
    executed_steps.append("init_session_state")

    ctx = session_manager.st.session_state.admin_ctx
    if ctx is None:
        ctx = build_context()
        session_manager.st.session_state.admin_ctx = ctx
        executed_steps.append("build_context")

    if not ctx.gate.initialized:
        with session_manager.st.spinner("Loading..."):
            state = ctx.gate.initialize()
        log.info(f"Session gate resolved to {state.gate_state}")
        executed_steps.append("initialize_gate")

    return StartupResult(status="CONTINUE", planned_steps=tuple(executed_steps))
