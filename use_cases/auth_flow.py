"""Authentication flow orchestration (application layer)."""

from dataclasses import dataclass
from typing import Literal, Optional

from utils import session_manager

AuthFlowStatus = Literal["CONTINUE", "STOP"]


@dataclass(frozen=True)
class AuthFlowResult:
    """Result contract for auth flow orchestration."""

    status: AuthFlowStatus
    reason: str
    generation: Optional[int] = None


def ensure_authenticated_session() -> AuthFlowResult:
    """Decide which top-level view is reachable for this rerun."""
    session_manager.init_session_state()
    ctx = session_manager.st.session_state.get("admin_ctx")

    if ctx is None or not ctx.gate.initialized:
        return AuthFlowResult(status="STOP", reason="loading")
    if not ctx.gate.is_authenticated:
        reason = "auth_required" if ctx.gate.server_online else "server_offline"
        return AuthFlowResult(status="STOP", reason=reason)
    return AuthFlowResult(status="CONTINUE", reason="authenticated", generation=ctx.gate.generation)


def submit_login(ctx, email: str, password: str) -> None:
    """Exchange credentials for a token and open the session.

    Raises ApiError subclasses; a 401 here means bad credentials and does not evict.
    """
    token = ctx.api.login(email.strip(), password)
    ctx.gate.login(token)
