"""Session DTOs shared across application layers."""

from dataclasses import dataclass
from typing import Literal

GateState = Literal["LOADING", "UNAUTHENTICATED", "AUTHENTICATED"]


@dataclass(frozen=True)
class SessionState:
    authenticated: bool = False
    server_online: bool = False
    loading: bool = True
    generation: int = 0

    @property
    def gate_state(self) -> GateState:
        if self.loading:
            return "LOADING"
        return "AUTHENTICATED" if self.authenticated else "UNAUTHENTICATED"


def is_authenticated(state: SessionState) -> bool:
    return state.authenticated and not state.loading


def can_submit_login(state: SessionState) -> bool:
    return state.server_online and not state.loading
