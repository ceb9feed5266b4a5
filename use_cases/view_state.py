"""Per-view request lifecycle: idle -> pending -> success | error -> idle."""

import time
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from infrastructure.api.errors import ApiError, AuthorizationError

RequestPhase = Literal["idle", "pending", "success", "error"]

FLASH_TTL_SECONDS = 3.0


@dataclass
class ViewRequestState:
    """Loading/message state owned by a single view.

    Success messages clear themselves after `ttl` seconds. Error messages stay
    until the next user action (`acknowledge` or a new `begin`).
    """

    phase: RequestPhase = "idle"
    message: str = ""
    generation: Optional[int] = None
    finished_at: Optional[float] = None
    ttl: float = FLASH_TTL_SECONDS
    clock: Callable[[], float] = time.monotonic

    @property
    def is_pending(self) -> bool:
        return self.phase == "pending"

    def begin(self, generation: int) -> bool:
        """Start a request. Returns False when one is already outstanding."""
        if self.phase == "pending":
            return False
        self.phase = "pending"
        self.message = ""
        self.generation = generation
        self.finished_at = None
        return True

    def accepts(self, generation: int) -> bool:
        """A result may be applied only while the session that started it is alive."""
        return self.phase == "pending" and self.generation == generation

    def succeed(self, message: str = "") -> None:
        self.phase = "success"
        self.message = message
        self.finished_at = self.clock()

    def fail(self, error) -> None:
        if isinstance(error, AuthorizationError):
            # Redirect to login supersedes the view; nothing to show here.
            self.reset()
            return
        self.phase = "error"
        self.message = error.message if isinstance(error, ApiError) else str(error)
        self.finished_at = self.clock()

    def abandon(self) -> None:
        """Drop a stale result without touching what the user sees."""
        self.reset()

    def acknowledge(self) -> None:
        if self.phase in ("success", "error"):
            self.reset()

    def reset(self) -> None:
        self.phase = "idle"
        self.message = ""
        self.generation = None
        self.finished_at = None

    def visible(self) -> tuple[RequestPhase, str]:
        """Phase and message as they should be displayed right now."""
        if self.phase == "success" and self.finished_at is not None:
            if self.clock() - self.finished_at >= self.ttl:
                self.reset()
        return self.phase, self.message
