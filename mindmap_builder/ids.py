"""Per-call identifier generation."""

from __future__ import annotations

from dataclasses import dataclass, field
import uuid


def _generation_token() -> str:
    return uuid.uuid4().hex[:8]


@dataclass
class IdGenerator:
    """Monotonic id source owned by a single parse or build call.

    The counter restarts at 1 for every generator, and the generation token
    keeps ids from two calls distinct even when the content is identical.
    """

    kind: str
    token: str = field(default_factory=_generation_token)
    counter: int = 0

    def next_id(self) -> str:
        self.counter += 1
        return f"{self.kind}_{self.token}_{self.counter}"
