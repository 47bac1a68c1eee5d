"""Cooperative cancellation for completion requests."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class CancellationToken:
    """
    Set by the host when the user keeps typing and a pending request is stale.

    The provider checks the token once the directory listing comes back and drops
    the result if it was cancelled meanwhile.
    """

    _cancelled: bool = field(default=False)

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
