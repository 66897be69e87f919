"""Inbound transport events.

The socket reader turns every received line, or every read failure, into
an :class:`InboundEvent`. Only the state processor consumes them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class InboundEvent:
    """One received line, or the error raised while reading it."""

    line: str = ""
    error: BaseException | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None
