"""Custom exception hierarchy for scrapperbot."""

from __future__ import annotations

import enum


class ExitCode(enum.IntEnum):
    """Process exit codes, one per fatal failure class."""

    OK = 0
    INTERNAL_ERROR = 1
    CONFIG_ERROR = 2
    CONNECTION_ERROR = 3
    TRANSPORT_ERROR = 4
    STARTUP_ERROR = 5


class ScrapperError(Exception):
    """Base exception for all scrapperbot errors."""

    exit_code: ExitCode = ExitCode.INTERNAL_ERROR


class ScrapperConfigError(ScrapperError):
    """Invalid or missing configuration."""

    exit_code = ExitCode.CONFIG_ERROR


class ScrapperStateError(ScrapperError):
    """The state store or event queue was used out of contract."""


class ScrapperTransportError(ScrapperError):
    """Socket-level failure (write error, connection reset).

    The connection is assumed unusable afterwards; commands are not
    acknowledged, so there is nothing to retry.
    """

    exit_code = ExitCode.TRANSPORT_ERROR

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class ScrapperConnectionError(ScrapperTransportError):
    """Could not establish the connection to the game server."""

    exit_code = ExitCode.CONNECTION_ERROR


class ScrapperDecodeError(ScrapperError):
    """An inbound line could not be decoded.

    ``message_type`` is the sniffed discriminant when the envelope parsed
    but the typed payload did not, otherwise ``None``.
    """

    def __init__(self, message: str, *, message_type: str | None = None, line: str = "") -> None:
        self.message_type = message_type
        self.line = line
        super().__init__(message)


class ScrapperStartupError(ScrapperError):
    """The session-ready announcement was malformed.

    Without a player id and roster there is no state to decide from.
    """

    exit_code = ExitCode.STARTUP_ERROR
