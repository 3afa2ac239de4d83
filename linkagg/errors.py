"""Errors raised when adding a link to a connection."""

from __future__ import annotations

from .ids import ServerId
from .messages import RefusedReason


class AddLinkError(Exception):
    """Adding a link to a connection failed."""

    default_message = "adding link failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    def should_reconnect(self) -> bool:
        """Whether the connection attempt should be retried."""
        return False


class AddLinkIoError(AddLinkError):
    """Sending or receiving over the link failed."""

    def __init__(self, error: BaseException) -> None:
        self.error = error
        super().__init__(f"IO error: {error}")

    def should_reconnect(self) -> bool:
        return True


class ServerIdMismatch(AddLinkError):
    """The link reached a different server than the other links of the connection.

    This happens when the server is restarted while a client is connected.
    """

    def __init__(self, expected: ServerId, present: ServerId) -> None:
        self.expected = expected
        self.present = present
        super().__init__(
            f"connected to server {expected} but link connects to server {present}"
        )


class AddLinkNotListening(AddLinkError):
    """The server is not accepting new connections."""

    default_message = "not listening"


class ConnectionClosed(AddLinkError):
    """The connection was closed."""

    default_message = "connection closed"


class ConnectionRefused(AddLinkError):
    """The connection was actively refused."""

    default_message = "connection refused"


class LinkRefused(AddLinkError):
    """The link was actively refused by the link filter."""

    default_message = "link refused"


_BY_REASON = {
    RefusedReason.CLOSED: ConnectionClosed,
    RefusedReason.NOT_LISTENING: AddLinkNotListening,
    RefusedReason.CONNECTION_REFUSED: ConnectionRefused,
    RefusedReason.LINK_REFUSED: LinkRefused,
}


def add_link_error_from_refused(reason: RefusedReason) -> AddLinkError:
    """Returns the error matching a refusal sent by the remote endpoint."""
    return _BY_REASON[RefusedReason(reason)]()