"""Exceptions raised by safe3 sessions and adapters."""

from typing import Any


class Safe3Error(Exception):
    """Base class for all safe3 errors.

    Attributes:
        cause: The underlying exception, if this error wraps one.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class InitializationError(Safe3Error):
    """The transport handle could not be created."""


class PairingError(Safe3Error):
    """The pairing proposal failed or the peer rejected it."""


class NotConnectedError(Safe3Error):
    """An operation needs a session but none is active."""

    def __init__(self, message: str = "Wallet not connected") -> None:
        super().__init__(message)


class NoAccountsError(Safe3Error):
    """The session holds no accounts for the requested namespace."""

    def __init__(self, message: str = "No accounts found in session") -> None:
        super().__init__(message)


class RemoteRequestError(Safe3Error):
    """A remote procedure call failed or was rejected by the transport.

    Attributes:
        method: The remote method that failed, if known.
        code: Error code reported by the peer, if any.
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        method: str | None = None,
        code: Any = None,
    ) -> None:
        super().__init__(message, cause)
        self.method = method
        self.code = code


class UnsupportedOperationError(RemoteRequestError):
    """The peer rejected a method it did not declare support for."""


class SessionClosedError(Safe3Error):
    """The session object was cleaned up and can no longer be used."""

    def __init__(self, message: str = "Session has been cleaned up") -> None:
        super().__init__(message)


class ConfigurationError(Safe3Error):
    """No adapter could be built from the supplied configuration."""


class DeploymentError(Safe3Error):
    """A contract deployment did not produce a contract address."""
