"""Session lifecycle, pairing, push-event relay and request bridge."""

from .bridge import RequestBridge
from .pairing import PairingInitiator, build_proposal
from .relay import EventRelay
from .session import Safe3Session, SessionState
from .store import SessionStore

__all__ = [
    "EventRelay",
    "PairingInitiator",
    "RequestBridge",
    "Safe3Session",
    "SessionState",
    "SessionStore",
    "build_proposal",
]
