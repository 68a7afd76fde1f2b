"""Wire and session types for safe3.

Models accept the camelCase keys used on the wire (``requiredNamespaces``,
``pairingTopic``) as well as their snake_case attribute names.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    DEFAULT_APP_DESCRIPTION,
    DEFAULT_APP_ICON,
    DEFAULT_APP_NAME,
    DEFAULT_APP_URL,
    EIP155_NAMESPACE,
)


class AppMetadata(BaseModel):
    """Identity of this application as shown to the wallet."""

    model_config = ConfigDict(frozen=True)

    name: str = DEFAULT_APP_NAME
    description: str = DEFAULT_APP_DESCRIPTION
    url: str = DEFAULT_APP_URL
    icons: list[str] = Field(default_factory=lambda: [DEFAULT_APP_ICON])


class ProposalNamespace(BaseModel):
    """Capabilities requested for one namespace in a pairing proposal."""

    chains: list[str] = Field(default_factory=list)
    methods: list[str] = Field(default_factory=list)
    events: list[str] = Field(default_factory=list)


class PairingProposal(BaseModel):
    """Capability namespaces required for a new connection."""

    model_config = ConfigDict(populate_by_name=True)

    required_namespaces: dict[str, ProposalNamespace] = Field(
        default_factory=dict, alias="requiredNamespaces"
    )


class SessionNamespace(BaseModel):
    """Accounts, methods and events granted for one namespace."""

    accounts: list[str] = Field(default_factory=list)
    methods: list[str] = Field(default_factory=list)
    events: list[str] = Field(default_factory=list)
    chains: list[str] | None = None


class Session(BaseModel):
    """An approved wallet session.

    Attributes:
        topic: Opaque identifier scoping every remote call to this session.
        namespaces: Namespace -> granted accounts/methods/events.
        expiry: Unix timestamp (seconds) after which the peer expires it.
        pairing_topic: Topic of the pairing the session was created from.
        peer: Wallet metadata, when the peer supplied it.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    topic: str
    namespaces: dict[str, SessionNamespace] = Field(default_factory=dict)
    expiry: int | None = None
    pairing_topic: str | None = Field(default=None, alias="pairingTopic")
    peer: dict[str, Any] | None = None

    def accounts(self, namespace: str = EIP155_NAMESPACE) -> list[str]:
        """Chain-qualified accounts granted for a namespace."""
        ns = self.namespaces.get(namespace)
        return list(ns.accounts) if ns else []


class SessionEventPayload(BaseModel):
    """Payload of a push event delivered by the transport."""

    topic: str
    params: dict[str, Any] = Field(default_factory=dict)


class DisconnectReason(BaseModel):
    """Machine-readable reason sent to the peer on disconnect."""

    code: int
    message: str
