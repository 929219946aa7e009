"""Payment gateway connectors."""

from .base import (
    ConnectorBase,
    CreditCard,
    Address,
    Phone,
    Document,
    FraudDetails,
    TicketEvent,
    FraudEvent,
    FraudPerson,
    FraudCategory,
    Item,
    GatewayOptions,
    GatewayResponse,
)
from .maxipago import MaxipagoConnector

__all__ = [
    # Base classes and models
    "ConnectorBase",
    "CreditCard",
    "Address",
    "Phone",
    "Document",
    "FraudDetails",
    "TicketEvent",
    "FraudEvent",
    "FraudPerson",
    "FraudCategory",
    "Item",
    "GatewayOptions",
    "GatewayResponse",
    # Connectors
    "MaxipagoConnector",
]
