"""maxiPago! XML protocol: request builder, response parser and connector."""

from .operations import (
    AUTHORIZATION_DELIMITER,
    Envelope,
    Operation,
    OPERATIONS,
    CardPresent,
    TokenizedCard,
    join_authorization,
    split_authorization,
)
from .builder import build_request
from .parser import flatten, parse
from .scrub import scrub
from .connector import MaxipagoConnector

__all__ = [
    "AUTHORIZATION_DELIMITER",
    "Envelope",
    "Operation",
    "OPERATIONS",
    "CardPresent",
    "TokenizedCard",
    "join_authorization",
    "split_authorization",
    "build_request",
    "flatten",
    "parse",
    "scrub",
    "MaxipagoConnector",
]
