"""Operation table and payload variants for the maxiPago! protocol."""

import enum
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from ..base import CreditCard, GatewayOptions

AUTHORIZATION_DELIMITER = "|"


class Envelope(str, enum.Enum):
    TRANSACTION = "transaction"
    ACCOUNT = "account"


class Operation(str, enum.Enum):
    """Every request the processor accepts from this connector."""
    SALE = "sale"
    AUTH = "auth"
    CAPTURE = "capture"
    VOID = "void"
    RETURN = "return"
    ADD_CONSUMER = "add-consumer"
    UPDATE_CONSUMER = "update-consumer"
    DELETE_CONSUMER = "delete-consumer"
    ADD_CARD_ONFILE = "add-card-onfile"
    DELETE_CARD_ONFILE = "delete-card-onfile"


@dataclass(frozen=True)
class OperationSpec:
    envelope: Envelope
    # element name under <order> for transactions, <command> text for account calls
    tag: str


OPERATIONS: Dict[Operation, OperationSpec] = {
    Operation.SALE: OperationSpec(Envelope.TRANSACTION, "sale"),
    Operation.AUTH: OperationSpec(Envelope.TRANSACTION, "auth"),
    Operation.CAPTURE: OperationSpec(Envelope.TRANSACTION, "capture"),
    Operation.VOID: OperationSpec(Envelope.TRANSACTION, "void"),
    Operation.RETURN: OperationSpec(Envelope.TRANSACTION, "return"),
    Operation.ADD_CONSUMER: OperationSpec(Envelope.ACCOUNT, "add-consumer"),
    Operation.UPDATE_CONSUMER: OperationSpec(Envelope.ACCOUNT, "update-consumer"),
    Operation.DELETE_CONSUMER: OperationSpec(Envelope.ACCOUNT, "delete-consumer"),
    Operation.ADD_CARD_ONFILE: OperationSpec(Envelope.ACCOUNT, "add-card-onfile"),
    Operation.DELETE_CARD_ONFILE: OperationSpec(Envelope.ACCOUNT, "delete-card-onfile"),
}


@dataclass(frozen=True)
class Credentials:
    merchant_id: str
    merchant_key: str


# Payment sources for sale/auth
@dataclass(frozen=True)
class CardPresent:
    card: CreditCard


@dataclass(frozen=True)
class TokenizedCard:
    consumer_id: str
    token: str
    cvv: Optional[str] = None


PaymentSource = Union[CardPresent, TokenizedCard]


def select_payment_source(creditcard: Optional[CreditCard], options: GatewayOptions) -> PaymentSource:
    """Use the on-file card when both consumer id and token are supplied."""
    if options.consumer_id and options.token:
        return TokenizedCard(consumer_id=options.consumer_id, token=options.token, cvv=options.cvv)
    if creditcard is None:
        raise ValueError("a credit card is required unless consumer_id and token are supplied")
    return CardPresent(card=creditcard)


# Per-operation payloads
@dataclass(frozen=True)
class AuthPayload:
    money: int
    source: PaymentSource
    options: GatewayOptions


@dataclass(frozen=True)
class AdjustPayload:
    """Body of capture and return requests."""
    money: int
    authorization: str
    options: GatewayOptions


@dataclass(frozen=True)
class VoidPayload:
    authorization: str


@dataclass(frozen=True)
class ConsumerPayload:
    consumer_id: Any = None
    external_id: Any = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


@dataclass(frozen=True)
class CardOnFilePayload:
    card: CreditCard
    options: GatewayOptions


@dataclass(frozen=True)
class DeleteCardPayload:
    token: str
    consumer_id: Optional[str] = None


Payload = Union[AuthPayload, AdjustPayload, VoidPayload, ConsumerPayload, CardOnFilePayload, DeleteCardPayload]


def join_authorization(order_id: Optional[str], transaction_id: Optional[str]) -> str:
    return f"{order_id or ''}{AUTHORIZATION_DELIMITER}{transaction_id or ''}"


def split_authorization(authorization: Optional[str]) -> Tuple[str, str]:
    """Recover (order_id, transaction_id) from a composite authorization.

    Only the first two fields are used; anything after a second delimiter
    is ignored.
    """
    parts = (authorization or "").split(AUTHORIZATION_DELIMITER)
    return parts[0], (parts[1] if len(parts) > 1 else "")
