from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List, Union
from pydantic import BaseModel, ConfigDict, Field


# Canonical models
class GatewayModel(BaseModel):
    """Caller-supplied record. Numeric ids, codes and amounts are kept as text."""
    model_config = ConfigDict(coerce_numbers_to_str=True)


class CreditCard(GatewayModel):
    number: str
    month: int
    year: int
    verification_value: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class Phone(GatewayModel):
    type: Optional[str] = None
    area_code: Optional[str] = None
    number: Optional[str] = None


class Document(GatewayModel):
    type: Optional[str] = None
    value: Optional[str] = None


class Address(GatewayModel):
    id: Optional[str] = None
    name: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    district: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    type: Optional[str] = None
    gender: Optional[str] = None
    birth_date: Optional[str] = None
    company_name: Optional[str] = None
    phones: Optional[List[Phone]] = None
    documents: Optional[List[Document]] = None


class FraudEvent(GatewayModel):
    id: Optional[str] = None
    name: Optional[str] = None
    local: Optional[str] = None
    date: Optional[str] = None
    quantity_ticket_sale: Optional[int] = None
    quantity_event_house: Optional[int] = None


class FraudPerson(GatewayModel):
    name: Optional[str] = None


class FraudCategory(GatewayModel):
    name: Optional[str] = None
    quantity: Optional[int] = None
    unit_amount: Optional[str] = None


class TicketEvent(GatewayModel):
    convenience_fee: Optional[str] = None
    quantity_full: Optional[int] = None
    quantity_half: Optional[int] = None
    event: Optional[FraudEvent] = None
    people: Optional[List[FraudPerson]] = None
    categories: Optional[List[FraudCategory]] = None


class FraudDetails(GatewayModel):
    fraud_processor_id: Optional[str] = None
    capture_on_low_risk: Optional[str] = None
    void_on_high_risk: Optional[str] = None
    fraud_token: Optional[str] = None
    website_id: Optional[str] = None
    tickets: Optional[List[TicketEvent]] = None


class Item(GatewayModel):
    item_index: Optional[int] = None
    item_product_code: Optional[str] = None
    item_description: Optional[str] = None
    item_quantity: Optional[int] = None
    item_total_amount: Optional[str] = None
    item_unit_cost: Optional[str] = None


class GatewayOptions(GatewayModel):
    """Optional per-call settings shared by every gateway operation."""
    model_config = ConfigDict(extra="ignore")

    order_id: Optional[str] = None
    currency: Optional[str] = None
    installments: Optional[int] = None
    charge_interest: Optional[str] = None
    soft_descriptor: Optional[str] = None
    fraud_check: Optional[str] = None
    billing_address: Optional[Address] = None
    shipping_address: Optional[Address] = None
    fraud_details: Optional[FraudDetails] = None
    item_list: Optional[List[Item]] = None
    # on-file card used in place of raw card details
    consumer_id: Optional[str] = None
    token: Optional[str] = None
    cvv: Optional[str] = None
    max_charge_amount: Optional[str] = None

    @classmethod
    def coerce(cls, options: Union["GatewayOptions", Dict[str, Any], None]) -> "GatewayOptions":
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(options)


OptionsLike = Union[GatewayOptions, Dict[str, Any], None]


class GatewayResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    message: Optional[str] = None
    params: Dict[str, Optional[str]] = Field(default_factory=dict)
    authorization: Optional[str] = None
    test: bool = False


class ConnectorBase(ABC):
    """
    Minimal gateway interface. Implementations should be side-effect free
    until the method makes a network call to the processor.
    """

    @abstractmethod
    def purchase(self, money: int, creditcard: Optional[CreditCard] = None,
                 options: OptionsLike = None) -> GatewayResponse:
        """Authorize and capture in a single call."""
        raise NotImplementedError

    @abstractmethod
    def authorize(self, money: int, creditcard: Optional[CreditCard] = None,
                  options: OptionsLike = None) -> GatewayResponse:
        raise NotImplementedError

    @abstractmethod
    def capture(self, money: int, authorization: str, options: OptionsLike = None) -> GatewayResponse:
        raise NotImplementedError

    @abstractmethod
    def void(self, authorization: str, options: OptionsLike = None) -> GatewayResponse:
        raise NotImplementedError

    @abstractmethod
    def refund(self, money: int, authorization: str, options: OptionsLike = None) -> GatewayResponse:
        raise NotImplementedError

    @abstractmethod
    def verify(self, creditcard: CreditCard, options: OptionsLike = None) -> GatewayResponse:
        """Check that a card can be charged without keeping a charge on it."""
        raise NotImplementedError

    def supports_scrubbing(self) -> bool:
        return False

    def scrub(self, transcript: str) -> str:
        """
        Redact secrets and card data from a request/response transcript.

        Connectors that do not support scrubbing return the transcript as is.
        """
        return transcript

    def health_check(self) -> Dict[str, Any]:
        return {"ok": True}
