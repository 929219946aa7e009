"""XML request builder for the maxiPago! UniversalAPI.

Every request is one of two envelopes:

* ``<transaction-request>`` for sale, auth, capture, void and return. It
  carries the protocol version, the merchant credentials and an ``<order>``
  block holding a single element named after the operation.
* ``<api-request>`` for consumer and card-on-file management. It carries the
  credentials, the literal ``<command>`` name and a ``<request>`` block.

The body of the operation element is produced by the payload assembler
registered for the operation in ``PAYLOAD_ASSEMBLERS``. Optional values that
are missing or blank are left out of the document entirely.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from lxml import etree

from ..base import Address, CreditCard, FraudDetails, GatewayOptions, Item, TicketEvent
from ...money import DEFAULT_CURRENCY, format_amount
from .operations import (
    OPERATIONS,
    AdjustPayload,
    AuthPayload,
    CardOnFilePayload,
    CardPresent,
    ConsumerPayload,
    Credentials,
    DeleteCardPayload,
    Envelope,
    Operation,
    Payload,
    TokenizedCard,
    VoidPayload,
    split_authorization,
)

API_VERSION = "3.1.1.15"
TEST_PROCESSOR_ID = "1"
DEFAULT_PROCESSOR_ID = "4"


@dataclass(frozen=True)
class BuildContext:
    test: bool = False
    processor_id: Optional[str] = None


def generate_unique_id() -> str:
    return uuid.uuid4().hex


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def _text(parent: etree._Element, tag: str, value: Any) -> etree._Element:
    element = etree.SubElement(parent, tag)
    element.text = "" if value is None else str(value)
    return element


def _optional(parent: etree._Element, tag: str, value: Any) -> None:
    if not is_blank(value):
        _text(parent, tag, value)


def build_request(
    operation: Operation,
    credentials: Credentials,
    payload: Payload,
    *,
    test: bool = False,
    processor_id: Optional[str] = None,
) -> bytes:
    """Serialize one operation into its envelope as UTF-8 XML bytes."""
    spec = OPERATIONS[operation]
    assemble = PAYLOAD_ASSEMBLERS[operation]

    if spec.envelope is Envelope.TRANSACTION:
        root = etree.Element("transaction-request")
        _text(root, "version", API_VERSION)
        _add_verification(root, credentials)
        order = etree.SubElement(root, "order")
        body = etree.SubElement(order, spec.tag)
    else:
        root = etree.Element("api-request")
        _add_verification(root, credentials)
        _text(root, "command", spec.tag)
        body = etree.SubElement(root, "request")

    assemble(body, payload, BuildContext(test=test, processor_id=processor_id))
    return etree.tostring(root, xml_declaration=True, encoding="UTF-8", pretty_print=True)


def _add_verification(root: etree._Element, credentials: Credentials) -> None:
    verification = etree.SubElement(root, "verification")
    _text(verification, "merchantId", credentials.merchant_id)
    _text(verification, "merchantKey", credentials.merchant_key)


# sale / auth

def _add_credit_card(pay_type: etree._Element, source: CardPresent) -> None:
    card = source.card
    credit_card = etree.SubElement(pay_type, "creditCard")
    _text(credit_card, "number", card.number)
    _text(credit_card, "expMonth", card.month)
    _text(credit_card, "expYear", card.year)
    _text(credit_card, "cvvNumber", card.verification_value)


def _add_on_file(pay_type: etree._Element, source: TokenizedCard) -> None:
    on_file = etree.SubElement(pay_type, "onFile")
    _text(on_file, "customerId", source.consumer_id)
    _text(on_file, "token", source.token)
    _optional(on_file, "cvvNumber", source.cvv)


PAY_TYPE_ASSEMBLERS: Dict[type, Callable[[etree._Element, Any], None]] = {
    CardPresent: _add_credit_card,
    TokenizedCard: _add_on_file,
}


def assemble_auth(body: etree._Element, payload: AuthPayload, context: BuildContext) -> None:
    options = payload.options
    _add_processor_id(body, context)
    _optional(body, "fraudCheck", options.fraud_check)
    _add_reference_num(body, options)

    detail = etree.SubElement(body, "transactionDetail")
    pay_type = etree.SubElement(detail, "payType")
    PAY_TYPE_ASSEMBLERS[type(payload.source)](pay_type, payload.source)

    payment = etree.SubElement(body, "payment")
    _optional(payment, "softDescriptor", options.soft_descriptor)
    _add_amount(payment, payload.money, options)
    _add_installments(payment, options)

    if options.billing_address is not None:
        _add_address(body, "billing", options.billing_address)
    if options.shipping_address is not None:
        _add_address(body, "shipping", options.shipping_address)
    if options.fraud_details is not None:
        _add_fraud_details(body, options.fraud_details)
    if options.item_list is not None:
        _add_item_list(body, options.item_list)


def _add_processor_id(body: etree._Element, context: BuildContext) -> None:
    if context.test:
        _text(body, "processorID", TEST_PROCESSOR_ID)
    else:
        _text(body, "processorID", context.processor_id or DEFAULT_PROCESSOR_ID)


def _add_reference_num(body: etree._Element, options: GatewayOptions) -> None:
    _text(body, "referenceNum", options.order_id or generate_unique_id())


def _add_amount(payment: etree._Element, money: int, options: GatewayOptions) -> None:
    _text(payment, "chargeTotal", format_amount(money))
    _text(payment, "currencyCode", options.currency or DEFAULT_CURRENCY)


def _add_installments(payment: etree._Element, options: GatewayOptions) -> None:
    installments = options.installments
    if not isinstance(installments, int) or installments <= 1:
        return
    block = etree.SubElement(payment, "creditInstallment")
    _text(block, "numberOfInstallments", installments)
    _text(block, "chargeInterest", options.charge_interest or "N")


def _add_address(body: etree._Element, tag: str, address: Address) -> None:
    element = etree.SubElement(body, tag)
    _optional(element, "id", address.id)
    _optional(element, "name", address.name)
    _optional(element, "address", address.address1)
    _optional(element, "address2", address.address2)
    _optional(element, "district", address.district)
    _optional(element, "city", address.city)
    _optional(element, "state", address.state)
    _optional(element, "postalcode", address.zip)
    _optional(element, "country", address.country)
    _optional(element, "phone", address.phone)
    _optional(element, "email", address.email)
    _optional(element, "type", address.type)
    _optional(element, "gender", address.gender)
    _optional(element, "birthDate", address.birth_date)
    _optional(element, "companyName", address.company_name)

    if not is_blank(address.phones):
        phones = etree.SubElement(element, "phones")
        for phone in address.phones:
            entry = etree.SubElement(phones, "phone")
            _optional(entry, "phoneType", phone.type)
            _optional(entry, "phoneAreaCode", phone.area_code)
            _optional(entry, "phoneNumber", phone.number)

    if not is_blank(address.documents):
        documents = etree.SubElement(element, "documents")
        for document in address.documents:
            entry = etree.SubElement(documents, "document")
            _optional(entry, "documentType", document.type)
            _optional(entry, "documentValue", document.value)


def _add_fraud_details(body: etree._Element, fraud_details: FraudDetails) -> None:
    element = etree.SubElement(body, "fraudDetails")
    _optional(element, "fraudProcessorID", fraud_details.fraud_processor_id)
    _optional(element, "captureOnLowRisk", fraud_details.capture_on_low_risk)
    _optional(element, "voidOnHighRisk", fraud_details.void_on_high_risk)
    _optional(element, "fraudToken", fraud_details.fraud_token)
    _optional(element, "websiteId", fraud_details.website_id)
    if not is_blank(fraud_details.tickets):
        tickets = etree.SubElement(element, "tickets")
        for ticket_event in fraud_details.tickets:
            _add_ticket_event(tickets, ticket_event)


def _add_ticket_event(tickets: etree._Element, ticket_event: TicketEvent) -> None:
    element = etree.SubElement(tickets, "ticket_event")
    _optional(element, "convenienceFee", ticket_event.convenience_fee)
    _optional(element, "quantityFull", ticket_event.quantity_full)
    _optional(element, "quantityHalf", ticket_event.quantity_half)

    event = ticket_event.event
    if event is not None:
        entry = etree.SubElement(element, "event")
        _optional(entry, "id", event.id)
        _optional(entry, "name", event.name)
        _optional(entry, "local", event.local)
        _optional(entry, "date", event.date)
        _optional(entry, "quantityTicketSale", event.quantity_ticket_sale)
        _optional(entry, "quantityEventHouse", event.quantity_event_house)

    if not is_blank(ticket_event.people):
        people = etree.SubElement(element, "people")
        for person in ticket_event.people:
            entry = etree.SubElement(people, "person")
            _optional(entry, "name", person.name)

    if not is_blank(ticket_event.categories):
        categories = etree.SubElement(element, "categories")
        for category in ticket_event.categories:
            entry = etree.SubElement(categories, "category")
            _optional(entry, "name", category.name)
            _optional(entry, "quantity", category.quantity)
            _optional(entry, "unitAmount", category.unit_amount)


def _add_item_list(body: etree._Element, items: List[Item]) -> None:
    if is_blank(items):
        return
    item_list = etree.SubElement(body, "itemList")
    for item in items:
        entry = etree.SubElement(item_list, "item")
        _optional(entry, "itemIndex", item.item_index)
        _optional(entry, "itemProductCode", item.item_product_code)
        _optional(entry, "itemDescription", item.item_description)
        _optional(entry, "itemQuantity", item.item_quantity)
        _optional(entry, "itemTotalAmount", item.item_total_amount)
        _optional(entry, "itemUnitCost", item.item_unit_cost)


# capture / return / void

def assemble_adjustment(body: etree._Element, payload: AdjustPayload, context: BuildContext) -> None:
    order_id, _ = split_authorization(payload.authorization)
    _text(body, "orderID", order_id)
    _add_reference_num(body, payload.options)
    payment = etree.SubElement(body, "payment")
    _optional(payment, "softDescriptor", payload.options.soft_descriptor)
    _add_amount(payment, payload.money, payload.options)


def assemble_void(body: etree._Element, payload: VoidPayload, context: BuildContext) -> None:
    _, transaction_id = split_authorization(payload.authorization)
    _text(body, "transactionID", transaction_id)


# account management

def assemble_add_consumer(body: etree._Element, payload: ConsumerPayload, context: BuildContext) -> None:
    _text(body, "customerIdExt", payload.external_id)
    _text(body, "firstName", payload.first_name)
    _text(body, "lastName", payload.last_name)


def assemble_update_consumer(body: etree._Element, payload: ConsumerPayload, context: BuildContext) -> None:
    _text(body, "customerId", payload.consumer_id)
    _optional(body, "customerIdExt", payload.external_id)
    _optional(body, "firstName", payload.first_name)
    _optional(body, "lastName", payload.last_name)


def assemble_delete_consumer(body: etree._Element, payload: ConsumerPayload, context: BuildContext) -> None:
    _text(body, "customerId", payload.consumer_id)


def expiration_month(card: CreditCard) -> str:
    return str(card.month).zfill(2)


def expiration_year(card: CreditCard) -> str:
    year = str(card.year)
    return year if len(year) == 4 else "20" + year.zfill(2)


def assemble_add_card(body: etree._Element, payload: CardOnFilePayload, context: BuildContext) -> None:
    options = payload.options
    _optional(body, "customerId", options.consumer_id)
    address = options.billing_address
    # the processor expects card fields only alongside a billing address
    if address is None:
        return

    card = payload.card
    _text(body, "creditCardNumber", card.number)
    _text(body, "expirationMonth", expiration_month(card))
    _text(body, "expirationYear", expiration_year(card))
    _text(body, "billingName", card.name)
    _optional(body, "billingAddress1", address.address1)
    _optional(body, "billingAddress2", address.address2)
    _optional(body, "billingCity", address.city)
    _optional(body, "billingState", address.state)
    _optional(body, "billingZip", address.zip)
    _optional(body, "billingCountry", address.country)
    _optional(body, "billingPhone", address.phone)
    _optional(body, "billingEmail", address.email)
    _optional(body, "onFileMaxChargeAmount", options.max_charge_amount)


def assemble_delete_card(body: etree._Element, payload: DeleteCardPayload, context: BuildContext) -> None:
    _optional(body, "customerId", payload.consumer_id)
    _text(body, "token", payload.token)


PAYLOAD_ASSEMBLERS: Dict[Operation, Callable[[etree._Element, Any, BuildContext], None]] = {
    Operation.SALE: assemble_auth,
    Operation.AUTH: assemble_auth,
    Operation.CAPTURE: assemble_adjustment,
    Operation.RETURN: assemble_adjustment,
    Operation.VOID: assemble_void,
    Operation.ADD_CONSUMER: assemble_add_consumer,
    Operation.UPDATE_CONSUMER: assemble_update_consumer,
    Operation.DELETE_CONSUMER: assemble_delete_consumer,
    Operation.ADD_CARD_ONFILE: assemble_add_card,
    Operation.DELETE_CARD_ONFILE: assemble_delete_card,
}
