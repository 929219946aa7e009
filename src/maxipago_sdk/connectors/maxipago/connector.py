"""maxiPago! gateway connector."""

import logging
from typing import Any, Dict, Optional

from ..base import ConnectorBase, CreditCard, GatewayOptions, GatewayResponse, OptionsLike
from ...config import MaxipagoConfig
from ...money import DEFAULT_CURRENCY
from ...transport import HttpTransport
from . import parser
from .builder import build_request
from .operations import (
    OPERATIONS,
    AdjustPayload,
    AuthPayload,
    CardOnFilePayload,
    ConsumerPayload,
    Credentials,
    DeleteCardPayload,
    Envelope,
    Operation,
    Payload,
    VoidPayload,
    select_payment_source,
)
from .scrub import scrub

logger = logging.getLogger(__name__)

VERIFY_AMOUNT = 100


class MaxipagoConnector(ConnectorBase):
    """
    Connector for the maxiPago! XML UniversalAPI.

    Each public operation builds one XML document, posts it to the
    transaction or account endpoint of the configured mode and maps the
    flattened reply to a ``GatewayResponse``. Declines come back as
    unsuccessful responses; transport and parse failures raise.
    """

    live_url = "https://api.maxipago.net/UniversalAPI/postXML"
    test_url = "https://testapi.maxipago.net/UniversalAPI/postXML"
    live_api_url = "https://api.maxipago.net/UniversalAPI/postAPI"
    test_api_url = "https://testapi.maxipago.net/UniversalAPI/postAPI"

    supported_countries = ["BR"]
    default_currency = DEFAULT_CURRENCY
    money_format = "dollars"
    supported_cardtypes = ["visa", "master", "discover", "american_express", "diners_club"]
    homepage_url = "http://www.maxipago.com/"
    display_name = "maxiPago!"

    def __init__(
        self,
        merchant_id: Optional[str] = None,
        merchant_key: Optional[str] = None,
        *,
        test: Optional[bool] = None,
        processor_id: Optional[str] = None,
        transport: Optional[HttpTransport] = None,
        config: Optional[MaxipagoConfig] = None,
    ):
        config = config or MaxipagoConfig.from_env()
        merchant_id = merchant_id or config.merchant_id
        merchant_key = merchant_key or config.merchant_key
        if not merchant_id:
            raise ValueError("merchant_id is required (set MAXIPAGO_MERCHANT_ID)")
        if not merchant_key:
            raise ValueError("merchant_key is required (set MAXIPAGO_MERCHANT_KEY)")

        self._credentials = Credentials(merchant_id=merchant_id, merchant_key=merchant_key)
        self._test = config.test if test is None else test
        self._processor_id = processor_id or config.processor_id
        self._transport = transport or HttpTransport(timeout=config.timeout, scrubber=scrub)
        logger.info("MaxipagoConnector initialized (test=%s)", self._test)

    def is_test(self) -> bool:
        return self._test

    @property
    def transaction_url(self) -> str:
        return self.test_url if self._test else self.live_url

    @property
    def api_url(self) -> str:
        return self.test_api_url if self._test else self.live_api_url

    # Transactions

    def purchase(self, money: int, creditcard: Optional[CreditCard] = None,
                 options: OptionsLike = None) -> GatewayResponse:
        options = GatewayOptions.coerce(options)
        source = select_payment_source(creditcard, options)
        return self._commit(Operation.SALE, AuthPayload(money=money, source=source, options=options))

    def authorize(self, money: int, creditcard: Optional[CreditCard] = None,
                  options: OptionsLike = None) -> GatewayResponse:
        options = GatewayOptions.coerce(options)
        source = select_payment_source(creditcard, options)
        return self._commit(Operation.AUTH, AuthPayload(money=money, source=source, options=options))

    def capture(self, money: int, authorization: str, options: OptionsLike = None) -> GatewayResponse:
        options = GatewayOptions.coerce(options)
        return self._commit(Operation.CAPTURE, AdjustPayload(money=money, authorization=authorization, options=options))

    def void(self, authorization: str, options: OptionsLike = None) -> GatewayResponse:
        return self._commit(Operation.VOID, VoidPayload(authorization=authorization))

    def refund(self, money: int, authorization: str, options: OptionsLike = None) -> GatewayResponse:
        options = GatewayOptions.coerce(options)
        return self._commit(Operation.RETURN, AdjustPayload(money=money, authorization=authorization, options=options))

    def verify(self, creditcard: CreditCard, options: OptionsLike = None) -> GatewayResponse:
        """Authorize a nominal amount and void it straight away.

        The authorization result is returned; the void's own outcome is
        ignored. Nothing is voided when the authorization fails.
        """
        options = GatewayOptions.coerce(options)
        response = self.authorize(VERIFY_AMOUNT, creditcard, options)
        if response.success:
            void = self.void(response.authorization, options)
            if not void.success:
                logger.warning("Void after verify failed: %s", void.message)
        return response

    # Consumers and cards on file

    def add_consumer(self, external_id: Any, first_name: str, last_name: str) -> GatewayResponse:
        return self._commit(
            Operation.ADD_CONSUMER,
            ConsumerPayload(external_id=external_id, first_name=first_name, last_name=last_name),
        )

    def update_consumer(self, consumer_id: Any, external_id: Any = None,
                        first_name: str = "", last_name: str = "") -> GatewayResponse:
        return self._commit(
            Operation.UPDATE_CONSUMER,
            ConsumerPayload(consumer_id=consumer_id, external_id=external_id,
                            first_name=first_name, last_name=last_name),
        )

    def delete_consumer(self, consumer_id: Any) -> GatewayResponse:
        return self._commit(Operation.DELETE_CONSUMER, ConsumerPayload(consumer_id=consumer_id))

    def store(self, creditcard: CreditCard, options: OptionsLike = None) -> GatewayResponse:
        options = GatewayOptions.coerce(options)
        return self._commit(Operation.ADD_CARD_ONFILE, CardOnFilePayload(card=creditcard, options=options))

    def add_card(self, consumer_id: Any, creditcard: CreditCard, options: OptionsLike = None) -> GatewayResponse:
        """Store ``creditcard`` on file for ``consumer_id``."""
        options = GatewayOptions.coerce(options).model_copy(update={"consumer_id": str(consumer_id)})
        return self.store(creditcard, options)

    def unstore(self, token: str, options: OptionsLike = None) -> GatewayResponse:
        options = GatewayOptions.coerce(options)
        return self._commit(
            Operation.DELETE_CARD_ONFILE,
            DeleteCardPayload(token=token, consumer_id=options.consumer_id),
        )

    def supports_scrubbing(self) -> bool:
        return True

    def scrub(self, transcript: str) -> str:
        return scrub(transcript)

    def health_check(self) -> Dict[str, Any]:
        return {
            "ok": True,
            "provider": "maxipago",
            "test": self._test,
            "transaction_url": self.transaction_url,
            "api_url": self.api_url,
        }

    def _commit(self, operation: Operation, payload: Payload) -> GatewayResponse:
        request = build_request(
            operation,
            self._credentials,
            payload,
            test=self._test,
            processor_id=self._processor_id,
        )
        if OPERATIONS[operation].envelope is Envelope.TRANSACTION:
            url = self.transaction_url
        else:
            url = self.api_url

        body = self._transport.post(url, request, headers={"Content-Type": "text/xml"})
        response = parser.parse(body)

        result = GatewayResponse(
            success=parser.is_success(response),
            message=parser.message_from(response),
            params=response,
            authorization=parser.authorization_from(response),
            test=self._test,
        )
        logger.info("maxiPago %s: success=%s message=%s", operation.value, result.success, result.message)
        return result
