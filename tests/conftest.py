"""Shared test fixtures and configuration."""

import os
import pytest
from unittest.mock import MagicMock
from typing import Dict, Any

# Set up test environment variables before importing modules
os.environ.setdefault("MAXIPAGO_MERCHANT_ID", "100")
os.environ.setdefault("MAXIPAGO_MERCHANT_KEY", "env-merchant-key")
os.environ.setdefault("MAXIPAGO_API_KEY", "test_api_key_12345")

from maxipago_sdk.config import MaxipagoConfig
from maxipago_sdk.connectors.base import CreditCard
from maxipago_sdk.connectors.maxipago import MaxipagoConnector


AUTHORIZED_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<transaction-response>
  <authCode>123456</authCode>
  <orderID>0A0104A3:0150D0C1F0A2:2C2A:01D38B32</orderID>
  <referenceNum>12345</referenceNum>
  <transactionID>999888</transactionID>
  <transactionTimestamp>1432318929</transactionTimestamp>
  <responseCode>0</responseCode>
  <responseMessage>AUTHORIZED</responseMessage>
  <avsResponseCode/>
  <cvvResponseCode/>
  <processorCode>A</processorCode>
  <processorMessage>APPROVED</processorMessage>
  <errorMessage/>
  <creditCardScheme>Visa</creditCardScheme>
</transaction-response>
"""

DECLINED_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<transaction-response>
  <authCode/>
  <orderID>0A0104A3:0150D0C1F0A2:2C2A:01D38B33</orderID>
  <referenceNum>12345</referenceNum>
  <transactionID>999889</transactionID>
  <responseCode>1</responseCode>
  <responseMessage>DECLINED</responseMessage>
  <processorCode>D</processorCode>
  <processorMessage>DECLINED</processorMessage>
  <errorMessage>The transaction has an expired credit card.</errorMessage>
</transaction-response>
"""

VOIDED_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<transaction-response>
  <orderID>0A0104A3:0150D0C1F0A2:2C2A:01D38B32</orderID>
  <transactionID>999890</transactionID>
  <responseCode>0</responseCode>
  <responseMessage>VOIDED</responseMessage>
  <errorMessage/>
</transaction-response>
"""

VOID_FAILED_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<transaction-response>
  <orderID/>
  <transactionID/>
  <responseCode>1</responseCode>
  <responseMessage>ERROR</responseMessage>
  <errorMessage>Unable to validate, original void transaction not found</errorMessage>
</transaction-response>
"""

ADD_CONSUMER_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<api-response>
  <errorCode>0</errorCode>
  <errorMessage/>
  <command>add-consumer</command>
  <time>1432318929</time>
  <result>
    <customerId>24523</customerId>
  </result>
</api-response>
"""

ADD_CONSUMER_FAILED_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<api-response>
  <errorCode>1</errorCode>
  <errorMessage>lastName is a required field.</errorMessage>
  <command>add-consumer</command>
  <time>1432318929</time>
</api-response>
"""

ADD_CARD_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<api-response>
  <errorCode>0</errorCode>
  <errorMessage/>
  <command>add-card-onfile</command>
  <time>1432318929</time>
  <result>
    <token>c0fe2b8a5b</token>
  </result>
</api-response>
"""


@pytest.fixture
def credit_card() -> CreditCard:
    """Return a test Visa card."""
    return CreditCard(
        number="4111111111111111",
        month=9,
        year=2030,
        verification_value="444",
        first_name="Longbob",
        last_name="Longsen",
    )


@pytest.fixture
def billing_address() -> Dict[str, Any]:
    """Return a billing address with nested phone and document lists."""
    return {
        "name": "Jim Smith",
        "address1": "456 My Street",
        "address2": "Apt 1",
        "city": "Ottawa",
        "state": "ON",
        "zip": "K1C2N6",
        "country": "CA",
        "phone": "(555)555-5555",
        "email": "jim_smith@email.com",
        "phones": [{"type": "Mobile", "area_code": "11", "number": "999998888"}],
        "documents": [{"type": "CPF", "value": "12345678909"}],
    }


@pytest.fixture
def options(billing_address) -> Dict[str, Any]:
    """Return typical purchase options."""
    return {
        "order_id": "12345",
        "billing_address": billing_address,
        "installments": 3,
    }


@pytest.fixture
def transport() -> MagicMock:
    """Create a transport double returning an authorized transaction."""
    mock_transport = MagicMock()
    mock_transport.post.return_value = AUTHORIZED_RESPONSE
    return mock_transport


@pytest.fixture
def connector(transport) -> MaxipagoConnector:
    """Create a test-mode connector wired to the transport double."""
    return MaxipagoConnector(
        merchant_id="100",
        merchant_key="secret123",
        test=True,
        transport=transport,
        config=MaxipagoConfig(),
    )


@pytest.fixture
def live_connector(transport) -> MaxipagoConnector:
    """Create a live-mode connector wired to the transport double."""
    return MaxipagoConnector(
        merchant_id="100",
        merchant_key="secret123",
        test=False,
        transport=transport,
        config=MaxipagoConfig(),
    )


def sent_request(transport: MagicMock, index: int = -1) -> bytes:
    """Return the XML body of a recorded transport call."""
    return transport.post.call_args_list[index][0][1]


def sent_url(transport: MagicMock, index: int = -1) -> str:
    return transport.post.call_args_list[index][0][0]
