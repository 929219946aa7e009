"""
Server-side usage example against the maxiPago! sandbox. Set MAXIPAGO_MERCHANT_ID
and MAXIPAGO_MERCHANT_KEY to your test credentials before running.
"""
import os
from maxipago_sdk.connectors import CreditCard, MaxipagoConnector

def run():
    os.environ.setdefault("MAXIPAGO_TEST_MODE", "true")
    connector = MaxipagoConnector()
    card = CreditCard(number="4111111111111111", month=9, year=2030, verification_value="444",
                      first_name="Longbob", last_name="Longsen")
    options = {
        "order_id": "12345",
        "installments": 3,
        "billing_address": {"address1": "456 My Street", "city": "Ottawa", "zip": "K1C2N6", "country": "CA"},
    }
    auth = connector.authorize(1000, card, options)
    print("Authorize:", auth.success, auth.message)
    if auth.success:
        capture = connector.capture(1000, auth.authorization, options)
        print("Capture:", capture.success, capture.message)

if __name__ == "__main__":
    run()
