"""Reference HTTP API in front of the maxiPago! connector."""

import logging
from functools import lru_cache
from typing import Literal, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .auth import DEFAULT_RATE_LIMIT, limiter, verify_api_key
from .connectors.base import CreditCard, GatewayOptions, GatewayResponse
from .connectors.maxipago import MaxipagoConnector
from .exceptions import MaxipagoError

logger = logging.getLogger(__name__)

app = FastAPI(title="maxiPago! Connector - Reference API")
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@lru_cache(maxsize=1)
def get_connector() -> MaxipagoConnector:
    return MaxipagoConnector()


class PaymentBody(BaseModel):
    amount: int = Field(gt=0)
    card: Optional[CreditCard] = None
    intent: Literal["authorize", "purchase"] = "authorize"
    options: GatewayOptions = Field(default_factory=GatewayOptions)


class AdjustBody(BaseModel):
    amount: int = Field(gt=0)
    authorization: str
    options: GatewayOptions = Field(default_factory=GatewayOptions)


class VoidBody(BaseModel):
    authorization: str
    options: GatewayOptions = Field(default_factory=GatewayOptions)


class VerifyBody(BaseModel):
    card: CreditCard
    options: GatewayOptions = Field(default_factory=GatewayOptions)


class ConsumerBody(BaseModel):
    external_id: str
    first_name: str
    last_name: str


class ConsumerUpdateBody(BaseModel):
    external_id: Optional[str] = None
    first_name: str = ""
    last_name: str = ""


class CardBody(BaseModel):
    card: CreditCard
    options: GatewayOptions = Field(default_factory=GatewayOptions)


async def _run(operation: str, call) -> dict:
    try:
        response: GatewayResponse = await run_in_threadpool(call)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except MaxipagoError as e:
        logger.error("maxiPago %s failed: %s", operation, e)
        raise HTTPException(status_code=502, detail="Payment processor unavailable")
    return response.model_dump()


@app.post("/payments", dependencies=[Depends(verify_api_key)])
@limiter.limit(DEFAULT_RATE_LIMIT)
async def create_payment(request: Request, body: PaymentBody,
                         connector: MaxipagoConnector = Depends(get_connector)):
    if body.intent == "purchase":
        return await _run("purchase", lambda: connector.purchase(body.amount, body.card, body.options))
    return await _run("authorize", lambda: connector.authorize(body.amount, body.card, body.options))


@app.post("/payments/capture", dependencies=[Depends(verify_api_key)])
@limiter.limit(DEFAULT_RATE_LIMIT)
async def capture_payment(request: Request, body: AdjustBody,
                          connector: MaxipagoConnector = Depends(get_connector)):
    return await _run("capture", lambda: connector.capture(body.amount, body.authorization, body.options))


@app.post("/payments/refund", dependencies=[Depends(verify_api_key)])
@limiter.limit(DEFAULT_RATE_LIMIT)
async def refund_payment(request: Request, body: AdjustBody,
                         connector: MaxipagoConnector = Depends(get_connector)):
    return await _run("refund", lambda: connector.refund(body.amount, body.authorization, body.options))


@app.post("/payments/void", dependencies=[Depends(verify_api_key)])
@limiter.limit(DEFAULT_RATE_LIMIT)
async def void_payment(request: Request, body: VoidBody,
                       connector: MaxipagoConnector = Depends(get_connector)):
    return await _run("void", lambda: connector.void(body.authorization, body.options))


@app.post("/payments/verify", dependencies=[Depends(verify_api_key)])
@limiter.limit(DEFAULT_RATE_LIMIT)
async def verify_card(request: Request, body: VerifyBody,
                      connector: MaxipagoConnector = Depends(get_connector)):
    return await _run("verify", lambda: connector.verify(body.card, body.options))


@app.post("/consumers", dependencies=[Depends(verify_api_key)])
@limiter.limit(DEFAULT_RATE_LIMIT)
async def create_consumer(request: Request, body: ConsumerBody,
                          connector: MaxipagoConnector = Depends(get_connector)):
    return await _run("add-consumer", lambda: connector.add_consumer(body.external_id, body.first_name, body.last_name))


@app.put("/consumers/{consumer_id}", dependencies=[Depends(verify_api_key)])
@limiter.limit(DEFAULT_RATE_LIMIT)
async def update_consumer(request: Request, consumer_id: str, body: ConsumerUpdateBody,
                          connector: MaxipagoConnector = Depends(get_connector)):
    return await _run("update-consumer", lambda: connector.update_consumer(
        consumer_id, body.external_id, body.first_name, body.last_name))


@app.delete("/consumers/{consumer_id}", dependencies=[Depends(verify_api_key)])
@limiter.limit(DEFAULT_RATE_LIMIT)
async def delete_consumer(request: Request, consumer_id: str,
                          connector: MaxipagoConnector = Depends(get_connector)):
    return await _run("delete-consumer", lambda: connector.delete_consumer(consumer_id))


@app.post("/cards", dependencies=[Depends(verify_api_key)])
@limiter.limit(DEFAULT_RATE_LIMIT)
async def store_card(request: Request, body: CardBody,
                     connector: MaxipagoConnector = Depends(get_connector)):
    return await _run("add-card-onfile", lambda: connector.store(body.card, body.options))


@app.delete("/cards/{token}", dependencies=[Depends(verify_api_key)])
@limiter.limit(DEFAULT_RATE_LIMIT)
async def unstore_card(request: Request, token: str, consumer_id: Optional[str] = None,
                       connector: MaxipagoConnector = Depends(get_connector)):
    return await _run("delete-card-onfile", lambda: connector.unstore(token, {"consumer_id": consumer_id}))


@app.get("/health")
async def health(connector: MaxipagoConnector = Depends(get_connector)):
    return connector.health_check()
