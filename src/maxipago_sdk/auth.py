"""Bearer API key check and rate limiting for the reference API.

``MAXIPAGO_API_KEY`` is read on every request, so a rotated key takes effect
without a restart. ``MAXIPAGO_API_RATE_LIMIT`` sets the per-client limit on
the payment and account endpoints.
"""

import logging
import os
import secrets

from fastapi import HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from slowapi import Limiter
from slowapi.util import get_remote_address

logger = logging.getLogger(__name__)

API_KEY_ENV = "MAXIPAGO_API_KEY"
RATE_LIMIT_ENV = "MAXIPAGO_API_RATE_LIMIT"

DEFAULT_RATE_LIMIT = os.getenv(RATE_LIMIT_ENV, "60/minute")

bearer_scheme = HTTPBearer()
limiter = Limiter(key_func=get_remote_address)


async def verify_api_key(credentials: HTTPAuthorizationCredentials = Security(bearer_scheme)) -> str:
    """Accept the request only when its bearer token is the configured key.

    Raises:
        HTTPException: 500 when MAXIPAGO_API_KEY is unset, 401 on a wrong token.
    """
    expected_key = os.getenv(API_KEY_ENV)
    if not expected_key:
        logger.error("%s is not set; refusing API requests", API_KEY_ENV)
        raise HTTPException(status_code=500, detail="Server configuration error")
    # bytes so non-ASCII tokens are compared rather than raising TypeError
    if not secrets.compare_digest(credentials.credentials.encode("utf-8"), expected_key.encode("utf-8")):
        logger.warning("Rejected request with an invalid API key")
        raise HTTPException(status_code=401, detail="Invalid API key")
    return credentials.credentials
