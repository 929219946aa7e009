"""Errors raised by the maxiPago! connector.

Declined or rejected transactions are not errors: they come back as a
failed ``GatewayResponse``. Only transport and protocol failures raise.
"""


class MaxipagoError(Exception):
    """Base class for connector errors."""


class MaxipagoConnectionError(MaxipagoError):
    """The HTTPS exchange with the processor failed."""

    def __init__(self, message: str, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class MaxipagoResponseError(MaxipagoError):
    """The processor answered with a body that is not a usable XML document."""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message)
        self.body = body
