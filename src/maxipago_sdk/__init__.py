# maxipago_sdk package
__version__ = "0.1.0"

from .config import MaxipagoConfig
from .exceptions import MaxipagoError, MaxipagoConnectionError, MaxipagoResponseError
from .transport import HttpTransport
from .connectors import (
    ConnectorBase,
    CreditCard,
    Address,
    GatewayOptions,
    GatewayResponse,
    MaxipagoConnector,
)
