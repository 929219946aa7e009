"""HTTPS transport for XML posts."""

import logging
from typing import Callable, Dict, Optional, Union

import requests

from .config import DEFAULT_TIMEOUT
from .exceptions import MaxipagoConnectionError

logger = logging.getLogger(__name__)


class HttpTransport:
    """
    Thin wrapper around a requests session. One POST per call; retries and
    backoff are left to the caller.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        scrubber: Optional[Callable[[str], str]] = None,
    ):
        self.timeout = timeout
        self.session = session or requests.Session()
        # applied to transcripts before they reach the debug log
        self.scrubber = scrubber or (lambda transcript: transcript)

    def post(self, url: str, data: Union[str, bytes], headers: Optional[Dict[str, str]] = None) -> bytes:
        """POST ``data`` to ``url`` and return the raw response body.

        Raises:
            MaxipagoConnectionError: On network failure or a non-2xx status.
        """
        if logger.isEnabledFor(logging.DEBUG):
            body = data.decode("utf-8", "replace") if isinstance(data, bytes) else data
            logger.debug("POST %s\n%s", url, self.scrubber(body))
        try:
            response = self.session.post(url, data=data, headers=headers or {}, timeout=self.timeout)
        except requests.Timeout as e:
            logger.warning("Timeout posting to %s", url)
            raise MaxipagoConnectionError(f"Timed out posting to {url}") from e
        except requests.RequestException as e:
            logger.warning("Error posting to %s: %s", url, e)
            raise MaxipagoConnectionError(f"Failed to post to {url}: {e}") from e

        if response.status_code >= 400:
            logger.warning("HTTP %s from %s", response.status_code, url)
            raise MaxipagoConnectionError(
                f"Failed with {response.status_code} {response.reason}", status_code=response.status_code
            )

        content = response.content
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Response %s from %s\n%s",
                response.status_code, url, self.scrubber(content.decode("utf-8", "replace")),
            )
        return content

    def close(self) -> None:
        self.session.close()
