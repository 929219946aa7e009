"""Response flattening and outcome classification."""

import re
from typing import Dict, Optional, Union

from lxml import etree

from ...exceptions import MaxipagoResponseError
from .operations import join_authorization

SUCCESS_CODE = "0"

MESSAGE_FIELDS = (
    "error_message",
    "response_message",
    "processor_message",
    "error_msg",
    "customer_id",
    "token",
)

_ACRONYM_BOUNDARY = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True, remove_pis=True)


def underscore(name: str) -> str:
    """Convert an element name such as ``orderID`` to ``order_id``."""
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()


def flatten(element: etree._Element) -> Dict[str, Optional[str]]:
    """Collect leaf elements below ``element`` into a new mapping.

    Leaves are visited in document order; when two leaves normalize to the
    same name, the later one wins.
    """
    result: Dict[str, Optional[str]] = {}
    for child in element.iterchildren(tag=etree.Element):
        if _has_elements(child):
            result.update(flatten(child))
        else:
            result[underscore(etree.QName(child).localname)] = child.text
    return result


def _has_elements(element: etree._Element) -> bool:
    return next(element.iterchildren(tag=etree.Element), None) is not None


def parse(body: Union[str, bytes]) -> Dict[str, Optional[str]]:
    if isinstance(body, str):
        body = body.encode("utf-8")
    try:
        root = etree.fromstring(body, parser=_PARSER)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise MaxipagoResponseError(f"Malformed response from processor: {e}", body=body.decode("utf-8", "replace")) from e
    return flatten(root)


def _first_present(response: Dict[str, Optional[str]], *fields: str) -> Optional[str]:
    for field in fields:
        value = response.get(field)
        if value is not None:
            return value
    return None


def is_success(response: Dict[str, Optional[str]]) -> bool:
    return _first_present(response, "response_code", "error_code") == SUCCESS_CODE


def message_from(response: Dict[str, Optional[str]]) -> Optional[str]:
    return _first_present(response, *MESSAGE_FIELDS)


def authorization_from(response: Dict[str, Optional[str]]) -> str:
    return join_authorization(response.get("order_id"), response.get("transaction_id"))
