"""XML response decoding for the iDEAL API"""

import xml.etree.ElementTree as ET
from typing import Optional

from ideal_gateway.domain.exceptions import DecodeError
from ideal_gateway.domain.models import Bank, BankList, Consumer, TransactionResult
from ideal_gateway.domain.status import TransactionStatus

_ROOT_TAG = "response"
_TRUE = frozenset({"1", "t", "true"})
_FALSE = frozenset({"0", "f", "false"})


def decode_bank_list(body: bytes, operation: str = "banklist") -> BankList:
    """
    Decode a bank list document.

        <response>
          <bank><bank_id>0031</bank_id><bank_name>ABN AMRO</bank_name></bank>
          ...
        </response>

    Banks are returned in document order; no banks yields an empty list.

    Raises:
        DecodeError: On malformed XML, a root element other than <response>,
            or an API error document
    """
    root = _parse(body, operation)
    _raise_for_error_item(root, operation)
    return [
        Bank(
            bank_id=_int(bank, "bank_id", operation),
            name=bank.findtext("bank_name", default=""),
        )
        for bank in root.findall("bank")
    ]


def decode_transaction(body: bytes, with_redirect: bool = False, operation: str = "check") -> TransactionResult:
    """
    Decode a transaction (order) document.

    Only the fetch response carries a redirect URL, so <URL> is read only
    when with_redirect is set.

    Raises:
        DecodeError: On malformed XML, a wrong root element, or a missing <order>
    """
    root = _parse(body, operation)
    order = root.find("order")
    if order is None:
        _raise_for_error_item(root, operation)
        raise DecodeError("Response has no <order> element", operation=operation)

    raw_status = order.findtext("status", default="")
    consumer = order.find("consumer")

    return TransactionResult(
        transaction_id=order.findtext("transaction_id", default=""),
        amount=_int(order, "amount", operation),
        currency=order.findtext("currency", default=""),
        paid=_bool(order, "payed", operation),
        status=TransactionStatus.from_raw(raw_status),
        raw_status=raw_status,
        message=order.findtext("message", default=""),
        consumer=_consumer(consumer) if consumer is not None else Consumer(),
        redirect_url=order.findtext("URL") if with_redirect else None,
    )


def _parse(body: bytes, operation: str) -> ET.Element:
    try:
        root = ET.fromstring(body)
    except (ET.ParseError, LookupError) as e:  # LookupError: unknown declared encoding
        raise DecodeError(f"Malformed XML in {operation} response: {e}", operation=operation) from e

    if root.tag != _ROOT_TAG:
        raise DecodeError(
            f"Unexpected root element <{root.tag}> in {operation} response, expected <{_ROOT_TAG}>",
            operation=operation,
        )
    return root


def _raise_for_error_item(root: ET.Element, operation: str) -> None:
    # The API answers failed calls with <item type="error"> instead of a payload
    item = root.find("item")
    if item is not None and item.get("type") == "error":
        code = item.findtext("errorcode", default="?")
        message = item.findtext("message", default="")
        raise DecodeError(f"iDEAL API error {code}: {message}", operation=operation)


def _consumer(element: ET.Element) -> Consumer:
    return Consumer(
        name=element.findtext("consumerName"),
        account=element.findtext("consumerAccount"),
        city=element.findtext("consumerCity"),
    )


def _text(parent: ET.Element, tag: str) -> Optional[str]:
    value = parent.findtext(tag)
    if value is None:
        return None
    return value.strip()


def _int(parent: ET.Element, tag: str, operation: str) -> int:
    value = _text(parent, tag)
    if not value:
        return 0
    try:
        return int(value)
    except ValueError as e:
        raise DecodeError(f"Invalid integer in <{tag}>: {value!r}", operation=operation) from e


def _bool(parent: ET.Element, tag: str, operation: str) -> bool:
    value = _text(parent, tag)
    if not value:
        return False
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise DecodeError(f"Invalid boolean in <{tag}>: {value!r}", operation=operation)
