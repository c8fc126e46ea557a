"""
Account reads over a caller-supplied client

The adapter ships no RPC transport. Any object with
get_account_info(address, encoding="base64") returning a dict with "owner"
and "data" (["<base64>", "base64"] or a bare base64 string) is accepted.
"""

import base64
import binascii
import logging
from typing import Any, Callable, Dict, Optional, Protocol

from ..errors import InvalidArgument

logger = logging.getLogger(__name__)


class AccountReader(Protocol):
    def get_account_info(self, address: str, encoding: str = "base64") -> Optional[dict]:
        ...


def decode_account_data(account: dict) -> Optional[bytes]:
    """
    Raw bytes of an account info response.

    Returns:
        Decoded bytes, or None if the data field is missing or malformed
    """
    data = account.get("data", [])
    if isinstance(data, list) and len(data) > 0:
        encoded = data[0]
    elif isinstance(data, str):
        encoded = data
    else:
        return None
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.debug(f"Undecodable account data: {e}")
        return None


def read_account(reader: AccountReader, address: str) -> Optional[dict]:
    """Fetch account info, None when the account does not exist"""
    account = reader.get_account_info(str(address), encoding="base64")
    if not account:
        logger.debug(f"Account not found: {address}")
        return None
    return account


def fetch_parsed(reader: AccountReader, address: str, parser: Callable[[bytes], Dict[str, Any]]) -> Dict[str, Any]:
    """
    Fetch an account and run parser over its raw data

    Raises:
        InvalidArgument: If the account does not exist or its data is unreadable
        LengthMismatch: If the data does not fit the parser's schema
    """
    account = read_account(reader, address)
    raw_data = decode_account_data(account) if account else None
    if raw_data is None:
        raise InvalidArgument(f"Account {address} not found or unreadable", "address", address)
    return parser(raw_data)
