from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote

from web3 import Web3

from . import ValidationError
from .config import DEFAULT_SCHEME

ADDRESS_RE = re.compile(r"0x[a-fA-F0-9]{40}")


def validate_address(raw: str) -> str:
    """Return the trimmed address, or raise ValidationError."""
    address = raw.strip()
    if not ADDRESS_RE.fullmatch(address):
        raise ValidationError("Enter a valid Ethereum address.", field="address")
    return address


def validate_note(raw: str) -> str:
    """Return the trimmed note, or raise ValidationError if it is not UTF-8 encodable."""
    note = raw.strip()
    try:
        note.encode("utf-8")
    except UnicodeEncodeError:
        raise ValidationError("Note contains invalid characters.", field="note") from None
    return note


def checksum_address(address: str) -> str:
    """EIP-55 form of an already validated address."""
    return Web3.to_checksum_address(address)


def build_payment_uri(
    address: str,
    amount_wei: str,
    note: Optional[str] = None,
    *,
    scheme: str = DEFAULT_SCHEME,
) -> str:
    """Build an EIP-681 style payment URI.

    The address is assumed valid. A blank note is dropped; otherwise it is
    percent-encoded so only RFC 3986 unreserved characters stay literal.
    """
    base = f"{scheme}:{address}?value={amount_wei}"
    message = (note or "").strip()
    if not message:
        return base
    return f"{base}&message={quote(message, safe='')}"
