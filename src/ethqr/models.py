from __future__ import annotations

import re
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_WEI_RE = re.compile(r"[1-9][0-9]*")
_HEX_COLOR = r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"


class PaymentForm(BaseModel):
    """Raw, untrusted form input as typed by the user."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(default="", description="Recipient wallet address.")
    amount: str = Field(default="", description="Amount in ETH as a decimal string.")
    note: str = Field(default="", description="Optional free-text message.")


class PaymentRequest(BaseModel):
    """Validated payment request, ready to be encoded as a URI."""

    model_config = ConfigDict(frozen=True)

    address: str
    amount_wei: str = Field(description="Strictly positive wei amount, decimal digits.")
    note: Optional[str] = None

    @field_validator("amount_wei")
    def validate_amount_wei(cls, v):
        if not _WEI_RE.fullmatch(v):
            raise ValueError("amount_wei must be a positive integer without leading zeros.")
        return v

    @field_validator("note")
    def normalize_note(cls, v):
        if v is None:
            return None
        v = v.strip()
        return v or None

    def to_uri(self, scheme: str = "ethereum") -> str:
        from .uri import build_payment_uri

        return build_payment_uri(self.address, self.amount_wei, self.note, scheme=scheme)


class RenderOptions(BaseModel):
    """Rendering options handed to the QR renderer."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(default=320, gt=0, description="Target image width in pixels.")
    margin: int = Field(default=1, ge=0, description="Quiet zone in modules.")
    dark: str = Field(default="#0f172a", pattern=_HEX_COLOR)
    light: str = Field(default="#f8fafc", pattern=_HEX_COLOR)
    error: Literal["L", "M", "Q", "H"] = Field(
        default="M", description="Error correction level."
    )
