"""Form submission pipeline: validate, build the URI, render the QR code.

``generate`` is the pure path and raises on failure. ``QRGenerator`` wraps it
for interactive use: errors become an ``Outcome`` and state is only replaced
once a new image has been rendered.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional

from . import EthQRError, RenderError, ValidationError
from .amount import format_eth, to_wei
from .config import Settings
from .core import logger
from .models import PaymentForm, PaymentRequest
from .render import QRImage, QRRenderer
from .uri import checksum_address, validate_address, validate_note


@dataclass(frozen=True)
class GenerationResult:
    request: PaymentRequest
    uri: str
    image: QRImage

    @property
    def amount_eth(self) -> str:
        return format_eth(self.request.amount_wei)


@dataclass(frozen=True)
class Outcome:
    result: Optional[GenerationResult] = None
    error: Optional[EthQRError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        if self.error is not None:
            return str(self.error)
        return "QR code ready!"


@dataclass(frozen=True)
class GeneratorState:
    result: Optional[GenerationResult] = None
    is_generating: bool = False

    @property
    def has_result(self) -> bool:
        return self.result is not None


def prepare_request(form: PaymentForm, settings: Optional[Settings] = None) -> PaymentRequest:
    """Validate a form into a PaymentRequest. Address, amount, then note."""
    settings = settings or Settings()
    address = validate_address(form.address)
    if settings.checksum_address:
        address = checksum_address(address)
    amount_wei = to_wei(form.amount)
    note = validate_note(form.note)
    return PaymentRequest(address=address, amount_wei=amount_wei, note=note)


def generate(
    form: PaymentForm,
    settings: Optional[Settings] = None,
    renderer: Optional[QRRenderer] = None,
) -> GenerationResult:
    settings = settings or Settings()
    renderer = renderer or QRRenderer(settings.render)
    request = prepare_request(form, settings)
    uri = request.to_uri(settings.scheme)
    image = renderer.render(uri)
    return GenerationResult(request=request, uri=uri, image=image)


class QRGenerator:
    """Holds the last successful result for a single user session."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        renderer: Optional[QRRenderer] = None,
        logger=logger,
    ):
        self.settings = settings or Settings()
        self.renderer = renderer or QRRenderer(self.settings.render)
        self.logger = logger.bind(component="QRGenerator")
        self._state = GeneratorState()

    @property
    def state(self) -> GeneratorState:
        return self._state

    def submit(self, form: PaymentForm) -> Outcome:
        if self._state.is_generating:
            return Outcome(error=EthQRError("QR generation already in progress."))

        self._state = dataclasses.replace(self._state, is_generating=True)
        try:
            result = generate(form, self.settings, self.renderer)
        except ValidationError as exc:
            self.logger.info("Form rejected", field=exc.field, reason=exc.message)
            return Outcome(error=exc)
        except RenderError as exc:
            self.logger.error("QR generation failed", error=str(exc.__cause__ or exc))
            return Outcome(error=exc)
        finally:
            self._state = dataclasses.replace(self._state, is_generating=False)

        self._state = GeneratorState(result=result)
        self.logger.info(
            "QR generated",
            amount_wei=result.request.amount_wei,
            uri_length=len(result.uri),
        )
        return Outcome(result=result)

    def download(self, directory: str) -> str:
        """Save the current QR image to directory and return its path."""
        if self._state.result is None:
            raise EthQRError("Nothing to download yet. Generate a QR code first.")
        path = self._state.result.image.save(directory)
        self.logger.info("QR saved", path=path)
        return path
