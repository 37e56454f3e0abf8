from __future__ import annotations

from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Depends, Query
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import BaseModel

from . import RenderError, ValidationError
from .config import Settings
from .core import logger
from .models import PaymentForm
from .pipeline import generate
from .render import QRRenderer
from .ui import page_html

load_dotenv()


class QRRequestModel(BaseModel):
    address: str
    amount: str
    note: Optional[str] = None


class QRResponseModel(BaseModel):
    uri: str
    amount_wei: str
    amount_eth: str
    qr_data_uri: str
    filename: str


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.load()
    renderer = QRRenderer(settings.render)
    log = logger.bind(component="WebApp")
    app = FastAPI(title="Ethereum QR Generator", version="0.1")

    def get_settings() -> Settings:
        return settings

    def get_renderer() -> QRRenderer:
        return renderer

    def _error_response(exc: Exception) -> JSONResponse:
        if isinstance(exc, ValidationError):
            log.info("Request rejected", field=exc.field, reason=exc.message)
            return JSONResponse(
                status_code=422, content={"detail": exc.message, "field": exc.field}
            )
        log.error("QR generation failed", error=str(exc.__cause__ or exc))
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    def index(
        address: Optional[str] = Query(default=None),
        amount: Optional[str] = Query(default=None),
        note: str = Query(default=""),
        cfg: Settings = Depends(get_settings),
        qr: QRRenderer = Depends(get_renderer),
    ) -> HTMLResponse:
        if address is None and amount is None:
            return HTMLResponse(page_html())
        form = PaymentForm(address=address or "", amount=amount or "", note=note)
        try:
            result = generate(form, cfg, qr)
        except ValidationError as exc:
            log.info("Form rejected", field=exc.field, reason=exc.message)
            return HTMLResponse(page_html(form, error=exc.message))
        except RenderError as exc:
            log.error("QR generation failed", error=str(exc.__cause__ or exc))
            return HTMLResponse(page_html(form, error=str(exc)))
        return HTMLResponse(page_html(form, result=result))

    @app.post("/api/qr", response_model=QRResponseModel)
    def create_qr(
        body: QRRequestModel,
        cfg: Settings = Depends(get_settings),
        qr: QRRenderer = Depends(get_renderer),
    ):
        form = PaymentForm(address=body.address, amount=body.amount, note=body.note or "")
        try:
            result = generate(form, cfg, qr)
        except (ValidationError, RenderError) as exc:
            return _error_response(exc)
        return QRResponseModel(
            uri=result.uri,
            amount_wei=result.request.amount_wei,
            amount_eth=result.amount_eth,
            qr_data_uri=result.image.data_uri,
            filename=result.image.filename,
        )

    @app.get("/qr.png")
    def download_qr(
        address: str = Query(...),
        amount: str = Query(...),
        note: str = Query(default=""),
        cfg: Settings = Depends(get_settings),
        qr: QRRenderer = Depends(get_renderer),
    ):
        form = PaymentForm(address=address, amount=amount, note=note)
        try:
            result = generate(form, cfg, qr)
        except (ValidationError, RenderError) as exc:
            return _error_response(exc)
        return Response(
            content=result.image.png,
            media_type="image/png",
            headers={
                "Content-Disposition": f'attachment; filename="{result.image.filename}"'
            },
        )

    return app
