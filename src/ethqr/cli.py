from __future__ import annotations

import argparse
import json
import sys
from typing import List

import uvicorn
import yaml
from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError

from . import EthQRError
from .amount import to_wei
from .config import Settings, get_output_dir, get_server_config
from .core import logger
from .models import PaymentForm, RenderOptions
from .pipeline import QRGenerator, prepare_request

load_dotenv()


def _cmd_to_wei(args) -> None:
    print(to_wei(args.amount))


def _cmd_uri(args) -> None:
    settings = Settings.load(args.config)
    form = PaymentForm(address=args.address, amount=args.amount, note=args.note or "")
    request = prepare_request(form, settings)
    print(request.to_uri(settings.scheme))


def _cmd_generate(args) -> None:
    settings = Settings.load(args.config)
    overrides = {
        k: v
        for k, v in (
            ("width", args.width),
            ("margin", args.margin),
            ("dark", args.dark),
            ("light", args.light),
        )
        if v is not None
    }
    if overrides:
        settings.render = RenderOptions(**{**settings.render.model_dump(), **overrides})
    generator = QRGenerator(settings)
    form = PaymentForm(address=args.address, amount=args.amount, note=args.note or "")
    outcome = generator.submit(form)
    if not outcome.ok:
        raise outcome.error
    path = generator.download(args.out_dir or get_output_dir())
    print(json.dumps({"uri": outcome.result.uri, "qr": path}))


def _cmd_serve(args) -> None:
    from .web import create_app

    app = create_app(Settings.load(args.config))
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ethqr", description="Ethereum payment QR generator")
    p.add_argument("--config", help="path to YAML settings file")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("to-wei", help="convert an ETH amount to wei")
    s.add_argument("amount")
    s.set_defaults(func=_cmd_to_wei)

    s = sub.add_parser("uri", help="print the payment URI")
    s.add_argument("address")
    s.add_argument("amount")
    s.add_argument("--note")
    s.set_defaults(func=_cmd_uri)

    s = sub.add_parser("generate", help="render the payment QR code as PNG")
    s.add_argument("address")
    s.add_argument("amount")
    s.add_argument("--note")
    s.add_argument("--out-dir")
    s.add_argument("--width", type=int)
    s.add_argument("--margin", type=int)
    s.add_argument("--dark")
    s.add_argument("--light")
    s.set_defaults(func=_cmd_generate)

    server_cfg = get_server_config()
    s = sub.add_parser("serve", help="run the web form")
    s.add_argument("--host", default=server_cfg["host"])
    s.add_argument("--port", type=int, default=server_cfg["port"])
    s.add_argument("--log-level", default=server_cfg["log_level"])
    s.set_defaults(func=_cmd_serve)
    return p


def main(argv: List[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        args.func(args)
    except EthQRError as exc:
        logger.info("Command failed", cmd=args.cmd, error=str(exc))
        print(str(exc), file=sys.stderr)
        return 1
    except PydanticValidationError as exc:
        logger.warning("Invalid settings", cmd=args.cmd, errors=exc.error_count())
        print(f"Invalid settings: {exc}", file=sys.stderr)
        return 1
    except yaml.YAMLError as exc:
        logger.warning("Invalid settings file", cmd=args.cmd, error=str(exc))
        print(f"Invalid settings file: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
