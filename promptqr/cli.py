"""Command-line entry point: print a PromptPay payload, optionally save the QR image."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import settings
from .logging_conf import configure_logging
from .renderer import render_png, render_svg
from .services.builder import build_payload
from .services.errors import EncodeError

logger = logging.getLogger("promptqr.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="promptqr", description="Build a PromptPay QR payload")
    parser.add_argument("identifier", help="Phone number, 13-digit tax ID or 15-digit e-wallet ID")
    parser.add_argument("--amount", default=None, help="Fixed amount in THB, at most 2 decimal places")
    parser.add_argument("--country", default=None, help="ISO 3166-1 alpha-2 country code (default TH)")
    parser.add_argument("--currency", default=None, help="ISO 4217 numeric currency code (default 764)")
    parser.add_argument(
        "--no-validate",
        dest="validate_input",
        action="store_false",
        default=None,
        help="Skip format and checksum rules for pre-validated input",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write the QR image to a .png or .svg file")
    return parser.parse_args(argv)


def write_image(payload: str, output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    if output.suffix.lower() == ".svg":
        output.write_text(render_svg(payload, settings.render), encoding="utf-8")
    else:
        output.write_bytes(render_png(payload, settings.render))


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()
    config = settings.build_config(
        country_code=args.country,
        currency_code=args.currency,
        validate_input=args.validate_input,
    )
    try:
        result = build_payload(args.identifier, args.amount, config)
    except EncodeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(result.payload)
    if args.output is not None:
        write_image(result.payload, args.output)
        logger.info("qr image written", extra={"path": str(args.output), "kind": result.identifier.kind.value})
    return 0


if __name__ == "__main__":
    sys.exit(main())
