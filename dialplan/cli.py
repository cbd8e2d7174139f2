"""Command line access to the translator."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Optional, Sequence

from .config import configure_logging, get_settings
from .exceptions import DialplanError
from .store import DialplanStore
from .translator import DialplanCache, TranslatorService


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="dialplan", description="Asterisk dialplan translator")
    ap.add_argument("--data", help="Override the JSON data file")
    sub = ap.add_subparsers(dest="cmd", required=True)

    sub.add_parser("dialplan", help="Print the dialplan for every context")

    p_script = sub.add_parser("script", help="Print the translation of a single script")
    p_script.add_argument("--id", dest="script_id", type=int, required=True)

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8080)
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.data:
        os.environ["DATA_PATH"] = args.data
        get_settings.cache_clear()
    settings = get_settings()
    configure_logging(settings)

    if args.cmd == "serve":
        import uvicorn

        uvicorn.run("dialplan.app:create_app", factory=True, host=args.host, port=args.port)
        return 0

    store = DialplanStore(settings.data_path, default_host=settings.fastagi_host)
    translator = TranslatorService(store, DialplanCache(), generator_name=settings.generator_name)
    if args.cmd == "dialplan":
        sys.stdout.write(translator.translate_dialplan())
        return 0

    try:
        sys.stdout.write(translator.translate_script(args.script_id))
    except DialplanError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
