"""Command line entry point: export or serve the generated document."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import uvicorn

from .api.routes import make_route_groups
from .app import build_api_app, configure, load_route_groups
from .features.document import generate_document
from .utils.config import API_ROOT, ROUTES_TARGET, STATUS_CODES_PATH
from .utils.errors import DocumentationError

log = logging.getLogger("routedoc.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate an OpenAPI document from registered route groups"
    )
    parser.add_argument(
        "--routes",
        type=str,
        default=ROUTES_TARGET or None,
        help="Route groups to document as module:attribute (env ROUTEDOC_ROUTES)",
    )
    parser.add_argument(
        "--status-codes",
        type=Path,
        default=STATUS_CODES_PATH,
        help="YAML file with per-route status code overrides",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the document to this file ('-' for stdout) instead of serving it",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to serve on, default: 127.0.0.1",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=3001,
        help="Port to serve on, default: 3001",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def export(args: argparse.Namespace) -> int:
    groups = load_route_groups(args.routes) if args.routes else []
    try:
        document = generate_document(
            make_route_groups(groups, status_source=args.status_codes),
            args.status_codes,
        )
    except DocumentationError as exc:
        log.error("document.failed: %s", exc)
        return 1

    rendered = json.dumps(document, indent=2) + "\n"
    if args.output == "-":
        sys.stdout.write(rendered)
    else:
        Path(args.output).write_text(rendered, encoding="utf-8")
        log.info("document.written", extra={"output": args.output})
    return 0


def run(args: argparse.Namespace) -> int:
    """Execute the parsed command line."""
    configure()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.output:
        return export(args)

    groups = load_route_groups(args.routes) if args.routes else []
    app = build_api_app(groups, status_source=args.status_codes, debug=args.debug)
    log.info(
        "[routedoc] Serving document on http://%s:%s%s/swagger.json",
        args.host,
        args.port,
        API_ROOT,
    )
    uvicorn.run(app, host=args.host, port=int(args.port))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    return run(args)


__all__ = ["build_parser", "export", "main", "run"]


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
