from __future__ import annotations

import functools
import http.server
import sys
from pathlib import Path
from typing import Optional, Sequence

from .cli import configure_logging, make_parser, output_dir, run_build


def make_server(directory: Path, host: str, port: int) -> http.server.ThreadingHTTPServer:
    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(directory))
    return http.server.ThreadingHTTPServer((host, port), handler)


def serve(directory: Path, host: str, port: int) -> None:
    httpd = make_server(directory, host, port)
    print(f"http://{host}:{httpd.server_address[1]}/")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        print("Shutting down server.")
    finally:
        httpd.server_close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = make_parser("Serve the built site over HTTP.", argv)
    parser.add_argument("--with-build", action="store_true", help="Build the site before serving.")
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    if args.with_build:
        run_build(args)
    site_dir = output_dir(args)
    if not site_dir.is_dir():
        print(f"Output directory missing: {site_dir}. Run the build first.", file=sys.stderr)
        return 1
    serve(site_dir, args.host, args.port)
    return 0
