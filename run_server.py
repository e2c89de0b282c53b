"""Run the ticket HTTP API.

Usage:
    python run_server.py [--host 0.0.0.0] [--port 8787] [--data-dir data/]
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from weighticket.web.server import run_server


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the weigh-ticket API server.")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind")
    parser.add_argument("--port", type=int, default=8787, help="Port to bind")
    parser.add_argument("--data-dir", type=Path, default=None, help="Config, registry and output directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    run_server(host=args.host, port=args.port, base_dir=args.data_dir)


if __name__ == "__main__":
    main()
