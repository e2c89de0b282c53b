"""HTTP API for report generation, slip conversion and the file registry.

Serves:
- GET    /api/health
- GET    /api/config, POST /api/config
- POST   /api/generate-excel
- POST   /api/excel-to-txt, /api/excel-to-txt-zip  (raw xlsx body or multipart "file")
- GET    /api/files, /api/files/type/<kind>, /api/files/download/<id>
- DELETE /api/files/<id>
"""

from __future__ import annotations

import json
import logging
import mimetypes
import os
from email import policy
from email.parser import BytesParser
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from weighticket.generator.report_generator import ReportGenerator
from weighticket.storage.config_store import (
    config_path,
    data_dir,
    load_config,
    output_dir,
    registry_path,
    save_config,
)
from weighticket.storage.file_registry import FileRegistry
from weighticket.tickets.errors import TicketGenerationError, ValidationError
from weighticket.validation.request_checks import parse_app_config, parse_generation_request

logger = logging.getLogger(__name__)

XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CORS_ORIGIN = os.environ.get("CORS_ORIGIN", "*")


def extract_upload(body: bytes, content_type: str) -> bytes:
    """Return the uploaded file bytes from a raw or multipart request body."""
    if not content_type.startswith("multipart/form-data"):
        if not body:
            raise ValidationError("No file uploaded")
        return body

    message = BytesParser(policy=policy.default).parsebytes(
        b"Content-Type: " + content_type.encode("latin-1") + b"\r\n\r\n" + body
    )
    for part in message.iter_parts():
        if part.get_param("name", header="content-disposition") == "file":
            payload = part.get_payload(decode=True)
            if payload:
                return payload
    raise ValidationError("No file uploaded")


class TicketApiHandler(BaseHTTPRequestHandler):
    """Serve the ticket API. ``base_dir`` is bound per server."""

    base_dir: Path = data_dir()

    # -- helpers -----------------------------------------------------------

    @property
    def registry(self) -> FileRegistry:
        return FileRegistry(registry_path(self.base_dir))

    @property
    def generator(self) -> ReportGenerator:
        return ReportGenerator(output_dir(self.base_dir), self.registry)

    def _send_json(self, payload, status: HTTPStatus = HTTPStatus.OK) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Access-Control-Allow-Origin", CORS_ORIGIN)
        self.end_headers()
        self.wfile.write(body)

    def _send_error_json(self, status: HTTPStatus, message: str) -> None:
        self._send_json({"error": message}, status)

    def _send_download(self, path: Path, content_type: Optional[str] = None) -> None:
        if not path.exists() or not path.is_file():
            self._send_error_json(HTTPStatus.NOT_FOUND, "File not found")
            return

        content = path.read_bytes()
        content_type = content_type or mimetypes.guess_type(str(path))[0] or "application/octet-stream"

        self.send_response(HTTPStatus.OK)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(content)))
        self.send_header("Content-Disposition", f'attachment; filename="{path.name}"')
        self.send_header("Access-Control-Allow-Origin", CORS_ORIGIN)
        self.end_headers()
        self.wfile.write(content)

    def _read_body(self) -> bytes:
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length) if length > 0 else b""

    def _read_json(self):
        body = self._read_body()
        try:
            return json.loads(body.decode("utf-8") or "{}")
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ValidationError(f"Invalid JSON body: {exc}") from exc

    def _dispatch(self, method: str) -> None:
        route = urlparse(self.path).path.rstrip("/") or "/"
        handler = getattr(self, f"_{method}_routes")
        try:
            if not handler(route):
                self._send_error_json(HTTPStatus.NOT_FOUND, "Not found")
        except TicketGenerationError as exc:
            logger.warning(f"{method.upper()} {route}: {exc}")
            self._send_error_json(HTTPStatus.BAD_REQUEST, str(exc))
        except Exception:
            logger.exception(f"{method.upper()} {route} failed")
            self._send_error_json(HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error")

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        logger.debug("%s - %s", self.address_string(), format % args)

    # -- verbs -------------------------------------------------------------

    def do_GET(self) -> None:  # noqa: N802
        self._dispatch("get")

    def do_POST(self) -> None:  # noqa: N802
        self._dispatch("post")

    def do_DELETE(self) -> None:  # noqa: N802
        self._dispatch("delete")

    def do_OPTIONS(self) -> None:  # noqa: N802
        self.send_response(HTTPStatus.NO_CONTENT)
        self.send_header("Access-Control-Allow-Origin", CORS_ORIGIN)
        self.send_header("Access-Control-Allow-Methods", "GET, POST, DELETE, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()

    # -- routes ------------------------------------------------------------

    def _get_routes(self, route: str) -> bool:
        if route == "/api/health":
            self._send_json({"status": "ok", "service": "weighticket"})
            return True

        if route == "/api/config":
            config = load_config(config_path(self.base_dir))
            self._send_json(config.to_dict())
            return True

        if route == "/api/files":
            self._send_json([f.to_dict() for f in self.registry.list_all()])
            return True

        if route.startswith("/api/files/type/"):
            kind = route.rsplit("/", 1)[-1]
            self._send_json([f.to_dict() for f in self.registry.list_by_kind(kind)])
            return True

        if route.startswith("/api/files/download/"):
            entry = self.registry.get_by_id(self._route_id(route))
            if entry is None:
                self._send_error_json(HTTPStatus.NOT_FOUND, "File not found")
            else:
                self._send_download(Path(entry.path))
            return True

        return False

    def _post_routes(self, route: str) -> bool:
        if route == "/api/config":
            config = parse_app_config(self._read_json())
            save_config(config, config_path(self.base_dir))
            self._send_json({"ok": True})
            return True

        if route in {"/api/generate-excel", "/generate-excel"}:
            payload = self._read_json()
            config = load_config(config_path(self.base_dir))
            params, drivers = parse_generation_request(payload, config)
            gen = self.generator
            records = gen.generate_records(params, drivers)
            path = gen.render("xlsx", records, params)
            self._send_download(path, XLSX_TYPE)
            return True

        if route in {"/api/excel-to-txt", "/api/excel-to-txt-zip"}:
            data = extract_upload(self._read_body(), self.headers.get("Content-Type", ""))
            as_zip = route.endswith("-zip")
            path = self.generator.convert_excel(data, as_zip=as_zip)
            self._send_download(
                path, "application/zip" if as_zip else "text/plain; charset=utf-8",
            )
            return True

        return False

    def _delete_routes(self, route: str) -> bool:
        if route.startswith("/api/files/"):
            entry = self.registry.delete_by_id(self._route_id(route), remove_file=True)
            if entry is None:
                self._send_error_json(HTTPStatus.NOT_FOUND, "File not found")
            else:
                self._send_json({"ok": True, "deleted": entry.to_dict()})
            return True
        return False

    @staticmethod
    def _route_id(route: str) -> int:
        tail = route.rsplit("/", 1)[-1]
        if not tail.isdigit():
            raise ValidationError(f"Invalid file id {tail!r}")
        return int(tail)


def create_server(
    host: str = "127.0.0.1", port: int = 8787, base_dir: Optional[Path] = None,
) -> ThreadingHTTPServer:
    """Build a server whose handler reads and writes under ``base_dir``."""
    handler = type(
        "BoundTicketApiHandler", (TicketApiHandler,), {"base_dir": data_dir(base_dir)},
    )
    return ThreadingHTTPServer((host, port), handler)


def run_server(host: str = "127.0.0.1", port: int = 8787, base_dir: Optional[Path] = None) -> None:
    """Run the HTTP API until interrupted."""
    server = create_server(host, port, base_dir)

    access_host = "127.0.0.1" if host in {"0.0.0.0", "::"} else host
    print(f"Ticket API running at http://{access_host}:{port}/api/health")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()


if __name__ == "__main__":
    run_server()
