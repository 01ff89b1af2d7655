"""HTTP handler that accepts migration requests and launches them in the background."""

from __future__ import annotations

import json
import logging
import urllib.parse
from http.server import BaseHTTPRequestHandler
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError

from ..core.composer import composer_runner
from ..core.config import MigratorConfig
from ..migration.background import launch_migration
from ..migration.descriptor import ProjectDescriptor
from .models import ApiResponse, MigrateRequest

logger = logging.getLogger(__name__)

MIGRATE_PATHS = ("/migrate", "/api/migrate")
ACCEPTED_MESSAGE = "Lumen to Laravel Migration On Progress..."

Launcher = Callable[..., None]


class MigrationHandler(BaseHTTPRequestHandler):
    """Serve the migrate and health endpoints."""

    config: MigratorConfig = MigratorConfig()
    launcher: Optional[Launcher] = None

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A003 - signature from BaseHTTPRequestHandler
        logger.debug("%s - %s", self.address_string(), format % args)

    # Core helpers ---------------------------------------------------------

    def _send_json(self, status_code: int, payload: Dict[str, Any]) -> None:
        self.send_response(status_code)
        self.send_header("Content-type", "application/json")
        self.send_header("Cache-Control", "no-cache")
        self.end_headers()
        self.wfile.write(json.dumps(payload).encode())

    def _send_envelope(self, status_code: int, success: bool, message: str) -> None:
        self._send_json(status_code, ApiResponse(success=success, message=message).model_dump())

    def _read_params(self) -> Dict[str, Any]:
        """Merge query-string parameters with a JSON or form body (body wins)."""
        parsed = urllib.parse.urlparse(self.path)
        params: Dict[str, Any] = {
            key: values[0] for key, values in urllib.parse.parse_qs(parsed.query).items()
        }

        content_length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(content_length) if content_length else b""
        if not body:
            return params

        content_type = (self.headers.get("Content-Type") or "").split(";")[0].strip().lower()
        if content_type == "application/x-www-form-urlencoded":
            form = urllib.parse.parse_qs(body.decode("utf-8"))
            params.update({key: values[0] for key, values in form.items()})
            return params

        payload = json.loads(body.decode("utf-8"))
        if not isinstance(payload, dict):
            raise ValueError("request body must be a JSON object")
        params.update(payload)
        return params

    # Endpoints ------------------------------------------------------------

    def handle_health(self) -> None:
        self._send_json(
            200,
            {"status": "ok", "repo_root": str(self.config.resolved_repo_root())},
        )

    def handle_migrate(self) -> None:
        try:
            params = self._read_params()
        except (UnicodeDecodeError, ValueError) as exc:
            self._send_envelope(400, False, f"Invalid request body: {exc}")
            return

        try:
            request = MigrateRequest.model_validate(params)
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ()))
            self._send_envelope(400, False, f"Invalid {field}: {first.get('msg')}")
            return

        missing = request.missing_field_message()
        if missing:
            self._send_envelope(400, False, missing)
            return

        descriptor = ProjectDescriptor.for_request(
            self.config.resolved_repo_root(), request.project_name, request.project_path
        )
        no_interaction = (
            self.config.no_interaction if request.no_interaction is None else request.no_interaction
        )
        composer = composer_runner(
            binary=self.config.composer_binary,
            no_interaction=no_interaction,
            timeout=self.config.composer_timeout,
        )

        self._send_envelope(200, True, ACCEPTED_MESSAGE)
        launcher = self.launcher or launch_migration
        launcher(descriptor, merge_env=request.with_env, composer=composer)

    # HTTP methods ---------------------------------------------------------

    def do_POST(self) -> None:  # noqa: N802 (standard library name)
        path = urllib.parse.urlparse(self.path).path
        if path in MIGRATE_PATHS:
            self.handle_migrate()
        else:
            self._send_envelope(404, False, "Not found")

    def do_GET(self) -> None:  # noqa: N802
        path = urllib.parse.urlparse(self.path).path
        if path == "/api/health":
            self.handle_health()
        else:
            self._send_envelope(404, False, "Not found")


__all__ = ["MigrationHandler", "MIGRATE_PATHS", "ACCEPTED_MESSAGE"]
