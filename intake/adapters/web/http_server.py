"""HTTP server adapter for the intake form.

Provides a small threaded HTTP server built on Python's http.server module.
Request bodies are buffered on the connection thread and the submission
pipeline runs on the application's asyncio event loop.

Routes:
- OPTIONS *                 -> 204 CORS preflight
- GET / and GET /index.html -> the onboarding form
- POST /submit              -> submission pipeline
- anything else             -> 404
"""

import asyncio
import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

from intake.core.errors import InternalError, MalformedInput, PersistenceError
from intake.core.pipeline import SubmissionPipeline

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

FORM_PATHS = ("/", "/index.html")
SUBMIT_PATH = "/submit"
MAX_CHUNK_LINE = 65536


def read_form(form_path: Path) -> bytes:
    """Read the onboarding form.

    Raises:
        InternalError: If the file cannot be read.
    """
    try:
        return form_path.read_bytes()
    except OSError as e:
        raise InternalError(f"Failed to read form {form_path}: {e}") from e


def make_intake_handler(
    pipeline: SubmissionPipeline,
    event_loop: asyncio.AbstractEventLoop,
    form_path: Path,
) -> type[BaseHTTPRequestHandler]:
    """Factory to create an IntakeHTTPHandler class with instance-specific state.

    Args:
        pipeline: Submission pipeline for POST /submit
        event_loop: Event loop the pipeline runs on
        form_path: Path of the static onboarding form

    Returns:
        An IntakeHTTPHandler class configured with the provided dependencies
    """

    class IntakeHTTPHandler(BaseHTTPRequestHandler):
        """HTTP request handler for the intake routes."""

        @property
        def route(self) -> str:
            return urlsplit(self.path).path

        def do_OPTIONS(self) -> None:
            """Answer any CORS preflight."""
            self._send(204)

        def do_GET(self) -> None:
            """Serve the onboarding form."""
            if self.route not in FORM_PATHS:
                self._send_not_found()
                return

            try:
                html = read_form(form_path)
            except InternalError as e:
                logger.error(str(e))
                self._send(500, b"Server error", "text/plain; charset=utf-8")
                return

            self._send(200, html, "text/html; charset=utf-8")

        def do_POST(self) -> None:
            """Handle a form submission."""
            if self.route != SUBMIT_PATH:
                self._send_not_found()
                return

            try:
                body = self._read_body()
            except MalformedInput as e:
                logger.error(f"Submission error: {e}")
                self.close_connection = True
                self._send_json(500, {"ok": False, "error": str(e)})
                return

            # No timeout: once persisted, the record is reported as saved.
            # The system event is bounded on its own.
            future = asyncio.run_coroutine_threadsafe(pipeline.submit(body), event_loop)
            try:
                result = future.result()
            except (MalformedInput, PersistenceError) as e:
                logger.error(f"Submission error: {e}")
                self._send_json(500, {"ok": False, "error": str(e)})
                return
            except Exception as e:
                logger.error(f"Unexpected submission error: {e}", exc_info=True)
                self._send_json(500, {"ok": False, "error": str(e) or type(e).__name__})
                return

            self._send_json(200, {"ok": True, "id": result.record_id})

        def __getattr__(self, name: str) -> Any:
            # http.server dispatches to do_<METHOD> and answers 501 when it
            # is missing; every other method is an unknown route here
            if name.startswith("do_"):
                return self._send_not_found
            raise AttributeError(name)

        def _read_body(self) -> bytes:
            """Buffer the full request body, sized or chunked.

            Raises:
                MalformedInput: If the chunked framing is invalid.
            """
            if "chunked" in self.headers.get("Transfer-Encoding", "").lower():
                return self._read_chunked_body()

            try:
                content_length = int(self.headers.get("Content-Length") or 0)
            except ValueError:
                content_length = 0
            return self.rfile.read(content_length) if content_length > 0 else b""

        def _read_chunked_body(self) -> bytes:
            chunks = []
            while True:
                size_line = self.rfile.readline(MAX_CHUNK_LINE)
                try:
                    size = int(size_line.split(b";", 1)[0].strip(), 16)
                except ValueError as e:
                    raise MalformedInput(f"Invalid chunk size: {size_line[:40]!r}") from e
                if size < 0:
                    raise MalformedInput(f"Invalid chunk size: {size_line[:40]!r}")
                if size == 0:
                    break

                chunk = self.rfile.read(size)
                if len(chunk) < size:
                    raise MalformedInput("Request body ended before the last chunk")
                chunks.append(chunk)
                self.rfile.readline(MAX_CHUNK_LINE)

            # Skip trailers up to the terminating empty line
            while self.rfile.readline(MAX_CHUNK_LINE) not in (b"\r\n", b"\n", b""):
                pass
            return b"".join(chunks)

        def _send_not_found(self) -> None:
            # Drain the body so the connection closes cleanly
            try:
                self._read_body()
            except MalformedInput:
                self.close_connection = True
            self._send(404, b"Not found", "text/plain; charset=utf-8")

        def _send_json(self, status: int, data: dict[str, Any]) -> None:
            """Send JSON response."""
            self._send(status, json.dumps(data).encode("utf-8"), "application/json")

        def _send(
            self, status: int, body: bytes = b"", content_type: str | None = None
        ) -> None:
            """Send a complete response; CORS headers go on every route."""
            self.send_response(status)
            for header, value in CORS_HEADERS.items():
                self.send_header(header, value)
            if content_type:
                self.send_header("Content-Type", content_type)
            if status != 204:
                self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            if body and self.command != "HEAD":
                self.wfile.write(body)

        def log_message(self, format: str, *args: Any) -> None:
            """Log HTTP request."""
            logger.debug(f"HTTP {self.client_address[0]}: {format % args}")

    return IntakeHTTPHandler


class IntakeHTTPServer:
    """Intake HTTP server adapter.

    Serves the onboarding form and accepts submissions.
    """

    def __init__(
        self,
        pipeline: SubmissionPipeline,
        form_path: str | Path,
        host: str = "127.0.0.1",
        port: int = 3000,
    ):
        """Initialize the HTTP server.

        Args:
            pipeline: SubmissionPipeline instance to handle submissions.
            form_path: Path of the static onboarding form.
            host: Host to listen on (default loopback only).
            port: Port to listen on (default 3000, 0 picks a free port).
        """
        self.pipeline = pipeline
        self.form_path = Path(form_path)
        self.host = host
        self.port = port
        self.server: ThreadingHTTPServer | None = None
        self._server_task: asyncio.Task[None] | None = None

    @property
    def bound_port(self) -> int:
        """Port actually bound; differs from ``port`` when it was 0."""
        if self.server is None:
            raise RuntimeError("Server is not started")
        return int(self.server.server_address[1])

    async def start(self) -> None:
        """Start the HTTP server."""
        handler_class = make_intake_handler(
            pipeline=self.pipeline,
            event_loop=asyncio.get_running_loop(),
            form_path=self.form_path,
        )

        self.server = ThreadingHTTPServer((self.host, self.port), handler_class)
        self.server.daemon_threads = True

        # Run server in a separate thread to avoid blocking
        self._server_task = asyncio.create_task(self._run_server())
        # Let the task hand serve_forever to its thread before anyone can call stop()
        await asyncio.sleep(0)
        logger.info(f"Intake server listening on {self.host}:{self.bound_port}")

    async def _run_server(self) -> None:
        """Run the HTTP server loop in a thread pool."""
        if not self.server:
            return

        try:
            await asyncio.to_thread(self.server.serve_forever)
        except asyncio.CancelledError:
            # Normal shutdown
            pass
        except Exception as e:
            logger.error(f"Intake HTTP server error: {e}", exc_info=True)

    async def stop(self) -> None:
        """Stop the HTTP server."""
        if self.server:
            await asyncio.to_thread(self.server.shutdown)
            self.server.server_close()
        if self._server_task:
            self._server_task.cancel()
            try:
                await self._server_task
            except asyncio.CancelledError:
                pass
        logger.info("Intake HTTP server stopped")
