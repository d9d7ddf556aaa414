"""PreviewServer: live preview of a tutorial README with reload on save."""

import asyncio
import logging
import pathlib
import threading
import traceback
import webbrowser
from dataclasses import dataclass
from typing import Iterator, Optional

from watchfiles import Change, awatch
from werkzeug.middleware.shared_data import SharedDataMiddleware
from werkzeug.serving import make_server
from werkzeug.wrappers import Request, Response

from .hub import NotificationHub, Subscription
from .metadata import METADATA_FILENAME, read_metadata
from .render import (
    highlight_stylesheet,
    render_error,
    render_markdown,
    render_not_found,
    render_page,
)

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_KEEPALIVE = 15.0
README_FILENAME = "README.md"
STATIC_DIR = pathlib.Path(__file__).parent / "static"


@dataclass
class PreviewConfig:
    """Configuration for previewing one tutorial directory."""

    tutorial_dir: pathlib.Path
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    open_url: bool = True
    verbose: bool = False
    keepalive: float = DEFAULT_KEEPALIVE

    @property
    def readme_path(self) -> pathlib.Path:
        return self.tutorial_dir / README_FILENAME

    @property
    def metadata_path(self) -> pathlib.Path:
        return self.tutorial_dir / METADATA_FILENAME

    @property
    def tutorial_name(self) -> str:
        return self.tutorial_dir.resolve().name

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"


def not_found_app(_environ, start_response):
    start_response("404 Not Found", [("Content-Type", "text/plain")])
    return [b"Not Found"]


def event_stream(
    subscription: Subscription, keepalive: Optional[float] = None
) -> Iterator[bytes]:
    """Serialize a subscription as a server-sent event stream."""
    try:
        # Sent first so the response head reaches the browser right away.
        yield b"retry: 1000\n\n"
        for message in subscription.messages(keepalive=keepalive):
            if message is None:
                yield b": keepalive\n\n"
            else:
                yield f"data: {message}\n\n".encode("utf-8")
    finally:
        subscription.close()


class PreviewMiddleware:
    """Middleware that renders the tracked README and serves reload events."""

    def __init__(self, app, config: PreviewConfig, hub: NotificationHub):
        self.app = app
        self.config = config
        self.hub = hub

    def __call__(self, environ, start_response):
        request = Request(environ)
        path = request.path

        if path == "/":
            response = self._render_preview()
        elif path == "/events":
            response = self._open_event_stream(request)
        elif path.startswith("/highlight/") and path.endswith(".css"):
            response = self._highlight_css(path)
        else:
            return self.app(environ, start_response)

        return response(environ, start_response)

    def _render_preview(self) -> Response:
        readme_path = self.config.readme_path
        try:
            if not readme_path.exists():
                body = render_not_found(readme_path, self.config.tutorial_name)
                return Response(body, status=404, mimetype="text/html")

            content = render_markdown(readme_path.read_text(encoding="utf-8"))
            metadata = read_metadata(
                self.config.tutorial_dir, self.config.tutorial_name
            )
            body = render_page(content, self.config.tutorial_name, metadata)
            return Response(body, mimetype="text/html")
        except Exception as e:
            logger.exception(f"Error rendering {readme_path}: {e}")
            return Response(
                render_error(traceback.format_exc()), status=500, mimetype="text/html"
            )

    def _open_event_stream(self, request: Request) -> Response:
        if request.method == "HEAD":
            return Response(mimetype="text/event-stream")

        subscription = self.hub.connect()
        response = Response(
            event_stream(subscription, self.config.keepalive),
            mimetype="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )
        # Runs even if the stream generator was never started.
        response.call_on_close(subscription.close)
        return response

    def _highlight_css(self, path: str) -> Response:
        style = pathlib.PurePosixPath(path).stem
        css = highlight_stylesheet(style)
        if css is None:
            return Response(f"Unknown highlight style: {style}", status=404)
        return Response(css, mimetype="text/css")


def create_app(config: PreviewConfig, hub: NotificationHub):
    """Create the WSGI application with all middleware."""
    app = SharedDataMiddleware(not_found_app, {"/public": str(STATIC_DIR)})
    app = PreviewMiddleware(app, config, hub)
    return app


class PreviewServer:
    """Development server that reloads open previews when the README changes."""

    def __init__(self, config: PreviewConfig, hub: Optional[NotificationHub] = None):
        self.config = config
        self.hub = hub if hub is not None else NotificationHub()

        self._http_server = None
        self._http_thread = None
        self._stop_event = asyncio.Event()

    def _is_tracked(self, path) -> bool:
        return pathlib.Path(path).resolve() == self.config.readme_path.resolve()

    async def _watch_for_changes(self):
        """Broadcast a reload whenever the tracked README is written."""
        async for changes in awatch(
            self.config.tutorial_dir, stop_event=self._stop_event
        ):
            if any(
                change != Change.deleted and self._is_tracked(path)
                for change, path in changes
            ):
                logger.info(f"📝 {README_FILENAME} changed, reloading...")
                delivered = self.hub.broadcast()
                logger.debug(f"Reload sent to {delivered} client(s)")

    def _open_browser(self):
        if not webbrowser.open(self.config.url):
            logger.warning(
                f"Could not open browser automatically. Please visit {self.config.url}"
            )

    async def serve(self):
        """Start the server and watch until cancelled or stopped."""
        app = create_app(self.config, self.hub)
        self._http_server = make_server(
            self.config.host, self.config.port, app, threaded=True
        )
        self._http_thread = threading.Thread(
            target=self._http_server.serve_forever, daemon=True
        )
        self._http_thread.start()
        logger.debug(f"HTTP server thread started on {self.config.url}")

        if self.config.open_url:
            threading.Timer(1, self._open_browser).start()

        try:
            await self._watch_for_changes()
        finally:
            self.hub.close_all()
            if self._http_server:
                self._http_server.shutdown()
                self._http_server.server_close()
                self._http_server = None

    def stop(self):
        """Stop the server."""
        self._stop_event.set()
        self.hub.close_all()
        if self._http_server:
            self._http_server.shutdown()
