"""Live preview server for cookbook tutorials."""

__version__ = "2025.10.1"

from .hub import RELOAD_SENTINEL, NotificationHub, Subscription
from .server import PreviewConfig, PreviewServer, create_app

__all__ = [
    "__version__",
    "RELOAD_SENTINEL",
    "NotificationHub",
    "Subscription",
    "PreviewConfig",
    "PreviewServer",
    "create_app",
]
