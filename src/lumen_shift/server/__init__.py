"""HTTP trigger for background migrations."""

from .handler import ACCEPTED_MESSAGE, MigrationHandler
from .models import ApiResponse, MigrateRequest
from .server import create_server, make_handler_class, start_server

__all__ = [
    "ACCEPTED_MESSAGE",
    "MigrationHandler",
    "ApiResponse",
    "MigrateRequest",
    "create_server",
    "make_handler_class",
    "start_server",
]
