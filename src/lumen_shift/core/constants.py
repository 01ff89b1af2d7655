"""Shared path and package constants for Lumen and Laravel project layouts."""

from __future__ import annotations

MANIFEST_FILE = "composer.json"
LOCK_FILE = "composer.lock"
ENV_FILE = ".env"
REMOVED_PACKAGES_LOG = "removed_packages.txt"

DESTINATION_SUFFIX = "_new"

MICRO_FRAMEWORK_PACKAGE = "laravel/lumen-framework"
FULL_FRAMEWORK_SKELETON = "laravel/laravel"

# Top-level subtrees carried over from the Lumen project, in copy order.
COPIED_SUBTREES = (
    "app",
    "resources",
    "config",
    "public",
    "routes",
    "database",
    "storage",
    "tests",
)
PUBLIC_DIR = "public"
PUBLIC_ENTRY_POINT = "index.php"

ROUTES_DIR = "routes"
WEB_ROUTES_FILE = "web.php"
API_ROUTES_FILE = "api.php"

CONTROLLER_NAMESPACE = "App\\Http\\Controllers"
ROUTE_FACADE_IMPORT = "use Illuminate\\Support\\Facades\\Route;"

__all__ = [
    "MANIFEST_FILE",
    "LOCK_FILE",
    "ENV_FILE",
    "REMOVED_PACKAGES_LOG",
    "DESTINATION_SUFFIX",
    "MICRO_FRAMEWORK_PACKAGE",
    "FULL_FRAMEWORK_SKELETON",
    "COPIED_SUBTREES",
    "PUBLIC_DIR",
    "PUBLIC_ENTRY_POINT",
    "ROUTES_DIR",
    "WEB_ROUTES_FILE",
    "API_ROUTES_FILE",
    "CONTROLLER_NAMESPACE",
    "ROUTE_FACADE_IMPORT",
]
