"""Stage 6: rewrite Lumen router calls into Laravel Route facade calls.

The rewrite is purely textual. Each rule is a pure ``str -> str`` function
applied in the order of ``ROUTING_RULES``:

1. drop the ``@var \\Laravel\\Lumen\\Routing\\Router $router`` doc comment
2. ``$router->`` becomes ``Route::``
3. drop ``use ($router)`` closure captures
4. import the Route facade after ``<?php`` unless already imported
5. ``'Controller@action'`` becomes ``[App\\Http\\Controllers\\Controller::class, 'action']``
"""

from __future__ import annotations

import re
from typing import Callable

from ...core.constants import (
    CONTROLLER_NAMESPACE,
    ROUTE_FACADE_IMPORT,
    ROUTES_DIR,
    WEB_ROUTES_FILE,
)
from ...core.errors import RoutingError
from ..base import BaseStage, StageContext, StageResult
from ..descriptor import ProjectDescriptor
from ..registry import StageRegistry

ROUTER_DOC_COMMENT = re.compile(
    r"/\*\*?[ \t]*@var[ \t]+\\?Laravel\\Lumen\\Routing\\Router[ \t]+\$router[ \t]*\*/[ \t]*\n?"
)
ROUTER_CAPTURE = re.compile(r"[ \t]*\buse[ \t]*\([ \t]*\$router[ \t]*\)")
OPENING_TAG = re.compile(r"\A(\ufeff?)<\?php")

HTTP_VERBS = ("get", "post", "put", "delete", "patch", "options", "any")

# Quoted literals exclude newlines and the separators between arguments
# never cross ';', so a match always stays inside one statement.
_QUOTED = r"'(?:[^'\\\n]|\\.)*'|\"(?:[^\"\\\n]|\\.)*\""
ROUTE_ACTION = re.compile(
    r"Route::(" + "|".join(HTTP_VERBS) + r")\(\s*"
    r"(" + _QUOTED + r")"
    r"\s*,\s*(['\"])\\?([A-Za-z_][A-Za-z0-9_\\]*)@([A-Za-z_][A-Za-z0-9_]*)\3\s*\)"
)


def strip_router_doc_comment(text: str) -> str:
    return ROUTER_DOC_COMMENT.sub("", text)


def replace_router_calls(text: str) -> str:
    return text.replace("$router->", "Route::")


def strip_router_capture(text: str) -> str:
    return ROUTER_CAPTURE.sub("", text)


def ensure_route_facade_import(text: str) -> str:
    if ROUTE_FACADE_IMPORT in text:
        return text
    return OPENING_TAG.sub(lambda m: f"{m.group(1)}<?php\n\n{ROUTE_FACADE_IMPORT}", text, count=1)


def qualify_controller(controller: str) -> str:
    if controller.startswith(CONTROLLER_NAMESPACE + "\\"):
        return controller
    return f"{CONTROLLER_NAMESPACE}\\{controller}"


def convert_controller_actions(text: str) -> str:
    def _replace(match: re.Match[str]) -> str:
        verb, path, _quote, controller, action = match.groups()
        return f"Route::{verb}({path}, [{qualify_controller(controller)}::class, '{action}'])"

    return ROUTE_ACTION.sub(_replace, text)


ROUTING_RULES: tuple[Callable[[str], str], ...] = (
    strip_router_doc_comment,
    replace_router_calls,
    strip_router_capture,
    ensure_route_facade_import,
    convert_controller_actions,
)


def rewrite_routing(text: str) -> str:
    """Apply every routing rule in order."""
    for rule in ROUTING_RULES:
        text = rule(text)
    return text


@StageRegistry.register
class RewriteRoutesStage(BaseStage):
    """Convert routes/web.php of the destination to Laravel syntax in place."""

    stage_id = "convert_routes"
    description = "Convert Lumen routes to Laravel"
    order = 6

    def apply(self, descriptor: ProjectDescriptor, context: StageContext) -> StageResult:
        route_file = descriptor.destination / ROUTES_DIR / WEB_ROUTES_FILE
        if not route_file.exists():
            raise RoutingError(f"Routing file not found: {route_file}")

        original = route_file.read_text(encoding="utf-8")
        converted = rewrite_routing(original)
        route_file.write_text(converted, encoding="utf-8")

        rewritten = len(ROUTE_ACTION.findall(replace_router_calls(original)))
        return StageResult(
            success=True,
            changes_made=[
                f"Converted {ROUTES_DIR}/{WEB_ROUTES_FILE} to Laravel syntax "
                f"({rewritten} controller actions)"
            ],
        )
