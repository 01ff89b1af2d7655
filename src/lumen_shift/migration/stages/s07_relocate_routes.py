"""Stage 7: move converted routes into the api slot and restore a default web.php."""

from __future__ import annotations

import logging
from pathlib import Path

from ...core.constants import API_ROUTES_FILE, ROUTES_DIR, WEB_ROUTES_FILE
from ...core.errors import RoutingError
from ..base import BaseStage, StageContext, StageResult
from ..descriptor import ProjectDescriptor
from ..registry import StageRegistry

logger = logging.getLogger(__name__)

DEFAULT_WEB_ROUTES = """<?php

use Illuminate\\Support\\Facades\\Route;

/*
|--------------------------------------------------------------------------
| Web Routes
|--------------------------------------------------------------------------
|
| Here is where you can register web routes for your application.
| These routes are loaded by the RouteServiceProvider within a group which
| contains the "web" middleware group. Now create something great!
|
*/

Route::get('/', function () {
    return view('welcome');
});
"""


def relocate_routes(project_root: Path) -> list[str]:
    """Delete api.php, rename web.php to api.php, then write a default web.php.

    Raises:
        RoutingError: If there is no web.php to relocate.
    """
    routes_dir = project_root / ROUTES_DIR
    web_routes = routes_dir / WEB_ROUTES_FILE
    api_routes = routes_dir / API_ROUTES_FILE
    changes: list[str] = []

    if not web_routes.exists():
        raise RoutingError(f"Routing file not found: {web_routes}")

    if api_routes.exists():
        api_routes.unlink()
        changes.append(f"Removed existing {API_ROUTES_FILE}")
        logger.info("Existing %s has been removed", api_routes)

    web_routes.rename(api_routes)
    changes.append(f"Renamed {WEB_ROUTES_FILE} to {API_ROUTES_FILE}")

    web_routes.write_text(DEFAULT_WEB_ROUTES, encoding="utf-8")
    changes.append(f"Created default {WEB_ROUTES_FILE}")
    return changes


@StageRegistry.register
class RelocateRoutesStage(BaseStage):
    stage_id = "relocate_routes"
    description = "Move routes to api.php"
    order = 7

    def apply(self, descriptor: ProjectDescriptor, context: StageContext) -> StageResult:
        return StageResult(success=True, changes_made=relocate_routes(descriptor.destination))
