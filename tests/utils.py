"""Shared helpers for lumen-shift tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from lumen_shift.core.composer import ComposerResult

LUMEN_ROUTES = """<?php

/** @var \\Laravel\\Lumen\\Routing\\Router $router */

$router->get('/', function () use ($router) {
    return $router->app->version();
});

$router->get('/users', 'UserController@index');
$router->post('/users/{id}', 'UserController@update');
"""

LUMEN_CONTROLLER = """<?php

namespace App\\Http\\Controllers;

use Laravel\\Lumen\\Routing\\Controller as BaseController;

class Controller extends BaseController
{
}
"""

LUMEN_KERNEL = """<?php

namespace App\\Console;

use Illuminate\\Console\\Scheduling\\Schedule;
use Laravel\\Lumen\\Console\\Kernel as ConsoleKernel;

class Kernel extends ConsoleKernel
{
}
"""


def write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=4), encoding="utf-8")


def read_json(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


class FakeComposer:
    """Scripted stand-in for composer_runner(); records every call."""

    def __init__(self, results: Sequence[ComposerResult] = ()) -> None:
        self.results = list(results)
        self.calls: list[tuple[list[str], Path | None]] = []

    def __call__(self, args: Sequence[str], cwd: Path | None = None) -> ComposerResult:
        self.calls.append((list(args), cwd))
        if self.results:
            return self.results.pop(0)
        return ok_result(args)


def ok_result(args: Sequence[str] = ("install",)) -> ComposerResult:
    return ComposerResult(args=tuple(args), returncode=0, stdout="", stderr="")


def failed_result(stderr: str, args: Sequence[str] = ("install",), returncode: int = 2) -> ComposerResult:
    return ComposerResult(args=tuple(args), returncode=returncode, stdout="", stderr=stderr)

