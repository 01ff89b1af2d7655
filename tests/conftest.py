from __future__ import annotations

from pathlib import Path

import pytest

from tests.utils import (
    LUMEN_CONTROLLER,
    LUMEN_KERNEL,
    LUMEN_ROUTES,
    FakeComposer,
    write_json,
)


@pytest.fixture()
def fake_composer() -> FakeComposer:
    return FakeComposer()


@pytest.fixture()
def lumen_project(tmp_path: Path) -> Path:
    """A minimal Lumen 9 project tree."""
    origin = tmp_path / "shop" / "api"
    write_json(
        origin / "composer.json",
        {
            "name": "acme/shop-api",
            "require": {
                "php": "^8.0",
                "laravel/lumen-framework": "^9.0",
                "guzzlehttp/guzzle": "^7.4",
            },
            "require-dev": {"phpunit/phpunit": "^9.5"},
            "autoload": {
                "psr-4": {"App\\": "app/"},
                "files": ["app/helpers.php"],
            },
        },
    )
    (origin / ".env").write_text("APP_NAME=Lumen\nAPP_KEY=lumen-key\nQUEUE_CONNECTION=redis\n", encoding="utf-8")

    (origin / "app" / "Http" / "Controllers").mkdir(parents=True)
    (origin / "app" / "Http" / "Controllers" / "Controller.php").write_text(LUMEN_CONTROLLER, encoding="utf-8")
    (origin / "app" / "Console").mkdir(parents=True)
    (origin / "app" / "Console" / "Kernel.php").write_text(LUMEN_KERNEL, encoding="utf-8")
    (origin / "app" / "helpers.php").write_text("<?php\n", encoding="utf-8")

    (origin / "public").mkdir()
    (origin / "public" / "index.php").write_text("<?php // lumen entry\n", encoding="utf-8")
    (origin / "public" / "robots.txt").write_text("User-agent: *\n", encoding="utf-8")

    (origin / "routes").mkdir()
    (origin / "routes" / "web.php").write_text(LUMEN_ROUTES, encoding="utf-8")

    (origin / "config").mkdir()
    (origin / "config" / "app.php").write_text("<?php return [];\n", encoding="utf-8")
    return origin


@pytest.fixture()
def laravel_project(tmp_path: Path) -> Path:
    """What composer create-project leaves behind, reduced to the files we touch."""
    destination = tmp_path / "shop" / "api_new"
    write_json(
        destination / "composer.json",
        {
            "name": "laravel/laravel",
            "require": {
                "php": "^8.1",
                "laravel/framework": "^9.19",
                "guzzlehttp/guzzle": "^7.2",
            },
            "require-dev": {"phpunit/phpunit": "^9.5.10", "spatie/laravel-ignition": "^1.0"},
            "autoload": {
                "psr-4": {"App\\": "app/", "Database\\Factories\\": "database/factories/"},
            },
        },
    )
    (destination / ".env").write_text("APP_NAME=Laravel\nAPP_ENV=local\n", encoding="utf-8")
    (destination / "public").mkdir()
    (destination / "public" / "index.php").write_text("<?php // laravel entry\n", encoding="utf-8")
    (destination / "routes").mkdir()
    (destination / "routes" / "web.php").write_text("<?php // laravel web\n", encoding="utf-8")
    (destination / "routes" / "api.php").write_text("<?php // laravel api\n", encoding="utf-8")
    return destination
