"""Tests for composer install with the incompatible-package retry."""

from __future__ import annotations

from pathlib import Path

import pytest

from lumen_shift.core.errors import ComposerError, ManifestError
from lumen_shift.migration.base import StageContext
from lumen_shift.migration.descriptor import ProjectDescriptor
from lumen_shift.migration.stages.s08_install import (
    INSTALL_ARGS,
    RETRY_ARGS,
    InstallDependenciesStage,
    find_incompatible_packages,
    install_dependencies,
    remove_packages,
)

from tests.utils import FakeComposer, failed_result, read_json, write_json

CONFLICT_OUTPUT = """Loading composer repositories with package information
Your requirements could not be resolved to an installable set of packages.

  Problem 1
    - vendor/incompatible[1.2.3] require php ^8.2 -> your php version (7.4) does not satisfy that requirement.
  Problem 2
    - dev/tool[v2.0.0, ..., v2.3.1] require php >=8.1 -> your php version (7.4.33) does not satisfy that requirement.
"""


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    write_json(
        tmp_path / "composer.json",
        {
            "require": {"php": "^8.1", "vendor/incompatible": "^1.2", "laravel/framework": "^9.19"},
            "require-dev": {"dev/tool": "^2.0", "phpunit/phpunit": "^9.5"},
        },
    )
    return tmp_path


class TestFindIncompatiblePackages:
    def test_extracts_names_in_order(self) -> None:
        assert find_incompatible_packages(CONFLICT_OUTPUT) == ["vendor/incompatible", "dev/tool"]

    def test_unrelated_failures_yield_nothing(self) -> None:
        output = "  Problem 1\n    - Root composer.json requires vendor/missing, it could not be found.\n"

        assert find_incompatible_packages(output) == []

    def test_other_platform_packages_match(self) -> None:
        line = "- foo/bar[3.0.0] require ext-intl * -> your ext-intl version (n/a) does not satisfy that requirement."

        assert find_incompatible_packages(line) == ["foo/bar"]

    def test_duplicates_are_kept(self) -> None:
        line = "- a/b[1.0] require php ^8.2 -> your php version (7.4) does not satisfy that requirement.\n"

        assert find_incompatible_packages(line * 2) == ["a/b", "a/b"]


class TestRemovePackages:
    def test_removes_from_both_sections(self) -> None:
        manifest = {"require": {"a/b": "1", "c/d": "1"}, "require-dev": {"a/b": "1", "e/f": "1"}}

        remove_packages(manifest, ["a/b", "not/present"])

        assert manifest == {"require": {"c/d": "1"}, "require-dev": {"e/f": "1"}}

    def test_missing_require_dev_raises(self) -> None:
        with pytest.raises(ManifestError, match="require-dev"):
            remove_packages({"require": {"a/b": "1"}}, ["a/b"])


class TestInstallDependencies:
    def test_success_on_first_attempt(self, project: Path, fake_composer: FakeComposer) -> None:
        result = install_dependencies(project, fake_composer)

        assert result.success
        assert fake_composer.calls == [(list(INSTALL_ARGS), project)]
        assert not (project / "removed_packages.txt").exists()

    def test_stale_lock_is_removed_before_install(self, project: Path, fake_composer: FakeComposer) -> None:
        (project / "composer.lock").write_text("{}", encoding="utf-8")

        result = install_dependencies(project, fake_composer)

        assert not (project / "composer.lock").exists()
        assert "Removed stale composer.lock" in result.changes_made

    def test_conflict_triggers_single_retry(self, project: Path) -> None:
        composer = FakeComposer([failed_result(CONFLICT_OUTPUT)])

        result = install_dependencies(project, composer)

        assert result.success
        assert [call[0] for call in composer.calls] == [list(INSTALL_ARGS), list(RETRY_ARGS)]
        manifest = read_json(project / "composer.json")
        assert "vendor/incompatible" not in manifest["require"]
        assert "dev/tool" not in manifest["require-dev"]
        assert manifest["require"]["laravel/framework"] == "^9.19"
        assert (project / "removed_packages.txt").read_text(encoding="utf-8") == (
            "Incompatible packages:\nvendor/incompatible\ndev/tool\n\n"
        )

    def test_removed_packages_log_is_appended(self, project: Path) -> None:
        (project / "removed_packages.txt").write_text("Incompatible packages:\nold/pkg\n\n", encoding="utf-8")
        composer = FakeComposer([failed_result(CONFLICT_OUTPUT)])

        install_dependencies(project, composer)

        content = (project / "removed_packages.txt").read_text(encoding="utf-8")
        assert content.startswith("Incompatible packages:\nold/pkg\n\n")
        assert content.count("Incompatible packages:") == 2

    def test_failed_retry_is_final(self, project: Path) -> None:
        composer = FakeComposer([failed_result(CONFLICT_OUTPUT), failed_result(CONFLICT_OUTPUT)])

        with pytest.raises(ComposerError, match="retry failed"):
            install_dependencies(project, composer)

        assert len(composer.calls) == 2

    def test_failure_without_conflicts_does_not_retry(self, project: Path) -> None:
        composer = FakeComposer([failed_result("network is unreachable")])

        with pytest.raises(ComposerError) as excinfo:
            install_dependencies(project, composer)

        assert len(composer.calls) == 1
        assert "network is unreachable" in excinfo.value.output

    def test_missing_require_dev_is_fatal(self, tmp_path: Path) -> None:
        write_json(tmp_path / "composer.json", {"require": {"vendor/incompatible": "^1.2"}})
        composer = FakeComposer([failed_result(CONFLICT_OUTPUT)])

        with pytest.raises(ManifestError):
            install_dependencies(tmp_path, composer)

        assert len(composer.calls) == 1
        assert (tmp_path / "removed_packages.txt").exists()
        assert read_json(tmp_path / "composer.json") == {"require": {"vendor/incompatible": "^1.2"}}


class TestInstallDependenciesStage:
    def test_stage_reports_composer_failure(self, project: Path) -> None:
        composer = FakeComposer([failed_result("boom")])
        descriptor = ProjectDescriptor(name="shop", origin=project / "origin", destination=project)

        result = InstallDependenciesStage().run(descriptor, StageContext(composer=composer))

        assert result.success is False
        assert "no incompatible packages were detected" in result.errors[0]
