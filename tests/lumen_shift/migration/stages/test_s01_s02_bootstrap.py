"""Tests for version resolution and Laravel scaffolding stages."""

from __future__ import annotations

from pathlib import Path

from lumen_shift.migration.base import StageContext
from lumen_shift.migration.descriptor import ProjectDescriptor
from lumen_shift.migration.stages.s01_resolve_version import ResolveVersionStage
from lumen_shift.migration.stages.s02_scaffold import ScaffoldStage, create_project_args

from tests.utils import FakeComposer, failed_result


class TestResolveVersionStage:
    def test_returns_updated_descriptor(self, lumen_project: Path) -> None:
        descriptor = ProjectDescriptor.for_paths(lumen_project, "shop")

        result = ResolveVersionStage().run(descriptor, StageContext())

        assert result.success
        assert result.descriptor is not None
        assert result.descriptor.version == "9.*"
        assert descriptor.version == ""

    def test_missing_manifest_fails(self, tmp_path: Path) -> None:
        descriptor = ProjectDescriptor.for_paths(tmp_path / "api", "shop")

        result = ResolveVersionStage().run(descriptor, StageContext())

        assert result.success is False
        assert result.descriptor is None


class TestCreateProjectArgs:
    def test_with_version(self, tmp_path: Path) -> None:
        descriptor = ProjectDescriptor(name="shop", origin=tmp_path / "api", destination=tmp_path / "api_new", version="9.*")

        assert create_project_args(descriptor) == [
            "create-project",
            "--prefer-dist",
            "laravel/laravel",
            str(tmp_path / "api_new"),
            "9.*",
        ]

    def test_without_version(self, tmp_path: Path) -> None:
        descriptor = ProjectDescriptor(name="shop", origin=tmp_path / "api", destination=tmp_path / "api_new")

        assert create_project_args(descriptor)[-1] == str(tmp_path / "api_new")


class TestScaffoldStage:
    def test_invokes_composer(self, tmp_path: Path, fake_composer: FakeComposer) -> None:
        descriptor = ProjectDescriptor(name="shop", origin=tmp_path / "api", destination=tmp_path / "api_new", version="9.*")

        result = ScaffoldStage().run(descriptor, StageContext(composer=fake_composer))

        assert result.success
        assert fake_composer.calls == [(create_project_args(descriptor), None)]
        assert result.warnings == []

    def test_unresolved_version_warns(self, tmp_path: Path, fake_composer: FakeComposer) -> None:
        descriptor = ProjectDescriptor(name="shop", origin=tmp_path / "api", destination=tmp_path / "api_new")

        result = ScaffoldStage().run(descriptor, StageContext(composer=fake_composer))

        assert result.success
        assert result.warnings == ["No target version resolved, using latest laravel/laravel"]

    def test_composer_failure_is_reported(self, tmp_path: Path) -> None:
        composer = FakeComposer([failed_result("Could not find package", returncode=1)])
        descriptor = ProjectDescriptor(name="shop", origin=tmp_path / "api", destination=tmp_path / "api_new", version="9.*")

        result = ScaffoldStage().run(descriptor, StageContext(composer=composer))

        assert result.success is False
        assert "exit code 1" in result.errors[0]
        assert "Could not find package" in result.errors[0]
