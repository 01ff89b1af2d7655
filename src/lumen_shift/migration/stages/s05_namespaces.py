"""Stage 5: point Lumen base-class imports at their Laravel equivalents."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from ..base import BaseStage, StageContext, StageResult
from ..descriptor import ProjectDescriptor
from ..registry import StageRegistry


@dataclass(frozen=True)
class NamespaceRule:
    """Rewrite one ``use`` import inside one file of the Laravel project."""

    relative_path: str
    lumen_import: str
    laravel_import: str

    @property
    def pattern(self) -> re.Pattern[str]:
        return re.compile(r"^(\s*)use\s+\\?" + re.escape(self.lumen_import) + r"\s*;", re.MULTILINE)

    def rewrite(self, text: str) -> tuple[str, int]:
        return self.pattern.subn(lambda m: f"{m.group(1)}use {self.laravel_import};", text)


NAMESPACE_RULES = (
    NamespaceRule(
        "app/Console/Kernel.php",
        "Laravel\\Lumen\\Console\\Kernel as ConsoleKernel",
        "Illuminate\\Foundation\\Console\\Kernel as ConsoleKernel",
    ),
    NamespaceRule(
        "app/Exceptions/Handler.php",
        "Laravel\\Lumen\\Exceptions\\Handler as ExceptionHandler",
        "Illuminate\\Foundation\\Exceptions\\Handler as ExceptionHandler",
    ),
    NamespaceRule(
        "app/Providers/EventServiceProvider.php",
        "Laravel\\Lumen\\Providers\\EventServiceProvider as ServiceProvider",
        "Illuminate\\Foundation\\Support\\Providers\\EventServiceProvider as ServiceProvider",
    ),
    NamespaceRule(
        "app/Http/Controllers/Controller.php",
        "Laravel\\Lumen\\Routing\\Controller as BaseController",
        "Illuminate\\Routing\\Controller as BaseController",
    ),
)


def rewrite_namespaces(project_root: Path, rules=NAMESPACE_RULES) -> tuple[list[str], list[str]]:
    """Apply every namespace rule under ``project_root``.

    Each file is handled on its own so one missing file does not block the
    others.

    Returns:
        Tuple of (changes, warnings).
    """
    changes: list[str] = []
    warnings: list[str] = []

    for rule in rules:
        path = project_root / rule.relative_path
        if not path.exists():
            warnings.append(f"{rule.relative_path} not found, skipped")
            continue

        content = path.read_text(encoding="utf-8")
        updated, count = rule.rewrite(content)
        if count == 0:
            changes.append(f"{rule.relative_path}: already uses Laravel imports")
            continue

        path.write_text(updated, encoding="utf-8")
        changes.append(f"{rule.relative_path}: now uses {rule.laravel_import}")

    return changes, warnings


@StageRegistry.register
class NamespaceStage(BaseStage):
    """Rewrite Kernel, Handler, EventServiceProvider and Controller imports."""

    stage_id = "adjust_namespaces"
    description = "Update Laravel/Lumen namespaces"
    order = 5

    def apply(self, descriptor: ProjectDescriptor, context: StageContext) -> StageResult:
        changes, warnings = rewrite_namespaces(descriptor.destination)
        return StageResult(success=True, changes_made=changes, warnings=warnings)
