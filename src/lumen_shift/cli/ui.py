"""Rich rendering of pipeline progress."""

from __future__ import annotations

from typing import Callable, Optional

from rich.tree import Tree

from ..migration.base import BaseStage, StageResult

_SYMBOLS = {
    "pending": "[green dim]○[/green dim]",
    "running": "[cyan]○[/cyan]",
    "done": "[green]●[/green]",
    "error": "[red]●[/red]",
    "skipped": "[yellow]○[/yellow]",
}


class StageTracker:
    """Track stage status and render it as a Rich tree.

    ``observe`` matches the runner's observer signature, so an instance can be
    passed straight to ``MigrationRunner.run``.
    """

    def __init__(self, title: str, stages: list[BaseStage]):
        self.title = title
        self.steps = [
            {"key": s.stage_id, "label": s.description, "status": "pending", "detail": ""}
            for s in stages
        ]
        self._refresh_cb: Optional[Callable[[], None]] = None

    def attach_refresh(self, cb: Callable[[], None]) -> None:
        self._refresh_cb = cb

    def observe(self, stage: BaseStage, status: str, result: Optional[StageResult]) -> None:
        detail = ""
        if result is not None:
            if result.errors:
                detail = "; ".join(result.errors)
            elif result.changes_made:
                detail = result.changes_made[-1]
        elif status == "skipped":
            detail = "not requested"
        self._update(stage.stage_id, stage.description, status, detail)

    def status_of(self, key: str) -> Optional[str]:
        for step in self.steps:
            if step["key"] == key:
                return step["status"]
        return None

    def _update(self, key: str, label: str, status: str, detail: str) -> None:
        for step in self.steps:
            if step["key"] == key:
                step["status"] = status
                if detail:
                    step["detail"] = detail
                break
        else:
            self.steps.append({"key": key, "label": label, "status": status, "detail": detail})
        if self._refresh_cb:
            self._refresh_cb()

    def render(self) -> Tree:
        tree = Tree(f"[cyan]{self.title}[/cyan]", guide_style="grey50")
        for step in self.steps:
            symbol = _SYMBOLS.get(step["status"], " ")
            detail = step["detail"].strip()
            if step["status"] == "pending":
                line = f"{symbol} [bright_black]{step['label']}[/bright_black]"
            elif detail:
                line = f"{symbol} [white]{step['label']}[/white] [bright_black]({detail})[/bright_black]"
            else:
                line = f"{symbol} [white]{step['label']}[/white]"
            tree.add(line)
        return tree


__all__ = ["StageTracker"]
