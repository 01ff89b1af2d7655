"""Request and response models for the migration HTTP trigger."""

from __future__ import annotations

from pathlib import PurePath
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

__all__ = ["MigrateRequest", "ApiResponse"]


class MigrateRequest(BaseModel):
    """Parameters of ``POST /api/migrate`` (JSON, form or query string)."""

    project_path: Optional[str] = Field(
        None, alias="projectPath", description="Lumen project path under the project directory"
    )
    project_name: Optional[str] = Field(
        None, alias="projectName", description="Project directory under the repository root"
    )
    with_env: bool = Field(False, alias="withEnv", description="Merge .env files after install")
    no_interaction: Optional[bool] = Field(
        None, alias="noInteraction", description="Pass --no-interaction to composer"
    )

    model_config = {"populate_by_name": True}

    @field_validator("project_path", "project_name")
    @classmethod
    def _relative_inside_repo(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value:
            return None
        path = PurePath(value)
        if path.is_absolute() or ".." in path.parts:
            raise ValueError("must be a relative path inside the repository root")
        return value

    def missing_field_message(self) -> Optional[str]:
        if not self.project_path:
            return "Please provide the Lumen project path."
        if not self.project_name:
            return "Please provide the project name."
        return None


class ApiResponse(BaseModel):
    """Envelope returned by every migration endpoint."""

    success: bool = Field(..., description="Whether the request was accepted")
    message: str = Field(..., description="Human readable status")
    data: Optional[Any] = Field(None, description="Payload, null for acknowledgements")
