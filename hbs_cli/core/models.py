"""Domain models for template rendering configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


def normalize_extension(value: str) -> str:
    """Strip leading dots from an output extension and validate what is left."""
    extension = value.strip().lstrip(".")
    if not extension:
        raise ValueError(f"Extension must not be empty, got: {value!r}")
    if "/" in extension or "\\" in extension:
        raise ValueError(f"Extension must not contain a path separator: {value!r}")
    return extension


class RenderTask(BaseModel):
    """A single template rendering task."""

    template_path: Path = Field(..., description="Template file path")
    output_path: Path = Field(..., description="Output file path")


class RenderConfig(BaseModel):
    """Configuration for the rendering process."""

    templates: list[Path] = Field(
        default_factory=list, description="Resolved template files"
    )
    output_dir: Path = Field(
        default_factory=Path.cwd, description="Base output directory"
    )
    extension: str = Field(default="html", description="Output file extension")
    stdout: bool = Field(default=False, description="Write to standard output")
    file_mode: int = Field(default=0o644, description="File permissions (octal)")

    @field_validator("extension")
    @classmethod
    def _normalize_extension(cls, value: str) -> str:
        return normalize_extension(value)

    def output_path_for(self, template_path: Path) -> Path:
        """Return ``<output_dir>/<template stem>.<extension>``."""
        return self.output_dir / f"{template_path.stem}.{self.extension}"

    def tasks(self) -> list[RenderTask]:
        return [
            RenderTask(template_path=tpl, output_path=self.output_path_for(tpl))
            for tpl in self.templates
        ]
