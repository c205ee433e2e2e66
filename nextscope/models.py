"""Pydantic models for project-level reports."""

from typing import Literal

from pydantic import BaseModel, Field


class FrameworkInfo(BaseModel):
    """Framework detected from package.json dependencies."""

    framework: Literal["nextjs", "react", "unknown"] = Field(
        default="unknown", description="Detected framework"
    )
    has_package_json: bool = Field(default=False, description="Whether package.json exists")
    name: str | None = Field(default=None, description="Package name from package.json")
    next_version: str | None = Field(default=None, description="Declared next version range")
    react_version: str | None = Field(default=None, description="Declared react version range")


class OverviewCounts(BaseModel):
    """Headline counts from the component, page and hook extractors."""

    components: int = 0
    functional_components: int = 0
    class_components: int = 0
    pages: int = 0
    dynamic_routes: int = 0
    custom_hooks: int = 0
    hook_calls: int = 0
    hook_violations: int = 0


class ProjectOverview(BaseModel):
    """Quick overview of a React/Next.js project."""

    project_path: str = Field(description="Absolute path of the analyzed project")
    framework: FrameworkInfo = Field(default_factory=FrameworkInfo)
    counts: OverviewCounts = Field(default_factory=OverviewCounts)
    files_processed: int = Field(default=0, description="Source files parsed by the first extractor")
    pages_by_type: dict[str, int] = Field(default_factory=dict)
    rendering_methods: dict[str, int] = Field(
        default_factory=dict, description="Page count per rendering method (ssr, ssg, static)"
    )
    errors: list[str] = Field(default_factory=list, description="Errors from failed extractors")
    warnings: list[str] = Field(default_factory=list, description="Per-file warnings")
