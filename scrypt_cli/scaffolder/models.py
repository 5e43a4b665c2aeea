"""Data models shared by the scaffolding pipeline.

``ProjectRequest`` is validated with Pydantic at the CLI boundary; the
per-run values that flow between steps (``WorkingContext``, ``StepResult``,
``PipelineOutcome``) are plain dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, Field, field_validator


class ProjectVariant(str, Enum):
    """Kind of project being scaffolded; selects the template."""

    CONTRACT = "contract"
    LIBRARY = "library"
    STATEFUL_CONTRACT = "stateful-contract"


TEMPLATE_IDS: MappingProxyType[ProjectVariant, str] = MappingProxyType(
    {
        ProjectVariant.CONTRACT: "demo-contract",
        ProjectVariant.LIBRARY: "demo-lib",
        ProjectVariant.STATEFUL_CONTRACT: "counter",
    }
)


def template_id_for(variant: ProjectVariant) -> str:
    """Return the template directory name (under ``templates/``) for *variant*."""
    return TEMPLATE_IDS[ProjectVariant(variant)]


class ProjectRequest(BaseModel):
    """A single project-creation request."""

    name: str = Field(..., description="Target directory, relative to the base directory")
    variant: ProjectVariant = Field(default=ProjectVariant.CONTRACT)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("project name must not be empty")
        return value

    @property
    def seed(self) -> str:
        """Final path segment of ``name``; the seed for placeholder values."""
        return Path(self.name).name


class ScaffoldError(Exception):
    """Base class for scaffolding errors."""


class TemplateFetchError(ScaffoldError):
    """Raised when the template archive cannot be fetched, extracted or copied."""

    def __init__(self, message: str, url: str = ""):
        self.url = url
        super().__init__(message)


@dataclass(frozen=True)
class WorkingContext:
    """Directories a pipeline run operates on.

    Every step receives the context explicitly; the process working
    directory is never changed.
    """

    base_dir: Path
    project_dir: Path


@dataclass(frozen=True)
class StepResult:
    """Outcome of a single scaffold step."""

    label: str
    success: bool
    cause: str = ""


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    ABORTED = "aborted"
    FAILED = "failed"


@dataclass(frozen=True)
class PipelineOutcome:
    """Terminal state of a scaffold run.

    Exactly one of the three shapes is produced:
    ``success(project_dir)``, ``aborted(reason)`` or ``failed(step_label, cause)``.
    """

    status: OutcomeStatus
    project_dir: Path | None = None
    reason: str = ""
    step_label: str = ""
    cause: str = ""

    @classmethod
    def success(cls, project_dir: Path) -> "PipelineOutcome":
        return cls(status=OutcomeStatus.SUCCESS, project_dir=project_dir)

    @classmethod
    def aborted(cls, reason: str) -> "PipelineOutcome":
        return cls(status=OutcomeStatus.ABORTED, reason=reason)

    @classmethod
    def failed(cls, step_label: str, cause: str) -> "PipelineOutcome":
        return cls(status=OutcomeStatus.FAILED, step_label=step_label, cause=cause)

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    @property
    def exit_code(self) -> int:
        """Process exit code the CLI reports for this outcome."""
        return 0 if self.ok else 1
