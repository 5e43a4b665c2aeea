"""scrypt-cli scaffolder -- creates smart-contract projects from templates.

Quick usage::

    from scrypt_cli.config import Config
    from scrypt_cli.scaffolder import ProjectScaffolder, ProjectVariant

    scaffolder = ProjectScaffolder(Config())
    outcome = await scaffolder.scaffold(ProjectVariant.CONTRACT, "my-app")
"""

from .fetcher import TemplateFetcher
from .generator import ProjectScaffolder
from .models import (
    TEMPLATE_IDS,
    OutcomeStatus,
    PipelineOutcome,
    ProjectRequest,
    ProjectVariant,
    ScaffoldError,
    StepResult,
    TemplateFetchError,
    WorkingContext,
    template_id_for,
)
from .naming import PlaceholderRule, apply_rule, kebab_case, set_project_name, title_case
from .steps import StepRunner

__all__ = [
    # Orchestration
    "ProjectScaffolder",
    "PipelineOutcome",
    "OutcomeStatus",
    # Request & templates
    "ProjectRequest",
    "ProjectVariant",
    "TEMPLATE_IDS",
    "template_id_for",
    "TemplateFetcher",
    # Steps
    "StepRunner",
    "StepResult",
    "WorkingContext",
    # Naming
    "PlaceholderRule",
    "apply_rule",
    "set_project_name",
    "title_case",
    "kebab_case",
    # Errors
    "ScaffoldError",
    "TemplateFetchError",
]
