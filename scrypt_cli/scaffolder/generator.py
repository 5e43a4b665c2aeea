"""Main scaffolding orchestrator.

Runs the project-creation pipeline for one request:

1. Pre-flight -- the target must not exist and git must be installed.
2. Create the project directory.
3. ``git init`` (before ``npm ci``, so install hooks can find ``.git``).
4. Fetch and place the template for the requested variant.
5. ``npm ci`` then ``npm run build``.
6. Substitute the project name into README.md and package.json.

The first failing step stops the pipeline.  The partially created directory
is then removed unless ``keep_partial`` is set.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from rich.panel import Panel

from ..config import Config
from ..utils import console, print_error, print_warning, which
from .fetcher import TemplateFetcher
from .models import (
    PipelineOutcome,
    ProjectRequest,
    ProjectVariant,
    StepResult,
    TemplateFetchError,
    WorkingContext,
    template_id_for,
)
from .naming import set_project_name
from .steps import StepAction, StepRunner

STEP_CREATE_DIR = "Create project directory"
STEP_GIT_INIT = "Initialize Git repo"
STEP_FETCH = "Set up project"
STEP_INSTALL = "NPM install"
STEP_BUILD = "NPM build contract"
STEP_SET_NAME = "Set project name"


class ProjectScaffolder:
    """Creates a new smart-contract project from a remote template.

    The scaffolder holds no per-run state; each ``scaffold`` call builds its
    own ``WorkingContext`` and passes it to every step.
    """

    def __init__(
        self,
        config: Config,
        fetcher: TemplateFetcher | None = None,
        runner: StepRunner | None = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher or TemplateFetcher(config)
        self.runner = runner or StepRunner(config)

    # -- Public API --------------------------------------------------------

    async def scaffold(self, variant: ProjectVariant, name: str) -> PipelineOutcome:
        """Scaffold project *name* of the given *variant*.

        Args:
            variant: Which template to use.
            name: Target directory relative to ``config.base_dir``; its last
                path segment seeds the project's display and package names.

        Returns:
            ``success(project_dir)``, ``aborted(reason)`` when a pre-flight
            check fails (nothing is created), or ``failed(step, cause)``.
        """
        request = ProjectRequest(name=name, variant=variant)
        base_dir = Path(self.config.base_dir)
        project_dir = base_dir / request.name

        if project_dir.exists() or project_dir.is_symlink():
            print_error("Directory already exists. Not proceeding")
            return PipelineOutcome.aborted("already exists")

        # Checked before anything is fetched, so a missing git leaves no
        # files behind.
        if which(self.config.vcs_executable) is None:
            print_error("Please ensure Git is installed, then try again.")
            return PipelineOutcome.aborted("git missing")

        try:
            await asyncio.to_thread(project_dir.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            print_error(f"Cannot create {project_dir}: {exc}")
            return PipelineOutcome.failed(STEP_CREATE_DIR, str(exc))
        ctx = WorkingContext(base_dir=base_dir, project_dir=project_dir)

        outcome = await self._run_pipeline(request, ctx)
        if not outcome.ok:
            print_error(f"{outcome.step_label} failed: {outcome.cause}")
            await self._rollback(ctx)
            return outcome

        self._report_success(request.name)
        return outcome

    # -- Pipeline ----------------------------------------------------------

    async def _run_pipeline(self, request: ProjectRequest, ctx: WorkingContext) -> PipelineOutcome:
        commands = self.config.commands
        template_id = template_id_for(request.variant)

        steps: list[tuple[str, StepAction]] = [
            (STEP_GIT_INIT, commands.git_init),
            (STEP_FETCH, lambda: self._fetch_template(template_id, ctx)),
            (STEP_INSTALL, commands.install),
            (STEP_BUILD, commands.build),
            (STEP_SET_NAME, lambda: set_project_name(ctx.project_dir, request.seed)),
        ]

        for label, action in steps:
            result: StepResult = await self.runner.run_step(label, action, ctx)
            if not result.success:
                return PipelineOutcome.failed(result.label, result.cause)

        return PipelineOutcome.success(ctx.project_dir)

    async def _fetch_template(self, template_id: str, ctx: WorkingContext) -> None:
        if not await self.fetcher.fetch(template_id, ctx.project_dir):
            raise self.fetcher.last_error or TemplateFetchError(
                f"Template '{template_id}' could not be set up"
            )

    async def _rollback(self, ctx: WorkingContext) -> None:
        """Remove the project directory created by this run."""
        if self.config.keep_partial:
            print_warning(f"Partial project left at {ctx.project_dir}")
            return
        await asyncio.to_thread(shutil.rmtree, ctx.project_dir, True)
        print_warning(f"Removed partial project {ctx.project_dir}")

    def _report_success(self, name: str) -> None:
        console.print(
            Panel(
                f"[green]Project {name} was successfully created![/green]\n\n"
                "Add your Git repo URL and you're good to go:\n"
                "  git remote add origin <your-repo-url>",
                title="Project Ready",
                border_style="green",
            )
        )
