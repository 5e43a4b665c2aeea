"""Step runner for the scaffolding pipeline.

A step is one labelled unit of work: either a shell command executed inside
the project directory, or an in-process callable.  Each step is announced
with a spinner and reported as succeeded or failed; the runner never retries
and never terminates the process -- it returns a ``StepResult`` and the
caller decides what a failure means.
"""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable

from ..config import Config
from ..utils import console, create_progress, run_command
from .models import StepResult, WorkingContext

StepAction = str | Callable[[], Any] | Callable[[], Awaitable[Any]]


class StepRunner:
    """Executes scaffold steps one at a time inside a ``WorkingContext``."""

    def __init__(self, config: Config) -> None:
        self.config = config

    async def run_step(
        self, label: str, action: StepAction, ctx: WorkingContext
    ) -> StepResult:
        """Run *action* under *label* and report the outcome.

        Args:
            label: Human-readable step name shown to the operator.
            action: A shell command string (run with ``cwd=ctx.project_dir``,
                output suppressed) or a sync/async callable.
            ctx: The run's working context.

        Returns:
            A ``StepResult``; on failure ``cause`` carries stderr or the
            exception text.
        """
        with create_progress() as progress:
            progress.add_task(f"{label}...", total=None)
            try:
                cause = await self._execute(action, ctx)
            except Exception as exc:
                cause = f"{type(exc).__name__}: {exc}"
            else:
                if cause is None:
                    console.print(f"[green]✔[/green] [green]{label}[/green]")
                    return StepResult(label=label, success=True)

        console.print(f"[red]✖[/red] {label}")
        return StepResult(label=label, success=False, cause=cause)

    async def _execute(self, action: StepAction, ctx: WorkingContext) -> str | None:
        """Run the action; return ``None`` on success or a failure cause."""
        if isinstance(action, str):
            returncode, stdout, stderr = await run_command(
                action,
                cwd=ctx.project_dir,
                timeout=self.config.step_timeout,
            )
            if returncode != 0:
                detail = stderr or stdout
                return f"`{action}` exited with code {returncode}" + (f": {detail}" if detail else "")
            return None

        result = action()
        if inspect.isawaitable(result):
            await result
        return None
