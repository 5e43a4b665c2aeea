"""scrypt-cli configuration.

Typed configuration for the scaffolding pipeline. All settings use Pydantic v2
models so they are validated at construction time and can be overridden from
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

_TRUTHY = {"1", "true", "yes", "on"}


class CommandConfig(BaseModel):
    """Shell commands run inside the freshly created project directory."""

    git_init: str = Field(default="git init -q")
    # The templates commit package-lock.json, so ``npm ci`` gives a clean,
    # reproducible install.
    install: str = Field(default="npm ci --silent")
    build: str = Field(default="npm run build --silent")


class Config(BaseModel):
    """Global scrypt-cli configuration.

    Created once by the CLI entry point and passed to the scaffolder, which
    hands it down to the fetcher and the step runner.
    """

    base_dir: Path = Field(default=Path("."), description="Directory new projects are created in")
    template_repo: str = Field(default="sCrypt-Inc/scrypt-cli")
    template_ref: str = Field(default="main")
    archive_url: str = Field(default="https://codeload.github.com/{repo}/tar.gz/{ref}")
    fetch_timeout: int = Field(default=60, ge=1, description="Archive download timeout in seconds")
    cache_dir: Path | None = Field(default=None, description="Where downloaded archives are kept")
    force_fetch: bool = Field(default=True, description="Re-download even if a cached archive exists")
    vcs_executable: str = Field(default="git")
    commands: CommandConfig = Field(default_factory=CommandConfig)
    step_timeout: int | None = Field(
        default=None, ge=1, description="Per-command timeout in seconds; None waits forever"
    )
    keep_partial: bool = Field(
        default=False, description="Leave a partially scaffolded directory on disk after a failure"
    )

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def archive_url_for(self) -> str:
        """Return the download URL of the template archive."""
        return self.archive_url.format(repo=self.template_repo, ref=self.template_ref)

    def cache_path_for(self) -> Path | None:
        """Return ``<cache_dir>/<owner>/<repo>/<ref>.tar.gz``, or ``None`` if caching is off."""
        if self.cache_dir is None:
            return None
        ref = self.template_ref.replace("/", "_")
        return Path(self.cache_dir).joinpath(*self.template_repo.split("/"), f"{ref}.tar.gz")

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SCRYPT_TEMPLATE_REPO, SCRYPT_TEMPLATE_REF, SCRYPT_ARCHIVE_URL,
            SCRYPT_FETCH_TIMEOUT, SCRYPT_CACHE_DIR, SCRYPT_FORCE_FETCH,
            SCRYPT_KEEP_PARTIAL, SCRYPT_STEP_TIMEOUT.

        Keyword *overrides* win over the environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SCRYPT_TEMPLATE_REPO"):
            kwargs["template_repo"] = os.environ["SCRYPT_TEMPLATE_REPO"]
        if os.environ.get("SCRYPT_TEMPLATE_REF"):
            kwargs["template_ref"] = os.environ["SCRYPT_TEMPLATE_REF"]
        if os.environ.get("SCRYPT_ARCHIVE_URL"):
            kwargs["archive_url"] = os.environ["SCRYPT_ARCHIVE_URL"]
        if os.environ.get("SCRYPT_FETCH_TIMEOUT"):
            kwargs["fetch_timeout"] = int(os.environ["SCRYPT_FETCH_TIMEOUT"])
        if os.environ.get("SCRYPT_CACHE_DIR"):
            kwargs["cache_dir"] = Path(os.environ["SCRYPT_CACHE_DIR"]).expanduser()
        if os.environ.get("SCRYPT_FORCE_FETCH"):
            kwargs["force_fetch"] = os.environ["SCRYPT_FORCE_FETCH"].strip().lower() in _TRUTHY
        if os.environ.get("SCRYPT_KEEP_PARTIAL"):
            kwargs["keep_partial"] = os.environ["SCRYPT_KEEP_PARTIAL"].strip().lower() in _TRUTHY
        if os.environ.get("SCRYPT_STEP_TIMEOUT"):
            kwargs["step_timeout"] = int(os.environ["SCRYPT_STEP_TIMEOUT"])

        kwargs.update(overrides)
        return cls(**kwargs)
