"""Shared pytest fixtures for the scrypt-cli test suite.

Provides reusable fixtures for:
- Mock asyncio subprocesses
- In-memory template archives shaped like the GitHub codeload tarball
- ``httpx.MockTransport`` instances serving those archives
- Configs pointing at a temporary base directory
"""

from __future__ import annotations

import io
import json
import sys
import tarfile
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from scrypt_cli.config import CommandConfig, Config

ARCHIVE_ROOT = "scrypt-cli-main"

README_TEMPLATE = "# PROJECT_NAME\n\nA PROJECT_NAME smart contract project.\n"
PACKAGE_TEMPLATE = json.dumps(
    {"name": "package-name", "version": "0.1.0", "scripts": {"build": "tsc"}},
    indent=2,
) + "\n"


def build_archive(files: dict[str, str], root: str = ARCHIVE_ROOT) -> bytes:
    """Build a gzipped tarball whose entries all sit under ``<root>/``."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        root_info = tarfile.TarInfo(root)
        root_info.type = tarfile.DIRTYPE
        root_info.mode = 0o755
        tar.addfile(root_info)
        for name, content in files.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(f"{root}/{name}")
            info.size = len(data)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


def default_template_files() -> dict[str, str]:
    """Files for every template variant, plus unrelated repository files."""
    files: dict[str, str] = {
        "README.md": "# scrypt-cli\n",
        "src/lib/project.js": "module.exports = {}\n",
    }
    for template_id in ("demo-contract", "demo-lib", "counter"):
        files[f"templates/{template_id}/README.md"] = README_TEMPLATE
        files[f"templates/{template_id}/package.json"] = PACKAGE_TEMPLATE
        files[f"templates/{template_id}/src/contracts/{template_id}.ts"] = (
            f"// {template_id} contract\n"
        )
        files[f"templates/{template_id}/.gitignore"] = "node_modules\nkeys\n"
    return files


# ---------------------------------------------------------------------------
# Archives & HTTP
# ---------------------------------------------------------------------------

@pytest.fixture
def archive_builder():
    """The ``build_archive`` helper, for tests that need custom archive contents."""
    return build_archive


@pytest.fixture
def template_archive() -> bytes:
    """Tarball containing all three templates."""
    return build_archive(default_template_files())


@pytest.fixture
def archive_transport():
    """Factory for an ``httpx.MockTransport`` that serves an archive.

    Usage:
        def test_fetch(archive_transport, template_archive):
            transport = archive_transport(template_archive)
            ...

    The returned transport records each requested URL in ``transport.requests``.
    """
    def factory(body: bytes, status_code: int = 200) -> httpx.MockTransport:
        requests: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(str(request.url))
            return httpx.Response(status_code, content=body)

        transport = httpx.MockTransport(handler)
        transport.requests = requests  # type: ignore[attr-defined]
        return transport

    return factory


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

def _noop_command() -> str:
    return f'"{sys.executable}" -c "pass"'


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """Directory new projects are created in."""
    directory = tmp_path / "workspace"
    directory.mkdir()
    return directory


@pytest.fixture
def config(base_dir: Path) -> Config:
    """Config rooted at ``base_dir`` whose shell commands all succeed instantly."""
    noop = _noop_command()
    return Config(
        base_dir=base_dir,
        commands=CommandConfig(git_init=noop, install=noop, build=noop),
    )


# ---------------------------------------------------------------------------
# Mock Subprocess
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_shell", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
