"""Template fetching: download, filter, extract and place.

All project templates live in one repository under ``templates/<id>/``.  The
fetcher downloads the repository tarball once, extracts only the entries of
the requested template into a temporary directory, and copies them into the
project directory.
"""

from __future__ import annotations

import asyncio
import os
import shutil
import tarfile
import tempfile
import zlib
from pathlib import Path, PurePosixPath

import httpx

from ..config import Config
from ..utils import print_error
from .models import TemplateFetchError

# Directory the templates leave out through their own .gitignore.
KEYS_DIR = "keys"


def template_prefix(template_id: str) -> str:
    return f"templates/{template_id}/"


def strip_root(member_name: str) -> str:
    """Drop the archive's top-level ``<repo>-<ref>/`` folder from an entry path."""
    parts = PurePosixPath(member_name).parts
    return "/".join(parts[1:])


def filter_members(names: list[str], template_id: str) -> list[str]:
    """Return the entry names (root already stripped) that belong to *template_id*."""
    prefix = template_prefix(template_id)
    return [name for name in names if prefix in name]


def _safe_target(dest: Path, relative: str) -> Path | None:
    """Resolve *relative* under *dest*, or ``None`` if it would escape it."""
    path = PurePosixPath(relative)
    if path.is_absolute() or ".." in path.parts:
        return None
    return dest.joinpath(*path.parts)


def extract_template(archive: Path, template_id: str, dest: Path) -> list[Path]:
    """Extract the files of *template_id* from *archive* into *dest*.

    Entry paths keep their ``templates/<id>/`` prefix, so the template's
    contents end up under ``dest/templates/<id>/``.  Symlinks, devices and
    entries pointing outside *dest* are skipped.

    Returns:
        The regular files written, in archive order.
    """
    written: list[Path] = []
    try:
        with tarfile.open(archive, mode="r:*") as tar:
            for member in tar:
                relative = strip_root(member.name)
                if not filter_members([relative], template_id):
                    continue
                target = _safe_target(dest, relative)
                if target is None:
                    continue
                if member.isdir():
                    target.mkdir(parents=True, exist_ok=True)
                elif member.isfile():
                    source = tar.extractfile(member)
                    if source is None:
                        continue
                    target.parent.mkdir(parents=True, exist_ok=True)
                    with source, open(target, "wb") as out:
                        shutil.copyfileobj(source, out)
                    os.chmod(target, (member.mode & 0o777) | 0o600)
                    written.append(target)
    except (tarfile.TarError, EOFError, zlib.error) as exc:
        raise TemplateFetchError(f"Cannot read template archive {archive}: {exc}") from exc
    return written


def copy_tree_no_overwrite(src: Path, dest: Path) -> None:
    """Copy the contents of *src* into *dest*, keeping any file already there."""
    for root, dirs, files in os.walk(src):
        rel = Path(root).relative_to(src)
        target_root = dest / rel
        target_root.mkdir(parents=True, exist_ok=True)
        for filename in files:
            target = target_root / filename
            if target.exists():
                continue
            shutil.copy2(Path(root) / filename, target)


class TemplateFetcher:
    """Fetches a named template from the remote template repository."""

    def __init__(self, config: Config, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self.transport = transport
        self.last_error: TemplateFetchError | None = None

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.fetch_timeout, connect=10.0),
            follow_redirects=True,
            transport=self.transport,
        )

    # ------------------------------------------------------------------
    # Download
    # ------------------------------------------------------------------

    async def download(self, target: Path) -> Path:
        """Download the template archive to *target*.

        The body is streamed into ``<target>.part`` and renamed once complete;
        the partial file is removed if the download fails.

        Raises:
            TemplateFetchError: On any HTTP or network failure.
        """
        url = self.config.archive_url_for()
        partial = target.with_name(target.name + ".part")
        try:
            async with self._client() as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()
                    await asyncio.to_thread(target.parent.mkdir, parents=True, exist_ok=True)
                    fh = await asyncio.to_thread(open, partial, "wb")
                    try:
                        async for chunk in response.aiter_bytes():
                            await asyncio.to_thread(fh.write, chunk)
                    finally:
                        await asyncio.to_thread(fh.close)
            await asyncio.to_thread(partial.replace, target)
        except httpx.HTTPStatusError as exc:
            raise TemplateFetchError(
                f"Template download failed with HTTP {exc.response.status_code}: {url}", url=url
            ) from exc
        except httpx.HTTPError as exc:
            raise TemplateFetchError(f"Cannot download template archive from {url}: {exc}", url=url) from exc
        finally:
            await asyncio.to_thread(partial.unlink, missing_ok=True)
        return target

    async def _archive(self, workdir: Path) -> Path:
        """Return a local archive path, downloading unless a usable cache exists."""
        cached = self.config.cache_path_for()
        if cached is None:
            return await self.download(workdir / "template.tar.gz")
        if cached.is_file() and not self.config.force_fetch:
            return cached
        return await self.download(cached)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def place(self, template_id: str, dest: str | Path) -> Path:
        """Fetch *template_id* and copy its files into *dest*.

        Also creates the empty ``keys/`` directory the template leaves out.

        Returns:
            The destination directory.

        Raises:
            TemplateFetchError: If the archive cannot be fetched or read, or it
                contains no files for *template_id*.
        """
        dest = Path(dest)
        workdir = Path(await asyncio.to_thread(tempfile.mkdtemp, prefix=".scrypt-template-"))
        try:
            archive = await self._archive(workdir)
            extracted = workdir / "extract"
            written = await asyncio.to_thread(extract_template, archive, template_id, extracted)
            if not written:
                raise TemplateFetchError(
                    f"Template '{template_id}' not found in archive",
                    url=self.config.archive_url_for(),
                )
            source = extracted.joinpath("templates", template_id)
            await asyncio.to_thread(copy_tree_no_overwrite, source, dest)
            (dest / KEYS_DIR).mkdir(exist_ok=True)
        except OSError as exc:
            raise TemplateFetchError(f"Cannot place template '{template_id}': {exc}") from exc
        finally:
            await asyncio.to_thread(shutil.rmtree, workdir, True)
        return dest

    async def fetch(self, template_id: str, dest: str | Path) -> bool:
        """Fetch and place *template_id*; ``True`` when the files are in *dest*.

        The underlying cause of a failure is printed and kept in
        ``last_error`` before returning ``False``.
        """
        self.last_error = None
        try:
            await self.place(template_id, dest)
        except TemplateFetchError as exc:
            self.last_error = exc
            print_error(str(exc))
            return False
        return True
