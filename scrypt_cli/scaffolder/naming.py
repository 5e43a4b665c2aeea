"""Placeholder substitution for freshly scaffolded projects.

Templates ship with literal marker strings (``PROJECT_NAME`` in the README,
``package-name`` in ``package.json``).  After the template is placed, those
markers are replaced with values derived from the user's project name.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

_BRAND_TITLE = "Scrypt"
_BRAND_CANONICAL = "sCrypt"


@dataclass(frozen=True)
class PlaceholderRule:
    """Replace the first ``token`` in ``target_file`` with ``replacement``."""

    target_file: str
    token: str
    replacement: str


def title_case(name: str) -> str:
    """Turn a hyphenated project name into a human-readable title.

    Examples::

        title_case("my-app")       -> "My App"
        title_case("scrypt-demo")  -> "sCrypt Demo"
    """
    words = [w[:1].upper() + w[1:].lower() for w in name.split("-")]
    return " ".join(words).replace(_BRAND_TITLE, _BRAND_CANONICAL)


def kebab_case(name: str) -> str:
    """Lowercase *name* and hyphenate its first space.

    Only the first space is converted: ``"My Cool Project"`` becomes
    ``"my-cool project"``.
    """
    return name.lower().replace(" ", "-", 1)


def replace_in_file(path: str | Path, token: str, replacement: str) -> None:
    """Replace the first occurrence of *token* in the file at *path*.

    A missing file is left alone.
    """
    file_path = Path(path)
    if not file_path.is_file():
        return
    content = file_path.read_text(encoding="utf-8")
    file_path.write_text(content.replace(token, replacement, 1), encoding="utf-8")


def apply_rule(rule: PlaceholderRule, root: str | Path) -> None:
    replace_in_file(Path(root) / rule.target_file, rule.token, rule.replacement)


def project_name_rules(seed: str) -> list[PlaceholderRule]:
    """Return the README and manifest rules for the project seed name."""
    return [
        PlaceholderRule("README.md", "PROJECT_NAME", title_case(seed)),
        PlaceholderRule("package.json", "package-name", kebab_case(seed)),
    ]


def set_project_name(root: str | Path, seed: str) -> None:
    """Write the formatted project name into the template's README and manifest."""
    for rule in project_name_rules(seed):
        apply_rule(rule, root)
