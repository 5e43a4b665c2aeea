"""Unit tests for placeholder substitution (scrypt_cli.scaffolder.naming).

Tests cover:
- title_case / kebab_case derivations, including documented quirks
- replace_in_file first-occurrence semantics and missing files
- set_project_name against a README and package.json pair
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from scrypt_cli.scaffolder.naming import (
    PlaceholderRule,
    apply_rule,
    kebab_case,
    project_name_rules,
    replace_in_file,
    set_project_name,
    title_case,
)


# ---------------------------------------------------------------------------
# title_case
# ---------------------------------------------------------------------------

class TestTitleCase:
    @pytest.mark.unit
    def test_hyphenated_name(self):
        assert title_case("my-app") == "My App"

    @pytest.mark.unit
    def test_mixed_case_segments_normalised(self):
        assert title_case("mY-COOL-app") == "My Cool App"

    @pytest.mark.unit
    def test_single_word_idempotent(self):
        once = title_case("demo")
        assert once == "Demo"
        assert title_case(once) == "Demo"

    @pytest.mark.unit
    def test_brand_recased(self):
        assert title_case("scrypt-demo") == "sCrypt Demo"

    @pytest.mark.unit
    def test_empty_segments_preserved(self):
        assert title_case("a--b") == "A  B"


# ---------------------------------------------------------------------------
# kebab_case
# ---------------------------------------------------------------------------

class TestKebabCase:
    @pytest.mark.unit
    def test_two_words(self):
        assert kebab_case("My Project") == "my-project"

    @pytest.mark.unit
    def test_only_first_space_converted(self):
        assert kebab_case("My Cool Project") == "my-cool project"

    @pytest.mark.unit
    def test_already_kebab(self):
        assert kebab_case("my-app") == "my-app"


# ---------------------------------------------------------------------------
# replace_in_file / apply_rule
# ---------------------------------------------------------------------------

class TestReplaceInFile:
    @pytest.mark.unit
    def test_replaces_first_occurrence_only(self, tmp_path: Path):
        target = tmp_path / "README.md"
        target.write_text("# TOKEN\nTOKEN again\n", encoding="utf-8")
        replace_in_file(target, "TOKEN", "Value")
        assert target.read_text(encoding="utf-8") == "# Value\nTOKEN again\n"

    @pytest.mark.unit
    def test_unmatched_token_leaves_content(self, tmp_path: Path):
        target = tmp_path / "README.md"
        target.write_text("nothing here\n", encoding="utf-8")
        replace_in_file(target, "TOKEN", "Value")
        assert target.read_text(encoding="utf-8") == "nothing here\n"

    @pytest.mark.unit
    def test_missing_file_is_ignored(self, tmp_path: Path):
        replace_in_file(tmp_path / "absent.md", "TOKEN", "Value")
        assert not (tmp_path / "absent.md").exists()

    @pytest.mark.unit
    def test_apply_rule_resolves_relative_to_root(self, tmp_path: Path):
        (tmp_path / "docs").mkdir()
        target = tmp_path / "docs" / "intro.md"
        target.write_text("Hello NAME", encoding="utf-8")
        apply_rule(PlaceholderRule("docs/intro.md", "NAME", "World"), tmp_path)
        assert target.read_text(encoding="utf-8") == "Hello World"


# ---------------------------------------------------------------------------
# set_project_name
# ---------------------------------------------------------------------------

class TestSetProjectName:
    @pytest.mark.unit
    def test_rules_for_seed(self):
        rules = project_name_rules("my-app")
        assert rules == [
            PlaceholderRule("README.md", "PROJECT_NAME", "My App"),
            PlaceholderRule("package.json", "package-name", "my-app"),
        ]

    @pytest.mark.unit
    def test_readme_and_manifest_substituted(self, tmp_path: Path):
        (tmp_path / "README.md").write_text("# PROJECT_NAME\n", encoding="utf-8")
        (tmp_path / "package.json").write_text(
            json.dumps({"name": "package-name"}), encoding="utf-8"
        )

        set_project_name(tmp_path, "my-app")

        assert (tmp_path / "README.md").read_text(encoding="utf-8") == "# My App\n"
        manifest = json.loads((tmp_path / "package.json").read_text(encoding="utf-8"))
        assert manifest["name"] == "my-app"
