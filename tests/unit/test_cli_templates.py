"""Unit tests for the copilot-instructions-templates CLI (list, init, validate)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from copilot_templates.cli import app

runner = CliRunner()


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clean_env: None, write_template) -> Path:
    """A working directory with three valid templates and a base skeleton."""
    monkeypatch.chdir(tmp_path)
    write_template("languages/python.md", title="Python", category="language", difficulty="beginner",
                   tags='["python", "backend"]')
    write_template("frameworks/react.md", title="React", category="framework", difficulty="intermediate",
                   tags='["react", "frontend"]', extra='primaryTech: "React 18+"')
    write_template("roles/code-reviewer.md", title="Code Reviewer", category="role", difficulty="advanced",
                   tags='["review", "quality"]')
    write_template("_base-template.md", frontmatter=False)
    return tmp_path


class TestList:
    def test_groups_by_category(self, project: Path) -> None:
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        output = result.output
        assert "LANGUAGES" in output and "FRAMEWORKS" in output and "ROLES" in output
        assert output.index("FRAMEWORKS") < output.index("LANGUAGES") < output.index("ROLES")
        assert "ID: react" in output
        assert "Tech: React 18+" in output
        assert "Total: 3 template(s)" in output
        assert "_base-template" not in output

    def test_category_and_difficulty_filter(self, project: Path) -> None:
        result = runner.invoke(app, ["list", "--category=role", "--difficulty=advanced", "--json"])
        assert result.exit_code == 0
        rows = json.loads(result.output)
        assert [row["id"] for row in rows] == ["code-reviewer"]
        assert rows[0]["category"] == "role"
        assert rows[0]["difficulty"] == "advanced"

    def test_tag_filter(self, project: Path) -> None:
        result = runner.invoke(app, ["list", "-t", "frontend", "--json"])
        assert result.exit_code == 0
        assert [row["id"] for row in json.loads(result.output)] == ["react"]

    def test_no_match_still_exits_zero(self, project: Path) -> None:
        result = runner.invoke(app, ["list", "--category", "framework", "--difficulty", "beginner"])
        assert result.exit_code == 0
        assert "No templates found matching the criteria." in result.output

    def test_unknown_category_warns(self, project: Path) -> None:
        result = runner.invoke(app, ["list", "--category", "tool"])
        assert result.exit_code == 0
        assert "unknown category 'tool'" in result.output

    def test_missing_templates_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clean_env: None) -> None:
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "Templates directory does not exist" in result.output
        assert "No templates found" in result.output


class TestValidate:
    def test_all_valid(self, project: Path) -> None:
        result = runner.invoke(app, ["validate"])
        assert result.exit_code == 0
        assert "Total files: 3" in result.output
        assert "Invalid: 0" in result.output
        assert "All templates are valid" in result.output

    def test_missing_section_fails(self, project: Path, write_template) -> None:
        write_template("roles/partial.md", body="## Role / Identity\n## Context & Tech Stack\n"
                       "## Coding Standards\n## Workflow & Commands\n")
        result = runner.invoke(app, ["validate"])
        assert result.exit_code == 1
        assert "FAIL:" in result.output
        assert "Missing required section: ## Project Layout" in result.output
        assert "Validation failed" in result.output

    def test_named_files_only(self, project: Path, write_template) -> None:
        bad = write_template("roles/bad.md", difficulty=None)
        result = runner.invoke(app, ["validate", str(bad)])
        assert result.exit_code == 1
        assert "Total files: 1" in result.output
        assert "Missing required field: difficulty" in result.output

    def test_warnings_pass_unless_strict(self, project: Path, write_template) -> None:
        path = write_template("roles/untagged.md", tags="[]")
        relaxed = runner.invoke(app, ["validate", str(path)])
        assert relaxed.exit_code == 0
        assert "WARN:" in relaxed.output
        assert 'Warning: Field "tags" is empty' in relaxed.output

        strict = runner.invoke(app, ["validate", str(path), "--strict"])
        assert strict.exit_code == 1
        assert 'Error: Field "tags" is empty' in strict.output

    def test_unreadable_file_counts_as_invalid(self, project: Path) -> None:
        result = runner.invoke(app, ["validate", "templates/missing.md"])
        assert result.exit_code == 1
        assert "Cannot read file" in result.output

    def test_include_base(self, project: Path) -> None:
        result = runner.invoke(app, ["validate", "--include-base"])
        assert result.exit_code == 0
        assert "Total files: 4" in result.output

    def test_nothing_to_validate(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clean_env: None) -> None:
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["validate"])
        assert result.exit_code == 0
        assert "No templates found to validate." in result.output


class TestInit:
    def test_non_interactive_with_templates(self, project: Path) -> None:
        result = runner.invoke(app, ["init", "--no-interactive", "--template", "python", "-t", "react"])
        assert result.exit_code == 0, result.output
        output_file = project / ".github" / "copilot-instructions.md"
        content = output_file.read_text(encoding="utf-8")
        assert "from: python, react" in content
        assert "title:" not in content
        assert content.count("## Role / Identity") == 2

    def test_interactive_selection(self, project: Path) -> None:
        result = runner.invoke(app, ["init", "--output", "out/instructions.md"], input="1,2\n")
        assert result.exit_code == 0, result.output
        assert "Available templates:" in result.output
        content = (project / "out" / "instructions.md").read_text(encoding="utf-8")
        assert "from: react, python" in content

    def test_invalid_interactive_selection(self, project: Path) -> None:
        result = runner.invoke(app, ["init"], input="9\n")
        assert result.exit_code == 2
        assert "invalid selection" in result.output

    def test_configured_defaults(self, project: Path) -> None:
        (project / ".copilot-templates.yaml").write_text(
            "default_templates: [code-reviewer]\noutput: AGENTS.md\n", encoding="utf-8"
        )
        result = runner.invoke(app, ["init", "--no-interactive"])
        assert result.exit_code == 0, result.output
        assert "from: code-reviewer" in (project / "AGENTS.md").read_text(encoding="utf-8")

    def test_no_selection_in_non_interactive_mode(self, project: Path) -> None:
        result = runner.invoke(app, ["init", "--no-interactive"])
        assert result.exit_code == 2
        assert "no templates selected" in result.output

    def test_unknown_template(self, project: Path) -> None:
        result = runner.invoke(app, ["init", "--no-interactive", "-t", "cobol"])
        assert result.exit_code == 2
        assert "Template not found: cobol" in result.output

    def test_existing_output_requires_force(self, project: Path) -> None:
        target = project / "existing.md"
        target.write_text("keep me\n", encoding="utf-8")
        result = runner.invoke(app, ["init", "-t", "python", "-o", str(target)])
        assert result.exit_code == 2
        assert target.read_text(encoding="utf-8") == "keep me\n"

        forced = runner.invoke(app, ["init", "-t", "python", "-o", str(target), "--force"])
        assert forced.exit_code == 0
        assert "from: python" in target.read_text(encoding="utf-8")

    def test_unwritable_output(self, project: Path) -> None:
        (project / "blocker").write_text("file, not a directory\n", encoding="utf-8")
        result = runner.invoke(app, ["init", "-t", "python", "-o", "blocker/out.md"])
        assert result.exit_code == 1
        assert "cannot write" in result.output

    def test_compatibility_warning(self, project: Path, write_template) -> None:
        write_template("roles/solo.md", title="Solo", category="role", extra="combinableWith: []")
        result = runner.invoke(app, ["init", "-t", "solo,python"])
        assert result.exit_code == 0, result.output
        assert "'solo' does not list 'python' in combinableWith" in result.output


class TestRoot:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.startswith("copilot-instructions-templates ")

    def test_bad_config_exits_two(self, project: Path) -> None:
        (project / "bad.yaml").write_text("- not\n- a mapping\n", encoding="utf-8")
        result = runner.invoke(app, ["--config", "bad.yaml", "list"])
        assert result.exit_code == 2
        assert "Config root must be mapping" in result.output

    def test_config_points_at_other_templates_dir(self, project: Path, write_template) -> None:
        other = project / "elsewhere"
        (other / "x").mkdir(parents=True)
        (other / "x" / "only.md").write_text((project / "templates" / "languages" / "python.md").read_text(), encoding="utf-8")
        (project / "alt.yaml").write_text(f"templates_dir: {other}\n", encoding="utf-8")
        result = runner.invoke(app, ["--config", "alt.yaml", "list", "--json"])
        assert result.exit_code == 0
        assert [row["id"] for row in json.loads(result.output)] == ["only"]
