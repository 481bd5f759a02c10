"""Smoke tests for the CLI."""

import json
from pathlib import Path

import pytest
from inkwell import config as config_module
from inkwell.cli import app
from inkwell.content.store import OverrideStore
from typer.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    for key in ("INKWELL_DATASET", "INKWELL_STATE_DIR", "INKWELL_DEBOUNCE_MS",
                "INKWELL_DEFAULT_VIEW"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config_module, "GLOBAL_CONFIG", tmp_path / "no-global.toml")
    monkeypatch.setattr(config_module, "CONFIG_SEARCH_PATHS", [tmp_path / "cwd"])


@pytest.fixture
def invoke(runner: CliRunner, dataset_path: Path, state_dir: Path):
    """Invoke the CLI against the sample dataset and a private state dir."""

    def _invoke(*args: str, input: str | None = None):
        base = ["--dataset", str(dataset_path), "--state-dir", str(state_dir)]
        return runner.invoke(app, [*base, *args], input=input)

    return _invoke


def _add_quote(invoke) -> int:
    result = invoke("add", "quote", "--text", "Keep going.", "--category", "grit",
                    "--author", "Me", "--date", "2024-06-01")
    assert result.exit_code == 0, result.output
    return int(result.output.strip().splitlines()[-1].split(":")[1])


class TestCLI:
    def test_main_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "list" in result.output

    def test_main_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "inkwell" in result.output


class TestList:
    def test_lists_everything(self, invoke) -> None:
        result = invoke("list")
        assert result.exit_code == 0, result.output
        assert "Morning" in result.output
        assert "Begin anywhere." in result.output

    def test_category_filter(self, invoke) -> None:
        result = invoke("list", "--category", "courage")
        assert result.exit_code == 0
        assert "Begin anywhere." in result.output
        assert "Morning" not in result.output

    def test_search_and_view(self, invoke) -> None:
        result = invoke("list", "--search", "ada", "--view", "quotes")
        assert result.exit_code == 0
        assert "Love is the answer." in result.output
        assert "Morning" not in result.output

    def test_default_view_flag(self, invoke) -> None:
        result = invoke("--default-view", "quotes", "list")
        assert result.exit_code == 0, result.output
        assert "Begin anywhere." in result.output
        assert "Morning" not in result.output

    def test_explicit_view_beats_default_view(self, invoke) -> None:
        result = invoke("--default-view", "quotes", "list", "--view", "poems")
        assert result.exit_code == 0, result.output
        assert "Morning" in result.output
        assert "Begin anywhere." not in result.output

    def test_debounce_flag_rejects_negative(self, invoke) -> None:
        result = invoke("--debounce-ms", "-1", "list")
        assert result.exit_code == 2

    def test_invalid_debounce_env_does_not_crash(
        self, invoke, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("INKWELL_DEBOUNCE_MS", "abc")
        result = invoke("list")
        assert result.exit_code == 0, result.output
        assert "Morning" in result.output

    def test_no_results(self, invoke) -> None:
        result = invoke("list", "--search", "nothing-like-this")
        assert result.exit_code == 0
        assert "No results found" in result.output

    def test_missing_dataset_exits_1(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["--dataset", str(tmp_path / "nope.json"), "--state-dir", str(tmp_path), "list"]
        )
        assert result.exit_code == 1
        assert "Failed to load content" in result.output


class TestCategoriesAndColor:
    def test_categories(self, invoke) -> None:
        result = invoke("categories")
        assert result.exit_code == 0
        for label in ("Courage", "Love", "Nature"):
            assert label in result.output

    def test_color(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["color", "a"])
        assert result.exit_code == 0
        assert "#6adb24" in result.output
        assert "rgba(106, 219, 36, 0.15)" in result.output


class TestEditing:
    def test_add_quote_persists(self, invoke, state_dir: Path) -> None:
        item_id = _add_quote(invoke)
        working = OverrideStore(state_dir).load_content()
        assert working is not None
        assert working.quotes[-1].id == item_id
        assert working.quotes[-1].text == "Keep going."

    def test_add_poem_requires_title_and_content(self, invoke) -> None:
        result = invoke("add", "poem", "--category", "x", "--author", "Me")
        assert result.exit_code == 1
        assert "--title and --content" in result.output

    def test_add_invalid_date(self, invoke) -> None:
        result = invoke("add", "quote", "--text", "t", "--category", "x",
                        "--author", "Me", "--date", "not-a-date")
        assert result.exit_code == 1
        assert "Invalid quote" in result.output

    def test_edit_own_item(self, invoke, state_dir: Path) -> None:
        item_id = _add_quote(invoke)
        result = invoke("edit", "quote", str(item_id), "--text", "Keep going, always.")
        assert result.exit_code == 0, result.output
        working = OverrideStore(state_dir).load_content()
        assert working.quotes[-1].text == "Keep going, always."
        assert working.quotes[-1].category == "grit"

    def test_edit_original_refused(self, invoke) -> None:
        result = invoke("edit", "poem", "1", "--title", "Hijacked")
        assert result.exit_code == 1
        assert "cannot be edited" in result.output

    def test_delete_original_refused(self, invoke) -> None:
        result = invoke("delete", "quote", "1", "--yes")
        assert result.exit_code == 1
        assert "cannot be deleted" in result.output

    def test_delete_own_item(self, invoke, state_dir: Path) -> None:
        item_id = _add_quote(invoke)
        result = invoke("delete", "quote", str(item_id), input="y\n")
        assert result.exit_code == 0, result.output
        assert item_id not in OverrideStore(state_dir).load_content().ids("quote")

    def test_delete_missing(self, invoke) -> None:
        result = invoke("delete", "poem", "424242", "--yes")
        assert result.exit_code == 1
        assert "No poem with id 424242" in result.output


class TestExportResetTheme:
    def test_export(self, invoke, tmp_path: Path) -> None:
        out = tmp_path / "export"
        result = invoke("export", "--output", str(out))
        assert result.exit_code == 0
        data = json.loads((out / "content.json").read_text(encoding="utf-8"))
        assert [p["id"] for p in data["poems"]] == [1, 2]

    def test_reset(self, invoke, state_dir: Path) -> None:
        item_id = _add_quote(invoke)
        result = invoke("reset", "--yes")
        assert result.exit_code == 0
        assert item_id not in OverrideStore(state_dir).load_content().ids("quote")

    def test_reset_aborted(self, invoke, state_dir: Path) -> None:
        item_id = _add_quote(invoke)
        result = invoke("reset", input="n\n")
        assert result.exit_code == 1
        assert item_id in OverrideStore(state_dir).load_content().ids("quote")

    def test_theme_toggle_and_set(self, invoke, state_dir: Path) -> None:
        assert "Theme: dark" in invoke("theme").output
        assert "Theme: light" in invoke("theme").output
        assert "Theme: dark" in invoke("theme", "dark").output
        assert OverrideStore(state_dir).get("theme") == "dark"
