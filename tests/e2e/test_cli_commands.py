"""End-to-end tests for CLI commands."""

import json
import os
import sys
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from cpp_smells.cli.main import app
from cpp_smells.config.thresholds import ThresholdConfig

SMELLY = """\
int request_count = 0;

int handle(int a, int b, int c, int d, int e, int f) {
    if (a > 0 && b > 0 && c > 0 && d > 0) {
        if (e) {
            if (f) {
                return 1;
            }
        }
    }
    return 0;
}
"""

CLEAN = """\
int add(int a, int b) {
    return a + b;
}
"""


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI rebinds loguru to the runner's stderr; restore it afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    src = tmp_path / "src"
    src.mkdir()
    (src / "smelly.cpp").write_text(SMELLY, encoding="utf-8")
    (src / "clean.hpp").write_text(CLEAN, encoding="utf-8")
    (src / "notes.txt").write_text("not code", encoding="utf-8")
    build = src / "build"
    build.mkdir()
    (build / "generated.cpp").write_text(SMELLY, encoding="utf-8")

    original_dir = os.getcwd()
    os.chdir(tmp_path)
    yield tmp_path
    os.chdir(original_dir)


class TestAnalyzeCommand:
    """End-to-end tests for the analyze command."""

    @pytest.fixture
    def cli_runner(self):
        return CliRunner()

    def test_json_output(self, cli_runner, project_dir):
        result = cli_runner.invoke(app, ["analyze", "src", "--json"])

        assert result.exit_code == 0, result.output
        report = json.loads(result.stdout)
        files = {f["file_name"]: f for f in report["files"]}

        # build/ is ignored and .txt is not a C/C++ extension
        assert sorted(files) == ["clean.hpp", "smelly.cpp"]
        assert files["clean.hpp"]["total_smells"] == 0
        assert report["stats"]["total_files"] == 2
        assert report["stats"]["total_smells"] == files["smelly.cpp"]["total_smells"]
        assert report["stats"]["smells_by_type"]["DeepNesting"] == 1
        assert report["stats"]["worst_files"][0]["file_name"] == "smelly.cpp"

    def test_min_severity_filter(self, cli_runner, project_dir):
        result = cli_runner.invoke(
            app, ["analyze", "src", "--json", "--min-severity", "high"]
        )

        assert result.exit_code == 0, result.output
        report = json.loads(result.stdout)
        severities = {
            smell["severity"] for f in report["files"] for smell in f["smells"]
        }
        assert severities == {"high"}

    def test_output_file(self, cli_runner, project_dir):
        target = project_dir / "reports" / "smells.json"

        result = cli_runner.invoke(app, ["analyze", "src", "--output", str(target)])

        assert result.exit_code == 0, result.output
        assert "Report written" in result.output
        assert json.loads(target.read_text(encoding="utf-8"))["stats"]["total_files"] == 2

    def test_unwritable_output_file(self, cli_runner, project_dir):
        # The parent "directory" is a regular file
        target = project_dir / "src" / "notes.txt" / "smells.json"

        result = cli_runner.invoke(app, ["analyze", "src", "--output", str(target)])

        assert result.exit_code == 1
        assert "Cannot write" in result.output
        assert "Report written" not in result.output

    def test_console_report(self, cli_runner, project_dir):
        result = cli_runner.invoke(app, ["analyze", "src/smelly.cpp", "--top", "3"])

        assert result.exit_code == 0, result.output
        assert "Code Smell Analysis" in result.output
        assert "Smells by Type" in result.output
        assert "Average Metrics" in result.output

    def test_config_file_thresholds(self, cli_runner, project_dir):
        config = project_dir / "strict.yaml"
        config.write_text("long_parameter_list:\n  low: 1\n  medium: 1\n  high: 1\n")

        result = cli_runner.invoke(
            app, ["analyze", "src/clean.hpp", "--json", "--config", str(config)]
        )

        assert result.exit_code == 0, result.output
        report = json.loads(result.stdout)
        kinds = [s["type"] for s in report["files"][0]["smells"]]
        assert kinds == ["LongParameterList"]

    def test_default_config_file_is_picked_up(self, cli_runner, project_dir):
        (project_dir / ".cpp-smells.yaml").write_text("global_variable_severity: high\n")

        result = cli_runner.invoke(app, ["analyze", "src/smelly.cpp", "--json"])

        report = json.loads(result.stdout)
        globals_found = [
            s for s in report["files"][0]["smells"] if s["type"] == "GlobalVariables"
        ]
        assert [s["severity"] for s in globals_found] == ["high"]

    def test_invalid_config_exits_with_error(self, cli_runner, project_dir):
        config = project_dir / "bad.yaml"
        config.write_text("no_such_threshold: 3\n")

        result = cli_runner.invoke(app, ["analyze", "src", "--config", str(config)])

        assert result.exit_code == 1
        assert "Unknown threshold keys" in result.output

    def test_no_sources_found(self, cli_runner, project_dir):
        empty = project_dir / "empty"
        empty.mkdir()

        result = cli_runner.invoke(app, ["analyze", str(empty)])

        assert result.exit_code == 1
        assert "No C/C++ files" in result.output


class TestExplainCommand:
    """End-to-end tests for the explain command."""

    def test_known_kind(self):
        result = CliRunner().invoke(app, ["explain", "deep-nesting"])

        assert result.exit_code == 0
        assert "DeepNesting" in result.output
        assert "guard clauses" in result.output

    def test_unknown_kind(self):
        result = CliRunner().invoke(app, ["explain", "SpaghettiCode"])

        assert result.exit_code == 1
        assert "Unknown smell kind" in result.output


class TestThresholdsCommand:
    """End-to-end tests for the thresholds command."""

    def test_print_json(self):
        result = CliRunner().invoke(app, ["thresholds", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["long_function"] == {
            "low": 20,
            "medium": 30,
            "high": 40,
        }

    def test_write_defaults(self, tmp_path: Path):
        target = tmp_path / ".cpp-smells.yaml"

        result = CliRunner().invoke(app, ["thresholds", "--write", str(target)])

        assert result.exit_code == 0
        assert ThresholdConfig.load(target) == ThresholdConfig()


class TestVersion:
    def test_version(self):
        result = CliRunner().invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "cpp-smells version" in result.output
