"""Tests for the cyclo command line."""

import json
import os

import pytest
from typer.testing import CliRunner

from cyclo import __version__
from cyclo.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Keep user and project config files and CYCLO_* variables out of the run."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(home)
    for key in [k for k in os.environ if k.startswith("CYCLO_")]:
        monkeypatch.delenv(key)
    return home


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"cyclo version {__version__}" in result.output


class TestAnalyzeCommand:
    """Test ``cyclo analyze``."""

    def test_prints_summary(self, c_project):
        result = runner.invoke(app, ["analyze", str(c_project)])
        assert result.exit_code == 0, result.output
        assert "24" in result.output
        assert "switch.cpp" in result.output
        assert "Top 4 files by mean complexity" in result.output

    def test_top_limits_table(self, c_project):
        result = runner.invoke(app, ["analyze", str(c_project), "--top", "1"])
        assert result.exit_code == 0, result.output
        assert "Top 1 files" in result.output
        assert "main.c" not in result.output

    def test_writes_artifacts(self, c_project, tmp_path):
        out = tmp_path / "artifacts"
        result = runner.invoke(
            app,
            [
                "analyze",
                str(c_project),
                "-o",
                str(out / "tree.json"),
                "--script",
                str(out / "cyclo.js"),
                "--report",
                str(out / "report.html"),
                "-d",
                "--debug-file",
                str(out / "debug.txt"),
                "-q",
            ],
        )
        assert result.exit_code == 0, result.output
        nodes = json.loads((out / "tree.json").read_text())
        assert nodes[0]["value"] == 24
        assert (out / "cyclo.js").read_text().startswith("var jsondata = [")
        assert "Cyclomatic complexity" in (out / "report.html").read_text()
        assert 'file: "main.c"' in (out / "debug.txt").read_text()

    def test_debug_default_file(self, c_project, isolated):
        result = runner.invoke(app, ["analyze", str(c_project), "--debug", "-q"])
        assert result.exit_code == 0, result.output
        assert (isolated / "debug.txt").exists()

    def test_quiet(self, c_project):
        result = runner.invoke(app, ["analyze", str(c_project), "-q"])
        assert result.exit_code == 0
        assert result.output.strip() == ""

    def test_colorscale(self, c_project, tmp_path):
        script = tmp_path / "cyclo.js"
        result = runner.invoke(
            app, ["analyze", str(c_project), "--colorscale", "Viridis", "--script", str(script), "-q"]
        )
        assert result.exit_code == 0, result.output
        assert '"colorscale": "Viridis"' in script.read_text()

    def test_nothing_to_analyze(self, make_tree):
        root = make_tree({"README.md": "nothing here"})
        result = runner.invoke(app, ["analyze", str(root)])
        assert result.exit_code == 1
        assert "Nothing to analyze" in result.output

    def test_missing_path(self, tmp_path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_log_file(self, c_project, tmp_path):
        """--log-file keeps the DEBUG scan trail even when quiet."""
        log_file = tmp_path / "logs" / "run.log"
        result = runner.invoke(app, ["analyze", str(c_project), "-q", "--log-file", str(log_file)])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == ""
        text = log_file.read_text()
        assert "Enumerated 4 source files" in text
        assert "Scanned main.c" in text

    def test_verbose_lists_skipped(self, make_tree):
        root = make_tree({"a.c": "return 0;\n", "b.c": b"\x00"})
        result = runner.invoke(app, ["analyze", str(root), "-v"])
        assert result.exit_code == 0, result.output
        assert "unreadable" in result.output

    def test_bad_config_file(self, c_project, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("workers = 0\n")
        result = runner.invoke(app, ["analyze", str(c_project), "-c", str(bad)])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestServeCommand:
    """Test ``cyclo serve`` without binding a socket."""

    def test_missing_dependencies(self, c_project, monkeypatch):
        monkeypatch.setattr("cyclo.server.find_spec", lambda name: None)
        result = runner.invoke(app, ["serve", str(c_project)])
        assert result.exit_code == 1
        assert "starlette>=0.27.0" in result.output
        assert "uvicorn>=0.23.0" in result.output

    def test_serves_analysis(self, c_project, monkeypatch, tmp_path):
        uvicorn = pytest.importorskip("uvicorn")
        pytest.importorskip("starlette")
        calls = {}

        def fake_run(asgi_app, **kwargs):
            calls["app"] = asgi_app
            calls.update(kwargs)

        monkeypatch.setattr(uvicorn, "run", fake_run)
        log_file = tmp_path / "serve.log"
        result = runner.invoke(
            app, ["serve", str(c_project), "--port", "9123", "--log-file", str(log_file)]
        )
        assert result.exit_code == 0, result.output
        assert calls["port"] == 9123
        assert calls["host"] == "127.0.0.1"
        assert calls["app"] is not None
        assert "Serving" in log_file.read_text()

    def test_nothing_to_serve(self, make_tree):
        pytest.importorskip("uvicorn")
        pytest.importorskip("starlette")
        root = make_tree({"notes.txt": "if"})
        result = runner.invoke(app, ["serve", str(root)])
        assert result.exit_code == 1
        assert "Nothing to analyze" in result.output
