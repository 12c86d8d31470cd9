"""Tests for the rootline command-line interface."""

import csv
import io
import json

import pytest

from rootline import __version__
from rootline.cli import create_parser, main


class TestParser:
    """Tests for create_parser()."""

    def test_build_defaults(self):
        args = create_parser().parse_args(["build", "lineage.csv"])

        assert args.command == "build"
        assert args.format == "json"
        assert args.output is None

    def test_column_overrides(self):
        args = create_parser().parse_args(["roots", "t.csv", "--parent", "src", "--child", "dst"])

        assert (args.parent, args.child) == ("src", "dst")

    def test_unknown_format_rejected(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["build", "t.csv", "-f", "yaml"])


class TestBuildCommand:
    """Tests for `rootline build`."""

    def test_json_to_stdout(self, isolated_cwd, example_csv, capsys):
        assert main(["build", str(example_csv)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["roots"] == ["A", "D"]
        assert data["metadata"]["node_count"] == 4

    def test_csv_format(self, isolated_cwd, example_csv, capsys):
        assert main(["build", str(example_csv), "-f", "csv"]) == 0

        rows = list(csv.DictReader(io.StringIO(capsys.readouterr().out)))
        assert len(rows) == 4

    def test_html_to_file(self, isolated_cwd, example_csv, capsys):
        output = isolated_cwd / "view.html"

        assert main(["build", str(example_csv), "-f", "html", "-o", str(output)]) == 0

        assert "<svg" in output.read_text(encoding="utf-8")
        assert "Wrote html for 4 nodes in 2 trees" in capsys.readouterr().err

    def test_quiet_suppresses_messages(self, isolated_cwd, example_csv, capsys):
        output = isolated_cwd / "out.txt"

        assert main(["-q", "build", str(example_csv), "-f", "text", "-o", str(output)]) == 0

        assert capsys.readouterr().err == ""

    def test_overlap_warning(self, isolated_cwd, capsys):
        table = isolated_cwd / "wide.csv"
        rows = ["parent,child", ",root", ",other"] + [f"root,leaf{i}" for i in range(8)]
        table.write_text("\n".join(rows) + "\n", encoding="utf-8")

        assert main(["build", str(table), "-f", "text"]) == 0

        assert "overlap on the canvas" in capsys.readouterr().err

    def test_missing_column_reports_error(self, isolated_cwd, example_csv, capsys):
        assert main(["build", str(example_csv), "--parent", "nope"]) == 1

        err = capsys.readouterr().err
        assert err.startswith("Error:")
        assert "nope" in err

    def test_cycle_reports_error(self, isolated_cwd, capsys):
        table = isolated_cwd / "cycle.csv"
        table.write_text("parent,child\nA,B\nB,A\n", encoding="utf-8")

        assert main(["build", str(table)]) == 1

        assert "cycle detected" in capsys.readouterr().err

    def test_config_file_columns(self, isolated_cwd, capsys):
        (isolated_cwd / ".rootline.toml").write_text(
            '[columns]\nparent = "up"\nchild = "down"\n', encoding="utf-8"
        )
        table = isolated_cwd / "t.csv"
        table.write_text("up,down\n,x\nx,y\n", encoding="utf-8")

        assert main(["roots", str(table)]) == 0

        assert capsys.readouterr().out == "x\n"


class TestAnalyzeCommands:
    """Tests for `rootline roots` and `rootline tree`."""

    def test_roots(self, isolated_cwd, example_csv, capsys):
        assert main(["roots", str(example_csv)]) == 0

        assert capsys.readouterr().out == "A\nD\n"

    def test_tree(self, isolated_cwd, example_csv, capsys):
        assert main(["tree", str(example_csv)]) == 0

        out = capsys.readouterr().out
        assert out.startswith("Lineage (4 nodes, 2 roots)\n" + "=" * 60 + "\n")
        assert "  - B\n" in out

    def test_tree_empty_table(self, isolated_cwd, capsys):
        table = isolated_cwd / "empty.csv"
        table.write_text("parent,child\n", encoding="utf-8")

        assert main(["tree", str(table)]) == 0

        assert "No rows found" in capsys.readouterr().out


class TestConfigCommand:
    """Tests for `rootline config`."""

    def test_init_then_path(self, isolated_cwd, capsys):
        assert main(["config", "init"]) == 0
        assert (isolated_cwd / ".rootline.toml").is_file()
        capsys.readouterr()

        assert main(["config", "path"]) == 0
        assert capsys.readouterr().out.strip().endswith(".rootline.toml")

    def test_init_refuses_overwrite(self, isolated_cwd, capsys):
        (isolated_cwd / ".rootline.toml").write_text("", encoding="utf-8")

        assert main(["config", "init"]) == 1
        assert "already exists" in capsys.readouterr().err

    def test_path_without_file(self, isolated_cwd, capsys):
        (isolated_cwd / ".git").mkdir()

        assert main(["config", "path"]) == 1
        assert "No .rootline.toml found" in capsys.readouterr().out

    def test_show_json(self, isolated_cwd, capsys):
        (isolated_cwd / ".git").mkdir()

        assert main(["config", "show", "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["layout"]["node_width"] == 200

    def test_show_toml(self, isolated_cwd, capsys):
        (isolated_cwd / ".git").mkdir()

        assert main(["config", "show"]) == 0

        assert "[render]" in capsys.readouterr().out


class TestMisc:
    """Tests for version and help output."""

    def test_version_command(self, capsys):
        assert main(["version"]) == 0

        assert capsys.readouterr().out.strip() == f"rootline {__version__}"

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0

        assert "usage: rootline" in capsys.readouterr().out


class TestServeCommand:
    """Tests for `rootline serve` without binding a socket."""

    def test_runs_app_with_configured_address(self, isolated_cwd, example_csv, monkeypatch):
        pytest.importorskip("flask_cors")
        from flask import Flask

        calls = {}
        monkeypatch.setattr(Flask, "run", lambda self, **kwargs: calls.update(kwargs))

        assert main(["-q", "serve", str(example_csv), "--port", "6001"]) == 0

        assert calls == {"host": "127.0.0.1", "port": 6001, "debug": False}

    def test_missing_table_still_serves(self, isolated_cwd, monkeypatch, capsys):
        pytest.importorskip("flask_cors")
        from flask import Flask

        monkeypatch.setattr(Flask, "run", lambda self, **kwargs: None)

        assert main(["serve", str(isolated_cwd / "later.csv")]) == 0

        assert "Warning: Table file not found" in capsys.readouterr().err
