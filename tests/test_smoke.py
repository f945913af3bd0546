"""Smoke tests: imports work, CLI commands work."""

from click.testing import CliRunner

from dotlang.__main__ import main
from dotlang.errors import DotExecError


def test_import():
    import dotlang

    assert dotlang.parse is not None
    assert dotlang.print_dot is not None


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "Parse, reformat and render graphviz DOT files" in result.output


def test_fmt_stdin():
    runner = CliRunner()
    result = runner.invoke(main, ["fmt"], input="digraph G { a -- b; c [shape=box] }")
    assert result.exit_code == 0
    assert result.output == "digraph G {\n    a -> b \n    c[shape=box]\n}\n"


def test_fmt_options():
    runner = CliRunner()
    result = runner.invoke(main, ["fmt", "--inline", "--semi"], input="graph { a; b }")
    assert result.exit_code == 0
    assert result.output == "graph {a; b;}\n"

    result = runner.invoke(main, ["fmt", "-i", "1"], input="graph { a }")
    assert result.output == "graph {\n  a\n}\n"


def test_fmt_file_to_file(tmp_path):
    src = tmp_path / "in.gv"
    src.write_text("graph{a--b}")
    out = tmp_path / "out.gv"
    runner = CliRunner()
    result = runner.invoke(main, ["fmt", str(src), "-o", str(out)])
    assert result.exit_code == 0
    assert out.read_text() == "graph {\n    a -- b \n}\n"


def test_check_ok():
    runner = CliRunner()
    result = runner.invoke(main, ["check"], input="digraph { a -> b; c }")
    assert result.exit_code == 0
    assert "ok: digraph with 2 top-level statements" in result.output


def test_check_reports_location():
    runner = CliRunner()
    result = runner.invoke(main, ["check"], input="digraph {\n  a -> \n}")
    assert result.exit_code == 1
    assert "parse error: 3:1:" in result.output


def test_render(monkeypatch):
    calls = []

    def fake_exec(graph, ctx, args, config=None):
        calls.append((graph, [a.prepare() for a in args], config.binary))
        return b"<svg/>"

    monkeypatch.setattr("dotlang.__main__.exec_dot", fake_exec)
    runner = CliRunner()
    result = runner.invoke(
        main, ["render", "-T", "png", "-K", "neato", "--dot-binary", "gv", "--arg=-Gdpi=72"], input="graph { a }"
    )
    assert result.exit_code == 0
    assert result.output == "<svg/>"
    ((_, args, binary),) = calls
    assert args == ["-Tpng", "-Kneato", "-Gdpi=72"]
    assert binary == "gv"


def test_render_failure(monkeypatch):
    def fake_exec(graph, ctx, args, config=None):
        raise DotExecError("graphviz binary 'dot' not found")

    monkeypatch.setattr("dotlang.__main__.exec_dot", fake_exec)
    runner = CliRunner()
    result = runner.invoke(main, ["render"], input="graph { a }")
    assert result.exit_code == 1
    assert "not found" in result.output
