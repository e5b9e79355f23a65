from click.testing import CliRunner

from ringarray import __version__
from ringarray.cli import cli


def test_cli_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_inspect_shows_layout(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["inspect", "1", "2", "3", "--capacity", "4"])
    assert result.exit_code == 0
    assert "Array<[1, 2, 3]>" in result.output
    assert "capacity: 4" in result.output
    assert "slots:    [1, 2, 3, _]" in result.output


def test_cli_inspect_parses_scalars(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["inspect", "a", "1.5", "true"])
    assert result.exit_code == 0
    assert "Array<['a', 1.5, True]>" in result.output
    assert "capacity: 8" in result.output


def test_cli_run_replays_operations(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(
        cli, ["run", "--values", "1,2,3", "push:4", "shift", "slice:1:5"]
    )
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0].split() == ["start", "[1,", "2,", "3]"]
    assert lines[1].split() == ["push:4", "[1,", "2,", "3,", "4]"]
    assert lines[2].split() == ["shift", "->", "1"]
    assert lines[3].split() == ["shift", "[2,", "3,", "4]"]
    assert lines[4].split() == ["slice:1:5", "[3,", "4]"]


def test_cli_run_grows_past_capacity(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(
        cli, ["run", "--values", "a,b", "--capacity", "2", "--layout", "push:c"]
    )
    assert result.exit_code == 0
    assert "Array<['a', 'b', 'c']>" in result.output
    assert "capacity: 4" in result.output


def test_cli_run_shift_on_empty(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["run", "shift", "push:1"])
    assert result.exit_code == 0
    assert "empty" in result.output
    assert result.output.splitlines()[-1].split() == ["push:1", "[1]"]


def test_cli_run_reports_slice_errors(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["run", "--values", "1", "slice:9:1"])
    assert result.exit_code == 1
    assert "Operation failed" in result.output
    assert "slice:9:1" in result.output


def test_cli_run_rejects_unknown_operations(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["run", "pop"])
    assert result.exit_code != 0
    assert "Unknown operation" in result.output
    result = runner.invoke(cli, ["run", "slice:x:1"])
    assert result.exit_code != 0
    assert "must be integers" in result.output
    result = runner.invoke(cli, ["run", "slice:1"])
    assert result.exit_code != 0


def test_cli_rejects_invalid_capacity(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["inspect", "1", "--capacity", "0"])
    assert result.exit_code != 0
    assert "capacity must be a positive integer" in result.output


def test_cli_uses_config_file(monkeypatch, tmp_path):
    (tmp_path / "ringarray.yaml").write_text(
        "default_capacity: 2\nseparator: ';'\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["inspect", "x"])
    assert "capacity: 2" in result.output
    result = runner.invoke(cli, ["run", "--values", "a;b"])
    assert result.output.splitlines()[0].split() == ["start", "['a',", "'b']"]


def test_cli_reports_bad_config(monkeypatch, tmp_path):
    (tmp_path / "ringarray.yaml").write_text("default_capacity: -3\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["inspect"])
    assert result.exit_code != 0
    assert "default_capacity" in result.output


def test_module_main_entrypoint():
    from ringarray.__main__ import main

    assert callable(main)


def test_main_invokes_cli(monkeypatch):
    import ringarray.cli as cli_mod

    called = {}

    def fake_cli():
        called["ran"] = True

    monkeypatch.setattr(cli_mod, "cli", fake_cli)
    cli_mod.main()
    assert called["ran"] is True
