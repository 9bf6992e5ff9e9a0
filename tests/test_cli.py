import io
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest

from kubesplit.cli.main import KubeSplitCLI

BUNDLE = (
    "apiVersion: apps/v1\n"
    "kind: Deployment\n"
    "metadata:\n"
    "  name: frontend-deployment\n"
    "status:\n"
    "  replicas: 1\n"
    "---\n"
    "42\n"
    "---\n"
    "apiVersion: v1\n"
    "kind: Service\n"
    "metadata:\n"
    "  name: Nginx\n"
)


class TerminalStdin(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def bundle_file(tmp_path):
    path = tmp_path / "bundle.yaml"
    path.write_text(BUNDLE)
    return path


@pytest.fixture
def outdir(tmp_path):
    path = tmp_path / "out"
    path.mkdir()
    (path / "stale.yaml").write_text("kind: Stale\n")
    return path


def run(*argv):
    return KubeSplitCLI().run(list(argv))


def test_no_arguments_prints_usage(capsys):
    assert run() == 0
    out = capsys.readouterr().out
    assert "usage: kubesplit" in out
    assert "--outdir" in out


def test_help_exits_zero(capsys):
    with pytest.raises(SystemExit) as exc:
        run("--help", "--format=bogus")
    assert exc.value.code == 0
    assert "kind/name" in capsys.readouterr().out


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        run("--version")
    assert exc.value.code == 0
    assert "kubesplit v1.0.0" in capsys.readouterr().out


def test_file_to_flat_layout(bundle_file, outdir, capsys):
    assert run(f"--file={bundle_file}", f"--outdir={outdir}") == 0

    assert sorted(p.name for p in outdir.iterdir()) == [
        "deployment-frontend-deployment.yaml",
        "service-nginx.yaml",
    ]
    out = capsys.readouterr().out
    assert "Saved document to" in out
    assert "Parsing complete! Saved 2 manifests." in out


def test_skipped_document_is_reported_on_stderr(bundle_file, outdir, capsys, caplog):
    assert run(f"--file={bundle_file}", f"--outdir={outdir}") == 0
    assert "document 2" in caplog.text
    assert "document 2" not in capsys.readouterr().out


def test_stdin_input(outdir, monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(BUNDLE))

    assert run("--outdir", str(outdir), "--format", "kind/name") == 0
    assert (outdir / "service" / "Nginx.yaml").exists()
    assert (outdir / "deployment" / "frontend-deployment.yaml").exists()


def test_service_format(bundle_file, outdir):
    assert run(f"--file={bundle_file}", f"--outdir={outdir}", "--format=service") == 0
    assert (outdir / "frontend" / "deployment-frontend-deployment.yaml").exists()
    assert (outdir / "common" / "service-nginx.yaml").exists()


def test_remove_patterns(bundle_file, outdir):
    assert run(f"--file={bundle_file}", f"--outdir={outdir}", "--remove=status:.*,replicas:.*") == 0
    text = (outdir / "deployment-frontend-deployment.yaml").read_text()
    assert "status" not in text
    assert "replicas" not in text


def test_missing_outdir_is_fatal(bundle_file, capsys):
    assert run(f"--file={bundle_file}") == 1
    assert "--outdir" in capsys.readouterr().err


def test_invalid_format_is_fatal_before_wipe(bundle_file, outdir, capsys):
    assert run(f"--file={bundle_file}", f"--outdir={outdir}", "--format=by-color") == 1
    assert "Invalid format option" in capsys.readouterr().err
    assert (outdir / "stale.yaml").exists()


def test_missing_input_file_is_fatal(tmp_path, outdir, capsys):
    assert run(f"--file={tmp_path / 'absent.yaml'}", f"--outdir={outdir}") == 1
    assert "Error opening YAML file" in capsys.readouterr().err
    assert (outdir / "stale.yaml").exists()


def test_bad_regex_writes_nothing(bundle_file, outdir, capsys):
    assert run(f"--file={bundle_file}", f"--outdir={outdir}", "--remove=ok,broken[") == 1
    assert "broken[" in capsys.readouterr().err
    assert list(outdir.iterdir()) == []


def test_interactive_stdin_is_refused(outdir, monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", TerminalStdin(""))

    assert run(f"--outdir={outdir}") == 1
    assert "usage: kubesplit" in capsys.readouterr().out
    assert (outdir / "stale.yaml").exists()


def test_previous_output_is_removed(bundle_file, outdir):
    run(f"--file={bundle_file}", f"--outdir={outdir}")
    assert not (outdir / "stale.yaml").exists()


def test_dry_run(bundle_file, outdir, capsys):
    assert run(f"--file={bundle_file}", f"--outdir={outdir}", "--dry-run") == 0

    assert sorted(p.name for p in outdir.iterdir()) == ["stale.yaml"]
    out = capsys.readouterr().out
    assert "Dry run complete! Would save 2 manifests." in out
    assert "Saved document to" not in out


def test_empty_input_is_success(tmp_path, outdir, capsys):
    empty = tmp_path / "empty.yaml"
    empty.write_text("")

    assert run(f"--file={empty}", f"--outdir={outdir}") == 0
    assert "Saved 0 manifests." in capsys.readouterr().out
