from click.testing import CliRunner

from git_const.cli import cli

from conftest import git


def _lines(result):
    return [line.strip() for line in result.output.splitlines()]


def test_hash_prints_full_hash(git_repo):
    result = CliRunner().invoke(cli, ["hash", "-C", str(git_repo)])

    assert result.exit_code == 0, result.output
    assert git(git_repo, "rev-parse", "HEAD") in _lines(result)


def test_short_hash_with_revision_and_literal(git_repo):
    result = CliRunner().invoke(cli, ["short-hash", "v1", "-C", str(git_repo), "--literal", "-t", "c"])

    assert result.exit_code == 0, result.output
    short = git(git_repo, "rev-parse", "--short", "v1")
    assert f'"{short}"' in _lines(result)


def test_hash_of_invalid_reference_fails(git_repo):
    result = CliRunner().invoke(cli, ["hash", "does-not-exist", "-C", str(git_repo)])

    assert result.exit_code == 1
    assert "Build failed" in result.output


def test_generate_writes_file(git_repo):
    output = git_repo / "_version.h"
    result = CliRunner().invoke(cli, [
        "generate", "-C", str(git_repo), "-o", "_version.h", "-c", "COMMIT=full", "-c", "TAG=short:v1",
    ])

    assert result.exit_code == 0, result.output
    content = output.read_text()
    assert f'#define COMMIT "{git(git_repo, "rev-parse", "HEAD")}"' in content
    assert "#define TAG " in content


def test_generate_uses_config_file(git_repo):
    (git_repo / "gitconst.yml").write_text("output: gen/_git.rs\nconstants:\n  GIT_HASH: full\n")

    result = CliRunner().invoke(cli, ["generate", "-C", str(git_repo)])

    assert result.exit_code == 0, result.output
    assert "pub const GIT_HASH: &str" in (git_repo / "gen" / "_git.rs").read_text()


def test_generate_failure_exits_non_zero_without_writing(git_repo):
    result = CliRunner().invoke(cli, [
        "generate", "-C", str(git_repo), "-o", "_git_const.py", "-c", "BAD=full:does-not-exist",
    ])

    assert result.exit_code == 1
    assert not (git_repo / "_git_const.py").exists()


def test_generate_emit_errors_writes_directive(git_repo):
    result = CliRunner().invoke(cli, [
        "generate", "-C", str(git_repo), "-o", "_git_const.py",
        "-c", "BAD=full:does-not-exist", "--emit-errors",
    ])

    assert result.exit_code == 1
    assert "raise ImportError(" in (git_repo / "_git_const.py").read_text()


def test_generate_dry_run_prints_content(git_repo):
    result = CliRunner().invoke(cli, ["generate", "-C", str(git_repo), "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "GIT_HASH = " in result.output
    assert not (git_repo / "_git_const.py").exists()


def test_generate_rejects_bad_constant(tmp_path):
    result = CliRunner().invoke(cli, ["generate", "-C", str(tmp_path), "-c", "bad-name=full"])

    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "git-const" in result.output


def test_generate_rejects_duplicate_constants(git_repo):
    result = CliRunner().invoke(cli, [
        "generate", "-C", str(git_repo), "-o", "v.rs", "-c", "A=full", "-c", "A=short",
    ])

    assert result.exit_code == 1
    assert "duplicate constants A" in result.output
    assert not (git_repo / "v.rs").exists()


def test_generate_fails_on_option_like_revision(git_repo):
    result = CliRunner().invoke(cli, [
        "generate", "-C", str(git_repo), "-o", "_git_const.py", "-c", "X=full:--show-toplevel",
    ])

    assert result.exit_code == 1
    assert not (git_repo / "_git_const.py").exists()
