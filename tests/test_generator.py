import os

import pytest

from git_const.config import ConstantSpec, GenerationConfig
from git_const.generator import ConstantGenerator, generate, write_if_changed
from git_const.hashes import HashKind

from conftest import git


def _config(repo, output, **kwargs):
    return GenerationConfig(output_path=str(output), cwd=str(repo), **kwargs)


def test_generates_importable_python_module(git_repo, tmp_path):
    output = tmp_path / "out" / "_git_const.py"
    result = generate(_config(git_repo, output))

    assert result.success
    assert result.written
    namespace = {}
    exec(compile(output.read_text(), str(output), "exec"), namespace)
    head = git(git_repo, "rev-parse", "HEAD")
    assert namespace["GIT_HASH"] == head
    assert head.startswith(namespace["GIT_SHORT_HASH"])
    assert namespace["__all__"] == ["GIT_HASH", "GIT_SHORT_HASH"]


def test_generates_c_header(git_repo, tmp_path):
    output = tmp_path / "version.h"
    constants = [ConstantSpec("COMMIT"), ConstantSpec("RELEASE", HashKind.SHORT, "v1")]
    result = generate(_config(git_repo, output, constants=constants))

    content = output.read_text()
    assert result.success
    assert "#ifndef VERSION_H" in content
    assert f'#define COMMIT "{result.values["COMMIT"]}"' in content
    assert f'#define RELEASE "{result.values["RELEASE"]}"' in content


def test_failure_writes_nothing_by_default(git_repo, tmp_path):
    output = tmp_path / "_git_const.py"
    constants = [ConstantSpec("GOOD"), ConstantSpec("BAD", revision="does-not-exist")]
    result = generate(_config(git_repo, output, constants=constants))

    assert not result.success
    assert not result.written
    assert not output.exists()
    assert "GOOD" in result.values
    assert len(result.errors) == 1
    assert result.error_messages[0].startswith("git failed with status")


def test_emit_errors_writes_failure_directive(git_repo, tmp_path):
    output = tmp_path / "version.h"
    constants = [ConstantSpec("GOOD"), ConstantSpec("BAD", revision="does-not-exist")]
    result = generate(_config(git_repo, output, constants=constants, emit_errors=True))

    content = output.read_text()
    assert not result.success
    assert result.written
    assert '#define GOOD "' in content
    assert '#error "git failed with status' in content
    assert "#define BAD" not in content


def test_emitted_python_failure_aborts_import(git_repo, tmp_path):
    output = tmp_path / "_git_const.py"
    config = _config(git_repo, output, emit_errors=True,
                     constants=[ConstantSpec("BAD", revision="does-not-exist")])
    ConstantGenerator(config).generate()

    try:
        exec(compile(output.read_text(), str(output), "exec"), {})
    except ImportError as e:
        assert "git failed" in str(e)
    else:
        raise AssertionError("generated module imported despite failure")


def test_dry_run_does_not_write(git_repo, tmp_path):
    output = tmp_path / "_git_const.py"
    result = generate(_config(git_repo, output, dry_run=True))

    assert result.success
    assert "GIT_HASH = " in result.content
    assert not output.exists()


def test_unchanged_output_is_not_rewritten(git_repo, tmp_path):
    output = tmp_path / "_git_const.py"
    config = _config(git_repo, output)
    assert generate(config).written
    os.utime(output, (0, 0))

    result = generate(config)

    assert result.success
    assert not result.written
    assert output.stat().st_mtime == 0


def test_write_if_changed(tmp_path):
    path = tmp_path / "nested" / "file.txt"

    assert write_if_changed(path, "a\n")
    assert not write_if_changed(path, "a\n")
    assert write_if_changed(path, "b\n")
    assert path.read_text() == "b\n"


def test_include_guard_is_valid_for_digit_leading_file_names(git_repo, tmp_path):
    output = tmp_path / "1version.h"
    result = generate(_config(git_repo, output, constants=[ConstantSpec("COMMIT")]))

    assert result.success
    assert "#ifndef _1VERSION_H" in output.read_text()


def test_generator_rejects_names_added_after_construction(git_repo, tmp_path):
    config = _config(git_repo, tmp_path / "_git_const.py")
    config.constants = [ConstantSpec("def")]

    with pytest.raises(ValueError, match="reserved"):
        ConstantGenerator(config)
    assert not (tmp_path / "_git_const.py").exists()
