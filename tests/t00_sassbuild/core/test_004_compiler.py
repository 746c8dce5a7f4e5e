import subprocess
from pathlib import Path

import pytest

from sassbuild.core import compiler as compiler_module
from sassbuild.core.compiler import SassCompiler
from sassbuild.core.exceptions import CompilationError, CompilerNotFoundError
from sassbuild.core.staleness import DirectoryPair


class FakeRun:
    """Records subprocess.run calls and returns a canned result"""

    def __init__(self, returncode=0, stdout="", stderr=""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        return subprocess.CompletedProcess(cmd, self.returncode, self.stdout, self.stderr)


def test_build_command_defaults():
    pairs = [DirectoryPair(Path("src/scss"), Path("build/css"))]

    assert SassCompiler().build_command(pairs) == ["sass", "--update", "--style=expanded", "src/scss:build/css"]


def test_build_command_options():
    compiler = SassCompiler("dart-sass", style="compressed", source_map=False,
                            load_paths=[Path("node_modules")], quiet=True)
    pairs = [DirectoryPair(Path("a"), Path("out/a")), DirectoryPair(Path("b"), Path("out/b"))]

    assert compiler.build_command(pairs) == [
        "dart-sass", "--update", "--style=compressed", "--no-source-map", "--quiet",
        "--load-path=node_modules", "a:out/a", "b:out/b",
    ]


def test_compile_creates_targets_and_runs_once(temp_dir, monkeypatch):
    fake = FakeRun(stdout="Compiled src/main.scss to build/main.css.\n")
    monkeypatch.setattr(compiler_module.subprocess, "run", fake)
    pairs = [DirectoryPair(temp_dir / "src", temp_dir / "build" / "css")]

    result = SassCompiler().compile(pairs)

    assert result.returncode == 0
    assert (temp_dir / "build" / "css").is_dir()
    assert len(fake.calls) == 1
    assert fake.calls[0][0][-1] == f"{temp_dir / 'src'}:{temp_dir / 'build' / 'css'}"


def test_compile_failure_raises(temp_dir, monkeypatch):
    monkeypatch.setattr(compiler_module.subprocess, "run",
                        FakeRun(returncode=65, stderr="Error: expected \";\"."))
    pairs = [DirectoryPair(temp_dir / "src", temp_dir / "out")]

    with pytest.raises(CompilationError) as exc_info:
        SassCompiler().compile(pairs)

    assert exc_info.value.returncode == 65
    assert "expected" in exc_info.value.stderr
    assert exc_info.value.command[0] == "sass"


def test_missing_executable(temp_dir):
    pairs = [DirectoryPair(temp_dir / "src", temp_dir / "out")]

    with pytest.raises(CompilerNotFoundError):
        SassCompiler(executable=str(temp_dir / "no-such-sass")).compile(pairs)


def test_uncreatable_target_raises_compilation_error(temp_dir, monkeypatch):
    fake = FakeRun()
    monkeypatch.setattr(compiler_module.subprocess, "run", fake)
    blocker = temp_dir / "build"
    blocker.write_text("not a directory")
    pairs = [DirectoryPair(temp_dir / "src", blocker / "css")]

    with pytest.raises(CompilationError, match="Cannot create output directory") as exc_info:
        SassCompiler().compile(pairs)

    assert isinstance(exc_info.value.__cause__, OSError)
    assert fake.calls == []


def test_unrunnable_executable_raises_compilation_error(temp_dir, monkeypatch):
    def denied(cmd, **kwargs):
        raise PermissionError(13, "Permission denied", cmd[0])

    monkeypatch.setattr(compiler_module.subprocess, "run", denied)
    pairs = [DirectoryPair(temp_dir / "src", temp_dir / "out")]

    with pytest.raises(CompilationError, match="Cannot run Sass executable") as exc_info:
        SassCompiler(executable="/opt/sass/sass").compile(pairs)

    assert not isinstance(exc_info.value, CompilerNotFoundError)
    assert exc_info.value.command[0] == "/opt/sass/sass"
