import logging

import pytest

from sassbuild.config import BuildConfig
from sassbuild.core.builder import UpdateResult, create_compiler, update_stylesheets
from sassbuild.core.exceptions import FilesystemAccessError
from sassbuild.core import scanner

from conftest import make_tree


class RecordingCompiler:
    def __init__(self):
        self.compiled = []

    def compile(self, pairs):
        self.compiled.append(list(pairs))


@pytest.fixture
def project(temp_dir):
    make_tree(temp_dir / "scss", {"main.scss": 50})
    make_tree(temp_dir / "build" / "css", {"main.css": 100})
    return temp_dir


def _config(project, **kwargs):
    return BuildConfig(
        template_locations={project / "scss": project / "build" / "css"},
        build_directory=project / "build",
        **kwargs,
    )


def test_skip(project, caplog):
    compiler = RecordingCompiler()

    with caplog.at_level(logging.INFO, logger="sassbuild"):
        result = update_stylesheets(_config(project, skip=True), compiler=compiler)

    assert result is UpdateResult.SKIPPED
    assert compiler.compiled == []
    assert "Skip compiling Sass templates" in caplog.text


def test_up_to_date(project, caplog):
    compiler = RecordingCompiler()

    with caplog.at_level(logging.INFO, logger="sassbuild"):
        result = update_stylesheets(_config(project), compiler=compiler)

    assert result is UpdateResult.UP_TO_DATE
    assert compiler.compiled == []
    assert "Skip compiling Sass templates, no changes." in caplog.text


def test_stale_compiles(project):
    make_tree(project / "scss", {"main.scss": 200})
    compiler = RecordingCompiler()

    result = update_stylesheets(_config(project), compiler=compiler)

    assert result is UpdateResult.COMPILED
    assert [p.source for p in compiler.compiled[0]] == [project / "scss"]


def test_force_compiles_without_checking(project, monkeypatch):
    def fail_scandir(path):
        raise AssertionError("no scan expected")

    monkeypatch.setattr(scanner.os, "scandir", fail_scandir)
    compiler = RecordingCompiler()

    assert update_stylesheets(_config(project), force=True, compiler=compiler) is UpdateResult.COMPILED
    assert len(compiler.compiled) == 1


def test_filesystem_error_aborts(project, monkeypatch):
    def broken_scandir(path):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(scanner.os, "scandir", broken_scandir)
    compiler = RecordingCompiler()

    with pytest.raises(FilesystemAccessError):
        update_stylesheets(_config(project), compiler=compiler)
    assert compiler.compiled == []


def test_create_compiler_from_config(project):
    compiler = create_compiler(_config(project, sass_executable="dart-sass", style="compressed", quiet=True))

    assert compiler.executable == "dart-sass"
    assert compiler.style == "compressed"
    assert compiler.quiet is True
