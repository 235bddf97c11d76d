"""CLI integration tests for file discovery."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import write_files

from srcfind.cli import main


def _make_tree(root: Path) -> None:
    """Create a minimal project directory tree for testing."""
    write_files(
        root,
        "index.js",
        "lib/util.mjs",
        "lib/legacy.cjs",
        "README.md",
        "node_modules/pkg/index.js",
        ".venv/lib/site.js",
    )


def _listed(out: str) -> list[str]:
    return sorted(Path(line).name for line in out.strip().split("\n") if line)


def test_directory(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["."]) == 0
    assert _listed(capsys.readouterr().out) == ["index.js", "legacy.cjs", "util.mjs"]


def test_no_args_defaults_to_cwd(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    assert _listed(capsys.readouterr().out) == ["index.js", "legacy.cjs", "util.mjs"]


def test_skips_ignored_dirs(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["."]) == 0
    out = capsys.readouterr().out
    assert "node_modules" not in out
    assert ".venv" not in out


def test_glob_argument(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["lib/*.mjs"]) == 0
    assert _listed(capsys.readouterr().out) == ["util.mjs"]


def test_extend_files(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    write_files(tmp_path, "app.ts")
    monkeypatch.chdir(tmp_path)
    assert main(["--extend-files", "**/*.ts", "."]) == 0
    assert "app.ts" in capsys.readouterr().out


def test_files_replaces_defaults(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--files", "**/*.mjs", "."]) == 0
    assert _listed(capsys.readouterr().out) == ["util.mjs"]


def test_ignore_pattern(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    write_files(tmp_path, "drafts/wip.js")
    monkeypatch.chdir(tmp_path)
    assert main(["--ignore-pattern", "drafts/", "."]) == 0
    out = capsys.readouterr().out
    assert "drafts" not in out
    assert "index.js" in out


def test_no_respect_gitignore(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    write_files(tmp_path, "keep.js", "ignored/found.js")
    (tmp_path / ".gitignore").write_text("ignored/\n")
    monkeypatch.chdir(tmp_path)
    assert main(["."]) == 0
    assert "found.js" not in capsys.readouterr().out
    assert main(["--no-respect-gitignore", "."]) == 0
    assert "found.js" in capsys.readouterr().out


def test_no_ignore(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--no-ignore", "."]) == 0
    out = capsys.readouterr().out
    assert "node_modules" in out
    assert ".venv" not in out  # hidden directories still need an explicit pattern


def test_srcfindignore(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    write_files(tmp_path, "keep.js", "skip/nope.js")
    (tmp_path / ".srcfindignore").write_text("skip/\n")
    monkeypatch.chdir(tmp_path)
    assert main(["."]) == 0
    out = capsys.readouterr().out
    assert "keep.js" in out
    assert "skip" not in out


def test_explicit_ignored_file_warns(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["node_modules/pkg/index.js"]) == 0
    captured = capsys.readouterr()
    assert captured.out.strip() == ""
    assert "warning:" in captured.err
    assert "'!node_modules/*'" in captured.err


def test_show_ignored(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--show-ignored", "node_modules/pkg/index.js"]) == 0
    captured = capsys.readouterr()
    assert _listed(captured.out) == ["index.js"]
    assert "warning:" in captured.err


def test_missing_file_fails(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["missing.js"]) == 2
    assert "No files matching 'missing.js' were found." in capsys.readouterr().err


def test_no_error_on_unmatched_pattern(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--no-error-on-unmatched-pattern", "missing.js", "index.js"]) == 0
    assert _listed(capsys.readouterr().out) == ["index.js"]


def test_all_ignored_fails(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["node_modules/**/*.js"]) == 2
    assert "All files matched by 'node_modules/**/*.js' are ignored." in capsys.readouterr().err


def test_no_glob(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--no-glob", "*.js"]) == 2
    assert "(glob was disabled)" in capsys.readouterr().err


def test_config_file_is_applied(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / "srcfind.toml").write_text('files = ["**/*.cjs"]\n')
    monkeypatch.chdir(tmp_path)
    assert main(["."]) == 0
    assert _listed(capsys.readouterr().out) == ["legacy.cjs"]


def test_cli_flag_overrides_config(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / "srcfind.toml").write_text('files = ["**/*.cjs"]\n')
    monkeypatch.chdir(tmp_path)
    assert main(["--files", "**/*.mjs", "."]) == 0
    assert _listed(capsys.readouterr().out) == ["util.mjs"]


def test_invalid_config_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "srcfind.toml").write_text("this is not valid toml [[[")
    monkeypatch.chdir(tmp_path)
    assert main(["."]) == 1
    assert "invalid config file" in capsys.readouterr().err


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--version"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("v") or out.startswith("unknown")


def test_explicit_flag_detection_with_default_value(tmp_path: Path) -> None:
    """Passing a flag whose value equals the default should still count as explicit."""
    from srcfind.cli import _parse_args  # pyright: ignore[reportPrivateUsage]

    _, explicit_flags = _parse_args(["--files", "**/*.js", str(tmp_path)])
    assert explicit_flags == {"files"}
