"""Run every example's ``main()`` and compare stdout with its ``# =>`` comments."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from types import ModuleType

import pytest

EXAMPLES_ROOT = Path(__file__).resolve().parents[2] / "examples"


def _iter_example_paths() -> list[Path]:
    paths = sorted(EXAMPLES_ROOT.glob("ex_*/[0-9][0-9]_*.py"))
    if not paths:
        msg = f"No examples found under {EXAMPLES_ROOT}."
        raise AssertionError(msg)
    return paths


def _extract_expected_lines(path: Path) -> list[str]:
    return [
        line.split("# =>", maxsplit=1)[1].strip()
        for line in path.read_text(encoding="utf-8").splitlines()
        if "# =>" in line
    ]


def _load_example(path: Path, monkeypatch: pytest.MonkeyPatch) -> ModuleType:
    module_name = f"ditree_example_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    monkeypatch.setitem(sys.modules, module_name, module)
    spec.loader.exec_module(module)
    return module


@pytest.mark.parametrize(
    "path",
    _iter_example_paths(),
    ids=lambda path: str(path.relative_to(EXAMPLES_ROOT)),
)
def test_example_stdout_matches_inline_expectations(
    path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    module = _load_example(path, monkeypatch)

    module.main()

    assert capsys.readouterr().out.splitlines() == _extract_expected_lines(path)
