"""
Testy dla pyproject.toml i źródeł pakietu.

Instalowany jest tylko pakiet tilegrid - main.py i api/ zostają
lokalnymi punktami wejścia repozytorium.
"""

import pytest
import warnings
from pathlib import Path

PYPROJECT = Path(__file__).parent.parent / "pyproject.toml"


@pytest.fixture
def setuptools_config():
    tomllib = pytest.importorskip("tomllib")
    with PYPROJECT.open("rb") as f:
        return tomllib.load(f)["tool"]["setuptools"]


def test_only_tilegrid_packages_installed(setuptools_config):
    packages = setuptools_config["packages"]
    assert packages
    assert all(p == "tilegrid" or p.startswith("tilegrid.") for p in packages)


def test_no_top_level_modules_installed(setuptools_config):
    assert "py-modules" not in setuptools_config


def test_every_subpackage_listed(setuptools_config):
    root = PYPROJECT.parent / "tilegrid"
    found = {
        ".".join(init.parent.relative_to(root.parent).parts)
        for init in root.rglob("__init__.py")
    }
    assert found == set(setuptools_config["packages"])


@pytest.mark.parametrize(
    "source",
    sorted((PYPROJECT.parent / "tilegrid").rglob("*.py")),
    ids=lambda p: p.name,
)
def test_sources_compile_without_warnings(source):
    """Np. '\\ ' w docstringu z rysunkiem to SyntaxWarning."""
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        compile(source.read_text(encoding="utf-8"), str(source), "exec")
