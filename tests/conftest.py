import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'modx' and tests/ as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from helpers.cache_utils import reset_modx_caches


@pytest.fixture(autouse=True)
def _isolate_modx_env(monkeypatch):
    """Drop MODX_* overrides from the outer environment and reset caches."""
    for key in list(os.environ):
        if key.startswith("MODX_"):
            monkeypatch.delenv(key, raising=False)
    reset_modx_caches()
    yield
    reset_modx_caches()


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    """An isolated project root (marked by ``.modx/``) used as the cwd."""
    (tmp_path / ".modx").mkdir()
    (tmp_path / "templates").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path
