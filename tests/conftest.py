"""
Pytest configuration and shared fixtures for the irsnap tests.
"""

import difflib
import os
import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from irsnap.api import default_registry
from irsnap.shared.source_span import SourceSpan
from irsnap.utils.io_utils import read_source_file, write_text_file

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Set to rewrite baselines from the current output instead of comparing.
REGENERATE_ENV = "IRSNAP_REGENERATE_BASELINES"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def registry():
    """Fresh registry with internal nodes and component renderers."""
    return default_registry()


@pytest.fixture
def span():
    """Factory for spans in a fixed file."""
    def _span(absolute: int = 0, line: int = 0, character: int = 0, length: int = 0,
              file_path: str = "/Views/Home/Index.cshtml") -> SourceSpan:
        return SourceSpan(file_path=file_path, absolute_index=absolute, line_index=line,
                          character_index=character, length=length)
    return _span


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture(scope="session")
def assert_matches_baseline():
    """
    Compare a dump byte-for-byte with `<fixtures>/<name>.ir.txt`.

    Failure output is a unified diff, which is what the dump format is for.
    """
    def _assert(dump: str, name: str) -> None:
        baseline = FIXTURES_DIR / f"{name}.ir.txt"
        if os.environ.get(REGENERATE_ENV):
            write_text_file(baseline, dump)
            return
        expected = read_source_file(baseline).replace("\r\n", "\n")
        if dump != expected:
            diff = "".join(difflib.unified_diff(
                expected.splitlines(keepends=True),
                dump.splitlines(keepends=True),
                fromfile=f"{name}.ir.txt",
                tofile="actual",
            ))
            pytest.fail(f"IR dump does not match baseline:\n{diff}")
    return _assert


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
