"""
Root conftest.py for rbplay tests.

Makes the package importable from a plain checkout and registers
the custom markers used by the suite.
"""

import sys
from pathlib import Path

repo_root = Path(__file__).parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "export: mark test as needing the optional image/PDF/video libraries",
    )
