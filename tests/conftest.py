import os
import sys

import pytest

# Ensure tests can import top-level modules when pytest changes CWD.
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


@pytest.fixture
def examples_dir():
    """Directory holding the sample .pycl programs."""
    return os.path.join(REPO_ROOT, "examples")
