# SPDX-License-Identifier: LGPL-3.0-or-later
import os
import sys
from pathlib import Path

import pytest

_THIS_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _THIS_DIR.parent

for p in (_REPO_ROOT, _THIS_DIR):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

os.environ.setdefault("PYTHONPATH", str(_REPO_ROOT))

from fakes.fake_logger import FakeLogger  # noqa: E402
from fakes.fake_runner import FakeRunner  # noqa: E402
from fakes.inline_executor import InlineExecutor  # noqa: E402


@pytest.fixture
def fake_logger():
    return FakeLogger()


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def inline_executor():
    return InlineExecutor()
