import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from kzg10.srs import setup


# ── 테스트 상수 ──
SEED = 42
KEY_DEGREE = 8


@pytest.fixture(scope="session")
def key():
    """Shared commitment key for most tests (t=8, seeded)."""
    return setup(KEY_DEGREE, seed=SEED)


@pytest.fixture(scope="session")
def key4():
    """t=4 key for the concrete 3x^3+x^2+4x+1 scenario."""
    return setup(4, seed=1234)
