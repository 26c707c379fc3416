"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

CARLOS_SUPER_SCL = """! carlos_super.scl
!
Carlos Super Just
 12
!
 17/16
 9/8
 6/5
 5/4
 4/3
 11/8
 3/2
 13/8
 5/3
 7/4
 15/8
 2/1
"""

EDO12_SCL = """! 12edo.scl
!
12 tone equal temperament
12
!
100.0
200.0
300.0
400.0
500.0
600.0
700.0
800.0
900.0
1000.0
1100.0
2/1
"""

LINEAR_KBM = """! linear.kbm
! Size of map
12
! First and last MIDI notes to retune
0
127
! Middle note where the first entry of the mapping is mapped to
60
! Reference note for which frequency is given
69
! Frequency to tune the above note to
440.0
! Scale degree to consider as formal octave
12
! Mapping
0
1
2
3
4
5
6
7
8
9
10
11
"""


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def carlos_super_text() -> str:
    """Carlos Super Just as .scl content."""
    return CARLOS_SUPER_SCL


@pytest.fixture
def edo12_text() -> str:
    """12-tone equal temperament as .scl content."""
    return EDO12_SCL


@pytest.fixture
def linear_kbm_text() -> str:
    """Linear 12-key .kbm with the middle key at 60 and A4 = 440 Hz."""
    return LINEAR_KBM


@pytest.fixture
def carlos_super_path(temp_dir: Path, carlos_super_text: str) -> Path:
    """Carlos Super Just written to a .scl file."""
    path = temp_dir / "carlos_super.scl"
    path.write_text(carlos_super_text)
    return path


@pytest.fixture
def edo12_path(temp_dir: Path, edo12_text: str) -> Path:
    """12-EDO written to a .scl file."""
    path = temp_dir / "12edo.scl"
    path.write_text(edo12_text)
    return path


@pytest.fixture
def linear_kbm_path(temp_dir: Path, linear_kbm_text: str) -> Path:
    """The linear keyboard mapping written to a .kbm file."""
    path = temp_dir / "linear.kbm"
    path.write_text(linear_kbm_text)
    return path
