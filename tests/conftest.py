"""Pytest configuration for codepad tests.

Ensures the project root is in sys.path so `tests.fakes` and the top-level
packages import the same way in every test module.
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
