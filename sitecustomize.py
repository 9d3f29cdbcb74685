"""Auto-add src/ to sys.path for repo-local imports.

Lets scripts and a bare ``pytest`` run against the src/ layout without an
editable install.
"""
from __future__ import annotations

import os
import sys

_ROOT = os.path.dirname(__file__)
_SRC = os.path.join(_ROOT, "src")

if os.path.isdir(_SRC) and _SRC not in sys.path:
    sys.path.insert(0, _SRC)
