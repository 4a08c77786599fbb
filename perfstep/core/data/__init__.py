"""
Bundled static files.

``defaultReport.yml`` is the Taurus reporting template copied into each
workspace before a test run.
"""

from __future__ import annotations

from pathlib import Path

DATA_DIR = Path(__file__).parent

DEFAULT_REPORT_TEMPLATE = DATA_DIR / "defaultReport.yml"
