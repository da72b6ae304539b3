from __future__ import annotations


class ReportError(Exception):
    """The report could not be built or delivered."""
