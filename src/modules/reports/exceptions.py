"""Report domain exceptions."""

from __future__ import annotations


class NoReportData(Exception):
    """The selected date range holds no orders."""


class UnknownBucket(ValueError):
    """The dashboard drill-down bucket is not recognised."""
