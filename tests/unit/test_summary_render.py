from __future__ import annotations

from datetime import UTC, datetime

import pytest

from docuflow.models.processing_result import ProcessingResult
from docuflow.services.summary import render_summary_line


def _result(elapsed: float, success: int = 1, failed: int = 1) -> ProcessingResult:
    now = datetime.now(UTC)
    return ProcessingResult(
        success_files=success,
        failed_files=failed,
        total_pages=4,
        total_entries=7,
        total_skipped=2,
        start_time=now,
        end_time=now,
        elapsed_seconds=elapsed,
    )


def test_render_summary_line_fields():
    assert render_summary_line(_result(1.5)) == (
        "SUMMARY files=2/2 success=1 failed=1 pages=4 entries=7 skipped_rows=2 elapsed_sec=1.5"
    )


@pytest.mark.parametrize("elapsed,expected", [
    (0.0, "0"),
    (3.0, "3"),
    (1.23456, "1.235"),
    (0.000123, "0.000123"),
])
def test_elapsed_formatting(elapsed, expected):
    assert render_summary_line(_result(elapsed)).endswith(f"elapsed_sec={expected}")


def test_empty_batch():
    line = render_summary_line(_result(0.0, success=0, failed=0))
    assert line.startswith("SUMMARY files=0/0 success=0 failed=0")
