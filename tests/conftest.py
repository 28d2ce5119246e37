# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import fitz
import pandas as pd
import pytest

from docuflow.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("DOCUFLOW_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./output
pdf:
  line_tolerance: 8
excel:
  header_scan_rows: 10
  stats_sample_rows: 50
  preferred_sheet_keyword: opening
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "docuflow.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def clean_logging():
    reset_logging()
    yield
    reset_logging()


def _make_excel(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    with pd.ExcelWriter(path) as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


def _make_pdf(path: Path, pages: list[list[tuple[float, float, str]]]) -> Path:
    """Write a PDF; each word is (x, baseline_y_from_top, text)."""
    doc = fitz.open()
    for words in pages:
        page = doc.new_page()
        for x, y, text in words:
            page.insert_text((x, y), text, fontsize=11)
    doc.save(path)
    doc.close()
    return path


@pytest.fixture()
def make_excel() -> Callable[[Path, dict[str, list[list[object]]]], Path]:
    return _make_excel


@pytest.fixture()
def make_pdf() -> Callable[[Path, list[list[tuple[float, float, str]]]], Path]:
    return _make_pdf


@pytest.fixture()
def trial_balance_rows() -> list[list[object]]:
    return [
        ["Opening balances as at 1 January"],
        ["Account", "Category", "Debit", "Credit"],
        ["Cash on Hand", "Assets", 1500, 0],
        ["Accounts Payable", "Liabilities", 0, 900],
        ["Share Capital", "Equity", 0, 600],
        ["Total", "", 1500, 1500],
    ]
