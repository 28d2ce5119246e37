from __future__ import annotations

import json

from docuflow.models.error_record import ErrorRecord


def test_error_record_creation_and_json_line():
    rec = ErrorRecord.create(
        file="file.xlsx",
        sheet="Sheet1",
        row=10,
        error_type="UNRESOLVED_CATEGORY",
        message="Zebra Holdings",
    )
    data = json.loads(rec.to_json_line())
    assert data["file"] == "file.xlsx"
    assert data["row"] == 10
    assert data["error_type"] == "UNRESOLVED_CATEGORY"
    assert data["timestamp"].endswith("Z")
    assert set(data) == {"timestamp", "file", "sheet", "row", "error_type", "message"}


def test_error_record_keeps_non_ascii():
    rec = ErrorRecord.create("f.xlsx", "S", 3, "NON_ACCOUNT_ROW", "Owner’s Equity")
    assert "Owner’s Equity" in rec.to_json_line()


def test_file_level_row_sentinel():
    rec = ErrorRecord.create("broken.pdf", "<FILE_LEVEL>", -1, "DOCUMENT_READ_ERROR", "cannot open")
    assert json.loads(rec.to_json_line())["row"] == -1
