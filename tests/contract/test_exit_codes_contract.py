from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from docuflow.cli import main as cli_main
from docuflow.exceptions import ProcessingError

"""Exit codes: 0 all documents ok, 2 some failed, 1 fatal before or during the batch."""


def test_exit_code_fatal_startup(temp_workdir: Path, clean_logging, capsys):
    # no config/docuflow.yml
    assert cli_main([]) == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_fatal_invalid_config(write_config, temp_workdir: Path, clean_logging, capsys):
    write_config.write_text("output_directory: ./out\n", encoding="utf-8")
    assert cli_main([]) == 1
    assert "config validation failed" in capsys.readouterr().out


def test_exit_code_fatal_processing_error(write_config, temp_workdir: Path, clean_logging, capsys):
    with patch("docuflow.cli.app.process_all", side_effect=ProcessingError("Error reading directory")):
        assert cli_main([]) == 1
    assert "ERROR processing:" in capsys.readouterr().out


def test_exit_code_all_success(write_config, temp_workdir: Path, clean_logging, make_pdf, capsys):
    make_pdf(temp_workdir / "data" / "a.pdf", [[(50, 100, "A")]])
    make_pdf(temp_workdir / "data" / "b.pdf", [[(50, 100, "B")]])
    assert cli_main([]) == 0
    assert "SUMMARY files=2/2 success=2 failed=0" in capsys.readouterr().out


def test_exit_code_partial_failure(write_config, temp_workdir: Path, clean_logging, make_pdf, capsys):
    make_pdf(temp_workdir / "data" / "good.pdf", [[(50, 100, "A")]])
    (temp_workdir / "data" / "bad.pdf").write_bytes(b"garbage")
    assert cli_main([]) == 2
    assert "SUMMARY files=2/2 success=1 failed=1" in capsys.readouterr().out


def test_exit_code_all_failed_is_partial(write_config, temp_workdir: Path, clean_logging, capsys):
    (temp_workdir / "data" / "bad.pdf").write_bytes(b"garbage")
    assert cli_main([]) == 2


def test_exit_code_fatal_unwritable_error_log(write_config, temp_workdir: Path, clean_logging, capsys):
    (temp_workdir / "data" / "bad.pdf").write_bytes(b"garbage")
    logs = temp_workdir / "logs"
    logs.rmdir()
    logs.write_text("", encoding="utf-8")
    assert cli_main([]) == 1
    assert "ERROR processing: cannot write error log" in capsys.readouterr().out
