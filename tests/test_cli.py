"""Tests for the command-line interface."""

from pathlib import Path

import pytest
from click.testing import CliRunner
from openpyxl import load_workbook

from weighticket.config.schema import AppConfig
from weighticket.generator.cli import main
from weighticket.storage.config_store import save_config
from weighticket.storage.file_registry import FileRegistry


@pytest.fixture
def data_dir(tmp_path, fixed_driver, varied_driver):
    save_config(AppConfig(drivers=[fixed_driver, varied_driver]), tmp_path / "config.json")
    return tmp_path


def _generate(data_dir: Path, *extra: str):
    return CliRunner().invoke(main, [
        "--data-dir", str(data_dir), "generate",
        "--start", "2025-03-03", "--end", "2025-03-08",
        "--last-ticket", "52310", "--last-ticket-date", "2025-02-28",
        "--seed", "7", *extra,
    ])


class TestGenerateCommand:
    def test_excel(self, data_dir):
        result = _generate(data_dir)
        assert result.exit_code == 0, result.output

        path = Path(result.output.strip().splitlines()[-1])
        assert path.suffix == ".xlsx"
        assert path.parent == data_dir / "output"

        ws = load_workbook(path).active
        # 6 weekdays x (2 + 3) tickets below title + blank + header rows
        assert ws.max_row == 3 + 6 * 5

        entries = FileRegistry(data_dir / "files.db").list_all()
        assert [e.kind for e in entries] == ["excel"]

    @pytest.mark.parametrize("fmt,suffix", [
        ("txt", ".txt"), ("zip", ".zip"), ("parquet", ".parquet"),
    ])
    def test_other_formats(self, data_dir, fmt, suffix):
        result = _generate(data_dir, "--format", fmt)
        assert result.exit_code == 0, result.output
        assert Path(result.output.strip().splitlines()[-1]).suffix == suffix

    def test_validate_prints_report(self, data_dir):
        result = _generate(data_dir, "--validate", "--format", "txt")
        assert result.exit_code == 0, result.output
        assert "Checks: 5 passed, 0 failed" in result.output

    def test_seed_reproducible(self, data_dir, tmp_path):
        a = _generate(data_dir, "--format", "txt")
        b = _generate(data_dir, "--format", "txt")
        text_a = Path(a.output.strip().splitlines()[-1]).read_text()
        text_b = Path(b.output.strip().splitlines()[-1]).read_text()
        assert text_a == text_b

    def test_no_active_drivers(self, tmp_path, fixed_driver):
        from dataclasses import replace

        save_config(
            AppConfig(drivers=[replace(fixed_driver, active=False)]), tmp_path / "config.json",
        )
        result = _generate(tmp_path)
        assert result.exit_code == 1
        assert "No active drivers" in result.output

    def test_no_drivers_configured(self, tmp_path):
        result = _generate(tmp_path)
        assert result.exit_code == 1
        assert "drivers must not be empty" in result.output

    def test_bad_date(self, data_dir):
        result = CliRunner().invoke(main, [
            "--data-dir", str(data_dir), "generate",
            "--start", "03/03/2025", "--end", "2025-03-08",
            "--last-ticket", "1", "--last-ticket-date", "2025-02-28",
        ])
        assert result.exit_code == 1
        assert "startDate" in result.output


class TestOtherCommands:
    def test_to_txt(self, data_dir):
        generated = _generate(data_dir)
        report = generated.output.strip().splitlines()[-1]

        result = CliRunner().invoke(main, ["--data-dir", str(data_dir), "to-txt", report])
        assert result.exit_code == 0, result.output
        text = Path(result.output.strip().splitlines()[-1]).read_text()
        assert text.count("BASCULA PUBLICA COYULA") == 30

    def test_to_txt_zip(self, data_dir):
        report = _generate(data_dir).output.strip().splitlines()[-1]
        result = CliRunner().invoke(
            main, ["--data-dir", str(data_dir), "to-txt", report, "--zip"],
        )
        assert result.exit_code == 0, result.output
        assert result.output.strip().endswith(".zip")

    def test_files_listing_and_delete(self, data_dir):
        _generate(data_dir)
        _generate(data_dir, "--format", "zip")

        listing = CliRunner().invoke(main, ["--data-dir", str(data_dir), "files"])
        assert listing.exit_code == 0
        assert "excel" in listing.output and "zip" in listing.output

        only_zip = CliRunner().invoke(
            main, ["--data-dir", str(data_dir), "files", "--kind", "zip"],
        )
        assert "excel" not in only_zip.output

        entry = FileRegistry(data_dir / "files.db").list_by_kind("zip")[0]
        deleted = CliRunner().invoke(
            main, ["--data-dir", str(data_dir), "files-delete", str(entry.id), "--remove-file"],
        )
        assert deleted.exit_code == 0
        assert not Path(entry.path).exists()

    def test_delete_missing(self, data_dir):
        result = CliRunner().invoke(main, ["--data-dir", str(data_dir), "files-delete", "42"])
        assert result.exit_code == 1
        assert "not found" in result.output
