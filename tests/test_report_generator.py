"""Tests for ReportGenerator orchestration."""

import zipfile

import numpy as np
import pandas as pd
import pytest

from weighticket.generator.report_generator import OUTPUT_FORMATS, ReportGenerator
from weighticket.storage.file_registry import FileRegistry


@pytest.fixture
def generator(tmp_path):
    return ReportGenerator(tmp_path / "out", FileRegistry(tmp_path / "files.db"))


class TestReportGenerator:
    @pytest.mark.parametrize("fmt,kind", [
        ("xlsx", "excel"), ("txt", "txt"), ("zip", "zip"), ("parquet", "parquet"),
    ])
    def test_generate_registers_file(self, generator, fixed_params, fixed_driver, fmt, kind):
        path = generator.generate(fmt, fixed_params, [fixed_driver], np.random.default_rng(1))
        assert path.exists()
        assert path.parent == generator.output_dir

        entries = generator.registry.list_all()
        assert [(e.kind, e.name) for e in entries] == [(kind, path.name)]

    def test_formats_share_records(self, generator, fixed_params, fixed_driver, rng):
        records = generator.generate_records(fixed_params, [fixed_driver], rng)

        frame = pd.read_parquet(generator.render("parquet", records, fixed_params))
        assert frame["ticket_number"].tolist() == [r.ticket_number for r in records]

        with zipfile.ZipFile(generator.render("zip", records, fixed_params)) as zf:
            assert len(zf.namelist()) == len(records)

    def test_unknown_format(self, generator, fixed_params, fixed_driver, rng):
        records = generator.generate_records(fixed_params, [fixed_driver], rng)
        with pytest.raises(ValueError, match="Unknown output format"):
            generator.render("csv", records, fixed_params)

    def test_without_registry(self, tmp_path, fixed_params, fixed_driver, rng):
        gen = ReportGenerator(tmp_path)
        path = gen.generate("txt", fixed_params, [fixed_driver], rng)
        assert path.read_text(encoding="utf-8").count("TKT A") == 4

    def test_convert_excel(self, generator, fixed_params, fixed_driver, rng):
        xlsx = generator.generate("xlsx", fixed_params, [fixed_driver], rng)
        txt = generator.convert_excel(xlsx.read_bytes())
        assert "TKT A    1048" in txt.read_text(encoding="utf-8")
        assert [e.kind for e in generator.registry.list_all()] == ["txt", "excel"]

    def test_output_formats(self):
        assert OUTPUT_FORMATS == ("xlsx", "txt", "zip", "parquet")
