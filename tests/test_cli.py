"""Tests for the command-line interface using CliRunner."""

import json

import pytest
from typer.testing import CliRunner

from pharmagen.cli import app

runner = CliRunner()


@pytest.fixture
def vcf_path(tmp_path, sample_vcf):
    path = tmp_path / "sample_patient.vcf"
    path.write_text(sample_vcf)
    return path


class TestCLI:
    def test_analyze_no_llm(self, vcf_path, tmp_path):
        output = tmp_path / "out.json"
        result = runner.invoke(
            app, ["analyze", str(vcf_path), "--drugs", "codeine,aspirin", "--no-llm", "-o", str(output)]
        )

        assert result.exit_code == 0
        assert "Drug: CODEINE" in result.output
        assert '"ASPIRIN" is not supported' in result.output

        data = json.loads(output.read_text())
        assert data[0]["drug"] == "CODEINE"
        assert data[0]["pharmacogenomic_profile"]["diplotype"] == "*4/*1"
        assert data[1]["drug"] == "ASPIRIN"

    def test_analyze_invalid_vcf(self, tmp_path):
        path = tmp_path / "bad.vcf"
        path.write_text("not a vcf\n")
        result = runner.invoke(app, ["analyze", str(path), "--drugs", "CODEINE", "--no-llm"])

        assert result.exit_code == 1
        assert "missing_header" in result.output

    def test_analyze_missing_file(self, tmp_path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "nope.vcf"), "--drugs", "CODEINE"])
        assert result.exit_code == 1

    def test_validate(self, vcf_path):
        result = runner.invoke(app, ["validate", str(vcf_path)])
        assert result.exit_code == 0
        assert "is a valid VCF file" in result.output

    def test_validate_no_records(self, tmp_path):
        path = tmp_path / "empty.vcf"
        path.write_text("##fileformat=VCFv4.2\n#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n")
        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "no_records" in result.output

    def test_batch(self, vcf_path, tmp_path):
        output = tmp_path / "results.json"
        result = runner.invoke(
            app, ["batch", str(vcf_path), str(vcf_path), "--drugs", "CODEINE", "--no-llm", "-o", str(output)]
        )

        assert result.exit_code == 0
        assert "Successfully analyzed 2/2 files" in result.output
        data = json.loads(output.read_text())
        assert len(data) == 2
        assert data[0]["patient_id"] == "PATIENT_DEMO01"

    def test_drugs(self):
        result = runner.invoke(app, ["drugs"])
        assert result.exit_code == 0
        assert "CAPECITABINE" in result.output
        assert "DPYD" in result.output

    def test_sample(self, tmp_path):
        output = tmp_path / "demo.vcf"
        result = runner.invoke(app, ["sample", "-o", str(output)])
        assert result.exit_code == 0
        assert output.read_text().startswith("##fileformat=VCFv4.2")

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "PharmaGen version" in result.output
