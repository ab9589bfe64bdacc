"""Tests for the orchestration engine."""

import pytest
from unittest.mock import AsyncMock, patch

from pharmagen.constants import RULE_BASED_RECOMMENDATIONS
from pharmagen.engine import PharmacogenomicsEngine, VCFValidationError, parse_drug_list
from pharmagen.models.knowledge import RiskLabel
from pharmagen.models.variant import ValidationFailure


class TestParseDrugList:
    def test_comma_separated(self):
        assert parse_drug_list(" codeine, Warfarin,,  ") == ["CODEINE", "WARFARIN"]

    def test_list_input(self):
        assert parse_drug_list(["clopidogrel", " "]) == ["CLOPIDOGREL"]


class TestPharmacogenomicsEngine:
    """Tests for PharmacogenomicsEngine."""

    @pytest.mark.asyncio
    async def test_analyze_without_llm(self, sample_vcf):
        engine = PharmacogenomicsEngine(enable_llm=False)
        batch = await engine.analyze(sample_vcf, "CODEINE, WARFARIN")

        assert batch.patient_id == "PATIENT_DEMO01"
        assert batch.total_variants == 6
        assert [r.drug for r in batch.reports] == ["CODEINE", "WARFARIN"]
        assert batch.errors == []

        codeine = batch.reports[0]
        assert codeine.pharmacogenomic_profile.diplotype == "*4/*1"
        assert codeine.risk_assessment.risk_label == RiskLabel.ADJUST_DOSAGE
        assert codeine.llm_generated_explanation.summary == ""

    @pytest.mark.asyncio
    async def test_single_narrative_call_per_batch(self, sample_vcf, mock_llm_response, mock_completion):
        engine = PharmacogenomicsEngine(enable_logging=False)

        with patch("pharmagen.llm.service.acompletion", new_callable=AsyncMock) as mock_call:
            mock_call.return_value = mock_completion(mock_llm_response)

            batch = await engine.analyze(sample_vcf, "CODEINE, WARFARIN, CLOPIDOGREL")

            mock_call.assert_called_once()

        codeine, warfarin, clopidogrel = batch.reports
        assert codeine.clinical_recommendation.recommendation.startswith("Use codeine with caution")
        assert codeine.clinical_recommendation.alternative_drugs == ["Morphine", "Hydromorphone"]
        # Empty recommendation in the bundle falls back to the rule table
        assert warfarin.clinical_recommendation.recommendation == (
            RULE_BASED_RECOMMENDATIONS["WARFARIN"][warfarin.risk_assessment.risk_label]
        )
        assert warfarin.clinical_recommendation.monitoring_parameters == ["INR"]
        # No bundle for this drug at all
        assert clopidogrel.llm_generated_explanation.summary == ""
        assert clopidogrel.clinical_recommendation.cpic_guideline == "Guideline reference for CLOPIDOGREL"

    @pytest.mark.asyncio
    async def test_llm_failure_falls_back_for_every_drug(self, sample_vcf):
        engine = PharmacogenomicsEngine(enable_logging=False)

        with patch("pharmagen.llm.service.acompletion", new_callable=AsyncMock) as mock_call:
            mock_call.side_effect = ConnectionError("network down")

            batch = await engine.analyze(sample_vcf, "CODEINE, WARFARIN")

        assert len(batch.reports) == 2
        for report in batch.reports:
            assert report.llm_generated_explanation.summary == ""
            assert report.clinical_recommendation.recommendation == (
                RULE_BASED_RECOMMENDATIONS[report.drug][report.risk_assessment.risk_label]
            )

    @pytest.mark.asyncio
    async def test_unsupported_drug_does_not_abort_batch(self, sample_vcf):
        engine = PharmacogenomicsEngine(enable_llm=False)
        batch = await engine.analyze(sample_vcf, "ASPIRIN, codeine")

        assert [r.drug for r in batch.reports] == ["CODEINE"]
        assert len(batch.errors) == 1
        assert batch.errors[0].drug == "ASPIRIN"
        assert batch.errors[0].error.startswith('"ASPIRIN" is not supported. Supported drugs: CODEINE, WARFARIN')

    @pytest.mark.asyncio
    async def test_only_unsupported_drugs_skips_llm(self, sample_vcf):
        engine = PharmacogenomicsEngine(enable_logging=False)

        with patch("pharmagen.llm.service.acompletion", new_callable=AsyncMock) as mock_call:
            batch = await engine.analyze(sample_vcf, "ASPIRIN")
            mock_call.assert_not_called()

        assert batch.reports == []
        assert len(batch.errors) == 1

    @pytest.mark.asyncio
    async def test_validation_failure_raises(self):
        engine = PharmacogenomicsEngine(enable_llm=False)
        text = "##fileformat=VCFv4.2\n#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"

        with pytest.raises(VCFValidationError) as exc_info:
            await engine.analyze(text, "CODEINE")

        assert exc_info.value.reason == ValidationFailure.NO_RECORDS

    @pytest.mark.asyncio
    async def test_no_drugs_raises(self, sample_vcf):
        engine = PharmacogenomicsEngine(enable_llm=False)
        with pytest.raises(ValueError):
            await engine.analyze(sample_vcf, " , ")

    @pytest.mark.asyncio
    async def test_batch_analyze_drops_failed_jobs(self, sample_vcf):
        engine = PharmacogenomicsEngine(enable_llm=False)
        batches = await engine.batch_analyze([
            (sample_vcf, "CODEINE"),
            ("", "CODEINE"),
            (sample_vcf, ["TPMT_DRUG", "AZATHIOPRINE"]),
        ])

        assert len(batches) == 2
        assert batches[0].reports[0].drug == "CODEINE"
        assert batches[1].reports[0].drug == "AZATHIOPRINE"
        assert batches[1].errors[0].drug == "TPMT_DRUG"
