"""Tests for report assembly."""

from datetime import datetime

import pytest

from pharmagen.analyzer import analyze_variants
from pharmagen.assembler import build_result_object, get_rule_based_recommendation
from pharmagen.constants import (
    DRUG_GENE_MAP,
    GENERIC_RECOMMENDATION,
    RULE_BASED_RECOMMENDATIONS,
)
from pharmagen.models.knowledge import RiskLabel
from pharmagen.models.report import NarrativeBundle


@pytest.fixture
def warfarin_toxic(make_record):
    """WARFARIN analysis for a CYP2C9 *3/*3 patient (score -1.0 → PM → Toxic)."""
    variants = [
        make_record(rsid="rs1057910", gene="CYP2C9", star="*3"),
        make_record(rsid="rs1057910", gene="CYP2C9", star="*3"),
    ]
    return analyze_variants(variants, "WARFARIN")


class TestRuleBasedRecommendation:
    """Tests for the fallback recommendation table."""

    def test_warfarin_toxic(self):
        assert get_rule_based_recommendation("WARFARIN", RiskLabel.TOXIC) == (
            "Significantly reduce warfarin dose (>50%). Intensive INR monitoring required. "
            "Consider direct oral anticoagulants."
        )

    def test_accepts_label_string(self):
        assert get_rule_based_recommendation("CODEINE", "Adjust Dosage") == (
            "Reduce codeine dose by 25–50%. Consider tramadol as an alternative."
        )

    def test_unknown_label_uses_generic(self):
        assert get_rule_based_recommendation("CODEINE", RiskLabel.UNKNOWN) == GENERIC_RECOMMENDATION
        assert get_rule_based_recommendation("CODEINE", "Bogus") == GENERIC_RECOMMENDATION

    def test_unknown_drug_uses_generic(self):
        assert get_rule_based_recommendation("ASPIRIN", RiskLabel.SAFE) == GENERIC_RECOMMENDATION

    def test_every_drug_has_every_actionable_label(self):
        labels = {RiskLabel.SAFE, RiskLabel.ADJUST_DOSAGE, RiskLabel.TOXIC, RiskLabel.INEFFECTIVE}
        assert set(RULE_BASED_RECOMMENDATIONS) == set(DRUG_GENE_MAP)
        for drug, table in RULE_BASED_RECOMMENDATIONS.items():
            assert set(table) == labels, drug


class TestBuildResultObject:
    """Tests for build_result_object."""

    def test_fallback_without_narrative(self, warfarin_toxic):
        assert warfarin_toxic.risk_label == RiskLabel.TOXIC

        report = build_result_object("PATIENT_1", "WARFARIN", warfarin_toxic, None, 2)

        assert report.clinical_recommendation.recommendation == (
            RULE_BASED_RECOMMENDATIONS["WARFARIN"][RiskLabel.TOXIC]
        )
        assert report.clinical_recommendation.alternative_drugs == []
        assert report.clinical_recommendation.monitoring_parameters == []
        assert report.clinical_recommendation.cpic_guideline == "Guideline reference for WARFARIN"
        assert report.llm_generated_explanation.summary == ""
        assert report.llm_generated_explanation.mechanism_explanation == ""

    def test_structured_fields(self, codeine_analysis):
        report = build_result_object("PATIENT_DEMO01", "CODEINE", codeine_analysis, None, 6)

        assert report.patient_id == "PATIENT_DEMO01"
        assert report.drug == "CODEINE"
        assert report.risk_assessment.risk_label == RiskLabel.ADJUST_DOSAGE
        assert report.risk_assessment.confidence_score == 0.85
        assert report.pharmacogenomic_profile.primary_gene == "CYP2D6"
        assert report.pharmacogenomic_profile.diplotype == "*4/*1"
        assert report.quality_metrics.vcf_parsing_success is True
        assert report.quality_metrics.variants_detected == 6
        assert report.quality_metrics.pharmacogenomic_variants_found == 1
        assert isinstance(report.timestamp, datetime)
        assert report.timestamp.tzinfo is not None

    def test_narrative_fields_used(self, codeine_analysis):
        narrative = NarrativeBundle(
            summary="Intermediate metabolizer.",
            mechanism_explanation="Less morphine formed.",
            clinical_recommendation="Use a lower dose.",
            alternative_drugs=["Morphine"],
            monitoring_parameters=["Pain score"],
            cpic_guideline_reference="CPIC CYP2D6 Opioids 2021",
        )
        report = build_result_object("P1", "CODEINE", codeine_analysis, narrative, 6)

        assert report.clinical_recommendation.recommendation == "Use a lower dose."
        assert report.clinical_recommendation.alternative_drugs == ["Morphine"]
        assert report.clinical_recommendation.monitoring_parameters == ["Pain score"]
        assert report.clinical_recommendation.cpic_guideline == "CPIC CYP2D6 Opioids 2021"
        assert report.llm_generated_explanation.summary == "Intermediate metabolizer."

    def test_partial_narrative_uses_per_field_fallback(self, codeine_analysis):
        narrative = {"summary": "Only a summary.", "clinical_recommendation": "   "}
        report = build_result_object("P1", "CODEINE", codeine_analysis, narrative, 6)

        assert report.llm_generated_explanation.summary == "Only a summary."
        assert report.llm_generated_explanation.mechanism_explanation == ""
        assert report.clinical_recommendation.recommendation == (
            RULE_BASED_RECOMMENDATIONS["CODEINE"][RiskLabel.ADJUST_DOSAGE]
        )
        assert report.clinical_recommendation.cpic_guideline == "Guideline reference for CODEINE"

    def test_malformed_narrative_dict_treated_as_absent(self, codeine_analysis):
        narrative = {"summary": "ok", "alternative_drugs": "not-a-list"}
        report = build_result_object("P1", "CODEINE", codeine_analysis, narrative, 6)

        assert report.llm_generated_explanation.summary == ""
        assert report.clinical_recommendation.alternative_drugs == []

    def test_json_schema_keys(self, codeine_analysis):
        data = build_result_object("P1", "CODEINE", codeine_analysis, None, 6).model_dump(mode="json")

        assert set(data) == {
            "patient_id",
            "drug",
            "timestamp",
            "risk_assessment",
            "pharmacogenomic_profile",
            "clinical_recommendation",
            "llm_generated_explanation",
            "quality_metrics",
        }
        assert set(data["risk_assessment"]) == {"risk_label", "confidence_score", "severity"}
        assert set(data["pharmacogenomic_profile"]) == {
            "primary_gene", "diplotype", "phenotype", "phenotype_label", "detected_variants",
        }
        assert set(data["clinical_recommendation"]) == {
            "recommendation", "alternative_drugs", "monitoring_parameters", "cpic_guideline",
        }
        assert set(data["llm_generated_explanation"]) == {"summary", "mechanism_explanation"}
        assert set(data["quality_metrics"]) == {
            "vcf_parsing_success", "variants_detected", "pharmacogenomic_variants_found",
        }
        assert set(data["pharmacogenomic_profile"]["detected_variants"][0]) == {
            "rsid", "gene", "star_allele", "effect", "chromosome", "position", "reference", "alternate",
        }
        assert data["risk_assessment"]["risk_label"] == "Adjust Dosage"
        assert data["pharmacogenomic_profile"]["phenotype"] == "IM"
        assert data["pharmacogenomic_profile"]["detected_variants"][0]["effect"] == "loss_of_function"
        assert isinstance(data["timestamp"], str)

    def test_to_report(self, codeine_analysis):
        text = build_result_object("P1", "CODEINE", codeine_analysis, None, 6).to_report()
        assert "Drug: CODEINE" in text
        assert "Diplotype: *4/*1" in text
        assert "rs3892097 (*4, loss of function)" in text
        assert "Guideline reference for CODEINE" in text
