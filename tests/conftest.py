"""Pytest configuration and fixtures."""

import pytest


@pytest.fixture
def sample_vcf():
    """Demonstration VCF with one annotated variant per gene."""
    from pharmagen.constants import SAMPLE_VCF

    return SAMPLE_VCF


@pytest.fixture
def parsed_sample(sample_vcf):
    """Parsed demonstration VCF."""
    from pharmagen.parser import parse_vcf

    return parse_vcf(sample_vcf)


@pytest.fixture
def make_record():
    """Factory for VariantRecord objects."""
    from pharmagen.models.variant import VariantRecord

    def _make(rsid=None, gene=None, star=None, chrom="chr22", pos="42522613"):
        return VariantRecord(
            chrom=chrom,
            pos=pos,
            rsid=rsid,
            ref="C",
            alt="T",
            qual="100",
            filter="PASS",
            gene=gene,
            star=star,
        )

    return _make


@pytest.fixture
def codeine_analysis(parsed_sample):
    """CODEINE analysis of the demonstration VCF."""
    from pharmagen.analyzer import analyze_variants

    return analyze_variants(parsed_sample.variants, "CODEINE")


@pytest.fixture
def mock_llm_response():
    """Mock LLM batch response for testing."""
    return """{
        "CODEINE": {
            "summary": "The patient carries one non-functional CYP2D6*4 allele and is an intermediate metabolizer.",
            "mechanism_explanation": "CYP2D6 O-demethylates codeine to morphine; reduced activity lowers morphine formation.",
            "clinical_recommendation": "Use codeine with caution at the lowest effective dose or choose a non-CYP2D6 analgesic.",
            "alternative_drugs": ["Morphine", "Hydromorphone"],
            "monitoring_parameters": ["Pain control", "Respiratory rate"],
            "cpic_guideline_reference": "CPIC Guideline for CYP2D6 and Opioid Therapy (2021)"
        },
        "WARFARIN": {
            "summary": "CYP2C9*2 reduces S-warfarin clearance.",
            "mechanism_explanation": "CYP2C9 metabolizes S-warfarin.",
            "clinical_recommendation": "",
            "alternative_drugs": [],
            "monitoring_parameters": ["INR"],
            "cpic_guideline_reference": "CPIC Guideline for Warfarin (2017)"
        }
    }"""


@pytest.fixture
def mock_completion():
    """Build a litellm-style response object around raw content."""
    from unittest.mock import MagicMock

    def _make(content):
        response = MagicMock()
        response.choices = [MagicMock()]
        response.choices[0].message.content = content
        return response

    return _make
