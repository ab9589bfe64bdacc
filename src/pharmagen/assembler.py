"""Report assembly: merges rule-based analysis with an optional narrative."""

import logging
from typing import Any

from pydantic import ValidationError

from pharmagen.constants import GENERIC_RECOMMENDATION, RULE_BASED_RECOMMENDATIONS
from pharmagen.models.analysis import DrugAnalysis
from pharmagen.models.knowledge import RiskLabel
from pharmagen.models.report import (
    ClinicalRecommendation,
    LLMGeneratedExplanation,
    NarrativeBundle,
    PharmacogenomicProfile,
    QualityMetrics,
    Report,
    RiskAssessment,
)

logger = logging.getLogger(__name__)


def get_rule_based_recommendation(drug: str, risk_label: RiskLabel | str) -> str:
    """Clinical recommendation used when no narrative text is available."""
    try:
        label = RiskLabel(risk_label)
    except ValueError:
        return GENERIC_RECOMMENDATION
    return RULE_BASED_RECOMMENDATIONS.get(drug, {}).get(label, GENERIC_RECOMMENDATION)


def default_guideline_reference(drug: str) -> str:
    return f"Guideline reference for {drug}"


def _coerce_narrative(narrative: NarrativeBundle | dict[str, Any] | None) -> NarrativeBundle:
    if isinstance(narrative, NarrativeBundle):
        return narrative
    if isinstance(narrative, dict):
        try:
            return NarrativeBundle.model_validate(narrative)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed narrative bundle: {e.error_count()} errors")
    return NarrativeBundle()


def build_result_object(
    patient_id: str,
    drug: str,
    analysis: DrugAnalysis,
    narrative: NarrativeBundle | dict[str, Any] | None,
    total_variants: int,
) -> Report:
    """Assemble the final report for one drug.

    Every field is always present: any narrative field that is missing or
    empty falls back to rule-based text, an empty list or an empty string.
    """
    bundle = _coerce_narrative(narrative)

    return Report(
        patient_id=patient_id,
        drug=drug,
        risk_assessment=RiskAssessment(
            risk_label=analysis.risk_label,
            confidence_score=analysis.confidence,
            severity=analysis.severity,
        ),
        pharmacogenomic_profile=PharmacogenomicProfile(
            primary_gene=analysis.gene,
            diplotype=analysis.diplotype,
            phenotype=analysis.phenotype,
            phenotype_label=analysis.phenotype_label,
            detected_variants=analysis.detected_variants,
        ),
        clinical_recommendation=ClinicalRecommendation(
            recommendation=bundle.clinical_recommendation
            or get_rule_based_recommendation(drug, analysis.risk_label),
            alternative_drugs=bundle.alternative_drugs or [],
            monitoring_parameters=bundle.monitoring_parameters or [],
            cpic_guideline=bundle.cpic_guideline_reference or default_guideline_reference(drug),
        ),
        llm_generated_explanation=LLMGeneratedExplanation(
            summary=bundle.summary or "",
            mechanism_explanation=bundle.mechanism_explanation or "",
        ),
        quality_metrics=QualityMetrics(
            vcf_parsing_success=True,
            variants_detected=total_variants,
            pharmacogenomic_variants_found=len(analysis.detected_variants),
        ),
    )
