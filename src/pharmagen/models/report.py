"""Report models.

The JSON shape produced by ``Report.model_dump(mode="json")`` is the public
contract consumed by downstream callers; field names must not change.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pharmagen.models.analysis import DetectedVariant
from pharmagen.models.knowledge import Phenotype, RiskLabel, Severity


class NarrativeBundle(BaseModel):
    """LLM-generated explanation for one drug.

    Empty strings and empty lists are normalized to ``None`` so that a
    missing bundle and a partially filled one take the same fallback path.
    """

    model_config = ConfigDict(extra="ignore")

    summary: str | None = None
    mechanism_explanation: str | None = None
    clinical_recommendation: str | None = None
    alternative_drugs: list[str] | None = None
    monitoring_parameters: list[str] | None = None
    cpic_guideline_reference: str | None = None

    @field_validator(
        "summary",
        "mechanism_explanation",
        "clinical_recommendation",
        "cpic_guideline_reference",
        mode="before",
    )
    @classmethod
    def blank_text_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("alternative_drugs", "monitoring_parameters", mode="before")
    @classmethod
    def empty_list_to_none(cls, v):
        if isinstance(v, list) and not v:
            return None
        return v


class RiskAssessment(BaseModel):
    risk_label: RiskLabel
    confidence_score: float = Field(..., ge=0.0, le=1.0)
    severity: Severity


class PharmacogenomicProfile(BaseModel):
    primary_gene: str
    diplotype: str
    phenotype: Phenotype
    phenotype_label: str
    detected_variants: list[DetectedVariant] = Field(default_factory=list)


class ClinicalRecommendation(BaseModel):
    recommendation: str
    alternative_drugs: list[str] = Field(default_factory=list)
    monitoring_parameters: list[str] = Field(default_factory=list)
    cpic_guideline: str


class LLMGeneratedExplanation(BaseModel):
    summary: str = ""
    mechanism_explanation: str = ""


class QualityMetrics(BaseModel):
    vcf_parsing_success: bool = True
    variants_detected: int = Field(..., description="Annotated variants parsed from the VCF")
    pharmacogenomic_variants_found: int = Field(..., description="Variants matched to the primary gene")


class Report(BaseModel):
    """Complete pharmacogenomic report for one patient and drug."""

    model_config = ConfigDict(frozen=True)

    patient_id: str
    drug: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    risk_assessment: RiskAssessment
    pharmacogenomic_profile: PharmacogenomicProfile
    clinical_recommendation: ClinicalRecommendation
    llm_generated_explanation: LLMGeneratedExplanation
    quality_metrics: QualityMetrics

    def to_report(self) -> str:
        """Simple report output."""
        profile = self.pharmacogenomic_profile
        risk = self.risk_assessment

        report = f"\nPatient: {self.patient_id} | Drug: {self.drug}\n"
        report += (
            f"Risk: {risk.risk_label.value} | Severity: {risk.severity.value} "
            f"| Confidence: {risk.confidence_score:.1%}\n"
        )
        report += (
            f"Gene: {profile.primary_gene} | Diplotype: {profile.diplotype} "
            f"| Phenotype: {profile.phenotype.value} ({profile.phenotype_label})\n"
        )

        if profile.detected_variants:
            variants = [
                f"{v.rsid} ({v.star_allele}, {v.effect.value.replace('_', ' ')})"
                for v in profile.detected_variants
            ]
            report += f"Variants: {', '.join(variants)}\n"

        if self.llm_generated_explanation.summary:
            report += f"\n{self.llm_generated_explanation.summary}\n"

        report += f"\nRecommendation: {self.clinical_recommendation.recommendation}\n"

        if self.clinical_recommendation.alternative_drugs:
            report += f"Alternatives: {', '.join(self.clinical_recommendation.alternative_drugs)}\n"
        if self.clinical_recommendation.monitoring_parameters:
            report += f"Monitoring: {', '.join(self.clinical_recommendation.monitoring_parameters)}\n"

        report += f"Guideline: {self.clinical_recommendation.cpic_guideline}\n"
        return report


class DrugError(BaseModel):
    """A requested drug that could not be analyzed."""

    drug: str
    error: str


class AnalysisBatch(BaseModel):
    """Reports and per-drug errors for one VCF file."""

    patient_id: str
    total_variants: int = 0
    reports: list[Report] = Field(default_factory=list)
    errors: list[DrugError] = Field(default_factory=list)
