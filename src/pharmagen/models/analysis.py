"""Per-drug analysis models."""

from pydantic import BaseModel, ConfigDict, Field

from pharmagen.models.knowledge import Phenotype, RiskLabel, Severity, VariantEffect


class DetectedVariant(BaseModel):
    """A variant that matched the gene under analysis."""

    model_config = ConfigDict(frozen=True)

    rsid: str
    gene: str
    star_allele: str
    effect: VariantEffect
    chromosome: str
    position: str
    reference: str
    alternate: str


class DrugAnalysis(BaseModel):
    """Rule-based pharmacogenomic analysis for one drug."""

    model_config = ConfigDict(frozen=True)

    gene: str = Field(..., description="Primary pharmacogene for the drug")
    mechanism: str
    diplotype: str = Field(..., description="Star allele pair (e.g., *4/*1)")
    phenotype: Phenotype
    phenotype_label: str
    risk_label: RiskLabel
    severity: Severity
    confidence: float = Field(..., ge=0.0, le=1.0)
    activity_score: float = Field(..., description="Accumulated activity score")
    detected_variants: list[DetectedVariant] = Field(default_factory=list)
