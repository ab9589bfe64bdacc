"""Data models for PharmaGen."""

from pharmagen.models.analysis import DetectedVariant, DrugAnalysis
from pharmagen.models.knowledge import (
    DrugInfo,
    KnownVariant,
    Phenotype,
    RiskLabel,
    Severity,
    VariantEffect,
)
from pharmagen.models.report import (
    AnalysisBatch,
    ClinicalRecommendation,
    DrugError,
    LLMGeneratedExplanation,
    NarrativeBundle,
    PharmacogenomicProfile,
    QualityMetrics,
    Report,
    RiskAssessment,
)
from pharmagen.models.variant import (
    ParsedVCF,
    ValidationFailure,
    VariantRecord,
    VCFMetadata,
    VCFValidationResult,
)

__all__ = [
    "Phenotype",
    "VariantEffect",
    "RiskLabel",
    "Severity",
    "KnownVariant",
    "DrugInfo",
    "VariantRecord",
    "VCFMetadata",
    "ParsedVCF",
    "ValidationFailure",
    "VCFValidationResult",
    "DetectedVariant",
    "DrugAnalysis",
    "NarrativeBundle",
    "RiskAssessment",
    "PharmacogenomicProfile",
    "ClinicalRecommendation",
    "LLMGeneratedExplanation",
    "QualityMetrics",
    "Report",
    "DrugError",
    "AnalysisBatch",
]
