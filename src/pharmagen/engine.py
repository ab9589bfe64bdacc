"""Core analysis engine combining the rule pipeline and the narrative service.

ARCHITECTURE:
    VCF text → validate_vcf → parse_vcf → analyze_variants (per drug) → NarrativeService (one batch call) → build_result_object → AnalysisBatch

Key Design:
- All local parsing and analysis completes before the single narrative request
- One narrative request per patient covers every supported drug
- Unsupported drugs become DrugError entries; the rest of the batch continues
- Narrative failure means rule-based text for every drug, never a partial mix
- Stateless with no shared state; batch_analyze runs patients concurrently
"""

import asyncio
import logging

from pharmagen.analyzer import analyze_variants
from pharmagen.assembler import build_result_object
from pharmagen.constants import supported_drugs
from pharmagen.llm.service import NarrativeService
from pharmagen.models.analysis import DrugAnalysis
from pharmagen.models.report import AnalysisBatch, DrugError
from pharmagen.models.variant import ValidationFailure
from pharmagen.parser import parse_vcf, validate_vcf

logger = logging.getLogger(__name__)


class VCFValidationError(ValueError):
    """Raised when VCF text fails pre-flight validation."""

    def __init__(self, reason: ValidationFailure, message: str) -> None:
        super().__init__(message)
        self.reason = reason


def parse_drug_list(drugs: str | list[str]) -> list[str]:
    """Normalize drug input to a list of uppercase names.

    Accepts a comma-separated string or a list; blank entries are dropped.
    """
    items = drugs.split(",") if isinstance(drugs, str) else drugs
    return [d.strip().upper() for d in items if d and d.strip()]


def unsupported_drug_message(drug: str) -> str:
    return f'"{drug}" is not supported. Supported drugs: {", ".join(supported_drugs())}.'


class PharmacogenomicsEngine:
    """
    Engine for pharmacogenomic analysis.

    The rule pipeline is synchronous and pure; only the optional narrative
    request awaits I/O.
    """

    def __init__(
        self,
        llm_model: str = "gpt-4o-mini",
        llm_temperature: float = 0.2,
        enable_llm: bool = True,
        enable_logging: bool = True,
    ):
        self.enable_llm = enable_llm
        self.narrative_service = (
            NarrativeService(model=llm_model, temperature=llm_temperature, enable_logging=enable_logging)
            if enable_llm
            else None
        )

    async def analyze(self, vcf_text: str, drugs: str | list[str]) -> AnalysisBatch:
        """Analyze one VCF file against the requested drugs.

        Raises:
            VCFValidationError: If the VCF text fails pre-flight validation
            ValueError: If no drugs were requested
        """
        drug_list = parse_drug_list(drugs)
        if not drug_list:
            raise ValueError("Please select or enter at least one drug to analyze.")

        validation = validate_vcf(vcf_text)
        if not validation.valid:
            raise VCFValidationError(validation.reason, validation.error)

        parsed = parse_vcf(vcf_text)
        total_variants = len(parsed.variants)

        # Step 1: local rule-based analysis for every requested drug
        analyses: list[tuple[str, DrugAnalysis]] = []
        errors: list[DrugError] = []
        for drug in drug_list:
            analysis = analyze_variants(parsed.variants, drug)
            if analysis is None:
                logger.warning(f"Unsupported drug requested: {drug}")
                errors.append(DrugError(drug=drug, error=unsupported_drug_message(drug)))
                continue
            analyses.append((drug, analysis))

        # Step 2: one narrative request for all supported drugs
        narratives = None
        if analyses and self.narrative_service:
            narratives = await self.narrative_service.generate_batch(parsed.patient_id, analyses)

        # Step 3: assemble reports against the shared batch response
        reports = [
            build_result_object(
                parsed.patient_id,
                drug,
                analysis,
                narratives.get(drug) if narratives else None,
                total_variants,
            )
            for drug, analysis in analyses
        ]

        return AnalysisBatch(
            patient_id=parsed.patient_id,
            total_variants=total_variants,
            reports=reports,
            errors=errors,
        )

    async def batch_analyze(
        self, jobs: list[tuple[str, str | list[str]]]
    ) -> list[AnalysisBatch]:
        """
        Analyze multiple VCF files concurrently.

        Each job is (vcf_text, drugs). Failed jobs are logged and dropped.
        """
        tasks = [self.analyze(vcf_text, drugs) for vcf_text, drugs in jobs]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        batches = []
        for idx, result in enumerate(results):
            if isinstance(result, Exception):
                logger.warning(f"Job {idx} failed: {result}")
                continue
            batches.append(result)
        return batches
