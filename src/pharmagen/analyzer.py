"""Rule-based pharmacogenomic analysis.

ARCHITECTURE:
    VariantRecords + drug → gene lookup → activity score → phenotype → risk label → DrugAnalysis

Activity score logic (adapted from CPIC guidelines):
    Baseline 1.0 represents two functional alleles. Each known variant for the
    drug's primary gene adds its phenotype_impact.

    >= 2.0  → URM (Ultrarapid Metabolizer)
    >= 1.5  → RM  (Rapid Metabolizer)
    >= 0.5  → NM  (Normal Metabolizer)
    >  -0.5 → IM  (Intermediate Metabolizer)
    else    → PM  (Poor Metabolizer)

Key Design:
- Pure and deterministic: no I/O, no shared state
- No detected variants means wild-type (NM, *1/*1), whatever the score
- Unsupported drugs return None so a batch can continue
"""

from collections.abc import Iterable, Sequence

from pharmagen.constants import (
    CONFIDENCE_MAP,
    DEFAULT_CONFIDENCE,
    DEFAULT_SEVERITY,
    DRUG_GENE_MAP,
    DRUG_PHENOTYPE_RISKS,
    KNOWN_VARIANTS,
    PHENOTYPE_LABELS,
    SEVERITY_MAP,
)
from pharmagen.models.analysis import DetectedVariant, DrugAnalysis
from pharmagen.models.knowledge import Phenotype, RiskLabel, VariantEffect
from pharmagen.models.variant import VariantRecord

BASELINE_ACTIVITY_SCORE = 1.0
WILD_TYPE_ALLELE = "*1"

# Highest threshold first; first match wins
PHENOTYPE_THRESHOLDS: list[tuple[float, Phenotype]] = [
    (2.0, Phenotype.URM),
    (1.5, Phenotype.RM),
    (0.5, Phenotype.NM),
]
INTERMEDIATE_LOWER_BOUND = -0.5


def score_to_phenotype(score: float) -> Phenotype:
    """Convert an activity score to a phenotype code."""
    for threshold, phenotype in PHENOTYPE_THRESHOLDS:
        if score >= threshold:
            return phenotype
    if score > INTERMEDIATE_LOWER_BOUND:
        return Phenotype.IM
    return Phenotype.PM


def build_diplotype(detected_variants: Iterable[DetectedVariant]) -> str:
    """Build a diplotype string from detected star alleles.

    Only the first two alleles are used; missing alleles are wild-type (*1).
    """
    stars = [v.star_allele for v in detected_variants if v.star_allele]
    if not stars:
        return f"{WILD_TYPE_ALLELE}/{WILD_TYPE_ALLELE}"
    if len(stars) == 1:
        return f"{stars[0]}/{WILD_TYPE_ALLELE}"
    return f"{stars[0]}/{stars[1]}"


def resolve_risk_label(drug: str, phenotype: Phenotype) -> RiskLabel:
    return DRUG_PHENOTYPE_RISKS.get(drug, {}).get(phenotype, RiskLabel.UNKNOWN)


def analyze_variants(variants: Sequence[VariantRecord], drug: str) -> DrugAnalysis | None:
    """Analyze parsed variants for one drug.

    Args:
        variants: Parsed VCF records in file order
        drug: Uppercase drug name (e.g., 'WARFARIN')

    Returns:
        DrugAnalysis, or None if the drug is not supported
    """
    drug_info = DRUG_GENE_MAP.get(drug)
    if drug_info is None:
        return None

    gene = drug_info.gene
    detected: list[DetectedVariant] = []
    activity_score = BASELINE_ACTIVITY_SCORE

    for v in variants:
        known = KNOWN_VARIANTS.get(v.rsid) if v.rsid else None
        matches_gene = (known is not None and known.gene == gene) or v.gene == gene

        if known is not None and matches_gene:
            detected.append(DetectedVariant(
                rsid=v.rsid,
                gene=known.gene,
                star_allele=known.star or v.star or "unknown",
                effect=known.effect,
                chromosome=v.chrom,
                position=v.pos,
                reference=v.ref,
                alternate=v.alt,
            ))
            activity_score += known.phenotype_impact
        elif matches_gene and v.star:
            # Gene matches but the allele is not curated: show it, don't score it
            detected.append(DetectedVariant(
                rsid=v.rsid or "unknown",
                gene=v.gene or gene,
                star_allele=v.star,
                effect=VariantEffect.UNKNOWN,
                chromosome=v.chrom,
                position=v.pos,
                reference=v.ref,
                alternate=v.alt,
            ))

    phenotype = score_to_phenotype(activity_score) if detected else Phenotype.NM
    risk_label = resolve_risk_label(drug, phenotype)

    return DrugAnalysis(
        gene=gene,
        mechanism=drug_info.mechanism,
        diplotype=build_diplotype(detected),
        phenotype=phenotype,
        phenotype_label=PHENOTYPE_LABELS.get(phenotype, phenotype.value),
        risk_label=risk_label,
        severity=SEVERITY_MAP.get(risk_label, DEFAULT_SEVERITY),
        confidence=CONFIDENCE_MAP.get(risk_label, DEFAULT_CONFIDENCE),
        activity_score=activity_score,
        detected_variants=detected,
    )
