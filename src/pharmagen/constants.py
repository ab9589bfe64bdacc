"""Centralized knowledge base for PharmaGen.

This module consolidates the curated pharmacogenomic reference data:
- Known variants (rsID → gene, star allele, effect, activity impact)
- Supported drugs and their primary pharmacogenes
- Drug × phenotype risk labels (CPIC-derived)
- Severity, confidence and phenotype display mappings
- Rule-based clinical recommendations used when no narrative is available

All tables are built once at import time and never written afterwards.
"""

from pharmagen.models.knowledge import (
    DrugInfo,
    KnownVariant,
    Phenotype,
    RiskLabel,
    Severity,
    VariantEffect,
)

_Effect = VariantEffect
_Risk = RiskLabel
_P = Phenotype


# =============================================================================
# KNOWN VARIANTS
# =============================================================================
# Curated variants covering CYP2D6, CYP2C19, CYP2C9, SLCO1B1, TPMT, DPYD.
# phenotype_impact is added to the 1.0 baseline activity score.

KNOWN_VARIANTS: dict[str, KnownVariant] = {
    # CYP2D6
    "rs3892097": KnownVariant(gene="CYP2D6", star="*4", effect=_Effect.LOSS_OF_FUNCTION, phenotype_impact=-1.0),
    "rs35742686": KnownVariant(gene="CYP2D6", star="*3", effect=_Effect.LOSS_OF_FUNCTION, phenotype_impact=-1.0),
    "rs5030655": KnownVariant(gene="CYP2D6", star="*6", effect=_Effect.LOSS_OF_FUNCTION, phenotype_impact=-1.0),
    "rs16947": KnownVariant(gene="CYP2D6", star="*2", effect=_Effect.NORMAL, phenotype_impact=0.0),
    "rs28371706": KnownVariant(gene="CYP2D6", star="*41", effect=_Effect.DECREASED, phenotype_impact=-0.5),
    "rs1135840": KnownVariant(gene="CYP2D6", star="*10", effect=_Effect.DECREASED, phenotype_impact=-0.5),

    # CYP2C19
    "rs4244285": KnownVariant(gene="CYP2C19", star="*2", effect=_Effect.LOSS_OF_FUNCTION, phenotype_impact=-1.0),
    "rs4986893": KnownVariant(gene="CYP2C19", star="*3", effect=_Effect.LOSS_OF_FUNCTION, phenotype_impact=-1.0),
    "rs12248560": KnownVariant(gene="CYP2C19", star="*17", effect=_Effect.INCREASED, phenotype_impact=1.0),
    "rs28399504": KnownVariant(gene="CYP2C19", star="*4", effect=_Effect.LOSS_OF_FUNCTION, phenotype_impact=-1.0),

    # CYP2C9
    "rs1799853": KnownVariant(gene="CYP2C9", star="*2", effect=_Effect.DECREASED, phenotype_impact=-0.5),
    "rs1057910": KnownVariant(gene="CYP2C9", star="*3", effect=_Effect.SIGNIFICANTLY_DECREASED, phenotype_impact=-1.0),
    "rs28371686": KnownVariant(gene="CYP2C9", star="*5", effect=_Effect.DECREASED, phenotype_impact=-0.75),

    # SLCO1B1
    "rs4149056": KnownVariant(gene="SLCO1B1", star="*5", effect=_Effect.DECREASED_TRANSPORT, phenotype_impact=-1.0),
    "rs2306283": KnownVariant(gene="SLCO1B1", star="*1B", effect=_Effect.INCREASED_TRANSPORT, phenotype_impact=0.5),

    # TPMT
    "rs1800462": KnownVariant(gene="TPMT", star="*2", effect=_Effect.LOSS_OF_FUNCTION, phenotype_impact=-1.0),
    "rs1800460": KnownVariant(gene="TPMT", star="*3B", effect=_Effect.LOSS_OF_FUNCTION, phenotype_impact=-1.0),
    "rs1142345": KnownVariant(gene="TPMT", star="*3C", effect=_Effect.LOSS_OF_FUNCTION, phenotype_impact=-1.0),

    # DPYD
    "rs3918290": KnownVariant(gene="DPYD", star="*2A", effect=_Effect.LOSS_OF_FUNCTION, phenotype_impact=-1.0),
    "rs55886062": KnownVariant(gene="DPYD", star="*13", effect=_Effect.LOSS_OF_FUNCTION, phenotype_impact=-1.0),
    "rs67376798": KnownVariant(gene="DPYD", star="c.2846A>T", effect=_Effect.DECREASED, phenotype_impact=-0.5),
}

SUPPORTED_GENES: frozenset[str] = frozenset(v.gene for v in KNOWN_VARIANTS.values())


# =============================================================================
# DRUG CATALOG
# =============================================================================
# Each supported drug maps to its primary pharmacogene and metabolic mechanism.
# Insertion order is the order drugs are listed to users.

DRUG_GENE_MAP: dict[str, DrugInfo] = {
    "CODEINE": DrugInfo(gene="CYP2D6", mechanism="prodrug activation to morphine via O-demethylation"),
    "WARFARIN": DrugInfo(gene="CYP2C9", mechanism="hepatic metabolism and S-warfarin clearance"),
    "CLOPIDOGREL": DrugInfo(gene="CYP2C19", mechanism="prodrug activation to active thienopyridine metabolite"),
    "SIMVASTATIN": DrugInfo(gene="SLCO1B1", mechanism="hepatic uptake transport via OATP1B1 transporter"),
    "AZATHIOPRINE": DrugInfo(gene="TPMT", mechanism="thiopurine methylation and inactivation"),
    "FLUOROURACIL": DrugInfo(gene="DPYD", mechanism="pyrimidine catabolism and 5-FU inactivation"),
    "OMEPRAZOLE": DrugInfo(gene="CYP2C19", mechanism="Metabolism variability and clearance"),
    "AMITRIPTYLINE": DrugInfo(gene="CYP2D6", mechanism="Dose adjustment and metabolism"),
    "PHENYTOIN": DrugInfo(gene="CYP2C9", mechanism="Toxicity risk and hepatic clearance"),
    "ATORVASTATIN": DrugInfo(gene="SLCO1B1", mechanism="Myopathy risk via OATP1B1 transport"),
    "MERCAPTOPURINE": DrugInfo(gene="TPMT", mechanism="Severe toxicity via thiopurine methylation"),
    "CAPECITABINE": DrugInfo(gene="DPYD", mechanism="Fluoropyrimidine toxicity and catabolism"),
}


# =============================================================================
# DRUG × PHENOTYPE RISKS
# =============================================================================
# Based on CPIC guideline recommendations. Missing combinations resolve to
# RiskLabel.UNKNOWN in the analyzer.

# Shared pattern for drugs where both extremes of metabolism need action
_TOXIC_IM_ADJUST_URM_ADJUST = {
    _P.PM: _Risk.TOXIC,
    _P.IM: _Risk.ADJUST_DOSAGE,
    _P.NM: _Risk.SAFE,
    _P.RM: _Risk.SAFE,
    _P.URM: _Risk.ADJUST_DOSAGE,
}

_TOXIC_IM_ADJUST_URM_SAFE = {
    _P.PM: _Risk.TOXIC,
    _P.IM: _Risk.ADJUST_DOSAGE,
    _P.NM: _Risk.SAFE,
    _P.RM: _Risk.SAFE,
    _P.URM: _Risk.SAFE,
}

DRUG_PHENOTYPE_RISKS: dict[str, dict[Phenotype, RiskLabel]] = {
    "CODEINE": {
        _P.PM: _Risk.INEFFECTIVE,
        _P.IM: _Risk.ADJUST_DOSAGE,
        _P.NM: _Risk.SAFE,
        _P.RM: _Risk.SAFE,
        _P.URM: _Risk.TOXIC,
    },
    "WARFARIN": dict(_TOXIC_IM_ADJUST_URM_ADJUST),
    "CLOPIDOGREL": {
        _P.PM: _Risk.INEFFECTIVE,
        _P.IM: _Risk.INEFFECTIVE,
        _P.NM: _Risk.SAFE,
        _P.RM: _Risk.SAFE,
        _P.URM: _Risk.ADJUST_DOSAGE,
    },
    "SIMVASTATIN": dict(_TOXIC_IM_ADJUST_URM_SAFE),
    "AZATHIOPRINE": dict(_TOXIC_IM_ADJUST_URM_ADJUST),
    "FLUOROURACIL": dict(_TOXIC_IM_ADJUST_URM_ADJUST),
    "OMEPRAZOLE": {
        _P.PM: _Risk.SAFE,
        _P.IM: _Risk.SAFE,
        _P.NM: _Risk.SAFE,
        _P.RM: _Risk.INEFFECTIVE,
        _P.URM: _Risk.INEFFECTIVE,
    },
    "AMITRIPTYLINE": {
        _P.PM: _Risk.TOXIC,
        _P.IM: _Risk.ADJUST_DOSAGE,
        _P.NM: _Risk.SAFE,
        _P.RM: _Risk.ADJUST_DOSAGE,
        _P.URM: _Risk.INEFFECTIVE,
    },
    "PHENYTOIN": dict(_TOXIC_IM_ADJUST_URM_SAFE),
    "ATORVASTATIN": dict(_TOXIC_IM_ADJUST_URM_SAFE),
    "MERCAPTOPURINE": dict(_TOXIC_IM_ADJUST_URM_ADJUST),
    "CAPECITABINE": dict(_TOXIC_IM_ADJUST_URM_ADJUST),
}


# =============================================================================
# SEVERITY / CONFIDENCE / LABELS
# =============================================================================

SEVERITY_MAP: dict[RiskLabel, Severity] = {
    _Risk.SAFE: Severity.NONE,
    _Risk.ADJUST_DOSAGE: Severity.MODERATE,
    _Risk.TOXIC: Severity.CRITICAL,
    _Risk.INEFFECTIVE: Severity.HIGH,
    _Risk.UNKNOWN: Severity.LOW,
}

CONFIDENCE_MAP: dict[RiskLabel, float] = {
    _Risk.SAFE: 0.92,
    _Risk.ADJUST_DOSAGE: 0.85,
    _Risk.TOXIC: 0.90,
    _Risk.INEFFECTIVE: 0.88,
    _Risk.UNKNOWN: 0.40,
}

# Used when a risk label is missing from the maps above
DEFAULT_SEVERITY = Severity.LOW
DEFAULT_CONFIDENCE = 0.5

PHENOTYPE_LABELS: dict[Phenotype, str] = {
    _P.PM: "Poor Metabolizer",
    _P.IM: "Intermediate Metabolizer",
    _P.NM: "Normal Metabolizer",
    _P.RM: "Rapid Metabolizer",
    _P.URM: "Ultrarapid Metabolizer",
    _P.UNKNOWN: "Unknown",
}


# =============================================================================
# RULE-BASED RECOMMENDATIONS
# =============================================================================
# Clinical text used when the narrative service is unavailable or returns
# no recommendation for a drug.

GENERIC_RECOMMENDATION = "Consult a clinical pharmacist or pharmacogenomics specialist for guidance."

RULE_BASED_RECOMMENDATIONS: dict[str, dict[RiskLabel, str]] = {
    "CODEINE": {
        _Risk.SAFE: "Standard codeine dosing is appropriate. Monitor for adequate analgesia.",
        _Risk.ADJUST_DOSAGE: "Reduce codeine dose by 25–50%. Consider tramadol as an alternative.",
        _Risk.TOXIC: "AVOID CODEINE — risk of life-threatening respiratory depression. Use morphine or hydromorphone at reduced doses.",
        _Risk.INEFFECTIVE: "Codeine will not be activated to morphine. Use an alternative opioid (e.g., morphine, oxycodone).",
    },
    "WARFARIN": {
        _Risk.SAFE: "Standard warfarin initiation protocols apply. Use clinical algorithms for starting dose.",
        _Risk.ADJUST_DOSAGE: "Reduce starting warfarin dose by 25–50%. Increase INR monitoring frequency during initiation.",
        _Risk.TOXIC: "Significantly reduce warfarin dose (>50%). Intensive INR monitoring required. Consider direct oral anticoagulants.",
        _Risk.INEFFECTIVE: "Standard dosing may be insufficient; monitor INR closely and titrate accordingly.",
    },
    "CLOPIDOGREL": {
        _Risk.SAFE: "Standard clopidogrel dosing (75 mg/day) is appropriate.",
        _Risk.ADJUST_DOSAGE: "Consider alternative antiplatelet therapy (prasugrel or ticagrelor).",
        _Risk.TOXIC: "Standard dosing; monitor for excessive bleeding risk.",
        _Risk.INEFFECTIVE: "Clopidogrel is likely ineffective. Switch to prasugrel or ticagrelor per CPIC guidelines.",
    },
    "SIMVASTATIN": {
        _Risk.SAFE: "Standard simvastatin dosing is appropriate.",
        _Risk.ADJUST_DOSAGE: "Consider lower simvastatin dose (≤20 mg/day) or switch to pravastatin/rosuvastatin.",
        _Risk.TOXIC: "HIGH RISK of myopathy/rhabdomyolysis. Use an alternative statin (pravastatin or rosuvastatin).",
        _Risk.INEFFECTIVE: "Standard dosing. Monitor lipid panel at 6–8 weeks.",
    },
    "AZATHIOPRINE": {
        _Risk.SAFE: "Standard azathioprine dosing is appropriate. Monitor CBC periodically.",
        _Risk.ADJUST_DOSAGE: "Reduce azathioprine dose by 30–70%. Monitor CBC weekly for first month.",
        _Risk.TOXIC: "CONTRAINDICATED — severe potentially fatal myelosuppression risk. Use alternative immunosuppressant.",
        _Risk.INEFFECTIVE: "May require dose escalation. Monitor clinical response and CBC.",
    },
    "FLUOROURACIL": {
        _Risk.SAFE: "Standard 5-FU/capecitabine dosing is appropriate.",
        _Risk.ADJUST_DOSAGE: "Reduce 5-FU/capecitabine dose by 25–50%. Monitor closely for toxicity.",
        _Risk.TOXIC: "CONTRAINDICATED — life-threatening toxicity risk (mucositis, myelosuppression, neurotoxicity). Use alternative chemotherapy.",
        _Risk.INEFFECTIVE: "Standard dosing. Monitor for adequate treatment response.",
    },
    "OMEPRAZOLE": {
        _Risk.SAFE: "Standard omeprazole dosing is appropriate.",
        _Risk.ADJUST_DOSAGE: "Standard dosing is generally safe, but monitor clinical response.",
        _Risk.TOXIC: "Monitor for potential side effects; consider slight dose reduction if symptoms occur.",
        _Risk.INEFFECTIVE: "Increase starting dose by 100-200% or consider an alternative PPI not primarily metabolized by CYP2C19.",
    },
    "AMITRIPTYLINE": {
        _Risk.SAFE: "Standard amitriptyline dosing is appropriate.",
        _Risk.ADJUST_DOSAGE: "Consider a 25% dose reduction from the standard starting dose. Monitor closely.",
        _Risk.TOXIC: "Avoid amitriptyline due to high risk of adverse cardiovascular and anticholinergic effects.",
        _Risk.INEFFECTIVE: "Consider alternative drug; standard doses may fail to achieve therapeutic concentrations.",
    },
    "PHENYTOIN": {
        _Risk.SAFE: "Standard phenytoin maintenance dosing is appropriate.",
        _Risk.ADJUST_DOSAGE: "Reduce maintenance dose by 25-50%. Monitor serum concentrations closely.",
        _Risk.TOXIC: "Significant dose reduction (50%+) required. High risk of severe dose-related neurotoxicity.",
        _Risk.INEFFECTIVE: "Standard dosing; monitor serum levels to ensure therapeutic target is reached.",
    },
    "ATORVASTATIN": {
        _Risk.SAFE: "Standard atorvastatin dosing is appropriate.",
        _Risk.ADJUST_DOSAGE: "Consider lower starting dose (≤20 mg). Monitor for muscle pain.",
        _Risk.TOXIC: "High risk of statin-associated muscle symptoms (SAMS). Use an alternative statin like rosuvastatin.",
        _Risk.INEFFECTIVE: "Standard dosing; monitor lipid panel for therapeutic effect.",
    },
    "MERCAPTOPURINE": {
        _Risk.SAFE: "Standard mercaptopurine dosing is appropriate.",
        _Risk.ADJUST_DOSAGE: "Reduce dose significantly and monitor complete blood count (CBC) closely.",
        _Risk.TOXIC: "CONTRAINDICATED. Severe risk of life-threatening myelosuppression.",
        _Risk.INEFFECTIVE: "Standard dosing; monitor response and adjust as necessary.",
    },
    "CAPECITABINE": {
        _Risk.SAFE: "Standard capecitabine dosing is appropriate.",
        _Risk.ADJUST_DOSAGE: "Reduce dose by 50% and monitor closely for severe toxicity.",
        _Risk.TOXIC: "CONTRAINDICATED. High risk of severe or fatal toxicity (mucositis, diarrhea, myelosuppression).",
        _Risk.INEFFECTIVE: "Standard dosing; monitor for adequate treatment response.",
    },
}


# =============================================================================
# SAMPLE DATA
# =============================================================================
# Single-sample demonstration file: one clinically relevant variant per gene.

SAMPLE_VCF = (
    "##fileformat=VCFv4.2\n"
    '##FILTER=<ID=PASS,Description="All filters passed">\n'
    '##INFO=<ID=GENE,Number=1,Type=String,Description="Gene name">\n'
    '##INFO=<ID=STAR,Number=1,Type=String,Description="Star allele">\n'
    '##INFO=<ID=RS,Number=1,Type=String,Description="RS number">\n'
    "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tPATIENT_DEMO01\n"
    "chr22\t42522613\trs3892097\tC\tT\t100\tPASS\tGENE=CYP2D6;STAR=*4;RS=3892097\tGT\t0/1\n"
    "chr10\t96521657\trs4244285\tG\tA\t100\tPASS\tGENE=CYP2C19;STAR=*2;RS=4244285\tGT\t1/1\n"
    "chr10\t96702047\trs1799853\tC\tT\t100\tPASS\tGENE=CYP2C9;STAR=*2;RS=1799853\tGT\t0/1\n"
    "chr12\t21331549\trs4149056\tT\tC\t100\tPASS\tGENE=SLCO1B1;STAR=*5;RS=4149056\tGT\t0/1\n"
    "chr6\t18128556\trs1800462\tC\tG\t100\tPASS\tGENE=TPMT;STAR=*2;RS=1800462\tGT\t0/1\n"
    "chr1\t97915614\trs3918290\tC\tT\t100\tPASS\tGENE=DPYD;STAR=*2A;RS=3918290\tGT\t0/1"
)

SAMPLE_DRUGS = "CODEINE, WARFARIN, CLOPIDOGREL, SIMVASTATIN, AZATHIOPRINE, FLUOROURACIL"


def get_drug_info(drug: str) -> DrugInfo | None:
    """Look up a drug in the catalog (case-insensitive)."""
    return DRUG_GENE_MAP.get(drug.strip().upper())


def supported_drugs() -> list[str]:
    """Supported drug names in catalog order."""
    return list(DRUG_GENE_MAP)
