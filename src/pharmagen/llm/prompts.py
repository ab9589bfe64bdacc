"""
Batch prompts for pharmacogenomic narrative generation.
One request covers every drug analyzed for a patient.
"""

from pharmagen.models.analysis import DrugAnalysis

NARRATIVE_SYSTEM_PROMPT = """You are a clinical pharmacogenomics specialist generating a report for a physician.

The structured findings you receive (gene, diplotype, phenotype, risk label) were computed by a
deterministic CPIC-based rule engine. Do NOT change them. Your job is to explain them.

For each drug provide:
- summary: 2-3 sentence clinical summary of what the genotype means for this drug
- mechanism_explanation: how the gene variant alters drug metabolism or transport
- clinical_recommendation: concrete dosing or therapy guidance consistent with the risk label
- alternative_drugs: list of alternative agents (may be empty)
- monitoring_parameters: list of clinical or laboratory parameters to monitor
- cpic_guideline_reference: the relevant CPIC guideline citation

RESPONSE FORMAT:
Return strictly valid JSON (no markdown, no preamble, no postamble): a single object whose keys
are the uppercase DRUG NAMES and whose values are objects with exactly the fields above.
"""

NARRATIVE_USER_PROMPT = """PATIENT ID: {patient_id}

DATA FOR ANALYSIS:
{patient_data_summary}

Output exactly a single JSON object where the keys are the uppercase DRUG NAMES, and the values are objects containing the clinical explanation for that specific drug.

Structure the JSON exactly like this:
{{
  "{example_drug}": {{
    "summary": "2-3 sentence clinical summary...",
    "mechanism_explanation": "...",
    "clinical_recommendation": "...",
    "alternative_drugs": ["drug1", "drug2"],
    "monitoring_parameters": ["param1"],
    "cpic_guideline_reference": "..."
  }}
}}
"""


def format_variant_summary(analysis: DrugAnalysis) -> str:
    if not analysis.detected_variants:
        return "None detected — wild-type assumed"
    return ", ".join(
        f"{v.rsid} ({v.star_allele}, {v.effect.value.replace('_', ' ')})"
        for v in analysis.detected_variants
    )


def format_drug_block(drug: str, analysis: DrugAnalysis) -> str:
    return (
        f"DRUG: {drug}\n"
        f"- Primary Gene: {analysis.gene}\n"
        f"- Diplotype: {analysis.diplotype}\n"
        f"- Phenotype: {analysis.phenotype.value} ({analysis.phenotype_label})\n"
        f"- Risk Assessment: {analysis.risk_label.value}\n"
        f"- Detected Variants: {format_variant_summary(analysis)}\n"
        f"- Mechanism: {analysis.mechanism}"
    )


def create_batch_prompt(
    patient_id: str,
    analyses: list[tuple[str, DrugAnalysis]],
) -> list[dict]:
    """
    Returns a properly formatted message list for litellm/openai with system + user roles.
    """
    patient_data_summary = "\n\n".join(
        format_drug_block(drug, analysis) for drug, analysis in analyses
    )
    example_drug = analyses[0][0] if analyses else "CODEINE"

    user_content = NARRATIVE_USER_PROMPT.format(
        patient_id=patient_id,
        patient_data_summary=patient_data_summary,
        example_drug=example_drug,
    )

    return [
        {"role": "system", "content": NARRATIVE_SYSTEM_PROMPT},
        {"role": "user", "content": user_content},
    ]
