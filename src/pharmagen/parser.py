"""VCF parsing and pre-flight validation.

ARCHITECTURE:
    Raw VCF text → validate_vcf (gate) → parse_vcf → ParsedVCF(patient_id, variants, metadata)

Handles single-sample VCF v4.x text with GENE/STAR/RS INFO annotations.

Key Design:
- Tolerant: malformed data lines are skipped, never raised
- Only pharmacogenomically annotated records (rsID or GENE) are kept
- Input order is preserved; diplotype construction depends on it
"""

import logging
import random
import re
import string

from pharmagen.models.variant import (
    ParsedVCF,
    ValidationFailure,
    VariantRecord,
    VCFMetadata,
    VCFValidationResult,
)

logger = logging.getLogger(__name__)

PATIENT_ID_PREFIX = "PATIENT_"
PATIENT_ID_LENGTH = 5
MIN_DATA_COLUMNS = 8
SAMPLE_COLUMN = 9

FILEFORMAT_MARKER = "##fileformat=VCF"
COLUMN_HEADER_MARKER = "#CHROM"

RSID_PATTERN = re.compile(r'^rs')

VALIDATION_MESSAGES: dict[ValidationFailure, str] = {
    ValidationFailure.EMPTY: "File is empty.",
    ValidationFailure.MISSING_HEADER: (
        "Missing VCF header (##fileformat=VCF). This may not be a valid VCF file."
    ),
    ValidationFailure.MISSING_COLUMN_HEADER: (
        "Missing column header line (#CHROM). File appears malformed."
    ),
    ValidationFailure.NO_RECORDS: "No variant records found in this VCF file.",
}


def generate_patient_id() -> str:
    """Random fallback identifier, e.g. PATIENT_X7K2Q."""
    alphabet = string.ascii_uppercase + string.digits
    return PATIENT_ID_PREFIX + "".join(random.choices(alphabet, k=PATIENT_ID_LENGTH))


def parse_info_field(info: str) -> dict[str, str | bool]:
    """Parse a VCF INFO string into a key/value map.

    Flags without a value map to True.

    e.g.
    "GENE=CYP2D6;STAR=*4;RS=3892097" -> {'GENE': 'CYP2D6', 'STAR': '*4', 'RS': '3892097'}
    """
    fields: dict[str, str | bool] = {}
    for item in info.split(";"):
        key, sep, value = item.partition("=")
        fields[key] = value if sep else True
    return fields


def resolve_rsid(id_column: str, info: dict[str, str | bool]) -> str | None:
    """Resolve the dbSNP identifier from the ID column, then the INFO RS tag."""
    if id_column and RSID_PATTERN.match(id_column):
        return id_column
    rs_tag = info.get("RS")
    if rs_tag and rs_tag is not True:
        return f"rs{rs_tag}"
    return None


def _info_text(info: dict[str, str | bool], key: str) -> str | None:
    value = info.get(key)
    return value if isinstance(value, str) and value else None


def parse_vcf(text: str) -> ParsedVCF:
    """Parse VCF text into a patient identifier and annotated variant records.

    Args:
        text: Raw VCF file content

    Returns:
        ParsedVCF with records in input order. An input without usable
        records yields an empty variant list, not an error.

    Raises:
        ValueError: If text is None
    """
    if text is None:
        raise ValueError("VCF content is required")

    variants: list[VariantRecord] = []
    metadata = VCFMetadata()
    patient_id: str | None = None

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        metadata.total_lines += 1

        # Meta-information lines
        if line.startswith("##"):
            if line.startswith("##fileformat="):
                metadata.file_format = line.split("=")[1]
            continue

        # Column header: sample name sits in the tenth column
        if line.startswith(COLUMN_HEADER_MARKER):
            cols = line.split("\t")
            if len(cols) > SAMPLE_COLUMN and cols[SAMPLE_COLUMN].strip():
                patient_id = cols[SAMPLE_COLUMN].strip()
            continue

        metadata.data_lines += 1
        cols = line.split("\t")
        if len(cols) < MIN_DATA_COLUMNS:
            metadata.skipped_lines += 1
            logger.debug(f"Skipping malformed VCF line ({len(cols)} columns): {line[:80]}")
            continue

        chrom, pos, id_column, ref, alt, qual, filter_status, info_str = cols[:MIN_DATA_COLUMNS]
        info = parse_info_field(info_str)
        rsid = resolve_rsid(id_column, info)
        gene = _info_text(info, "GENE")

        # Only keep variants that carry some pharmacogenomic annotation
        if not (rsid or gene):
            continue

        variants.append(VariantRecord(
            chrom=chrom,
            pos=pos,
            rsid=rsid,
            ref=ref,
            alt=alt,
            qual=qual,
            filter=filter_status,
            gene=gene,
            star=_info_text(info, "STAR"),
            genotype=(cols[SAMPLE_COLUMN] or None) if len(cols) > SAMPLE_COLUMN else None,
            info=info,
        ))

    if patient_id is None:
        patient_id = generate_patient_id()

    logger.info(
        f"Parsed VCF for {patient_id}: {len(variants)} annotated variants "
        f"({metadata.skipped_lines} malformed lines skipped)"
    )
    return ParsedVCF(patient_id=patient_id, variants=variants, metadata=metadata)


def validate_vcf(text: str | None) -> VCFValidationResult:
    """Check that text looks like a VCF file before analysis.

    Checks run in order: empty, missing fileformat header, missing #CHROM
    line, no data records. Pure and idempotent.
    """

    def fail(reason: ValidationFailure) -> VCFValidationResult:
        return VCFValidationResult(valid=False, reason=reason, error=VALIDATION_MESSAGES[reason])

    if not text or not text.strip():
        return fail(ValidationFailure.EMPTY)
    if FILEFORMAT_MARKER not in text:
        return fail(ValidationFailure.MISSING_HEADER)
    if COLUMN_HEADER_MARKER not in text:
        return fail(ValidationFailure.MISSING_COLUMN_HEADER)

    data_lines = [line for line in text.split("\n") if line.strip() and not line.startswith("#")]
    if not data_lines:
        return fail(ValidationFailure.NO_RECORDS)

    return VCFValidationResult(valid=True)
