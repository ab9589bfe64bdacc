"""VCF record models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class VariantRecord(BaseModel):
    """One pharmacogenomically annotated row of a VCF file."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "chrom": "chr22",
                "pos": "42522613",
                "rsid": "rs3892097",
                "ref": "C",
                "alt": "T",
                "qual": "100",
                "filter": "PASS",
                "gene": "CYP2D6",
                "star": "*4",
                "genotype": "0/1",
                "info": {"GENE": "CYP2D6", "STAR": "*4", "RS": "3892097"},
            }
        },
    )

    chrom: str
    pos: str
    rsid: str | None = Field(None, description="dbSNP identifier in rsNNNN form")
    ref: str
    alt: str
    qual: str
    filter: str
    gene: str | None = Field(None, description="GENE annotation from INFO")
    star: str | None = Field(None, description="STAR annotation from INFO")
    genotype: str | None = Field(None, description="Sample column value (e.g., 0/1)")
    info: dict[str, str | bool] = Field(default_factory=dict)


class VCFMetadata(BaseModel):
    """File-level facts collected while parsing."""

    file_format: str | None = None
    total_lines: int = 0
    data_lines: int = 0
    skipped_lines: int = 0


class ParsedVCF(BaseModel):
    """Parser output: patient identifier plus ordered variant records."""

    patient_id: str
    variants: list[VariantRecord] = Field(default_factory=list)
    metadata: VCFMetadata = Field(default_factory=VCFMetadata)


class ValidationFailure(str, Enum):
    """Reasons a file fails pre-flight validation."""

    EMPTY = "empty"
    MISSING_HEADER = "missing_header"
    MISSING_COLUMN_HEADER = "missing_column_header"
    NO_RECORDS = "no_records"


class VCFValidationResult(BaseModel):
    """Outcome of pre-flight VCF validation."""

    valid: bool
    reason: ValidationFailure | None = None
    error: str | None = None
