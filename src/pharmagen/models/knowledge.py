"""Knowledge base models and closed vocabularies."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Phenotype(str, Enum):
    """Metabolizer phenotype codes (CPIC nomenclature)."""

    PM = "PM"
    IM = "IM"
    NM = "NM"
    RM = "RM"
    URM = "URM"
    UNKNOWN = "Unknown"


class VariantEffect(str, Enum):
    """Functional effect of a pharmacogenomic variant on its gene product."""

    NORMAL = "normal"
    DECREASED = "decreased"
    SIGNIFICANTLY_DECREASED = "significantly_decreased"
    LOSS_OF_FUNCTION = "loss_of_function"
    INCREASED = "increased"
    DECREASED_TRANSPORT = "decreased_transport"
    INCREASED_TRANSPORT = "increased_transport"
    UNKNOWN = "unknown"


class RiskLabel(str, Enum):
    """Clinical action category for a drug/phenotype combination."""

    SAFE = "Safe"
    ADJUST_DOSAGE = "Adjust Dosage"
    TOXIC = "Toxic"
    INEFFECTIVE = "Ineffective"
    UNKNOWN = "Unknown"


class Severity(str, Enum):
    """Severity tier attached to a risk label."""

    NONE = "none"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class KnownVariant(BaseModel):
    """Curated variant-to-effect mapping."""

    model_config = ConfigDict(frozen=True)

    gene: str = Field(..., description="Gene symbol (e.g., CYP2D6)")
    star: str = Field(..., description="Star allele designation (e.g., *4)")
    effect: VariantEffect
    phenotype_impact: float = Field(..., description="Signed contribution to the activity score")


class DrugInfo(BaseModel):
    """Primary pharmacogene and mechanism for a supported drug."""

    model_config = ConfigDict(frozen=True)

    gene: str
    mechanism: str
