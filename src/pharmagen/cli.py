"""Command-line interface for PharmaGen.

ARCHITECTURE:
    CLI Commands → PharmacogenomicsEngine / validate_vcf → text or JSON output

Workflows: analyze (one VCF), batch (concurrent VCFs), validate (pre-flight only)

Key Design:
- Typer framework for auto-help and type validation
- asyncio.run() bridges sync CLI → async engine
- Flexible I/O: stdout or JSON file output
"""

import asyncio
import json
import warnings
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from pharmagen.constants import DRUG_GENE_MAP, SAMPLE_VCF
from pharmagen.engine import PharmacogenomicsEngine, VCFValidationError
from pharmagen.parser import validate_vcf

# Suppress litellm's async cleanup warnings (harmless internal warnings)
warnings.filterwarnings("ignore", message=".*async_success_handler.*")
warnings.filterwarnings("ignore", message=".*coroutine.*was never awaited.*")

load_dotenv()

app = typer.Typer(
    name="pharmagen",
    help="Pharmacogenomic drug risk analysis from VCF files",
    add_completion=False,
)


def _read_vcf(path: Path) -> str:
    if not path.exists():
        print(f"Error: VCF file not found: {path}")
        raise typer.Exit(1)
    return path.read_text()


@app.command()
def analyze(
    vcf_file: Path = typer.Argument(..., help="Single-sample VCF file"),
    drugs: str = typer.Option(..., "--drugs", "-d", help="Comma-separated drugs (e.g., CODEINE,WARFARIN)"),
    model: str = typer.Option("gpt-4o-mini", "--model", "-m", help="LLM model"),
    temperature: float = typer.Option(0.2, "--temperature", help="LLM temperature (0.0-1.0)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file"),
    llm: bool = typer.Option(True, "--llm/--no-llm", help="Generate narrative explanations"),
    log: bool = typer.Option(True, "--log/--no-log", help="Enable LLM request logging"),
) -> None:
    """Analyze drug risks for one patient VCF."""
    vcf_text = _read_vcf(vcf_file)

    async def run_analysis() -> None:
        engine = PharmacogenomicsEngine(
            llm_model=model, llm_temperature=temperature, enable_llm=llm, enable_logging=log
        )
        try:
            batch = await engine.analyze(vcf_text, drugs)
        except VCFValidationError as e:
            print(f"Invalid VCF ({e.reason.value}): {e}")
            raise typer.Exit(1)
        except ValueError as e:
            print(f"Error: {e}")
            raise typer.Exit(1)

        print(f"\nPatient {batch.patient_id}: {batch.total_variants} annotated variants")
        for report in batch.reports:
            print(report.to_report())
        for error in batch.errors:
            print(f"Error: {error.error}")

        if output:
            output_data = [report.model_dump(mode="json") for report in batch.reports]
            output_data += [error.model_dump(mode="json") for error in batch.errors]
            with open(output, "w") as f:
                json.dump(output_data, f, indent=2)
            print(f"Saved to {output}")

    asyncio.run(run_analysis())


@app.command()
def batch(
    vcf_files: list[Path] = typer.Argument(..., help="VCF files to analyze"),
    drugs: str = typer.Option(..., "--drugs", "-d", help="Comma-separated drugs"),
    output: Path = typer.Option("results.json", "--output", "-o", help="Output file"),
    model: str = typer.Option("gpt-4o-mini", "--model", "-m", help="LLM model"),
    temperature: float = typer.Option(0.2, "--temperature", help="LLM temperature (0.0-1.0)"),
    llm: bool = typer.Option(True, "--llm/--no-llm", help="Generate narrative explanations"),
    log: bool = typer.Option(True, "--log/--no-log", help="Enable LLM request logging"),
) -> None:
    """Batch process multiple VCF files."""
    jobs = [(_read_vcf(path), drugs) for path in vcf_files]

    async def run_batch() -> None:
        engine = PharmacogenomicsEngine(
            llm_model=model, llm_temperature=temperature, enable_llm=llm, enable_logging=log
        )
        print(f"\nAnalyzing {len(jobs)} VCF files...")
        batches = await engine.batch_analyze(jobs)

        output_data = [b.model_dump(mode="json") for b in batches]
        with open(output, "w") as f:
            json.dump(output_data, f, indent=2)

        print(f"\nSuccessfully analyzed {len(batches)}/{len(jobs)} files")
        print(f"Results saved to {output}")

        # Simple risk label counts
        risk_counts: dict[str, int] = {}
        for b in batches:
            for report in b.reports:
                label = report.risk_assessment.risk_label.value
                risk_counts[label] = risk_counts.get(label, 0) + 1

        print("\nRisk Distribution:")
        for label, count in sorted(risk_counts.items()):
            print(f"  {label}: {count}")

    asyncio.run(run_batch())


@app.command()
def validate(
    vcf_file: Path = typer.Argument(..., help="VCF file to check"),
) -> None:
    """Run pre-flight validation on a VCF file."""
    result = validate_vcf(_read_vcf(vcf_file))
    if not result.valid:
        print(f"Invalid VCF ({result.reason.value}): {result.error}")
        raise typer.Exit(1)
    print(f"{vcf_file} is a valid VCF file")


@app.command()
def drugs() -> None:
    """List supported drugs and their primary genes."""
    for drug, info in DRUG_GENE_MAP.items():
        print(f"{drug:<16} {info.gene:<8} {info.mechanism}")


@app.command()
def sample(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write sample VCF to file"),
) -> None:
    """Print or save the demonstration VCF."""
    if output:
        output.write_text(SAMPLE_VCF + "\n")
        print(f"Saved to {output}")
    else:
        print(SAMPLE_VCF)


@app.command()
def version() -> None:
    """Show version information."""
    from pharmagen import __version__
    print(f"PharmaGen version {__version__}")


if __name__ == "__main__":
    app()
