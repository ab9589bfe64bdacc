"""LLM service for pharmacogenomic narrative generation."""

import json
import logging

from litellm import acompletion
from pydantic import TypeAdapter

from pharmagen.llm.prompts import create_batch_prompt
from pharmagen.models.analysis import DrugAnalysis
from pharmagen.models.report import NarrativeBundle
from pharmagen.utils.logging_config import get_logger

logger = logging.getLogger(__name__)

NarrativeBatch = dict[str, NarrativeBundle]
_batch_adapter = TypeAdapter(NarrativeBatch)

# Models that accept response_format={"type": "json_object"}
OPENAI_JSON_MODELS = ["gpt-4o-mini", "gpt-4o", "gpt-4-turbo", "gpt-3.5-turbo"]


def strip_code_fences(raw_content: str) -> str:
    """Remove a surrounding ```json ... ``` block if present."""
    content = raw_content.strip()
    if content.startswith("```"):
        parts = content.split("```")
        content = parts[1] if len(parts) > 1 else parts[0]
        if content.lower().startswith("json"):
            content = content[4:]
    return content.strip()


def parse_narrative_batch(raw_content: str) -> NarrativeBatch:
    """Parse model output into narrative bundles keyed by uppercase drug name.

    Raises:
        ValueError: If the content is not a JSON object of narrative bundles
    """
    content = strip_code_fences(raw_content)
    if not content:
        raise ValueError("Empty narrative response")

    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    bundles = _batch_adapter.validate_python(data)
    return {drug.strip().upper(): bundle for drug, bundle in bundles.items()}


class NarrativeService:
    """Generates clinical narrative text for a batch of drug analyses.

    The narrative is optional: every failure is logged and reported as None
    so callers fall back to rule-based text for the whole batch.
    """

    def __init__(self, model: str = "gpt-4o-mini", temperature: float = 0.2, enable_logging: bool = True):
        self.model = model
        self.temperature = temperature
        self.enable_logging = enable_logging
        self.logger = get_logger() if enable_logging else None

    async def generate_batch(
        self,
        patient_id: str,
        analyses: list[tuple[str, DrugAnalysis]],
    ) -> NarrativeBatch | None:
        """Request narratives for all analyses in one round trip.

        Returns:
            Mapping of uppercase drug name to NarrativeBundle, or None if the
            narrative is unavailable.
        """
        if not analyses:
            return None

        messages = create_batch_prompt(patient_id, analyses)
        drugs = [drug for drug, _ in analyses]

        request_id = None
        if self.logger:
            request_id = self.logger.log_llm_request(
                patient_id=patient_id,
                drugs=drugs,
                prompt_length=sum(len(m["content"]) for m in messages),
                model=self.model,
                temperature=self.temperature,
            )

        completion_kwargs = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "max_tokens": 4000,
        }

        # Only OpenAI JSON-mode models accept response_format
        if any(model_prefix in self.model.lower() for model_prefix in OPENAI_JSON_MODELS):
            completion_kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await acompletion(**completion_kwargs)
            raw_content = response.choices[0].message.content or ""
            narratives = parse_narrative_batch(raw_content)
        except Exception as e:
            if self.logger:
                self.logger.log_llm_error(
                    request_id=request_id or "unknown",
                    patient_id=patient_id,
                    error=e,
                )
            else:
                logger.warning(f"Narrative generation failed for {patient_id}: {e}")
            return None

        if self.logger:
            self.logger.log_llm_response(
                request_id=request_id or "unknown",
                patient_id=patient_id,
                drugs_returned=sorted(narratives),
                raw_response=raw_content[:500],
            )

        return narratives
