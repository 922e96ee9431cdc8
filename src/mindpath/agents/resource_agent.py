from __future__ import annotations

import json
import logging
import re

from pydantic import BaseModel

from mindpath.agents.llm_agent import LlmAgent
from mindpath.errors import AnalyzerFailure

logger = logging.getLogger(__name__)

RESOURCE_TYPES = {"article", "exercise", "technique", "tool", "analysis"}

FALLBACK_ANALYSIS = (
    "AI analysis completed successfully. The response format was unexpected, "
    "but the analysis was generated."
)
FALLBACK_RECOMMENDATIONS = (
    "Please review the analysis above for insights and recommendations. "
    "The AI has provided valuable insights about your journal entries."
)

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")

SYSTEM_PROMPT = (
    "You are a mental health AI assistant. Analyze journal entries and generate "
    "relevant mental health resources and insights. Keep the response supportive, "
    "non-judgmental, and focused on mental wellness. Do not provide medical advice."
)
ANALYSIS_PROMPT = (
    "Analyze the following journal entries.\n\n"
    "Journal Entries:\n{notes_text}\n\n"
    "Please provide:\n"
    "1. A brief analysis of the emotional patterns and themes in these entries\n"
    "2. 3-5 specific mental health resources (articles, exercises, techniques, "
    "or tools) that would be helpful\n"
    "3. Gentle, supportive recommendations based on the content\n\n"
    "Respond ONLY with valid JSON, without markdown or code blocks, using keys: "
    "analysis (string), resources (array of objects with title, description, "
    "type one of article|exercise|technique|tool, url or null), "
    "recommendations (string)."
)
INSIGHT_PROMPT = (
    "Based on these recent journal entries, provide a brief, supportive insight "
    "or encouragement:\n\n{notes_text}\n\n"
    "Keep it under 100 words, positive, and focused on growth and wellness."
)


def _format_notes(notes: list[dict[str, object]], *, with_dates: bool) -> str:
    blocks = []
    for note in notes:
        block = f"Title: {note['title']}\nContent: {note['content']}"
        if with_dates:
            block += f"\nDate: {note.get('last_updated', '')}\n---"
        blocks.append(block)
    return ("\n" if with_dates else "\n\n").join(blocks)


def normalize_resource(resource: object) -> dict[str, object]:
    if not isinstance(resource, dict):
        resource = {}
    resource_type = resource.get("type")
    url = resource.get("url")
    return {
        "title": str(resource.get("title") or "Untitled Resource"),
        "description": str(resource.get("description") or "No description available"),
        "type": resource_type if resource_type in RESOURCE_TYPES else "tool",
        "url": str(url) if url else None,
    }


def fallback_result(raw_text: str) -> dict[str, object]:
    return {
        "analysis": FALLBACK_ANALYSIS,
        "resources": [
            {
                "title": "AI Analysis Results",
                "description": raw_text,
                "type": "analysis",
                "url": None,
            }
        ],
        "recommendations": FALLBACK_RECOMMENDATIONS,
    }


def normalize_result(payload: dict[str, object] | None, raw_text: str) -> dict[str, object]:
    """Coerce model output into ``{analysis, resources, recommendations}``."""
    if (
        payload is None
        or not payload.get("analysis")
        or not payload.get("recommendations")
        or payload.get("resources") is None
    ):
        logger.warning("Analyzer returned an unexpected format; using fallback result")
        return fallback_result(raw_text)

    resources = payload["resources"]
    if not isinstance(resources, list):
        resources = []
    return {
        "analysis": str(payload["analysis"]),
        "resources": [normalize_resource(resource) for resource in resources],
        "recommendations": str(payload["recommendations"]),
    }


class ResourceAgent(BaseModel):
    llm_agent: LlmAgent

    @classmethod
    def from_env(cls) -> "ResourceAgent":
        return cls(llm_agent=LlmAgent.from_env())

    def _extract_json(self, content: str) -> dict[str, object] | None:
        content = _FENCE_RE.sub("", content.strip())
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError:
            start = content.find("{")
            end = content.rfind("}")
            if start == -1 or end == -1 or end <= start:
                return None
            try:
                parsed = json.loads(content[start : end + 1])
            except json.JSONDecodeError:
                return None
        return parsed if isinstance(parsed, dict) else None

    def _complete(self, user_prompt: str) -> str:
        try:
            response = self.llm_agent.llm.invoke(
                [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": user_prompt},
                ]
            )
        except Exception as exc:
            raise AnalyzerFailure(f"Analyzer request failed: {exc}") from exc
        content = response.content if isinstance(response.content, str) else ""
        content = content.strip()
        if not content:
            raise AnalyzerFailure("Analyzer returned an empty response")
        return content

    def analyze_notes(self, notes: list[dict[str, object]]) -> dict[str, object]:
        content = self._complete(
            ANALYSIS_PROMPT.format(notes_text=_format_notes(notes, with_dates=True))
        )
        logger.debug("Analyzer raw response: %s...", content[:200])
        return normalize_result(self._extract_json(content), content)

    def quick_insight(self, notes: list[dict[str, object]]) -> str:
        return self._complete(
            INSIGHT_PROMPT.format(notes_text=_format_notes(notes[:3], with_dates=False))
        )
