from __future__ import annotations

import logging
from typing import Protocol

from mindpath.agents.resource_agent import ResourceAgent
from mindpath.errors import AnalyzerFailure, NoNotesError, ValidationError
from mindpath.services.analysis_logs import TRIGGER_TYPES, append_log
from mindpath.services.notes import latest_notes

logger = logging.getLogger(__name__)

ANALYSIS_TYPE = "mental_health_analysis"
MAX_BATCH_NOTES = 10
MAX_BATCH_CHARS = 16000
INSIGHT_NOTES = 3


class ResourceAnalyzer(Protocol):
    def analyze_notes(self, notes: list[dict[str, object]]) -> dict[str, object]:
        ...


class InsightAnalyzer(Protocol):
    def quick_insight(self, notes: list[dict[str, object]]) -> str:
        ...


def _note_size(note: dict[str, object]) -> int:
    return len(str(note["title"])) + len(str(note["content"]))


def _truncate_to_budget(note: dict[str, object], max_chars: int) -> dict[str, object]:
    title = str(note["title"])[:max_chars]
    content = str(note["content"])[: max_chars - len(title)]
    return {**note, "title": title, "content": content}


def select_batch(
    notes: list[dict[str, object]],
    max_notes: int = MAX_BATCH_NOTES,
    max_chars: int = MAX_BATCH_CHARS,
) -> list[dict[str, object]]:
    """Pick the newest notes that fit both the count and character budgets.

    ``notes`` must already be ordered newest first. Selection stops at the
    first note that would push the running total past ``max_chars``. When the
    newest note alone is over budget it is truncated rather than dropped, so a
    single long entry can still be analyzed.
    """
    batch: list[dict[str, object]] = []
    total_chars = 0
    for note in notes[:max_notes]:
        size = _note_size(note)
        if total_chars + size > max_chars:
            if not batch:
                batch.append(_truncate_to_budget(note, max_chars))
            break
        batch.append(note)
        total_chars += size
    return batch


def _build_analyzer() -> ResourceAnalyzer:
    try:
        return ResourceAgent.from_env()
    except ValueError as exc:
        raise AnalyzerFailure(str(exc)) from exc


def run_analysis(
    owner: str,
    trigger_type: str,
    analyzer: ResourceAnalyzer | None = None,
) -> dict[str, object]:
    if trigger_type not in TRIGGER_TYPES:
        raise ValidationError(
            f"trigger_type must be one of: {', '.join(TRIGGER_TYPES)}"
        )

    batch = select_batch(latest_notes(owner, MAX_BATCH_NOTES))
    if not batch:
        raise NoNotesError("No notes available for analysis")

    if analyzer is None:
        analyzer = _build_analyzer()

    try:
        result = analyzer.analyze_notes(batch)
    except AnalyzerFailure:
        raise
    except Exception as exc:
        raise AnalyzerFailure(f"Analysis failed: {exc}") from exc

    snapshot = [{"id": note["id"], "title": note["title"]} for note in batch]
    log = append_log(owner, ANALYSIS_TYPE, snapshot, result, trigger_type)
    logger.info(
        "Stored %s analysis log %s for %s (%d notes)",
        trigger_type,
        log["id"],
        owner,
        len(batch),
    )
    return {
        "analysis": result,
        "log_id": log["id"],
        "notes_analyzed": len(batch),
    }


def run_quick_insight(owner: str, analyzer: InsightAnalyzer | None = None) -> str:
    notes = latest_notes(owner, INSIGHT_NOTES)
    if not notes:
        raise NoNotesError("No notes available for insight")

    if analyzer is None:
        analyzer = _build_analyzer()

    try:
        return analyzer.quick_insight(notes)
    except AnalyzerFailure:
        raise
    except Exception as exc:
        raise AnalyzerFailure(f"Insight generation failed: {exc}") from exc
