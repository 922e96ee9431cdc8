from __future__ import annotations

import logging

from mindpath.config import get_auto_analysis_threshold
from mindpath.tasks.analysis import run_automatic_analysis

logger = logging.getLogger(__name__)

AUTO_ANALYSIS_THRESHOLD = get_auto_analysis_threshold()


def should_trigger_analysis(
    note_count: int, threshold: int = AUTO_ANALYSIS_THRESHOLD
) -> bool:
    """Fire once, when the owner's note count lands exactly on the threshold.

    The count is re-derived after every insert, so two concurrent creates around
    the threshold may both or neither observe it.
    """
    return note_count == threshold


def schedule_automatic_analysis(owner: str) -> None:
    try:
        result = run_automatic_analysis.delay(owner)
    except Exception:
        logger.exception("Could not enqueue automatic analysis for %s", owner)
        return
    logger.info("Queued automatic analysis %s for %s", result.id, owner)
