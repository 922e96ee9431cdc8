from __future__ import annotations

import logging

from mindpath.core.celery_app import celery_app
from mindpath.errors import AnalyzerFailure, NoNotesError
from mindpath.services.analysis import run_analysis

logger = logging.getLogger(__name__)


@celery_app.task(name="mindpath.tasks.analysis.run_automatic_analysis")
def run_automatic_analysis(owner: str) -> dict[str, object]:
    # Analyzer problems stop here as a log line; no client sees them.
    try:
        outcome = run_analysis(owner, "automatic")
    except NoNotesError as exc:
        logger.warning("Automatic analysis skipped for %s: %s", owner, exc)
        return {"owner": owner, "status": "skipped", "error": str(exc)}
    except AnalyzerFailure as exc:
        logger.error("Automatic analysis failed for %s: %s", owner, exc)
        return {"owner": owner, "status": "failed", "error": str(exc)}

    return {
        "owner": owner,
        "status": "logged",
        "log_id": outcome["log_id"],
        "notes_analyzed": outcome["notes_analyzed"],
    }
