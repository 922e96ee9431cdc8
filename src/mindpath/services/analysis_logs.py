from __future__ import annotations

from sqlalchemy import select

from mindpath.errors import NotFoundError, ValidationError
from mindpath.models.analysis_log import AnalysisLog
from mindpath.models.database import store_session
from mindpath.services.timestamps import utc_now_iso

TRIGGER_TYPES = ("manual", "automatic")


def _serialize(log: AnalysisLog) -> dict[str, object]:
    return {
        "id": log.id,
        "analysis_type": log.analysis_type,
        "notes_analyzed": log.notes_analyzed,
        "generated_resources": log.generated_resources,
        "created_at": log.created_at,
        "trigger_type": log.trigger_type,
    }


def append_log(
    owner: str,
    analysis_type: str,
    notes_analyzed: list[dict[str, object]],
    result: dict[str, object],
    trigger_type: str,
) -> dict[str, object]:
    if trigger_type not in TRIGGER_TYPES:
        raise ValidationError(
            f"trigger_type must be one of: {', '.join(TRIGGER_TYPES)}"
        )

    with store_session() as session:
        log = AnalysisLog(
            owner=owner,
            analysis_type=analysis_type,
            notes_analyzed=[dict(item) for item in notes_analyzed],
            generated_resources=result,
            created_at=utc_now_iso(),
            trigger_type=trigger_type,
        )
        session.add(log)
        session.commit()
        session.refresh(log)
        return _serialize(log)


def list_logs(owner: str) -> list[dict[str, object]]:
    with store_session() as session:
        logs = session.execute(
            select(AnalysisLog)
            .where(AnalysisLog.owner == owner)
            .order_by(AnalysisLog.created_at.desc(), AnalysisLog.id.desc())
        ).scalars().all()
        return [_serialize(log) for log in logs]


def get_log(owner: str, log_id: int) -> dict[str, object]:
    with store_session() as session:
        log = session.execute(
            select(AnalysisLog).where(
                AnalysisLog.id == log_id, AnalysisLog.owner == owner
            )
        ).scalar_one_or_none()
        if log is None:
            raise NotFoundError("Analysis log not found")
        return _serialize(log)
