from __future__ import annotations

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from mindpath.models.database import Base


class AnalysisLog(Base):
    __tablename__ = "analysis_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner: Mapped[str] = mapped_column(String(255), index=True)
    analysis_type: Mapped[str] = mapped_column(String(64))
    # Value copies of {id, title}; not foreign keys, so history survives note edits.
    notes_analyzed: Mapped[list[dict[str, object]]] = mapped_column(JSON)
    generated_resources: Mapped[dict[str, object]] = mapped_column(JSON)
    created_at: Mapped[str] = mapped_column(String(40))
    trigger_type: Mapped[str] = mapped_column(String(16))
