from __future__ import annotations

import asyncio
from typing import Annotated, Any, Literal

from fastapi import APIRouter, BackgroundTasks, Depends, Path, status
from pydantic import BaseModel

from mindpath.core.auth import get_current_owner
from mindpath.services import analysis_logs, notes
from mindpath.services.analysis import run_analysis, run_quick_insight
from mindpath.services.trigger import schedule_automatic_analysis, should_trigger_analysis

router = APIRouter()

NoteId = Annotated[int, Path(gt=0, description="Positive note id")]
LogId = Annotated[int, Path(gt=0, description="Positive analysis log id")]


class NoteBody(BaseModel):
    # Left untyped so type and emptiness checks happen in the note store.
    title: Any = None
    content: Any = None


class AnalyzeBody(BaseModel):
    trigger_type: Literal["manual", "automatic"] = "manual"


@router.post("/notes", status_code=status.HTTP_201_CREATED)
async def create_note(
    body: NoteBody,
    background_tasks: BackgroundTasks,
    owner: str = Depends(get_current_owner),
) -> dict[str, object]:
    note = await asyncio.to_thread(notes.create_note, owner, body.title, body.content)
    note_count = await asyncio.to_thread(notes.count_notes, owner)
    if should_trigger_analysis(note_count):
        background_tasks.add_task(schedule_automatic_analysis, owner)
    return {"message": "Note created successfully", "note": note}


@router.get("/notes")
async def list_notes(owner: str = Depends(get_current_owner)) -> dict[str, object]:
    items = await asyncio.to_thread(notes.list_notes, owner)
    return {
        "message": "Notes retrieved successfully",
        "count": len(items),
        "notes": items,
    }


@router.get("/notes/{note_id}")
async def get_note(
    note_id: NoteId, owner: str = Depends(get_current_owner)
) -> dict[str, object]:
    note = await asyncio.to_thread(notes.get_note, owner, note_id)
    return {"message": "Note retrieved successfully", "note": note}


@router.put("/notes/{note_id}")
async def update_note(
    body: NoteBody,
    note_id: NoteId,
    owner: str = Depends(get_current_owner),
) -> dict[str, object]:
    note = await asyncio.to_thread(
        notes.update_note, owner, note_id, body.title, body.content
    )
    return {"message": "Note updated successfully", "note": note}


@router.patch("/notes/{note_id}")
async def patch_note(
    body: NoteBody,
    note_id: NoteId,
    owner: str = Depends(get_current_owner),
) -> dict[str, object]:
    note = await asyncio.to_thread(
        notes.patch_note, owner, note_id, body.title, body.content
    )
    return {"message": "Note updated successfully", "note": note}


@router.delete("/notes/{note_id}")
async def delete_note(
    note_id: NoteId, owner: str = Depends(get_current_owner)
) -> dict[str, object]:
    result = await asyncio.to_thread(notes.delete_note, owner, note_id)
    return {"message": "Note deleted successfully", "result": result}


@router.post("/analyze")
async def analyze_notes(
    body: AnalyzeBody | None = None,
    owner: str = Depends(get_current_owner),
) -> dict[str, object]:
    trigger_type = body.trigger_type if body else "manual"
    outcome = await asyncio.to_thread(run_analysis, owner, trigger_type)
    return {
        "message": "Analysis completed successfully",
        "analysis": outcome["analysis"],
        "logId": outcome["log_id"],
        "notesAnalyzed": outcome["notes_analyzed"],
    }


@router.get("/analysis-logs")
async def list_analysis_logs(
    owner: str = Depends(get_current_owner),
) -> dict[str, object]:
    logs = await asyncio.to_thread(analysis_logs.list_logs, owner)
    return {
        "message": "Analysis logs retrieved successfully",
        "count": len(logs),
        "logs": logs,
    }


@router.get("/analysis-logs/{log_id}")
async def get_analysis_log(
    log_id: LogId, owner: str = Depends(get_current_owner)
) -> dict[str, object]:
    log = await asyncio.to_thread(analysis_logs.get_log, owner, log_id)
    return {"message": "Analysis log retrieved successfully", "log": log}


@router.post("/insight")
async def quick_insight(owner: str = Depends(get_current_owner)) -> dict[str, object]:
    insight = await asyncio.to_thread(run_quick_insight, owner)
    return {"message": "Insight generated successfully", "insight": insight}
