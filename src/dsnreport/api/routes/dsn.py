"""DSN upload, answers and override endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel
from starlette.datastructures import UploadFile

from dsnreport.core.config import AppSettings
from dsnreport.core.types import QuestionAnswer
from dsnreport.ingest.upload import validate_upload
from dsnreport.reporting.questions import QUESTIONS, resolve_answers
from dsnreport.services.session import DsnSessionService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dsn"])


class OverrideRequest(BaseModel):
    value: QuestionAnswer


def _sessions(request: Request) -> DsnSessionService:
    return request.app.state.sessions


@router.post("/dsn/parse")
async def parse_dsn_file(request: Request) -> dict[str, Any]:
    """Validate the DSN uploaded under the configured form field, parse it and return the answers."""
    settings: AppSettings = request.app.state.settings
    form = await request.form()
    dsn = form.get(settings.upload.field_name)
    if not isinstance(dsn, UploadFile):
        raise HTTPException(status_code=400, detail="No file provided")

    filename = dsn.filename or ""
    data = await dsn.read()
    content = validate_upload(filename, data, settings.upload)

    logger.info("DSN file received: %s (%d bytes)", filename, len(data))
    session = _sessions(request).create(content, filename)

    return {
        "message": "DSN file uploaded and parsed successfully",
        "filename": filename,
        "size": len(data),
        "session_id": session.session_id,
        "metadata": session.parsed.metadata.model_dump(mode="json"),
        "summary": session.summary.model_dump(mode="json"),
        "answers": session.answers,
    }


@router.get("/questions")
async def list_questions() -> dict[str, Any]:
    return {"questions": [q.model_dump() for q in QUESTIONS]}


@router.get("/dsn/sessions/{session_id}")
async def get_session(session_id: str, request: Request) -> dict[str, Any]:
    session = _sessions(request).get(session_id)
    return {
        "session_id": session.session_id,
        "metadata": session.parsed.metadata.model_dump(mode="json"),
        "answers": session.answers,
        "overrides": session.overrides,
        "resolved": resolve_answers(session.answers, session.overrides),
    }


@router.put("/dsn/sessions/{session_id}/answers/{question_id}")
async def set_answer_override(
    session_id: str, question_id: str, body: OverrideRequest, request: Request,
) -> dict[str, Any]:
    session = _sessions(request).set_override(session_id, question_id, body.value)
    return {"question_id": question_id, "overrides": session.overrides}


@router.delete("/dsn/sessions/{session_id}/answers/{question_id}")
async def clear_answer_override(session_id: str, question_id: str, request: Request) -> dict[str, Any]:
    session = _sessions(request).clear_override(session_id, question_id)
    return {"question_id": question_id, "overrides": session.overrides}


@router.delete("/dsn/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> None:
    _sessions(request).delete(session_id)
