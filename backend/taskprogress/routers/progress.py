from __future__ import annotations
import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from ..db import get_db
from ..progress import ProgressRecord, ProgressStore, SqlProgressStore, check_progress, empty_record
from ..references import ReferenceTextNotFound, load_reference_text, reference_word_count, save_reference_text
from ..scoring import ProgressStrategy, UnknownStrategyError, strategy_from_settings
from ..settings import settings
from .auth import get_current_user, User

router = APIRouter(prefix="/api", tags=["progress"])

logger = logging.getLogger(__name__)


class CamelModel(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScoreRequest(CamelModel):
	candidate_text: Optional[str] = None
	reference_text: Optional[str] = None
	strategy: Optional[str] = None


class ScoreResponse(CamelModel):
	progress_percentage: int
	is_completed: bool
	strategy: str


class CheckProgressRequest(CamelModel):
	task_id: str
	text: Optional[str] = None
	strategy: Optional[str] = None


class ProgressResponse(CamelModel):
	task_id: str
	current_text: str
	progress: int
	is_completed: bool
	last_saved: datetime


class ReferenceRequest(CamelModel):
	text: str


class ReferenceResponse(CamelModel):
	task_id: str
	total_words: int


def get_progress_store(db: Session = Depends(get_db)) -> ProgressStore:
	return SqlProgressStore(db, retry_attempts=settings.storage_retry_attempts)


def _resolve_strategy(name: Optional[str]) -> ProgressStrategy:
	try:
		return strategy_from_settings(settings, name)
	except UnknownStrategyError as e:
		raise HTTPException(status_code=400, detail=str(e))


def _load_reference(db: Session, task_id: str) -> str:
	try:
		return load_reference_text(db, task_id, settings.reference_texts_dir)
	except ReferenceTextNotFound:
		raise HTTPException(status_code=404, detail="Reference text not found")


def _to_response(record: ProgressRecord) -> ProgressResponse:
	return ProgressResponse(
		task_id=record.task_id,
		current_text=record.current_text,
		progress=record.progress,
		is_completed=record.is_completed,
		last_saved=record.last_saved,
	)


@router.post("/progress/score", response_model=ScoreResponse)
def score(req: ScoreRequest, user: User = Depends(get_current_user)):
	strategy = _resolve_strategy(req.strategy)
	value = strategy.score(req.candidate_text, req.reference_text)
	return ScoreResponse(progress_percentage=value, is_completed=value == 100, strategy=strategy.name)


@router.get("/tasks/{task_id}/reference", response_model=ReferenceResponse)
def get_reference(task_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	content = _load_reference(db, task_id)
	return ReferenceResponse(task_id=task_id, total_words=reference_word_count(content))


@router.put("/tasks/{task_id}/reference", response_model=ReferenceResponse)
def put_reference(task_id: str, req: ReferenceRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
	if not (req.text or "").strip():
		raise HTTPException(status_code=400, detail="text is required")
	save_reference_text(db, task_id, req.text)
	logger.info("Reference text for task %s updated by %s", task_id, user.username)
	return ReferenceResponse(task_id=task_id, total_words=reference_word_count(req.text))


@router.get("/tasks/{task_id}/progress", response_model=ProgressResponse)
def get_progress(task_id: str, user: User = Depends(get_current_user), store: ProgressStore = Depends(get_progress_store)):
	record = store.get(task_id, user.username) or empty_record(task_id, user.username)
	return _to_response(record)


@router.post("/tasks/check-progress", response_model=ProgressResponse)
def post_check_progress(
	req: CheckProgressRequest,
	user: User = Depends(get_current_user),
	db: Session = Depends(get_db),
	store: ProgressStore = Depends(get_progress_store),
):
	strategy = _resolve_strategy(req.strategy)
	reference_text = _load_reference(db, req.task_id)
	try:
		record = check_progress(req.task_id, user.username, req.text, reference_text, strategy, store)
	except OperationalError:
		raise HTTPException(status_code=503, detail="Progress storage unavailable")
	return _to_response(record)
