from __future__ import annotations
import logging
import re
from pathlib import Path
from typing import Optional

from sqlalchemy.orm import Session

from .models import TaskReference

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parents[2]

_TASK_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class ReferenceTextNotFound(LookupError):
	pass


def resolve_reference_dir(reference_dir: str | Path) -> Path:
	# Relative settings point inside the project, so cwd doesn't matter when launching
	path = Path(reference_dir)
	if not path.is_absolute():
		path = BASE_DIR / path
	return path


def reference_word_count(text: Optional[str]) -> int:
	return len((text or "").split())


def _read_reference_file(task_id: str, reference_dir: str | Path) -> Optional[str]:
	# Task ids double as file stems, so anything path-like is refused
	if not _TASK_ID_RE.match(task_id):
		return None
	path = resolve_reference_dir(reference_dir) / f"{task_id}.txt"
	try:
		return path.read_text(encoding="utf-8")
	except FileNotFoundError:
		return None
	except OSError as e:
		logger.warning("Could not read reference text %s: %s", path, e)
		return None


def load_reference_text(db: Session, task_id: str, reference_dir: str | Path) -> str:
	"""Reference text for a task: database row first, then <reference_dir>/<task_id>.txt."""
	row = db.get(TaskReference, task_id)
	content = row.content if row is not None else _read_reference_file(task_id, reference_dir)
	if not content or not content.strip():
		raise ReferenceTextNotFound(task_id)
	return content


def save_reference_text(db: Session, task_id: str, text: str) -> TaskReference:
	row = db.merge(TaskReference(task_id=task_id, content=text))
	db.commit()
	return row
