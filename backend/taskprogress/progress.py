from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional, Protocol, Tuple

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from .models import TaskProgress
from .scoring import ProgressStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressRecord:
	task_id: str
	username: str
	current_text: str
	progress: int
	is_completed: bool
	last_saved: datetime


class ProgressStore(Protocol):
	def get(self, task_id: str, username: str) -> Optional[ProgressRecord]:
		...

	def save(self, record: ProgressRecord) -> ProgressRecord:
		...


class InMemoryProgressStore:
	def __init__(self) -> None:
		self._records: Dict[Tuple[str, str], ProgressRecord] = {}

	def get(self, task_id: str, username: str) -> Optional[ProgressRecord]:
		return self._records.get((task_id, username))

	def save(self, record: ProgressRecord) -> ProgressRecord:
		self._records[(record.task_id, record.username)] = record
		return record


class SqlProgressStore:
	"""Progress records in the task_progress table, one row per (task, user)."""

	def __init__(self, db: Session, *, retry_attempts: int = 3, retry_base_delay: float = 0.1) -> None:
		self.db = db
		self.retry_attempts = max(1, retry_attempts)
		self.retry_base_delay = retry_base_delay

	def get(self, task_id: str, username: str) -> Optional[ProgressRecord]:
		row = self.db.get(TaskProgress, (task_id, username))
		if row is None:
			return None
		last_saved = row.updated_at
		# SQLite hands back naive values; stored timestamps are always UTC
		if last_saved is not None and last_saved.tzinfo is None:
			last_saved = last_saved.replace(tzinfo=timezone.utc)
		return ProgressRecord(
			task_id=row.task_id,
			username=row.username,
			current_text=row.input_text or "",
			progress=int(row.progress or 0),
			is_completed=bool(row.is_completed),
			last_saved=last_saved,
		)

	def _merge(self, record: ProgressRecord) -> None:
		self.db.merge(
			TaskProgress(
				task_id=record.task_id,
				username=record.username,
				input_text=record.current_text,
				progress=record.progress,
				is_completed=record.is_completed,
				updated_at=record.last_saved,
			)
		)
		self.db.commit()

	def save(self, record: ProgressRecord) -> ProgressRecord:
		attempt = 0
		conflict_retried = False
		while True:
			attempt += 1
			try:
				self._merge(record)
				return record
			except IntegrityError:
				# Another request inserted the same (task, user) between merge's read and
				# its insert; merging again finds that row and updates it
				self.db.rollback()
				if conflict_retried:
					raise
				conflict_retried = True
				attempt -= 1
				logger.info("Progress row for task %s / %s created concurrently, updating it", record.task_id, record.username)
			except OperationalError as e:
				self.db.rollback()
				if attempt >= self.retry_attempts:
					logger.error("Saving progress for task %s failed after %d attempts: %s", record.task_id, attempt, e)
					raise
				delay = self.retry_base_delay * (2 ** (attempt - 1))
				logger.warning("Saving progress for task %s failed (attempt %d/%d), retrying in %.2fs", record.task_id, attempt, self.retry_attempts, delay)
				time.sleep(delay)


def empty_record(task_id: str, username: str) -> ProgressRecord:
	return ProgressRecord(
		task_id=task_id,
		username=username,
		current_text="",
		progress=0,
		is_completed=False,
		last_saved=datetime.now(timezone.utc),
	)


def check_progress(
	task_id: str,
	username: str,
	text: Optional[str],
	reference_text: str,
	strategy: ProgressStrategy,
	store: ProgressStore,
) -> ProgressRecord:
	"""Score `text` against the task reference and store the result.

	The score is always recomputed and the stored record is overwritten,
	whatever its previous state was.
	"""
	score = strategy.score(text, reference_text)
	record = ProgressRecord(
		task_id=task_id,
		username=username,
		current_text=text or "",
		progress=score,
		is_completed=score == 100,
		last_saved=datetime.now(timezone.utc),
	)
	logger.info("Task %s progress for %s: %d%% (%s)", task_id, username, score, strategy.name)
	return store.save(record)
