from __future__ import annotations
from datetime import datetime, timezone
from sqlalchemy import Boolean, Column, String, DateTime, Integer, Text, CheckConstraint
from .db import Base


class AuthUser(Base):
	__tablename__ = "auth_users"
	# Primary key is username
	username = Column(String(128), primary_key=True, index=True)
	password_hash = Column(String(256), nullable=False)
	email = Column(String(256), nullable=True)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class AuthSession(Base):
	__tablename__ = "auth_sessions"
	# One row per issued token (jti); deleting the row revokes the token
	session_id = Column(String(64), primary_key=True)
	username = Column(String(128), nullable=False, index=True)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	last_activity_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class TaskReference(Base):
	__tablename__ = "task_references"
	task_id = Column(String(128), primary_key=True)
	content = Column(Text, nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class TaskProgress(Base):
	__tablename__ = "task_progress"
	__table_args__ = (
		CheckConstraint("progress >= 0 AND progress <= 100", name="ck_task_progress_range"),
	)
	# Single entry per (task, user); each check overwrites the previous one
	task_id = Column(String(128), primary_key=True, index=True)
	username = Column(String(128), primary_key=True, index=True)
	input_text = Column(Text, nullable=False, default="")
	progress = Column(Integer, default=0, nullable=False)
	is_completed = Column(Boolean, default=False, nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
