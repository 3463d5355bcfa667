from __future__ import annotations
import re
from typing import List, Optional

_PUNCTUATION_RE = re.compile(r"[.,!?;:'\"()\n\r]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: Optional[str]) -> str:
	"""Lowercase, turn punctuation into spaces, collapse whitespace and trim.

	The steps run in that order so the result is deterministic, and applying
	the function to its own output returns it unchanged.
	"""
	if not text:
		return ""
	text = text.lower()
	text = _PUNCTUATION_RE.sub(" ", text)
	text = _WHITESPACE_RE.sub(" ", text)
	return text.strip()


def tokenize(text: Optional[str]) -> List[str]:
	normalized = normalize(text)
	if not normalized:
		return []
	return normalized.split(" ")


def word_count(text: Optional[str]) -> int:
	return len(tokenize(text))
