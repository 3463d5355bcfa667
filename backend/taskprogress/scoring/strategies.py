from __future__ import annotations
import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence, Type

from .normalizer import tokenize

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORDS = 5000


class UnknownStrategyError(ValueError):
	pass


def best_alignment_length(candidate_words: Sequence[str], reference_words: Sequence[str]) -> int:
	"""Largest number of position-wise equal tokens over every window offset.

	The candidate is held fixed and slid across the reference from offset 0 to
	len(reference) - len(candidate). A candidate longer than the reference has
	no valid offset and scores 0.
	"""
	m = len(candidate_words)
	if m == 0 or m > len(reference_words):
		return 0
	best = 0
	for offset in range(len(reference_words) - m + 1):
		matches = 0
		for j, word in enumerate(candidate_words):
			if reference_words[offset + j] == word:
				matches += 1
		if matches > best:
			best = matches
			if best == m:
				break
	return best


def length_progress(words: Sequence[str], target_words: int, min_words: int = 0) -> float:
	count = len(words)
	if count == 0 or count < min_words or target_words <= 0:
		return 0.0
	return min(100.0, count / target_words * 100)


def quality_progress(words: Sequence[str], reference_words: Sequence[str]) -> float:
	# Set overlap: word order and repeat counts are ignored
	reference_vocab = set(reference_words)
	if not reference_vocab:
		return 0.0
	matched = set(words) & reference_vocab
	return len(matched) / len(reference_vocab) * 100


def clamp_percentage(value: float) -> int:
	if value != value:  # NaN
		return 0
	rounded = int(math.floor(value + 0.5))
	return max(0, min(100, rounded))


class ProgressStrategy(ABC):
	name: str = ""

	def __init__(self, *, max_words: int = DEFAULT_MAX_WORDS) -> None:
		self.max_words = max_words

	def score(self, candidate_text: Optional[str], reference_text: Optional[str]) -> int:
		"""Completion percentage of `candidate_text` against `reference_text`.

		Total over all inputs: empty or missing text on either side gives 0.
		"""
		candidate_words = self._truncate(tokenize(candidate_text), "candidate")
		reference_words = self._truncate(tokenize(reference_text), "reference")
		if not candidate_words or not reference_words:
			return 0
		return clamp_percentage(self.percentage(candidate_words, reference_words))

	@abstractmethod
	def percentage(self, candidate_words: Sequence[str], reference_words: Sequence[str]) -> float:
		"""Unclamped percentage for two non-empty token sequences."""

	def _truncate(self, words: list[str], label: str) -> list[str]:
		if self.max_words and len(words) > self.max_words:
			logger.debug("Truncating %s text from %d to %d words", label, len(words), self.max_words)
			return words[: self.max_words]
		return words


class ExactAlignment(ProgressStrategy):
	"""Share of the reference reproduced verbatim, in order, starting anywhere."""

	name = "exact_alignment"

	def percentage(self, candidate_words: Sequence[str], reference_words: Sequence[str]) -> float:
		return best_alignment_length(candidate_words, reference_words) / len(reference_words) * 100


class WeightedOverlap(ProgressStrategy):
	"""Weighted mix of text volume and shared reference vocabulary."""

	name = "weighted_overlap"

	def __init__(
		self,
		*,
		target_words: int = 200,
		min_words: int = 50,
		length_weight: float = 0.6,
		quality_weight: float = 0.4,
		max_words: int = DEFAULT_MAX_WORDS,
	) -> None:
		super().__init__(max_words=max_words)
		self.target_words = target_words
		self.min_words = min_words
		self.length_weight = length_weight
		self.quality_weight = quality_weight

	def percentage(self, candidate_words: Sequence[str], reference_words: Sequence[str]) -> float:
		length = length_progress(candidate_words, self.target_words, self.min_words)
		quality = quality_progress(candidate_words, reference_words)
		return self.length_weight * length + self.quality_weight * quality


STRATEGIES: Dict[str, Type[ProgressStrategy]] = {
	ExactAlignment.name: ExactAlignment,
	WeightedOverlap.name: WeightedOverlap,
}


def get_strategy(name: str, **options: Any) -> ProgressStrategy:
	key = (name or "").strip().lower()
	cls = STRATEGIES.get(key)
	if cls is None:
		raise UnknownStrategyError(f"unknown scoring strategy: {name!r} (expected one of {', '.join(sorted(STRATEGIES))})")
	return cls(**options)


def strategy_from_settings(settings: Any, name: Optional[str] = None) -> ProgressStrategy:
	chosen = name or settings.scoring_strategy
	options: Dict[str, Any] = {"max_words": settings.max_input_words}
	if (chosen or "").strip().lower() == WeightedOverlap.name:
		options.update(
			target_words=settings.target_words,
			min_words=settings.min_words,
			length_weight=settings.length_weight,
			quality_weight=settings.quality_weight,
		)
	return get_strategy(chosen, **options)
