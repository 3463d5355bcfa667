from .normalizer import normalize, tokenize, word_count
from .strategies import (
	STRATEGIES,
	ExactAlignment,
	ProgressStrategy,
	UnknownStrategyError,
	WeightedOverlap,
	best_alignment_length,
	clamp_percentage,
	get_strategy,
	length_progress,
	quality_progress,
	strategy_from_settings,
)

__all__ = [
	"STRATEGIES",
	"ExactAlignment",
	"ProgressStrategy",
	"UnknownStrategyError",
	"WeightedOverlap",
	"best_alignment_length",
	"clamp_percentage",
	"get_strategy",
	"length_progress",
	"normalize",
	"quality_progress",
	"strategy_from_settings",
	"tokenize",
	"word_count",
]
