from __future__ import annotations
from enum import Enum
from typing import Optional

HARD_ABOVE = 0.85
EASY_BELOW = 0.5


class Difficulty(str, Enum):
	EASY = "easy"
	MEDIUM = "medium"
	HARD = "hard"


def select_level(requested: Difficulty = Difficulty.EASY, rolling_accuracy: Optional[float] = None) -> Difficulty:
	"""Pick the difficulty tier for the next batch of questions.

	Any accuracy signal overrides the requested tier. Both thresholds are
	exclusive, so exactly 0.5 and exactly 0.85 land on medium.
	"""
	if rolling_accuracy is None:
		return Difficulty(requested)
	if rolling_accuracy > HARD_ABOVE:
		return Difficulty.HARD
	if rolling_accuracy < EASY_BELOW:
		return Difficulty.EASY
	return Difficulty.MEDIUM
