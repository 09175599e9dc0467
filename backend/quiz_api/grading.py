from __future__ import annotations
import logging
import string
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

LETTERS = string.ascii_uppercase
# Used when a question arrives without its option list
DEFAULT_LETTERS = "ABCD"


class Question(BaseModel):
	stem: str
	options: List[str] = Field(default_factory=list)
	answer: str = ""
	explanation: Optional[str] = None
	hint: Optional[str] = None


@dataclass(frozen=True)
class Resolved:
	letter: str


@dataclass(frozen=True)
class Unresolved:
	normalized: str
	reason: str


Resolution = Union[Resolved, Unresolved]


@dataclass(frozen=True)
class GradeResult:
	user_letter: str
	correct_letter: str
	correctness: bool
	resolved: bool


def normalize(token: Any) -> str:
	"""Reduce an answer token to a single upper-case character ("" when empty)."""
	if token is None:
		return ""
	text = str(token).strip()
	if not text:
		return ""
	return text.upper()[0]


def valid_letters(options: Sequence[str]) -> str:
	if not options:
		return DEFAULT_LETTERS
	return LETTERS[: min(len(options), len(LETTERS))]


def letter_for_index(index: int) -> str:
	return LETTERS[index]


def resolve_correct_letter(answer: Any, options: Sequence[str]) -> Resolution:
	"""Map the stored answer field to the canonical option letter.

	A bare letter is taken as-is. Longer answers are matched against the
	option texts (trimmed, case-insensitive, first match wins) before falling
	back to their leading letter, so "Banana" resolves to the position of the
	"Banana" option rather than to "B".
	"""
	letter = normalize(answer)
	letters = valid_letters(options)
	raw = "" if answer is None else str(answer).strip()
	if len(raw) == 1 and letter in letters:
		return Resolved(letter)
	target = raw.upper()
	if target:
		for idx, opt in enumerate(options[: len(LETTERS)]):
			if str(opt).strip().upper() == target:
				return Resolved(letter_for_index(idx))
	if letter and letter in letters:
		return Resolved(letter)
	if not options:
		return Unresolved(letter, "answer is not a letter and no options were supplied")
	return Unresolved(letter, "answer matches no option")


def grade(question: Question, user_answer: Any) -> GradeResult:
	user_letter = normalize(user_answer)
	resolution = resolve_correct_letter(question.answer, question.options)
	if isinstance(resolution, Unresolved):
		logger.warning("Cannot resolve answer %r for question %r: %s", question.answer, question.stem, resolution.reason)
		return GradeResult(user_letter, resolution.normalized, False, False)
	return GradeResult(user_letter, resolution.letter, user_letter == resolution.letter, True)
