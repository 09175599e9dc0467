from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .difficulty import Difficulty, select_level
from .extraction import ExtractionFailed, extract_items
from .gemini_client import GeminiClient
from .services import Availability, Ready

logger = logging.getLogger(__name__)

MOCK_MODEL = "mock"


class Profile(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	last_accuracy: Optional[float] = Field(default=None, ge=0, le=1, alias="lastAccuracy")
	avg_time_secs: Optional[float] = Field(default=None, ge=0, alias="avgTimeSecs")


class GenerateRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	subject: str = Field(min_length=2)
	topic: str = Field(min_length=2)
	difficulty: Difficulty = Difficulty.EASY
	num_questions: int = Field(default=5, ge=1, le=10, alias="numQuestions")
	profile: Optional[Profile] = None


class GenerateResponse(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	items: List[Dict[str, Any]]
	used_model: str = Field(serialization_alias="usedModel")
	level: Difficulty
	extraction_error: Optional[str] = Field(default=None, serialization_alias="extractionError")


def mock_questions(subject: str, topic: str, count: int) -> List[Dict[str, Any]]:
	return [
		{
			"stem": f"Mock {subject} question #{i + 1} on {topic}?",
			"options": ["A", "B", "C", "D"],
			"answer": "A",
			"explanation": "This is mock data",
			"hint": "Think about the basics",
		}
		for i in range(count)
	]


def build_prompt(subject: str, topic: str, level: Difficulty, count: int) -> str:
	return (
		f"Generate {count} multiple-choice questions for the subject \"{subject}\" on the topic \"{topic}\" "
		f"at a {level.value} difficulty.\n"
		"Return ONLY a single, valid JSON object that matches this exact structure:\n"
		'{ "items": [{ "stem": "...", "options": ["...","...","...","..."], "answer": "A", "explanation": "...", "hint": "..." }] }\n'
		'Important: The "answer" field MUST be only a single uppercase letter: "A", "B", "C", or "D".'
	)


async def generate_questions(req: GenerateRequest, oracle: Availability[GeminiClient]) -> GenerateResponse:
	accuracy = req.profile.last_accuracy if req.profile else None
	level = select_level(req.difficulty, accuracy)
	if not isinstance(oracle, Ready):
		return GenerateResponse(items=mock_questions(req.subject, req.topic, req.num_questions), used_model=MOCK_MODEL, level=level)

	client = oracle.handle
	text = await client.generate(build_prompt(req.subject, req.topic, level, req.num_questions))
	result = extract_items(text)
	if isinstance(result, ExtractionFailed):
		logger.error("Oracle output could not be parsed (%s): %.500s", result.reason, result.raw)
		return GenerateResponse(items=[], used_model=client.model, level=level, extraction_error=result.reason)
	return GenerateResponse(items=result.items, used_model=client.model, level=level)
