from __future__ import annotations
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.exc import SQLAlchemyError

from ..gemini_client import OracleError
from ..generation import GenerateRequest, generate_questions
from ..grading import GradeResult, Question, grade
from ..services import Ready, Services, get_services
from .auth import User, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["quiz"])


class FeedbackRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	question: Question
	user_answer: Any = Field(default=None, alias="userAnswer")
	context: Optional[Any] = None


class FeedbackResponse(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	correctness: bool
	message: str
	next_hint: str = Field(serialization_alias="nextHint")


def _feedback_for(result: GradeResult) -> FeedbackResponse:
	if result.correctness:
		return FeedbackResponse(correctness=True, message="Correct! Great job.", next_hint="Try a harder one.")
	return FeedbackResponse(correctness=False, message="Not quite. Check the explanation.", next_hint="Review the key concept.")


def _record_attempt(services: Services, user: User, req: FeedbackRequest, result: GradeResult) -> None:
	if not isinstance(services.store, Ready):
		return
	try:
		services.store.handle.record(
			user.uid,
			question=req.question.stem,
			user_answer="" if req.user_answer is None else str(req.user_answer),
			correct_answer=req.question.answer,
			correctness=result.correctness,
		)
	except SQLAlchemyError:
		# Grading must still reach the caller
		logger.exception("Failed to record attempt for user %s", user.uid)


@router.post("/generate-questions")
async def generate(req: GenerateRequest, services: Services = Depends(get_services)):
	try:
		resp = await generate_questions(req, services.oracle)
	except OracleError as e:
		logger.error("Question generation failed: %s", e)
		raise HTTPException(status_code=500, detail={"error": "Server error", "details": str(e)})
	data = resp.model_dump(mode="json", by_alias=True)
	if data.get("extractionError") is None:
		data.pop("extractionError", None)
	return data


@router.post("/feedback")
async def feedback(
	req: FeedbackRequest,
	user: User = Depends(get_current_user),
	services: Services = Depends(get_services),
):
	result = grade(req.question, req.user_answer)
	# Store I/O is synchronous; keep it off the event loop
	await run_in_threadpool(_record_attempt, services, user, req, result)
	return _feedback_for(result).model_dump(by_alias=True)
