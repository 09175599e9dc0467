import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError

from ..services import Ready, Services, get_services
from .auth import User, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analytics"])


def accuracy_percent(attempts: int, correct: int) -> float:
	if attempts <= 0:
		return 0.0
	return round(correct / attempts * 100, 2)


@router.get("/analytics")
async def analytics(user: User = Depends(get_current_user), services: Services = Depends(get_services)):
	if not isinstance(services.store, Ready):
		raise HTTPException(status_code=500, detail="Analytics not available")
	try:
		attempts, correct = await run_in_threadpool(services.store.handle.summarize, user.uid)
	except SQLAlchemyError:
		logger.exception("Analytics query failed for user %s", user.uid)
		raise HTTPException(status_code=500, detail="Failed to fetch analytics")
	return {"attempts": attempts, "correct": correct, "accuracy": accuracy_percent(attempts, correct)}
