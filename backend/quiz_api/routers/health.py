from fastapi import APIRouter, Depends

from ..services import Services, describe, get_services

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
	return {"ok": True}


@router.get("/info")
def info(services: Services = Depends(get_services)):
	return {
		"status": "ok",
		"oracle": describe(services.oracle),
		"identity": describe(services.identity),
		"store": describe(services.store),
	}
