import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from .routers import analytics, health, quiz
from .services import Services, build_services
from .settings import Settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
	logging.basicConfig(level=level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
	logging.getLogger("httpx").setLevel(logging.WARNING)


async def _validation_error(request: Request, exc: RequestValidationError):
	# Client mistakes, not faults: no logging
	issues = [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in exc.errors()]
	return JSONResponse(status_code=400, content={"error": jsonable_encoder(issues)})


async def _http_error(request: Request, exc: HTTPException):
	content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
	return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def _unexpected_error(request: Request, exc: Exception):
	logger.exception("Unhandled error on %s %s", request.method, request.url.path)
	return JSONResponse(status_code=500, content={"error": "Server error", "details": str(exc)})


def create_app(settings: Optional[Settings] = None, services: Optional[Services] = None) -> FastAPI:
	settings = settings or (services.settings if services else Settings())
	configure_logging(settings.log_level)
	services = services or build_services(settings)

	app = FastAPI(title="Adaptive Quiz API")
	app.state.services = services
	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.cors_origins,
		allow_methods=["*"],
		allow_headers=["*"],
	)
	app.include_router(health.router, prefix=settings.api_prefix)
	app.include_router(quiz.router, prefix=settings.api_prefix)
	app.include_router(analytics.router, prefix=settings.api_prefix)
	app.add_exception_handler(RequestValidationError, _validation_error)
	app.add_exception_handler(HTTPException, _http_error)
	app.add_exception_handler(Exception, _unexpected_error)

	@app.on_event("shutdown")
	async def shutdown_event():
		await app.state.services.aclose()

	return app
