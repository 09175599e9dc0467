from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError

from .gemini_client import GeminiClient
from .identity import FirebaseTokenVerifier, build_verifier, check_service_account_key
from .settings import Settings
from .store import AttemptStore, open_store

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Unavailable:
	reason: str


@dataclass(frozen=True)
class Ready(Generic[T]):
	handle: T


Availability = Union[Unavailable, Ready[T]]


def describe(service: Availability) -> str:
	return "ready" if isinstance(service, Ready) else service.reason


@dataclass
class Services:
	"""Process-wide handles, built once and shared read-only by every request."""

	settings: Settings
	oracle: Availability[GeminiClient]
	identity: Availability[FirebaseTokenVerifier]
	store: Availability[AttemptStore]

	async def aclose(self) -> None:
		if isinstance(self.oracle, Ready):
			await self.oracle.handle.aclose()
		if isinstance(self.identity, Ready):
			await self.identity.handle.aclose()
		if isinstance(self.store, Ready):
			self.store.handle.dispose()


def build_oracle(settings: Settings) -> Availability[GeminiClient]:
	if not settings.gemini_api_key:
		return Unavailable("GOOGLE_API_KEY is not configured")
	return Ready(GeminiClient(settings))


def build_identity(settings: Settings) -> Availability[FirebaseTokenVerifier]:
	if not settings.identity_configured:
		return Unavailable("Firebase credentials are not configured")
	error = check_service_account_key(settings.firebase_private_key or "")
	if error is not None:
		logger.warning("Firebase init failed: %s", error)
		return Unavailable(f"Firebase private key is invalid: {error}")
	return Ready(build_verifier(settings))


def build_store(settings: Settings) -> Availability[AttemptStore]:
	if not settings.database_url:
		return Unavailable("DATABASE_URL is not configured")
	try:
		return Ready(open_store(settings.database_url))
	except SQLAlchemyError as err:
		logger.error("Attempt store init failed: %s", err)
		return Unavailable(f"attempt store failed to open: {err.__class__.__name__}")


def build_services(settings: Optional[Settings] = None) -> Services:
	settings = settings or Settings()
	logger.info(
		"Loaded configuration: port=%s google_api_key=%s firebase_project_id=%s database=%s",
		settings.port,
		"present" if settings.gemini_api_key else "missing",
		settings.firebase_project_id or "missing",
		"present" if settings.database_url else "missing",
	)
	services = Services(
		settings=settings,
		oracle=build_oracle(settings),
		identity=build_identity(settings),
		store=build_store(settings),
	)
	if isinstance(services.oracle, Unavailable):
		logger.warning("%s; serving mock questions", services.oracle.reason)
	if isinstance(services.identity, Unavailable):
		logger.warning("%s; authentication is disabled", services.identity.reason)
	return services


def get_services(request: Request) -> Services:
	return request.app.state.services
