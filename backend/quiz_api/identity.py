from __future__ import annotations
import logging
import re
import time
from typing import Any, Dict, Optional

import httpx
from jose import JWTError, jwk, jwt
from jose.exceptions import JWKError

from .settings import Settings

logger = logging.getLogger(__name__)

_MAX_AGE = re.compile(r"max-age=(\d+)")


class InvalidToken(Exception):
	pass


class FirebaseTokenVerifier:
	"""Verifies Firebase ID tokens against Google's published signing certificates."""

	def __init__(
		self,
		project_id: str,
		*,
		certs_url: str,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self.project_id = project_id
		self.issuer = f"https://securetoken.google.com/{project_id}"
		self._certs_url = certs_url
		self._client = httpx.AsyncClient(timeout=10, transport=transport)
		self._certs: Dict[str, str] = {}
		self._certs_expire_at = 0.0

	async def _signing_certs(self) -> Dict[str, str]:
		if self._certs and time.monotonic() < self._certs_expire_at:
			return self._certs
		r = await self._client.get(self._certs_url)
		r.raise_for_status()
		self._certs = r.json()
		m = _MAX_AGE.search(r.headers.get("cache-control", ""))
		self._certs_expire_at = time.monotonic() + (int(m.group(1)) if m else 0)
		return self._certs

	async def verify(self, token: str) -> Dict[str, Any]:
		try:
			kid = jwt.get_unverified_header(token).get("kid")
		except JWTError as err:
			raise InvalidToken("malformed token") from err
		try:
			certs = await self._signing_certs()
		except (httpx.HTTPError, ValueError) as err:
			logger.error("Could not fetch identity signing certificates: %s", err)
			raise InvalidToken("signing certificates unavailable") from err
		cert = certs.get(kid) if kid else None
		if cert is None:
			raise InvalidToken("unknown key id")
		try:
			claims = jwt.decode(token, cert, algorithms=["RS256"], audience=self.project_id, issuer=self.issuer)
		except JWTError as err:
			raise InvalidToken(str(err)) from err
		if not claims.get("sub"):
			raise InvalidToken("token has no subject")
		return claims

	async def aclose(self) -> None:
		await self._client.aclose()


def unescape_private_key(value: str) -> str:
	return value.replace("\\n", "\n")


def check_service_account_key(private_key: str) -> Optional[str]:
	"""Return None when the key parses as an RSA private key, else the error."""
	try:
		jwk.construct(unescape_private_key(private_key), "RS256")
	except (JWKError, ValueError) as err:
		return str(err) or err.__class__.__name__
	return None


def build_verifier(settings: Settings, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> FirebaseTokenVerifier:
	return FirebaseTokenVerifier(
		settings.firebase_project_id or "",
		certs_url=settings.firebase_certs_url,
		transport=transport,
	)
