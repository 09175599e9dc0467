from typing import Optional
import logging

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from ..identity import InvalidToken
from ..services import Ready, Services, get_services

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

# Owner of attempts recorded while authentication is disabled
ANONYMOUS_UID = "anonymous"


class User(BaseModel):
	uid: str
	email: Optional[str] = None
	anonymous: bool = False


async def get_current_user(
	credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
	services: Services = Depends(get_services),
) -> User:
	if not isinstance(services.identity, Ready):
		return User(uid=ANONYMOUS_UID, anonymous=True)
	if credentials is None or not credentials.credentials:
		raise HTTPException(status_code=401, detail="Missing Bearer token")
	try:
		claims = await services.identity.handle.verify(credentials.credentials)
	except InvalidToken as err:
		logger.info("Rejected bearer token: %s", err)
		raise HTTPException(status_code=401, detail="Invalid token")
	return User(uid=claims["sub"], email=claims.get("email"))
