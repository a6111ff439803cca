from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from devconnector.core.accounts import verify_token, get_user
from devconnector.core.errors import AuthorizationError
from devconnector.db.mongo import get_users_collection

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    users=Depends(get_users_collection),
):
    """Resolve the bearer token to the stored user document, or fail with 401."""
    if not credentials:
        raise AuthorizationError(unauthorized="Unauthorized")
    payload = verify_token(credentials.credentials)
    return get_user(payload["id"], collection=users)
