# checkout/utils/auth.py
import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from checkout.domain.identity import Caller, Role
from checkout.utils.settings import JWT_ALGORITHM, JWT_SECRET

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_caller(token: str) -> Caller:
    """Token wystawia Identity Service: sub = id usera, role = user | admin."""
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Authentication failed. Token has expired.")
    except jwt.PyJWTError:
        raise _unauthorized("Authentication failed. Invalid token.")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise _unauthorized("Authentication failed. User information not found.")

    try:
        role = Role(payload.get("role") or Role.USER.value)
    except ValueError:
        raise _unauthorized("Authentication failed. Unknown role.")

    return Caller(id=user_id, role=role)


def get_current_caller(creds: HTTPAuthorizationCredentials | None = Depends(security)) -> Caller:
    if not creds:
        raise _unauthorized("Authentication failed. No token provided or invalid format.")
    return decode_caller(creds.credentials)


def require_admin(caller: Caller = Depends(get_current_caller)) -> Caller:
    if not caller.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Admin privileges required.",
        )
    return caller
