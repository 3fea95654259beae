'''
JWT issuing and verification, and the role guard used by protected routes.
'''
from datetime import datetime, timedelta, timezone
from typing import Optional, Annotated
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from ..common.config import settings
from ..database.db_enums import UserRole
from ..models.token import TokenPayload
from ..common.logger import log
from ..database import models as db_models
from .user_service import UserService


# --- JWT Handling ---
class JWTHandler:
    @staticmethod
    def create_access_token(
        subject: str,
        role: Optional[str] = None,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

        expire = datetime.now(timezone.utc) + expires_delta
        to_encode = {"sub": str(subject), "exp": expire}
        if role is not None:
            to_encode["role"] = role
        return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def decode_token(token: str) -> TokenPayload | None:
        try:
            payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
            return TokenPayload(**payload)
        except (JWTError, ValueError) as e:  # pydantic errors are ValueErrors
            log.warning(f"JWT decode/validation error: {e}")
            return None


# --- JWT Verification Dependency Function ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")

async def verify_token_and_get_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    user_service: Annotated[UserService, Depends(UserService)]
) -> db_models.Users:
    """
    Dependency that verifies the bearer JWT and returns the polymorphic
    user (Admins, Mentors, or Teachers) it was issued to.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token_data = JWTHandler.decode_token(token)
    if not token_data or not token_data.sub:
        log.warning("JWT decode failed or invalid token structure.")
        raise credentials_exception

    user = await user_service.get_user_by_email(token_data.sub)
    if user is None:
        log.warning(f"User '{token_data.sub}' not found during token verification.")
        raise credentials_exception

    if not user.is_active:
        log.warning(f"User '{token_data.sub}' is not active.")
        raise credentials_exception

    log.info(f"JWT verified successfully for user: {user.email} (Role: {user.role})")
    return user


def require_roles(*roles: UserRole):
    """
    Builds a dependency that lets through only users holding one of `roles`.
    Anyone else gets a 403.
    """
    allowed = {role.value for role in roles}

    async def _check_role(
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)]
    ) -> db_models.Users:
        if current_user.role not in allowed:
            log.warning(f"SECURITY: User {current_user.id} (Role: {current_user.role}) needs one of {sorted(allowed)}.")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to view this resource."
            )
        return current_user

    return _check_role
