'''
Password login for staff accounts (admins, mentors and teachers).
'''
from typing import Annotated
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from .security import JWTHandler
from .user_service import UserService
from ..common.security_utils import HashedPassword
from ..models import token as token_models
from ..common.logger import log


class LoginService:
    """
    Exchanges an email and password for a bearer token carrying the user's
    role, which the dashboard uses to pick the teacher or mentor view.
    """
    def __init__(
        self,
        user_service: Annotated[UserService, Depends(UserService)]
    ):
        self.user_service = user_service

    async def login_user(self, form_data: OAuth2PasswordRequestForm) -> token_models.Token:
        # OAuth2 forms name the field "username"; it holds the email here.
        email = form_data.username
        user = await self.user_service.get_user_by_email(email)

        # unknown email and wrong password answer the same way
        if user is None or not HashedPassword.verify(form_data.password, user.password):
            log.warning(f"Rejected login for {email}.")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email or password",
                headers={"WWW-Authenticate": "Bearer"},
            )

        if not user.is_active:
            log.warning(f"Rejected login for deactivated {user.role} account {user.id}.")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Inactive user."
            )

        access_token = JWTHandler.create_access_token(subject=user.email, role=user.role)
        log.info(f"Issued access token to {user.role} {user.id}.")
        return token_models.Token(access_token=access_token, token_type="bearer")
