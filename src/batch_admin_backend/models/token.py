'''
Login response and JWT payload models.
'''
from pydantic import BaseModel, EmailStr
from datetime import datetime

class Token(BaseModel):
    access_token: str
    token_type: str

class TokenPayload(BaseModel):
    sub: EmailStr # the user's email
    role: str | None = None
    exp: datetime
