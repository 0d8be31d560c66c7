from pydantic import BaseModel
from typing import Optional


class SignUpRequest(BaseModel):
    email: str
    password: str
    name: Optional[str] = None
    profile_image: Optional[str] = None


class SignInRequest(BaseModel):
    email: str
    password: str


class ResetPasswordRequest(BaseModel):
    email: str


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = None
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
