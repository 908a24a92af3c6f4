from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from meetup.schemas.validation import RequestBody


class SignupRequest(RequestBody):
    firstName: str = Field(min_length=1)
    lastName: str = Field(min_length=1)
    email: EmailStr
    username: str = Field(min_length=4, max_length=30)
    password: str = Field(min_length=6)

    messages = {
        "email": "Invalid email",
        "username": "Username must be 4 to 30 characters and not an email",
        "firstName": "First Name is required",
        "lastName": "Last Name is required",
        "password": "Password must be 6 characters or more and 72 bytes or less",
    }

    @field_validator("username")
    @classmethod
    def usernameIsNotEmail(cls, value: str) -> str:
        if "@" in value:
            raise ValueError("Cannot be an email.")
        return value

    @field_validator("password")
    @classmethod
    def passwordFitsBcrypt(cls, value: str) -> str:
        # bcrypt only reads the first 72 bytes and newer releases refuse more
        if len(value.encode("utf-8")) > 72:
            raise ValueError("Password must be 72 bytes or less")
        return value

    class Config:
        json_schema_extra = {
            "example": {
                "firstName": "Demo",
                "lastName": "Lition",
                "email": "demo@user.io",
                "username": "Demo-lition",
                "password": "password",
            }
        }


class LoginRequest(RequestBody):
    credential: str = Field(min_length=1)
    password: str = Field(min_length=1)

    messages = {
        "credential": "Email or username is required",
        "password": "Password is required",
    }


class SessionUser(BaseModel):
    id: int
    firstName: str
    lastName: str
    email: str
    username: str


class SessionResponse(BaseModel):
    user: Optional[SessionUser] = None
    token: Optional[str] = None


class UserSummary(BaseModel):
    id: int
    firstName: str
    lastName: str
