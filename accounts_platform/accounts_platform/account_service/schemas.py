from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from typing import List, Optional

PHONE_PATTERN = r"^\+\d{6,15}$"
# passlib refuses longer secrets
MAX_PASSWORD_LENGTH = 4096


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Requests
class UserCreate(CamelModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6, max_length=MAX_PASSWORD_LENGTH)
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)


class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=MAX_PASSWORD_LENGTH)


class OrganisationCreate(CamelModel):
    name: str = Field(min_length=1)
    description: str = ""


class MemberAdd(CamelModel):
    # Absence is reported by the handler as a 400, not as a schema error
    user_id: Optional[str] = None


# Responses
class UserProfile(CamelModel):
    user_id: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None


class OrganisationOut(CamelModel):
    org_id: str
    name: str
    description: str


class AuthData(CamelModel):
    access_token: str
    user: UserProfile


class AuthResponse(BaseModel):
    status: str = "success"
    message: str
    data: AuthData


class UserResponse(BaseModel):
    status: str = "success"
    message: str
    data: UserProfile


class OrganisationResponse(BaseModel):
    status: str = "success"
    message: str
    data: OrganisationOut


class OrganisationList(BaseModel):
    organisations: List[OrganisationOut]


class OrganisationListResponse(BaseModel):
    status: str = "success"
    message: str
    data: OrganisationList


class MessageResponse(BaseModel):
    status: str = "success"
    message: str
