from pydantic import AliasChoices, EmailStr, Field
from portal.schemas.common import CamelModel

class UserRegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str

class UserLoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6)

class UserOut(CamelModel):
    name: str
    email: EmailStr

class UploadRequest(CamelModel):
    assignment_id: int
    submit_text: str = Field(
        min_length=1,
        validation_alias=AliasChoices("submitText", "text", "submit_text"),
    )
