from pydantic import EmailStr, Field
from typing import Optional
from portal.models.admin import Department
from portal.schemas.common import CamelModel, UtcDatetime

class AdminRegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str
    department: Department

class AdminLoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6)

class AdminOut(CamelModel):
    name: str
    email: EmailStr
    department: Department

class AssignmentCreateRequest(CamelModel):
    task: str = Field(min_length=1)
    description: Optional[str] = None
    due_date: UtcDatetime

class GradeRequest(CamelModel):
    user_id: int
    feedback: Optional[str] = None
