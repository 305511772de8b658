from pydantic import BaseModel, EmailStr, Field, validator
from typing import Optional


class UserResponse(BaseModel):
    id: int
    email: EmailStr
    name: Optional[str]
    is_admin: bool

    class Config:
        from_attributes = True


class UserUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)

    @validator("name")
    def validate_name(cls, v):
        if v is not None and (not v or not v.strip()):
            raise ValueError("Name cannot be empty")
        return v.strip() if v else v
