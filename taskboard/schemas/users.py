from pydantic import BaseModel, EmailStr

class SearchedUserOut(BaseModel):
    user_id: str
    organization_id: str
    username: str
    email: str
    role_str: str
    department_name: str

class InviteIn(BaseModel):
    email: EmailStr
    name: str | None = None
    role_name: str
    department_name: str | None = None

class InvitedUserOut(BaseModel):
    user_id: str
    id: str
    name: str
    email: str
    role: str
    department: str | None
