from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field

class UserBase(SQLModel):
    openId: str = Field(max_length=64, unique=True, index=True, sa_column_kwargs={"name": "open_id"})
    name: Optional[str] = None
    email: Optional[str] = Field(default=None, max_length=320)
    loginMethod: Optional[str] = Field(default=None, max_length=64, sa_column_kwargs={"name": "login_method"})
    role: str = Field(default="user", max_length=16) # 'user' or 'admin'

class User(UserBase, table=True):
    __tablename__ = "users"
    id: Optional[int] = Field(default=None, primary_key=True)
    createdAt: datetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"name": "created_at"})
    updatedAt: datetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"name": "updated_at"})
    lastSignedIn: datetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"name": "last_signed_in"})

class UserRead(UserBase):
    id: int
    createdAt: datetime
    lastSignedIn: datetime
