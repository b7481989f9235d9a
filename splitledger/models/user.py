from typing import List, Optional, TYPE_CHECKING
from sqlmodel import Field, Relationship, SQLModel
from splitledger.models.group import GroupMember

if TYPE_CHECKING:
    from splitledger.models.group import Group

class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    password_hash: str

    groups: List["Group"] = Relationship(back_populates="members", link_model=GroupMember)
