from typing import List, Optional, TYPE_CHECKING
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from splitledger.models.user import User
    from splitledger.models.expense import Expense

class GroupMember(SQLModel, table=True):
    group_id: Optional[int] = Field(default=None, foreign_key="group.id", primary_key=True)
    user_id: Optional[int] = Field(default=None, foreign_key="user.id", primary_key=True)

class Group(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    creator_id: Optional[int] = Field(default=None, foreign_key="user.id")

    members: List["User"] = Relationship(
        back_populates="groups",
        link_model=GroupMember,
        sa_relationship_kwargs={"order_by": "User.id"},
    )
    # ordered by creation
    expenses: List["Expense"] = Relationship(
        back_populates="group",
        sa_relationship_kwargs={"order_by": "Expense.id"},
    )

    def member_ids(self) -> set:
        return {m.id for m in self.members}
