from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, TYPE_CHECKING
from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from splitledger.models.group import Group
    from splitledger.models.user import User

class Expense(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    group_id: int = Field(foreign_key="group.id", index=True)
    owner_id: int = Field(foreign_key="user.id")
    amount: Decimal = Field(max_digits=12, decimal_places=2)
    expense_name: str
    description: Optional[str] = ""
    category: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True))

    group: Optional["Group"] = Relationship(back_populates="expenses")
    owner: Optional["User"] = Relationship()
    shares: List["ExpenseShare"] = Relationship(
        back_populates="expense",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "ExpenseShare.id"},
    )

class ExpenseShare(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    expense_id: Optional[int] = Field(default=None, foreign_key="expense.id")
    user_id: int = Field(foreign_key="user.id")
    # signed: positive = owed to user, negative = user owes
    amount: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)

    expense: Optional[Expense] = Relationship(back_populates="shares")
    user: Optional["User"] = Relationship()
