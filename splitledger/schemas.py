from datetime import datetime
from decimal import Decimal
from typing import Annotated, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Decimal in Python, plain number on the wire
Money = Annotated[Decimal, PlainSerializer(lambda v: float(v), return_type=float, when_used="json")]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ---------- requests ----------
class RegisterIn(CamelModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)

class LoginIn(CamelModel):
    email: str
    password: str

class EmailsIn(CamelModel):
    emails: List[str]

class GroupCreate(CamelModel):
    group_name: str = Field(min_length=1)
    emails: List[str] = Field(min_length=1)

class AddMemberIn(CamelModel):
    group_id: int
    email: str

class ExpenseCreate(CamelModel):
    group: int
    owner: int
    amount: Decimal
    expense_name: str
    category: str
    shared_with: List[int]
    description: Optional[str] = None

class SettleIn(CamelModel):
    expense_id: int


# ---------- responses ----------
class UserOut(CamelModel):
    id: int
    name: str
    email: str

class GroupOut(CamelModel):
    id: int
    name: str
    creator_id: Optional[int] = None
    members: List[UserOut] = []

class ShareOut(CamelModel):
    user_id: int
    amount: Money

class ExpenseOut(CamelModel):
    id: int
    group_id: int
    owner_id: int
    amount: Money
    expense_name: str
    description: Optional[str] = None
    category: str
    created_at: datetime
    shared_with: List[ShareOut] = Field(validation_alias=AliasChoices("shares", "sharedWith", "shared_with"))

class MemberBalance(CamelModel):
    id: int
    name: str
    email: str
    balance: Money

class GroupDashboard(CamelModel):
    group_id: int
    group_name: str
    owed_by_user: Money
    owed_to_user: Money
    members: List[MemberBalance]

class BalanceDetail(CamelModel):
    id: int
    name: str
    email: str
    amount: Money
    type: Literal["owedToUser", "owedByUser"]

class GroupBalanceDetails(CamelModel):
    group_id: int
    group_name: str
    balance_details: List[BalanceDetail]

class MemberExpenseBalance(MemberBalance):
    expenses: List[str] = []

class MemberBalances(CamelModel):
    group_name: str
    balances: List[MemberExpenseBalance]

class GroupSummary(CamelModel):
    group_id: int
    group_name: str
    owed_by_user: Money
    owed_to_user: Money
    members: List[UserOut]


# ---------- envelopes ----------
class MessageOut(CamelModel):
    message: str

class LoginOut(MessageOut):
    token: str
    user: UserOut

class UserIdsOut(CamelModel):
    user_ids: List[int]

class GroupEnvelope(CamelModel):
    message: Optional[str] = None
    group: GroupOut

class GroupsOut(CamelModel):
    groups: List[GroupOut]

class SummaryOut(CamelModel):
    summary: List[GroupSummary]

class DashboardOut(CamelModel):
    dashboard: List[GroupDashboard]

class ExpenseCreated(MessageOut):
    expense: ExpenseOut
    balances: Dict[int, Money]

class ExpenseSettled(MessageOut):
    expense: ExpenseOut
