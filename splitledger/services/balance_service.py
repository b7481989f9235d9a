# splitledger/services/balance_service.py
from decimal import Decimal
from typing import Dict, List

from splitledger.models.group import Group
from splitledger.models.user import User
from splitledger.repository import Repository
from splitledger.schemas import (
    BalanceDetail,
    GroupBalanceDetails,
    GroupDashboard,
    GroupSummary,
    MemberBalance,
    MemberBalances,
    MemberExpenseBalance,
    UserOut,
)

ZERO = Decimal("0.00")


def member_running_balances(group: Group) -> Dict[int, Decimal]:
    """Signed sum of each member's shares over the group's expenses (positive = creditor)."""
    nets = {m.id: ZERO for m in group.members}
    for e in group.expenses:
        for s in e.shares:
            # shares of users no longer in the member set are left out
            if s.user_id in nets:
                nets[s.user_id] += s.amount
    return nets


def compute_group_dashboard(group: Group, requesting_user_id: int) -> GroupDashboard:
    owed_by_user = ZERO
    owed_to_user = ZERO
    for e in group.expenses:
        for s in e.shares:
            if s.user_id != requesting_user_id:
                continue
            if s.amount < 0:
                owed_by_user -= s.amount
            else:
                owed_to_user += s.amount

    nets = member_running_balances(group)
    members = [
        MemberBalance(id=m.id, name=m.name, email=m.email, balance=nets[m.id])
        for m in group.members
    ]
    return GroupDashboard(
        group_id=group.id,
        group_name=group.name,
        owed_by_user=owed_by_user,
        owed_to_user=owed_to_user,
        members=members,
    )


def compute_group_balance_details(group: Group, requesting_user_id: int) -> GroupBalanceDetails:
    """Net amount between the requesting user and each counterparty.

    Only owner/sharer pairs that appear together in an expense are related; debts are
    never chained through a third member.
    """
    nets: Dict[int, Decimal] = {}
    counterparts: Dict[int, User] = {}

    for e in group.expenses:
        for s in e.shares:
            # zero (settled) and creditor shares carry no debt
            if s.amount >= 0:
                continue
            if e.owner_id == requesting_user_id and s.user_id != requesting_user_id:
                other, amt = s.user, -s.amount
            elif s.user_id == requesting_user_id and e.owner_id != requesting_user_id:
                other, amt = e.owner, s.amount
            else:
                continue
            nets[other.id] = nets.get(other.id, ZERO) + amt
            counterparts[other.id] = other

    details = [
        BalanceDetail(
            id=uid,
            name=counterparts[uid].name,
            email=counterparts[uid].email,
            amount=abs(net),
            type="owedToUser" if net >= 0 else "owedByUser",
        )
        for uid, net in nets.items()
    ]
    return GroupBalanceDetails(group_id=group.id, group_name=group.name, balance_details=details)


def compute_member_balances(group: Group) -> MemberBalances:
    nets = member_running_balances(group)
    names: Dict[int, List[str]] = {m.id: [] for m in group.members}
    for e in group.expenses:
        for s in e.shares:
            if s.user_id in names and e.expense_name not in names[s.user_id]:
                names[s.user_id].append(e.expense_name)

    balances = [
        MemberExpenseBalance(id=m.id, name=m.name, email=m.email, balance=nets[m.id], expenses=names[m.id])
        for m in group.members
    ]
    return MemberBalances(group_name=group.name, balances=balances)


def dashboard_for_user(repo: Repository, user_id: int) -> List[GroupDashboard]:
    return [compute_group_dashboard(g, user_id) for g in repo.groups_for_user(user_id)]


def summarize_groups(repo: Repository, user_id: int) -> List[GroupSummary]:
    summary = []
    for g in repo.groups_for_user(user_id):
        rollup = compute_group_dashboard(g, user_id)
        summary.append(GroupSummary(
            group_id=g.id,
            group_name=g.name,
            owed_by_user=rollup.owed_by_user,
            owed_to_user=rollup.owed_to_user,
            members=[UserOut.model_validate(m) for m in g.members],
        ))
    return summary
