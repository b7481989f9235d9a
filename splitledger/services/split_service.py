# splitledger/services/split_service.py
import logging
from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_HALF_UP
from typing import Dict, Iterable, Optional

from splitledger.errors import ValidationError
from splitledger.models.expense import Expense, ExpenseShare
from splitledger.models.group import Group
from splitledger.repository import Repository

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
# Numeric(12, 2) columns hold at most ten integer digits
MAX_AMOUNT = Decimal("1e10")


def to_money(value) -> Decimal:
    try:
        return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        raise ValidationError("Amount must be a number")


def split_equally(amount: Decimal, owner_id: int, sharer_ids: Iterable[int]) -> Dict[int, Decimal]:
    """Equal split between the owner and every sharer.

    The owner is never counted among the sharers (listing them there is the same as
    leaving them out), so ``n = len(sharers) + 1``. Each sharer owes ``amount / n``
    truncated to the cent and the owner is credited exactly what the sharers owe, so the
    shares always sum to zero; the rounding remainder stays in the owner's own portion.
    """
    sharers = [uid for uid in dict.fromkeys(sharer_ids) if uid != owner_id]
    if not sharers:
        raise ValidationError("At least one member other than the owner must share the expense")

    per_share = (amount / (len(sharers) + 1)).quantize(CENT, rounding=ROUND_DOWN)
    shares = {owner_id: per_share * len(sharers)}
    for uid in sharers:
        shares[uid] = -per_share
    return shares


def create_expense(
    repo: Repository,
    group: Group,
    owner_id: int,
    amount,
    sharer_ids: Iterable[int],
    name: str,
    category: str,
    description: Optional[str] = None,
) -> Expense:
    name = (name or "").strip()
    category = (category or "").strip()
    if not name or not category:
        raise ValidationError("All fields are required")

    amount = to_money(amount)
    if amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    if amount >= MAX_AMOUNT:
        raise ValidationError("Amount is too large")

    sharer_ids = list(sharer_ids)
    members = group.member_ids()
    if owner_id not in members:
        raise ValidationError("Owner is not a member of this group")
    if any(uid not in members for uid in sharer_ids):
        raise ValidationError("Some users not in this group")

    shares = split_equally(amount, owner_id, sharer_ids)

    expense = Expense(
        group_id=group.id,
        owner_id=owner_id,
        amount=amount,
        expense_name=name,
        description=(description or "").strip() or name,
        category=category,
        shares=[ExpenseShare(user_id=uid, amount=amt) for uid, amt in shares.items()],
    )
    repo.save(expense)
    logger.info("expense %s created in group %s: %s split %d ways", expense.id, group.id, amount, len(shares))
    return expense
