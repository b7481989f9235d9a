from decimal import Decimal

import pytest
from sqlmodel import select

from splitledger.errors import ValidationError
from splitledger.models.expense import Expense, ExpenseShare
from splitledger.services.split_service import create_expense, split_equally, to_money


def test_split_ninety_between_owner_and_two_sharers():
    shares = split_equally(Decimal("90"), 1, [2, 3])
    assert shares == {1: Decimal("60"), 2: Decimal("-30"), 3: Decimal("-30")}
    assert sum(shares.values()) == 0


def test_owner_absorbs_rounding_remainder():
    shares = split_equally(Decimal("100.00"), 1, [2, 3])
    assert shares[2] == shares[3] == Decimal("-33.33")
    assert shares[1] == Decimal("66.66")
    assert sum(shares.values()) == 0


@pytest.mark.parametrize("amount", ["0.01", "0.05", "1.00", "10.01", "99.99", "1234.57"])
def test_shares_always_sum_to_zero(amount):
    for sharer_count in range(1, 8):
        shares = split_equally(to_money(amount), 0, range(1, sharer_count + 1))
        assert sum(shares.values()) == 0
        assert shares[0] >= 0
        assert all(v <= 0 for uid, v in shares.items() if uid != 0)


def test_owner_listed_among_sharers_is_not_double_counted():
    assert split_equally(Decimal("90"), 1, [1, 2, 3]) == split_equally(Decimal("90"), 1, [2, 3])


def test_duplicate_sharers_collapse():
    assert split_equally(Decimal("90"), 1, [2, 2, 3, 3]) == {1: Decimal("60"), 2: Decimal("-30"), 3: Decimal("-30")}


@pytest.mark.parametrize("sharers", [[], [1]])
def test_split_without_other_sharers_is_rejected(sharers):
    with pytest.raises(ValidationError):
        split_equally(Decimal("90"), 1, sharers)


def test_create_expense_persists_expense_and_shares(trio, repo, session):
    group, a, b, c = trio
    expense = create_expense(repo, group, a.id, 90, [b.id, c.id], "Dinner", "Food")

    assert expense.id is not None
    assert expense.description == "Dinner"
    assert {s.user_id: s.amount for s in expense.shares} == {a.id: 60, b.id: -30, c.id: -30}
    session.refresh(group)
    assert [e.id for e in group.expenses] == [expense.id]


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"sharer_ids": []}, "other than the owner"),
        ({"sharer_ids": [999]}, "not in this group"),
        ({"amount": 0}, "greater than zero"),
        ({"amount": -5}, "greater than zero"),
        ({"amount": "abc"}, "must be a number"),
        ({"amount": "123456789012345678.91"}, "too large"),
        ({"amount": "10000000000.00"}, "too large"),
        ({"name": "  "}, "required"),
        ({"category": ""}, "required"),
    ],
)
def test_invalid_expense_is_rejected_without_writes(trio, repo, session, kwargs, message):
    group, a, b, c = trio
    args = {"owner_id": a.id, "amount": 90, "sharer_ids": [b.id, c.id], "name": "Dinner", "category": "Food"}
    args.update(kwargs)

    with pytest.raises(ValidationError, match=message):
        create_expense(repo, group, **args)

    assert session.exec(select(Expense)).all() == []
    assert session.exec(select(ExpenseShare)).all() == []


def test_owner_must_be_group_member(trio, repo, make_user):
    group, a, b, c = trio
    outsider = make_user("Zed")
    with pytest.raises(ValidationError, match="Owner"):
        create_expense(repo, group, outsider.id, 90, [b.id], "Dinner", "Food")


def test_amount_is_quantized_to_cents(trio, repo):
    group, a, b, c = trio
    expense = create_expense(repo, group, a.id, "10.005", [b.id], "Taxi", "Transport")
    assert expense.amount == Decimal("10.01")
    assert sum(s.amount for s in expense.shares) == 0


def test_largest_storable_amount_is_accepted(trio, repo, session):
    group, a, b, c = trio
    expense = create_expense(repo, group, a.id, "9999999999.99", [b.id, c.id], "Car", "Transport")
    session.expire_all()
    assert session.get(Expense, expense.id).amount == Decimal("9999999999.99")
    assert sum(s.amount for s in expense.shares) == 0


def test_expense_timestamp_is_timezone_aware(trio, repo):
    group, a, b, c = trio
    draft = Expense(group_id=group.id, owner_id=a.id, amount=Decimal("1.00"), expense_name="x", category="y")
    assert draft.created_at.tzinfo is not None

    expense = create_expense(repo, group, a.id, 90, [b.id, c.id], "Dinner", "Food")
    assert expense.id is not None
    assert expense.created_at is not None
