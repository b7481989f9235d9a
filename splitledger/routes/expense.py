from fastapi import APIRouter, Depends
from splitledger.auth import require_user
from splitledger.repository import Repository, get_repository
from splitledger.schemas import ExpenseCreate, ExpenseCreated, ExpenseOut, ExpenseSettled, SettleIn
from splitledger.services.settlement_service import settle_expense
from splitledger.services.split_service import create_expense

router = APIRouter(prefix="/api/expenses")

@router.post("/add", response_model=ExpenseCreated, status_code=201)
def add_expense(body: ExpenseCreate, user_id: int = Depends(require_user), repo: Repository = Depends(get_repository)):
    group = repo.get_group(body.group)
    e = create_expense(
        repo, group,
        owner_id=body.owner,
        amount=body.amount,
        sharer_ids=body.shared_with,
        name=body.expense_name,
        category=body.category,
        description=body.description,
    )
    return {
        "message": "Expense added successfully",
        "expense": ExpenseOut.model_validate(e),
        "balances": {s.user_id: s.amount for s in e.shares},
    }

@router.post("/settle", response_model=ExpenseSettled)
def settle(body: SettleIn, user_id: int = Depends(require_user), repo: Repository = Depends(get_repository)):
    e = settle_expense(repo, body.expense_id)
    return {"message": "Expense settled successfully", "expense": ExpenseOut.model_validate(e)}
