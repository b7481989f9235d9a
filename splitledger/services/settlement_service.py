# splitledger/services/settlement_service.py
import logging
from decimal import Decimal

from splitledger.models.expense import Expense
from splitledger.repository import Repository

logger = logging.getLogger(__name__)


def settle_expense(repo: Repository, expense_id: int) -> Expense:
    """Zero every share of the expense; the record itself is kept. Settling twice is a no-op."""
    expense = repo.get_expense(expense_id)
    for share in expense.shares:
        share.amount = Decimal("0.00")
    repo.save(expense)
    logger.info("expense %s settled", expense.id)
    return expense
