import logging
from typing import Iterable, List, Optional

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from splitledger.db import get_session
from splitledger.errors import NotFoundError, PersistenceError
from splitledger.models.user import User
from splitledger.models.group import Group, GroupMember
from splitledger.models.expense import Expense

logger = logging.getLogger(__name__)


class Repository:
    """Find/save access to users, groups and expenses over one request-scoped session."""

    def __init__(self, session: Session):
        self.session = session

    # users
    def get_user(self, user_id: int) -> User:
        user = self.session.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email)).first()

    def find_users_by_emails(self, emails: Iterable[str]) -> List[User]:
        emails = list(emails)
        if not emails:
            return []
        return list(self.session.exec(select(User).where(col(User.email).in_(emails)).order_by(User.id)).all())

    # groups
    def get_group(self, group_id: int) -> Group:
        group = self.session.get(Group, group_id)
        if not group:
            raise NotFoundError("Group not found")
        return group

    def groups_for_user(self, user_id: int) -> List[Group]:
        stmt = (
            select(Group)
            .join(GroupMember, Group.id == GroupMember.group_id)
            .where(GroupMember.user_id == user_id)
            .order_by(Group.id)
        )
        return list(self.session.exec(stmt).all())

    # expenses
    def get_expense(self, expense_id: int) -> Expense:
        expense = self.session.get(Expense, expense_id)
        if not expense:
            raise NotFoundError("Expense not found")
        return expense

    def save(self, *records):
        """Add records and commit them together; any database failure rolls the whole set back."""
        try:
            for record in records:
                self.session.add(record)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("commit failed for %s", ", ".join(type(r).__name__ for r in records))
            raise PersistenceError() from exc
        for record in records:
            self.session.refresh(record)
        return records[0] if len(records) == 1 else records


def get_repository(session: Session = Depends(get_session)) -> Repository:
    return Repository(session)
