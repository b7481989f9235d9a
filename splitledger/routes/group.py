import logging
from fastapi import APIRouter, Depends
from splitledger.auth import require_user
from splitledger.errors import NotFoundError, ValidationError
from splitledger.models.group import Group
from splitledger.repository import Repository, get_repository
from splitledger.schemas import (
    AddMemberIn, GroupBalanceDetails, GroupCreate, GroupDashboard, GroupEnvelope, GroupOut,
    GroupsOut, MemberBalances, SummaryOut,
)
from splitledger.services.balance_service import (
    compute_group_balance_details, compute_group_dashboard, compute_member_balances, summarize_groups,
)

router = APIRouter(prefix="/api/groups")
logger = logging.getLogger(__name__)

@router.post("/create", response_model=GroupEnvelope, status_code=201)
def create_group(body: GroupCreate, user_id: int = Depends(require_user), repo: Repository = Depends(get_repository)):
    emails = list(dict.fromkeys(e.strip().lower() for e in body.emails))
    users = repo.find_users_by_emails(emails)
    if len(users) != len(emails):
        raise ValidationError("Some emails are invalid")
    members = list(users)
    if user_id not in {u.id for u in members}:
        # creator is always a member
        members.append(repo.get_user(user_id))
    g = Group(name=body.group_name.strip(), creator_id=user_id, members=members)
    repo.save(g)
    logger.info("group %s created by user %s with %d members", g.id, user_id, len(members))
    return {"message": "Group created successfully", "group": GroupOut.model_validate(g)}

@router.patch("/add-member-by-email", response_model=GroupEnvelope)
def add_member_by_email(body: AddMemberIn, user_id: int = Depends(require_user), repo: Repository = Depends(get_repository)):
    member = repo.find_user_by_email(body.email.strip().lower())
    if not member:
        raise NotFoundError("User not found")
    g = repo.get_group(body.group_id)
    if member.id not in g.member_ids():
        g.members.append(member)
        repo.save(g)
    return {"message": "Member added successfully", "group": GroupOut.model_validate(g)}

@router.get("/my-groups", response_model=GroupsOut)
def my_groups(user_id: int = Depends(require_user), repo: Repository = Depends(get_repository)):
    return {"groups": [GroupOut.model_validate(g) for g in repo.groups_for_user(user_id)]}

@router.get("/summary", response_model=SummaryOut)
def group_summary(user_id: int = Depends(require_user), repo: Repository = Depends(get_repository)):
    return {"summary": summarize_groups(repo, user_id)}

@router.get("/{group_id}", response_model=GroupEnvelope, response_model_exclude_none=True)
def get_group(group_id: int, user_id: int = Depends(require_user), repo: Repository = Depends(get_repository)):
    return {"group": GroupOut.model_validate(repo.get_group(group_id))}

@router.get("/{group_id}/balances", response_model=MemberBalances)
def member_balances(group_id: int, user_id: int = Depends(require_user), repo: Repository = Depends(get_repository)):
    return compute_member_balances(repo.get_group(group_id))

@router.get("/{group_id}/balance-details", response_model=GroupBalanceDetails)
def balance_details(group_id: int, user_id: int = Depends(require_user), repo: Repository = Depends(get_repository)):
    return compute_group_balance_details(repo.get_group(group_id), user_id)

@router.get("/{group_id}/dashboard", response_model=GroupDashboard)
def group_dashboard(group_id: int, user_id: int = Depends(require_user), repo: Repository = Depends(get_repository)):
    return compute_group_dashboard(repo.get_group(group_id), user_id)
