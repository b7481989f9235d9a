from fastapi import APIRouter, Depends
from splitledger.auth import require_user
from splitledger.repository import Repository, get_repository
from splitledger.schemas import DashboardOut
from splitledger.services.balance_service import dashboard_for_user

router = APIRouter(prefix="/api/dashboard")

@router.get("/dash", response_model=DashboardOut)
def dashboard(user_id: int = Depends(require_user), repo: Repository = Depends(get_repository)):
    return {"dashboard": dashboard_for_user(repo, user_id)}
