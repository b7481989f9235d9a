from fastapi import APIRouter, Depends
from splitledger.repository import Repository, get_repository
from splitledger.schemas import EmailsIn, UserIdsOut, UserOut

router = APIRouter(prefix="/api")

@router.get("/users/{user_id}", response_model=UserOut)
def get_user(user_id: int, repo: Repository = Depends(get_repository)):
    # UserOut carries no password hash
    return repo.get_user(user_id)

@router.post("/get-ids-by-email", response_model=UserIdsOut)
def get_ids_by_email(body: EmailsIn, repo: Repository = Depends(get_repository)):
    users = repo.find_users_by_emails(e.strip().lower() for e in body.emails)
    return {"user_ids": [u.id for u in users]}
