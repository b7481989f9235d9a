import logging
import time

import bcrypt
from authlib.jose import JsonWebToken
from authlib.jose.errors import JoseError
from fastapi import APIRouter, Depends, Request

from splitledger.config import config
from splitledger.errors import UnauthorizedError, ValidationError
from splitledger.models.user import User
from splitledger.repository import Repository, get_repository
from splitledger.schemas import LoginIn, LoginOut, MessageOut, RegisterIn, UserOut

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)
jwt = JsonWebToken(["HS256"])


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)).decode("utf-8")

def check_password(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


def issue_token(user_id: int) -> str:
    now = int(time.time())
    payload = {"userId": user_id, "iat": now, "exp": now + config.TOKEN_TTL_SECONDS}
    return jwt.encode({"alg": "HS256"}, payload, config.JWT_SECRET).decode("ascii")

def verify_token(token: str) -> int:
    try:
        claims = jwt.decode(token, config.JWT_SECRET)
        claims.validate()
    except JoseError as e:
        logger.warning("token rejected: %s", e)
        raise UnauthorizedError("Invalid or expired token. Please log in again.")
    user_id = claims.get("userId") or claims.get("id")
    if not user_id:
        raise UnauthorizedError("Invalid token. Please log in again.")
    return int(user_id)


def require_user(request: Request) -> int:
    """Id of the caller, from ``Authorization: Bearer <token>`` or a bare ``token`` header."""
    auth_header = request.headers.get("authorization", "")
    token = request.headers.get("token")
    if not token and auth_header.lower().startswith("bearer "):
        token = auth_header.split(" ", 1)[1].strip()
    if not token:
        raise UnauthorizedError("Not Authorized. Please log in again.")
    return verify_token(token)


@router.post("/register", response_model=MessageOut, status_code=201)
def register(body: RegisterIn, repo: Repository = Depends(get_repository)):
    email = body.email.strip().lower()
    if repo.find_user_by_email(email):
        raise ValidationError("User already exists")
    user = User(name=body.name.strip(), email=email, password_hash=hash_password(body.password))
    repo.save(user)
    logger.info("registered user %s", user.id)
    return {"message": "User registered successfully"}

@router.post("/login", response_model=LoginOut)
def login(body: LoginIn, repo: Repository = Depends(get_repository)):
    user = repo.find_user_by_email(body.email.strip().lower())
    if not user or not check_password(body.password, user.password_hash):
        raise UnauthorizedError("Invalid credentials")
    return {"token": issue_token(user.id), "user": UserOut.model_validate(user), "message": "Login successful"}
