import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import config
from .db import init_db
from .errors import LedgerError
from .auth import router as auth_router
from .routes.user import router as user_router
from .routes.group import router as group_router
from .routes.expense import router as expense_router
from .routes.dashboard import router as dashboard_router

logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI(title="Expense Splitter")

if config.CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["*"],
        allow_credentials=True,
    )

# include routers
app.include_router(auth_router)
app.include_router(user_router)
app.include_router(group_router)
app.include_router(expense_router)
app.include_router(dashboard_router)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        problems.append(f"{field}: {err.get('msg')}" if field else err.get("msg"))
    return JSONResponse(status_code=400, content={"message": "; ".join(problems) or "Invalid request"})


@app.get("/")
def root():
    return {"message": "API Working"}


@app.on_event("startup")
def on_startup():
    init_db()
