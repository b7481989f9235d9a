from sqlmodel import SQLModel, create_engine, Session
from splitledger.config import config

connect_args = {"check_same_thread": False} if config.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(config.DATABASE_URL, echo=config.SQL_ECHO, connect_args=connect_args)


def init_db(bind=engine):
    # Import models so SQLModel.metadata includes them
    import splitledger.models.user, splitledger.models.group, splitledger.models.expense
    SQLModel.metadata.create_all(bind)


def get_session():
    with Session(engine) as session:
        yield session
