from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from shipment_service.domain.models import Base

def build_engine(database_url: str, echo: bool = False) -> Engine:
    url = make_url(database_url)
    kwargs = {"echo": echo, "future": True, "pool_pre_ping": True}
    if url.get_backend_name() == "sqlite":
        # SQLite connections are shared with the request worker threads
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            # One connection, otherwise every checkout sees an empty database
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)

def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

def ping(engine: Engine) -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1")).fetchone()

def init_models(engine: Engine) -> None:
    Base.metadata.create_all(engine)

def safe_url(database_url: str) -> str:
    """Connection string with the password masked, for logging."""
    return make_url(database_url).render_as_string(hide_password=True)
