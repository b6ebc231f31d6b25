from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.core.config import settings

# SQLite (local smoke runs) refuses cross-thread use by default and FastAPI
# runs sync handlers on a worker thread.
connect_args = (
    {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
)

# The engine is the entry point to the database. It's configured with the
# database URL and handles the connection pooling.
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)

# One session per request, handed out by app.api.deps.get_db.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
