from salesdash.database.base import Base
from salesdash.database.engine import build_engine, engine, init_schema
from salesdash.database.session import SessionLocal

__all__ = ["Base", "SessionLocal", "build_engine", "engine", "init_schema"]
