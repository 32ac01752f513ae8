from .session import Base, SessionLocal, create_tables, db_session, get_engine

__all__ = ["Base", "SessionLocal", "create_tables", "db_session", "get_engine"]
