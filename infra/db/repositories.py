# infra/db/repositories.py
from infra.db.project.repository import SqlAlchemyProjectRepository

__all__ = ["SqlAlchemyProjectRepository"]
