from app.repositories.base import Repositories
from app.repositories.memory import InMemoryRepositories
from app.repositories.sql import SqlRepositories

__all__ = ["Repositories", "InMemoryRepositories", "SqlRepositories"]
