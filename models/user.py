from sqlalchemy import Column, Integer, String, Boolean
from models.base import CoreBase


class AppUser(CoreBase):
    """
    Login account. password holds an unsalted hex SHA-256 digest.
    Saved journalist searches/selections reference app_user.id across stores.
    """
    __tablename__ = "app_user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)
    password = Column(String(64), nullable=False)
    editor = Column(Boolean, nullable=False, default=False)
