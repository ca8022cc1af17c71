"""
User Context (Core)
Login accounts for principals. The username is the principal identity.
"""

from typing import Optional
from asset_registry import db
from asset_registry.data.core.user_info.user import User
from asset_registry.logger import get_logger

logger = get_logger("asset_registry.buisness.core.user_context")

MIN_PASSWORD_LENGTH = 8


class UserContext:
    """
    Core context manager for user operations.
    """

    def __init__(self, user: User):
        self._user = user

    @property
    def user(self) -> User:
        return self._user

    @property
    def principal(self) -> str:
        return self._user.username

    @classmethod
    def find(cls, username: str) -> Optional['UserContext']:
        user = User.query.filter_by(username=username).first()
        return cls(user) if user else None

    @classmethod
    def create(cls, username: str, password: str, is_active: bool = True, commit: bool = True) -> 'UserContext':
        """
        Create a new login account.

        Raises:
            ValueError: If the username is empty or taken, or the password is too short
        """
        if not username or not username.strip():
            raise ValueError("Username is required")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        if User.query.filter_by(username=username).first():
            raise ValueError(f"Username '{username}' already exists")

        user = User(username=username.strip(), is_active=is_active)
        user.set_password(password)
        db.session.add(user)

        if commit:
            db.session.commit()
            logger.info(f"Created user: {user.username} (ID: {user.id})")
        else:
            db.session.flush()

        return cls(user)

    @classmethod
    def find_or_create(cls, username: str, password: str) -> 'UserContext':
        existing = cls.find(username)
        if existing:
            return existing
        return cls.create(username, password)
