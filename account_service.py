from __future__ import annotations

from typing import List, Optional

from loguru import logger

from auth import Identity, TokenService, hash_password, verify_password
from db import Database, TemplateRepository, UserRepository
from errors import AuthError, ConflictError, InvariantViolation
from models import AdminUserUpdate, ProfileUpdate
from workout_service import WorkoutService


class AccountService:
    """Registration, login, profile edits and user administration."""

    def __init__(
        self,
        db: Database,
        tokens: TokenService,
        user_repo: UserRepository | None = None,
        workout_service: WorkoutService | None = None,
        template_repo: TemplateRepository | None = None,
    ) -> None:
        self.db = db
        self.tokens = tokens
        self.users = user_repo or UserRepository(db)
        self.workouts = workout_service or WorkoutService(db)
        self.templates = template_repo or TemplateRepository(db)

    def _session(self, user_id: int) -> dict:
        user = self.users.fetch_detail(user_id)
        return {"token": self.tokens.issue(user), "user": user}

    def register(self, email: str, name: str, password: str) -> dict:
        email = email.strip().lower()
        if self.users.email_taken(email):
            raise ConflictError("Email already registered")
        user_id = self.users.create(email, name, hash_password(password))
        logger.info(f"Registered user {user_id}")
        return self._session(user_id)

    def login(self, email: str, password: str) -> dict:
        user = self.users.fetch_by_email(email.strip().lower())
        if user is None or not verify_password(password, user["password"]):
            logger.warning("Failed login attempt")
            raise AuthError("Invalid credentials")
        logger.info(f"User {user['id']} logged in")
        return self._session(user["id"])

    def ensure_admin(self, email: str, name: str, password: str) -> Optional[int]:
        """Create an admin account unless one with ``email`` exists."""
        email = email.strip().lower()
        if self.users.fetch_by_email(email) is not None:
            return None
        user_id = self.users.create(email, name, hash_password(password), role="ADMIN")
        logger.info(f"Seeded admin account {email}")
        return user_id

    def profile(self, identity: Identity) -> dict:
        return self.users.fetch_detail(identity.id)

    def update_profile(self, identity: Identity, changes: ProfileUpdate) -> dict:
        self.users.update(
            identity.id,
            name=changes.name,
            password_hash=hash_password(changes.password) if changes.password else None,
        )
        return self.users.fetch_detail(identity.id)

    def list_users(self) -> List[dict]:
        return self.users.fetch_all_users()

    def promote(self, user_id: int) -> dict:
        self.users.fetch_detail(user_id)
        self.users.update(user_id, role="ADMIN")
        logger.info(f"User {user_id} promoted to admin")
        return self.users.fetch_detail(user_id)

    def admin_update(self, user_id: int, changes: AdminUserUpdate) -> dict:
        """Edit any account. The last admin can never be demoted."""
        current = self.users.fetch_detail(user_id)
        email = changes.email.strip().lower() if changes.email else None
        if email and self.users.email_taken(email, exclude_id=user_id):
            raise ConflictError("Email already in use")
        if (
            changes.role == "USER"
            and current["role"] == "ADMIN"
            and self.users.admin_ids() == [user_id]
        ):
            raise InvariantViolation("Cannot demote the last admin")
        self.users.update(
            user_id,
            email=email,
            name=changes.name,
            role=changes.role,
            password_hash=hash_password(changes.password) if changes.password else None,
        )
        logger.info(f"User {user_id} updated by admin")
        return self.users.fetch_detail(user_id)

    def delete_user(self, actor: Identity, user_id: int) -> None:
        """Delete an account together with its workouts and templates."""
        if actor.id == user_id:
            raise InvariantViolation("Admins cannot delete themselves")
        target = self.users.fetch_detail(user_id)
        if target["role"] == "ADMIN" and self.users.admin_ids() == [user_id]:
            raise InvariantViolation("Cannot delete the last admin")
        with self.db.transaction():
            removed = self.workouts.delete_all_for_user(user_id)
            self.templates.delete_for_user(user_id)
            self.users.delete(user_id)
        logger.info(f"User {user_id} deleted with {removed} workouts")
