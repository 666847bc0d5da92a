# storefront/services/user_service.py
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import Conflict, NotFound, Unauthorized
from storefront.domain.schemas import RegisterIn, LoginIn, UserOut, ProfileOut
from storefront.repos.user_repo import UserRepo
from storefront.utils.security import hash_password, verify_password
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _to_user_out(user: UserModel) -> UserOut:
    return UserOut(
        user_id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
    )


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: RegisterIn) -> UserOut:
        if self.repo.get_by_email(payload.email):
            raise Conflict("User already exists")

        user = UserModel(
            email=payload.email,
            password_hash=hash_password(payload.password),
            first_name=payload.first_name,
            last_name=payload.last_name,
        )
        created = self.repo.create_user(user)
        logger.info(f"User registered: {created.email}")
        return _to_user_out(created)

    def authenticate(self, payload: LoginIn) -> UserOut:
        user = self.repo.get_by_email(payload.email)
        if not user or not user.is_active or not verify_password(payload.password, user.password_hash):
            raise Unauthorized("Invalid credentials")

        user.last_login_at = datetime.now(timezone.utc)
        self.repo.save(user)
        logger.info(f"User logged in: {user.email}")
        return _to_user_out(user)

    def get_profile(self, user_id: int) -> ProfileOut:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found")
        return ProfileOut(
            user_id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            created_at=user.created_at,
            last_login_at=user.last_login_at,
        )

    def update_profile(self, user_id: int, first_name: str, last_name: str) -> UserOut:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found")

        user.first_name = first_name
        user.last_name = last_name
        self.repo.save(user)
        return _to_user_out(user)

    def change_password(self, user_id: int, current_password: str, new_password: str) -> None:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found")

        if not verify_password(current_password, user.password_hash):
            raise Unauthorized("Current password is incorrect")

        user.password_hash = hash_password(new_password)
        self.repo.save(user)
        logger.info(f"Password changed for user {user_id}")
