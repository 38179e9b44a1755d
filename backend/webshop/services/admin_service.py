import hashlib
import re
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from webshop.config import settings
from webshop.models.admin_credential import AdminCredential
from webshop.repositories.admin_repo import AdminRepository
from webshop.services.exceptions import (
    AuthenticationError,
    Conflict,
    NotFound,
    ValidationError,
)
from webshop.utils.log import get_logger

log = get_logger("admin")

USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]+$")
PASSWORD_RE = re.compile(r"(?=.*[a-zA-Z])(?=.*\d)")


def hash_password(password: str) -> str:
    # unsalted sha256, kept so existing credential rows keep working
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


class AdminService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AdminRepository(db)

    def ensure_default(self) -> Optional[AdminCredential]:
        if self.repo.count():
            return None
        rec = self.repo.create(settings.DEFAULT_ADMIN_USERNAME, hash_password(settings.DEFAULT_ADMIN_PASSWORD))
        self.db.commit()
        log.info("Default admin credentials created (username: %s)", rec.username)
        return rec

    def verify(self, username: str, hashed_password: str) -> Optional[AdminCredential]:
        return self.repo.find(username, hashed_password)

    def login(self, username: Optional[str], password: Optional[str]) -> AdminCredential:
        if not username or not password:
            raise ValidationError("Username and password are required")
        rec = self.verify(username, hash_password(password))
        if not rec:
            # same answer for unknown user and wrong password
            log.warning("Failed admin login attempt")
            raise AuthenticationError("Invalid credentials")
        log.info("Admin %s logged in", rec.username)
        return rec

    def get_credentials(self) -> AdminCredential:
        rec = self.repo.get_active()
        if not rec:
            raise NotFound("Admin credentials not found")
        return rec

    def update_username(self, new_username: Optional[str]) -> AdminCredential:
        new_username = (new_username or "").strip()
        if len(new_username) < 3:
            raise ValidationError("Username must be at least 3 characters long")
        if not USERNAME_RE.match(new_username):
            raise ValidationError("Username can only contain letters, numbers, and underscores")

        rec = self.get_credentials()
        other = self.repo.get_by_username(new_username)
        if other and other.id != rec.id:
            raise Conflict("Username already exists")

        rec.username = new_username
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Conflict("Username already exists")
        log.info("Admin username changed to %s", new_username)
        return rec

    def update_password(self, current_password: Optional[str], new_password: Optional[str]) -> AdminCredential:
        if not current_password or not new_password:
            raise ValidationError("Current password and new password are required")
        if len(new_password) < 6:
            raise ValidationError("New password must be at least 6 characters long")
        if not PASSWORD_RE.match(new_password):
            raise ValidationError("New password must contain at least one letter and one number")

        rec = self.repo.find_by_password(hash_password(current_password))
        if not rec:
            raise AuthenticationError("Current password is incorrect")

        rec.password = hash_password(new_password)
        self.db.commit()
        log.info("Admin password changed for %s", rec.username)
        return rec
