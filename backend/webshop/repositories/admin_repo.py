from typing import Optional

from sqlalchemy.orm import Session

from webshop.models.admin_credential import AdminCredential


class AdminRepository:
    def __init__(self, db: Session):
        self.db = db

    def count(self) -> int:
        return self.db.query(AdminCredential).count()

    def get_active(self) -> Optional[AdminCredential]:
        return self.db.query(AdminCredential).order_by(AdminCredential.id).first()

    def get_by_username(self, username: str) -> Optional[AdminCredential]:
        return self.db.query(AdminCredential).filter(AdminCredential.username == username).first()

    def find(self, username: str, hashed_password: str) -> Optional[AdminCredential]:
        return (
            self.db.query(AdminCredential)
            .filter(
                AdminCredential.username == username,
                AdminCredential.password == hashed_password,
            )
            .first()
        )

    def find_by_password(self, hashed_password: str) -> Optional[AdminCredential]:
        return (
            self.db.query(AdminCredential)
            .filter(AdminCredential.password == hashed_password)
            .order_by(AdminCredential.id)
            .first()
        )

    def create(self, username: str, hashed_password: str) -> AdminCredential:
        rec = AdminCredential(username=username, password=hashed_password)
        self.db.add(rec)
        self.db.flush()
        return rec
