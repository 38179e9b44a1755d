from typing import Optional

from pydantic import BaseModel


# fields stay optional so missing values get the service's own 400 message
class LoginIn(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UpdateUsernameIn(BaseModel):
    newUsername: Optional[str] = None


class UpdatePasswordIn(BaseModel):
    currentPassword: Optional[str] = None
    newPassword: Optional[str] = None
