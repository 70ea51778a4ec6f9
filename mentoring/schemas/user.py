from typing import Literal

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    id: str
    intra_id: str
    role: Literal["mentor", "cadet"]

    @property
    def mentor(self) -> bool:
        return self.role == "mentor"


class UserAccessToken(BaseModel):
    model_config = ConfigDict(extra="ignore")

    uid: str
    intra_id: str
    role: Literal["mentor", "cadet"]

    def to_user(self) -> User:
        return User(id=self.uid, intra_id=self.intra_id, role=self.role)
