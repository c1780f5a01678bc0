from pydantic import BaseModel, ConfigDict
from datetime import datetime


class User(BaseModel):
    """
    Registered account.
    Created once by the credential store and never mutated afterwards.
    """
    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    email: str
    password_hash: str
    created_at: datetime

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"
