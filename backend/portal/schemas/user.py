from pydantic import BaseModel, ConfigDict, Field

from ..auth.rbac_contract import Role


class User(BaseModel):
    """Authenticated identity as held by the live session and the session store.

    Never carries a password.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    role: Role
    department: str
    avatar: str | None = Field(default=None, max_length=4)


class DirectoryUser(User):
    """Directory record. Only the user directory may hold one of these."""

    password: str = Field(..., repr=False)

    def sanitized(self) -> User:
        return User.model_validate(self.model_dump(exclude={"password"}))
