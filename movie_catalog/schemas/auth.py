"""Identity token claims shared by the token codec and the role gate."""

from pydantic import BaseModel, ConfigDict

from movie_catalog.models.user import UserRole


class TokenClaims(BaseModel):
    """Verified identity carried by a bearer token."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    name: str
    role: UserRole
