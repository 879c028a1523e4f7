from pydantic import BaseModel, ConfigDict


class AuthContextDTO(BaseModel):
    """Who the storefront acts for. Token issuance is handled by the auth backend."""
    model_config = ConfigDict(frozen=True)

    user_id: str | None = None
    token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)
