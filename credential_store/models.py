"""Token models.

``AccessTokenResponse`` mirrors the body of the client-credentials grant;
``AccessToken`` is what the store keeps and hands out.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from shared.clock import utc_now


class AccessTokenResponse(BaseModel):
    """POST /oauth2/token response body."""

    access_token: str
    expires_in: int = Field(..., description="Lifetime in seconds")
    token_type: Literal["bearer"]


class AccessToken(BaseModel):
    """Cached app access token."""

    model_config = {"frozen": True}

    access_token: str
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Whether the token should no longer be handed out."""
        return self.expires_at <= (now or utc_now())
