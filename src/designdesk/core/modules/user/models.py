from pydantic import Field

from designdesk.core.models import ApiModel


class TeamMember(ApiModel):
    """Member of the studio team, used as the roster for @mentions."""

    id: str = Field(..., description="User ID")
    name: str = Field(..., description="Display name, possibly with a parenthesized suffix")
    email: str | None = Field(None, description="Email address")
    role: str | None = Field(None, description="Team role, e.g. DESIGNER")
