import structlog

from designdesk.core.client import unwrap
from designdesk.core.core import Service
from designdesk.core.modules.mention.resolver import extract_mentions, resolve_mentions
from designdesk.core.modules.user.models import TeamMember
from designdesk.errors import NotFoundError

logger = structlog.get_logger(__name__)

ROSTER_PATHS = ("/api/team/mentions", "/api/chat/team-members")


class MentionService(Service):
    """Fetches the team roster once and resolves @mentions against it."""

    _roster: list[TeamMember] | None = None

    async def get_team_members(self, refresh: bool = False) -> list[TeamMember]:
        """Get the roster, fetching it on first use or when refresh is requested."""
        if self._roster is None or refresh:
            self._roster = await self._fetch_roster()
            logger.debug("team_roster_loaded", member_count=len(self._roster))
        return list(self._roster)

    async def resolve(self, mentions: list[str]) -> list[str]:
        """Resolve raw mention tokens to member IDs."""
        if not mentions:
            return []
        roster = await self.get_team_members()
        resolved = resolve_mentions(mentions, roster)
        if len(resolved) < len(mentions):
            logger.debug("mentions_partially_resolved", tokens=mentions, resolved=resolved)
        return resolved

    async def resolve_content(self, content: str) -> list[str]:
        """Extract mention tokens from message text and resolve them."""
        roster = await self.get_team_members()
        return resolve_mentions(extract_mentions(content, roster), roster)

    async def _fetch_roster(self) -> list[TeamMember]:
        for path in ROSTER_PATHS:
            try:
                data = await self.client.get(path)
            except NotFoundError:
                logger.debug("team_roster_endpoint_missing", path=path)
                continue
            members = unwrap(data, "teamMembers")
            if isinstance(members, dict):
                members = members.get("members", [])
            return [TeamMember.model_validate(member) for member in members or []]
        raise NotFoundError("No team roster endpoint available")
