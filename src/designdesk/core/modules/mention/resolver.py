"""Resolution of @mention tokens against the team roster.

Matching is best-effort. Roster entries are tried in order and the first
entry that satisfies any of the rules below wins, so an earlier member
matched by first name beats a later exact match. Ties between members
sharing a first name are not disambiguated.

1. Exact full name.
2. Member name contains the token (which covers prefixes).
3. First word of the member name equals the first word of the token,
   where words are split on whitespace and parentheses.
"""

import re
from collections.abc import Callable, Iterable, Sequence

from designdesk.core.modules.user.models import TeamMember

_WORD_SPLIT_RE = re.compile(r"[\s()]")
_MENTION_START_RE = re.compile(r"(?<![\w@])@")
_MENTION_WORD_RE = re.compile(r"[\w.'-]+")
_TAG_RE = re.compile(r"(?<![\w#])#([\w-]+)")


def _first_word(value: str) -> str:
    return _WORD_SPLIT_RE.split(value, maxsplit=1)[0]


def _exact(name: str, token: str) -> bool:
    return name == token


def _partial(name: str, token: str) -> bool:
    return token in name


def _first_name(name: str, token: str) -> bool:
    first = _first_word(name)
    return bool(first) and first == _first_word(token)


_RULES: tuple[Callable[[str, str], bool], ...] = (_exact, _partial, _first_name)


def match_member(mention: str, roster: Sequence[TeamMember]) -> TeamMember | None:
    """Return the roster entry a single mention token refers to, or None."""
    token = mention.strip().lstrip("@").strip().lower()
    if not token:
        return None

    for member in roster:
        name = member.name.lower()
        if any(rule(name, token) for rule in _RULES):
            return member
    return None


def resolve_mentions(mentions: Iterable[str], roster: Sequence[TeamMember]) -> list[str]:
    """Resolve raw mention tokens to member IDs, de-duplicated in first-seen order."""
    resolved: list[str] = []
    for mention in mentions:
        member = match_member(mention, roster)
        if member is not None and member.id not in resolved:
            resolved.append(member.id)
    return resolved


def extract_mentions(content: str, roster: Sequence[TeamMember] | None = None) -> list[str]:
    """Pull raw @mention tokens out of message text.

    When a roster is given, the longest member name that follows an ``@``
    (case-insensitive, ending on a word boundary) is taken as the token, so
    multi-word names like ``@John Smith`` survive. Otherwise the single word
    after ``@`` is used. Duplicate tokens are returned once.
    """
    names = sorted({member.name for member in roster or []}, key=len, reverse=True)
    tokens: list[str] = []

    for match in _MENTION_START_RE.finditer(content):
        rest = content[match.end() :]
        token = _match_roster_name(rest, names)
        if token is None:
            word = _MENTION_WORD_RE.match(rest)
            if word is None:
                continue
            token = word.group(0).rstrip(".'-")
        if token and token not in tokens:
            tokens.append(token)

    return tokens


def _match_roster_name(text: str, names: Sequence[str]) -> str | None:
    lowered = text.lower()
    for name in names:
        if not name or not lowered.startswith(name.lower()):
            continue
        following = text[len(name) : len(name) + 1]
        if not following or not (following.isalnum() or following == "_"):
            return text[: len(name)]
    return None


def extract_tags(content: str) -> list[str]:
    """Return #tag tokens in first-seen order, without the leading '#'."""
    tags: list[str] = []
    for tag in _TAG_RE.findall(content):
        if tag not in tags:
            tags.append(tag)
    return tags
