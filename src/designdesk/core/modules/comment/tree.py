"""Threading of flat comment lists into reply trees."""

from collections.abc import Iterable, Iterator, Sequence

from designdesk.core.modules.comment.models import Comment, CommentNode


def build_comment_tree(comments: Sequence[Comment]) -> list[CommentNode]:
    """Nest replies under their parents and order the roots.

    Roots are pinned comments first, then newest first within each group.
    Replies keep input order. A comment whose parent_id is not in the input
    is dropped entirely: it is neither a root nor a reply.
    """
    nodes: dict[str, CommentNode] = {comment.id: CommentNode.from_comment(comment) for comment in comments}
    roots: list[CommentNode] = []

    for comment in comments:
        node = nodes[comment.id]
        if comment.parent_id:
            parent = nodes.get(comment.parent_id)
            if parent is not None:
                parent.replies.append(node)
        else:
            roots.append(node)

    roots.sort(key=lambda node: node.created_at, reverse=True)
    roots.sort(key=lambda node: not node.is_pinned)
    return roots


def flatten_comment_tree(nodes: Iterable[CommentNode]) -> Iterator[CommentNode]:
    """Yield every node depth-first, parents before their replies."""
    for node in nodes:
        yield node
        yield from flatten_comment_tree(node.replies)


def filter_comments(
    comments: Iterable[Comment],
    section_type: str | None = None,
    search: str | None = None,
    pinned_only: bool = False,
) -> list[Comment]:
    """Apply the message panel filters: section, text search, pinned-only."""
    needle = search.lower() if search else None
    result = []
    for comment in comments:
        if section_type and comment.section_type != section_type:
            continue
        if needle and needle not in comment.content.lower() and needle not in comment.author_name.lower():
            continue
        if pinned_only and not comment.is_pinned:
            continue
        result.append(comment)
    return result
