"""
Comment Threading

Rebuilds reply trees from flat comment rows (anything with .id and
.parent_id). Two passes: index every item, then attach each item to its
parent. Input order is preserved within each level.

Replies whose parent is absent from the input (deleted, or filtered out
by moderation) are dropped together with their own replies.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, TypeVar


T = TypeVar("T")


@dataclass
class ThreadNode(Generic[T]):
    item: T
    replies: list["ThreadNode[T]"] = field(default_factory=list)


def build_thread(items: Iterable[T]) -> list[ThreadNode[T]]:
    nodes: dict[Any, ThreadNode[T]] = {}
    ordered: list[ThreadNode[T]] = []
    for item in items:
        node = ThreadNode(item=item)
        nodes[item.id] = node
        ordered.append(node)

    roots: list[ThreadNode[T]] = []
    for node in ordered:
        parent_id = node.item.parent_id
        if parent_id is None:
            roots.append(node)
        elif parent_id in nodes:
            nodes[parent_id].replies.append(node)
    return roots
