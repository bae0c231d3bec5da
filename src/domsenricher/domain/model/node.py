"""Tree nodes as delivered by the traversal."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .enums import NodeType


@dataclass(slots=True)
class TreeNode:
    """One node of a batch tree: its type, display name, repository PID and children."""

    type: NodeType
    name: str
    location: str
    children: list[TreeNode] = field(default_factory=list["TreeNode"])

    def add_child(self, child: TreeNode) -> TreeNode:
        self.children.append(child)
        return child

    def iter_subtree(self) -> Iterator[TreeNode]:
        """Yield this node and all descendants, parents before children."""

        yield self
        for child in self.children:
            yield from child.iter_subtree()
