"""Filesystem node model."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class Node(BaseModel):
    """A single file or directory in the tree.

    Nodes live in the Tree's arena and refer to each other by id: a directory
    maps child names to child ids, and every node except the root records its
    parent's id. The parent link is only used for upward traversal; the arena
    owns every node.

    Only the operation layer mutates content, children and timestamps, always
    through the Tree primitives.

    Args:
        node_id: Arena handle of this node.
        name: Name of this node, unique among its siblings ("" for root).
        is_directory: Whether this node is a directory. Immutable.
        content: File content. Always empty for directories.
        children: Child name to child node id. Always empty for files.
        parent_id: Arena handle of the parent, or None for the root.
        created_at: When this node was created.
        modified_at: When this node's content or children last changed.
    """

    node_id: int = Field(frozen=True, description="Arena handle of this node")
    name: str = Field(description="Name of this node, unique among siblings")
    is_directory: bool = Field(
        frozen=True, description="Whether this node is a directory"
    )
    content: str = Field(default="", description="File content")
    children: dict[str, int] = Field(
        default_factory=dict, description="Child name to child node id"
    )
    parent_id: Optional[int] = Field(
        default=None, description="Arena handle of the parent (None for root)"
    )
    created_at: datetime = Field(description="When this node was created")
    modified_at: datetime = Field(
        description="When this node's content or children last changed"
    )

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def touch(self, when: datetime) -> None:
        """Record a content or containment change at ``when``."""
        self.modified_at = when

    def to_dict(self) -> dict[str, Any]:
        """Convert this node's own attributes to a dictionary.

        Children are reported by name only; use Tree.get_snapshot() for a
        nested view.

        Returns:
            Dictionary representation of this node.
        """
        result: dict[str, Any] = {
            "name": self.name,
            "is_directory": self.is_directory,
            "created_at": self.created_at.isoformat(),
            "modified_at": self.modified_at.isoformat(),
        }
        if self.is_directory:
            result["children"] = sorted(self.children)
        else:
            result["size"] = len(self.content)
        return result
