"""Node arena and path resolution."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from vfs.errors import InvalidPathError, NotDirectoryError, PathNotFoundError
from vfs.node import Node

SEPARATOR = "/"
CURRENT_DIR = "."
PARENT_DIR = ".."


class Tree(BaseModel):
    """Owns every node of one filesystem and the current-directory pointer.

    Nodes are stored in a flat arena keyed by integer id. Directories hold
    child ids and children hold their parent's id, so there are no object
    reference cycles to manage.

    The resolver methods (resolve, absolute, path_of, split_parent) are pure
    lookups. The mutation primitives (new_node, attach, detach, set_cwd) are
    meant to be called by the operation layer only, which is responsible for
    checking invariants and logging events.

    Args:
        nodes: Arena of all live nodes, keyed by node id.
        root_id: Id of the root directory.
        cwd_id: Id of the current working directory.
        next_id: Next id to hand out. Ids are never reused.
    """

    nodes: dict[int, Node] = Field(description="Arena of all live nodes")
    root_id: int = Field(default=0, description="Id of the root directory")
    cwd_id: int = Field(default=0, description="Id of the current directory")
    next_id: int = Field(default=1, description="Next id to hand out")

    @classmethod
    def empty(cls, now: datetime) -> "Tree":
        """Create a tree holding only an empty root directory."""
        root = Node(
            node_id=0,
            name="",
            is_directory=True,
            created_at=now,
            modified_at=now,
        )
        return cls(nodes={0: root}, root_id=0, cwd_id=0, next_id=1)

    @property
    def root(self) -> Node:
        return self.nodes[self.root_id]

    @property
    def cwd(self) -> Node:
        return self.nodes[self.cwd_id]

    def parent_of(self, node: Node) -> Optional[Node]:
        if node.parent_id is None:
            return None
        return self.nodes[node.parent_id]

    def children_of(self, node: Node) -> list[Node]:
        """Return the direct children of a directory, sorted by name."""
        return [self.nodes[node.children[name]] for name in sorted(node.children)]

    # ===== Path Resolution =====

    def resolve(self, path: str) -> Node:
        """Translate a path string into a node.

        An empty path is the current directory. A leading separator starts
        at the root, anything else starts at the current directory. Empty
        and "." segments are skipped, ".." climbs to the parent (and stays
        put at the root). Any other segment must name an existing child.

        Args:
            path: Absolute or relative path.

        Returns:
            The node the path denotes.

        Raises:
            PathNotFoundError: If a segment does not exist. Continuing past a
                file is reported the same way, since files have no children.
        """
        if path == "":
            return self.cwd

        if path.startswith(SEPARATOR):
            node = self.root
            remainder = path[len(SEPARATOR):]
        else:
            node = self.cwd
            remainder = path

        for segment in remainder.split(SEPARATOR):
            if segment == "" or segment == CURRENT_DIR:
                continue
            if segment == PARENT_DIR:
                parent = self.parent_of(node)
                if parent is not None:
                    node = parent
                continue
            child_id = node.children.get(segment)
            if child_id is None:
                raise PathNotFoundError(segment, path=path)
            node = self.nodes[child_id]

        return node

    def path_of(self, node: Node) -> str:
        """Return the canonical absolute path of a node.

        The root is exactly the separator; every other path is the
        separator-joined names from the root, without a trailing separator.
        """
        parts: list[str] = []
        current: Optional[Node] = node
        while current is not None and current.node_id != self.root_id:
            parts.append(current.name)
            current = self.parent_of(current)
        return SEPARATOR + SEPARATOR.join(reversed(parts))

    def absolute(self, path: str) -> str:
        """Return the absolute form of path.

        Absolute paths are returned unchanged (not normalised). Relative
        paths are appended to the current directory's path; the empty path
        is the current directory's path.
        """
        if path.startswith(SEPARATOR):
            return path
        cwd_path = self.path_of(self.cwd)
        if path == "":
            return cwd_path
        if cwd_path == SEPARATOR:
            return SEPARATOR + path
        return cwd_path + SEPARATOR + path

    def split_parent(self, path: str) -> tuple[Node, str]:
        """Split path into its parent directory node and final name.

        A single trailing separator is ignored. The parent of a top-level
        absolute name is the root; the parent of a bare name is the current
        directory.

        Args:
            path: Path whose last segment names the target.

        Returns:
            Tuple of (parent directory node, target name).

        Raises:
            InvalidPathError: If the final name is empty, "." or "..".
            PathNotFoundError: If the parent does not exist.
            NotDirectoryError: If the parent is a file.
        """
        trimmed = path[: -len(SEPARATOR)] if path.endswith(SEPARATOR) else path
        index = trimmed.rfind(SEPARATOR)
        if index == -1:
            parent_path, name = "", trimmed
        elif index == 0:
            parent_path, name = SEPARATOR, trimmed[len(SEPARATOR):]
        else:
            parent_path, name = trimmed[:index], trimmed[index + len(SEPARATOR):]

        if name in ("", CURRENT_DIR, PARENT_DIR):
            raise InvalidPathError(path)

        parent = self.resolve(parent_path)
        if not parent.is_directory:
            raise NotDirectoryError(parent_path)
        return parent, name

    # ===== Mutation Primitives =====

    def new_node(self, name: str, is_directory: bool, now: datetime) -> Node:
        """Allocate a detached node with a fresh id."""
        node = Node(
            node_id=self.next_id,
            name=name,
            is_directory=is_directory,
            created_at=now,
            modified_at=now,
        )
        self.next_id += 1
        return node

    def attach(self, parent: Node, node: Node, now: datetime) -> None:
        """Insert node as a child of parent and touch the parent."""
        node.parent_id = parent.node_id
        self.nodes[node.node_id] = node
        parent.children[node.name] = node.node_id
        parent.touch(now)

    def detach(self, node: Node, now: datetime) -> None:
        """Remove node from its parent and drop it from the arena."""
        parent = self.parent_of(node)
        if parent is not None:
            del parent.children[node.name]
            parent.touch(now)
        del self.nodes[node.node_id]

    def set_cwd(self, node: Node) -> None:
        self.cwd_id = node.node_id

    # ===== Inspection =====

    def get_snapshot(self, node: Optional[Node] = None) -> dict[str, Any]:
        """Return a nested, JSON-serialisable view of the tree.

        Args:
            node: Subtree root to snapshot (defaults to the tree root).

        Returns:
            Dictionary with the node's attributes and, for directories, a
            name-sorted list of child snapshots.
        """
        if node is None:
            node = self.root
        snapshot = node.to_dict()
        if node.is_directory:
            snapshot["children"] = [
                self.get_snapshot(child) for child in self.children_of(node)
            ]
        else:
            snapshot["content"] = node.content
        return snapshot

    def structure(self, node: Optional[Node] = None) -> Any:
        """Return the timestamp-free shape of the tree.

        Directories become dicts of name to child structure, files become
        their content string. Two trees with equal structure hold the same
        names, kinds and contents.
        """
        if node is None:
            node = self.root
        if not node.is_directory:
            return node.content
        return {child.name: self.structure(child) for child in self.children_of(node)}

    def validate_state(self) -> list[str]:
        """Validate arena consistency and return any issues.

        Checks for:
        - Root and current directory exist and are directories
        - Exactly one parentless node (the root)
        - Child map keys match child names and parent links point back
        - Files have no children, directories have no content
        - Every node is reachable from the root

        Returns:
            List of validation error messages (empty list if valid).
        """
        issues = []

        root = self.nodes.get(self.root_id)
        if root is None:
            return [f"Root node {self.root_id} missing from arena"]
        if not root.is_directory:
            issues.append("Root node is not a directory")
        if root.parent_id is not None:
            issues.append("Root node has a parent")

        cwd = self.nodes.get(self.cwd_id)
        if cwd is None:
            issues.append(f"Current directory {self.cwd_id} missing from arena")
        elif not cwd.is_directory:
            issues.append(f"Current directory {self.cwd_id} is not a directory")

        parentless = [n.node_id for n in self.nodes.values() if n.parent_id is None]
        if parentless != [self.root_id]:
            issues.append(f"Expected only the root to be parentless, got {parentless}")

        for node in self.nodes.values():
            if not node.is_directory and node.children:
                issues.append(f"File {node.node_id} has children")
            if node.is_directory and node.content:
                issues.append(f"Directory {node.node_id} has content")
            for name, child_id in node.children.items():
                child = self.nodes.get(child_id)
                if child is None:
                    issues.append(f"Node {node.node_id} references missing child {child_id}")
                    continue
                if child.name != name:
                    issues.append(
                        f"Child key {name!r} of node {node.node_id} does not match name {child.name!r}"
                    )
                if child.parent_id != node.node_id:
                    issues.append(f"Child {child_id} does not point back to parent {node.node_id}")

        reachable = 0
        stack = [self.root_id]
        while stack:
            current = self.nodes.get(stack.pop())
            if current is None:
                continue
            reachable += 1
            stack.extend(current.children.values())
        if reachable != len(self.nodes):
            issues.append(
                f"{len(self.nodes) - reachable} node(s) not reachable from root"
            )

        return issues
