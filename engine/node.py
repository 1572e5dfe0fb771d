"""Filesystem node models.

A node is a tagged variant discriminated by its ``type`` field: either a
``FileNode`` holding text content or a ``DirectoryNode`` holding named
children. Both are plain pydantic models so a seed dictionary validates
straight into a fresh, fully owned tree.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


def validate_child_name(name: str) -> str:
    """Check that ``name`` is usable as a single path segment.

    Args:
        name: Candidate child name.

    Returns:
        The name unchanged.

    Raises:
        ValueError: If the name is empty, ``.``/``..`` or contains ``/``.
    """
    if not name:
        raise ValueError("Node names cannot be empty")
    if name in (".", ".."):
        raise ValueError(f"'{name}' is reserved and cannot name a node")
    if "/" in name:
        raise ValueError(f"Node name '{name}' cannot contain '/'")
    return name


class BaseNode(BaseModel):
    """Fields shared by files and directories.

    Args:
        mode: Permission-mode string set by ``chmod``. Metadata only, never
            enforced.
    """

    mode: Optional[str] = Field(
        default=None, description="Permission mode set by chmod (metadata only)"
    )

    def to_seed(self) -> dict[str, Any]:
        raise NotImplementedError


class FileNode(BaseNode):
    """A regular file with text content.

    Args:
        type: Always "file".
        content: File text. Empty content is valid and distinct from absence.
    """

    type: Literal["file"] = "file"
    content: str = Field(default="", description="File text content")

    @property
    def size(self) -> int:
        """Size shown by ``ls -l``: the content length in characters."""
        return len(self.content)

    def lines(self) -> list[str]:
        """Split content into lines the way line-oriented commands see it."""
        return self.content.split("\n")

    def to_seed(self) -> dict[str, Any]:
        seed: dict[str, Any] = {"type": "file", "content": self.content}
        if self.mode is not None:
            seed["mode"] = self.mode
        return seed


class DirectoryNode(BaseNode):
    """A directory mapping child names to nodes.

    Args:
        type: Always "directory".
        children: Child name to node. Names are unique within a directory and
            never contain ``/``.
    """

    type: Literal["directory"] = "directory"
    children: dict[str, "Node"] = Field(
        default_factory=dict, description="Child name to node"
    )

    @field_validator("children")
    @classmethod
    def validate_children_names(cls, children: dict[str, Any]) -> dict[str, Any]:
        for name in children:
            validate_child_name(name)
        return children

    @property
    def size(self) -> int:
        """Size shown by ``ls -l`` for every directory."""
        return 4096

    def get(self, name: str) -> Optional["Node"]:
        return self.children.get(name)

    def has(self, name: str) -> bool:
        return name in self.children

    def add(self, name: str, node: "Node") -> None:
        """Attach ``node`` under ``name``, replacing any existing child."""
        validate_child_name(name)
        self.children[name] = node

    def remove(self, name: str) -> "Node":
        return self.children.pop(name)

    def names(self, include_hidden: bool = True) -> list[str]:
        """Return sorted child names, optionally without dot-names."""
        names = sorted(self.children)
        if include_hidden:
            return names
        return [name for name in names if not name.startswith(".")]

    def to_seed(self) -> dict[str, Any]:
        seed: dict[str, Any] = {
            "type": "directory",
            "children": {
                name: child.to_seed() for name, child in self.children.items()
            },
        }
        if self.mode is not None:
            seed["mode"] = self.mode
        return seed


Node = Annotated[Union[FileNode, DirectoryNode], Field(discriminator="type")]

DirectoryNode.model_rebuild()


def copy_node(node: Union[FileNode, DirectoryNode]) -> Union[FileNode, DirectoryNode]:
    """Return a deep copy of ``node`` sharing no mutable state with it."""
    return node.model_copy(deep=True)


def is_ancestor(candidate: DirectoryNode, node: Union[FileNode, DirectoryNode]) -> bool:
    """Return True if ``node`` is ``candidate`` or lies somewhere beneath it."""
    if candidate is node:
        return True
    for child in candidate.children.values():
        if isinstance(child, DirectoryNode) and is_ancestor(child, node):
            return True
        if child is node:
            return True
    return False
