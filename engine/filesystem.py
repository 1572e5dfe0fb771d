"""In-memory filesystem tree and path resolution."""

from typing import Any, Iterator, Optional, Union

from pydantic import BaseModel, Field

from engine.node import DirectoryNode, FileNode, validate_child_name

AnyNode = Union[FileNode, DirectoryNode]


def split_segments(path: str) -> list[str]:
    """Split a path into its non-empty segments."""
    return [segment for segment in path.split("/") if segment]


def join_path(parent: str, name: str) -> str:
    """Join a directory path and a child name without doubling the slash."""
    if parent == "/":
        return f"/{name}"
    return f"{parent.rstrip('/')}/{name}"


def parent_path(path: str) -> str:
    """Return the structural parent of an absolute path (root is its own parent)."""
    segments = split_segments(path)
    return "/" + "/".join(segments[:-1])


class Filesystem(BaseModel):
    """A single-rooted tree of directories and files.

    The root is always a directory addressed as ``/``. Every other node has
    exactly one parent because nodes are only ever attached by moving them
    (``mv``) or by attaching a fresh deep copy (``cp``, seeding).

    Args:
        root: The root directory.

    Example:
        >>> fs = Filesystem.from_seed({"type": "directory", "children": {}})
        >>> fs.resolve("/", "/") is fs.root
        True
    """

    root: DirectoryNode = Field(
        default_factory=DirectoryNode, description="Root directory at '/'"
    )

    @classmethod
    def from_seed(cls, seed: dict[str, Any]) -> "Filesystem":
        """Build a new, fully owned tree from a seed dictionary.

        Accepts either a directory node (``{"type": "directory", ...}``) or the
        wrapped form ``{"/": {...}}``. Validation constructs fresh node objects,
        so the seed is never aliased by the returned tree.

        Args:
            seed: Nested seed structure.

        Returns:
            A new Filesystem.

        Raises:
            ValueError: If the seed is not a directory tree.
        """
        if isinstance(seed, dict) and "/" in seed and "type" not in seed:
            seed = seed["/"]
        if not isinstance(seed, dict) or seed.get("type") != "directory":
            raise ValueError("Seed root must be a directory")
        return cls(root=DirectoryNode.model_validate(seed))

    def to_seed(self) -> dict[str, Any]:
        """Export the tree in seed format."""
        return self.root.to_seed()

    # ===== Path Resolution =====

    def absolute_path(self, path: str, cwd: str) -> str:
        """Compute the absolute path string for ``path`` without existence checks.

        Uses the same rules as ``resolve`` for ``.``, ``..`` and relative paths.
        The result is normalized: no duplicate or trailing slashes.

        Args:
            path: Path expression.
            cwd: Absolute current working directory.

        Returns:
            Absolute path string.
        """
        if path.startswith("/"):
            target = path
        elif path == "..":
            target = parent_path(cwd)
        elif path == ".":
            target = cwd
        else:
            target = join_path(cwd, path)
        return "/" + "/".join(split_segments(target))

    def resolve(self, path: Optional[str], cwd: str) -> Optional[AnyNode]:
        """Resolve a path expression to a node.

        A bare ``..`` resolves to the parent of ``cwd``. A ``..`` segment
        embedded in a longer expression (``a/../b``) is rejected.

        Args:
            path: Path expression; empty or None resolves to nothing.
            cwd: Absolute current working directory.

        Returns:
            The node, or None if any segment is missing or traverses a file.
        """
        if not path:
            return None
        if path == "/":
            return self.root

        if path.startswith("/"):
            absolute = path
        elif path == "..":
            absolute = parent_path(cwd)
        elif path == ".":
            absolute = cwd
        else:
            absolute = join_path(cwd, path)

        current: AnyNode = self.root
        for segment in split_segments(absolute):
            if segment == "..":
                return None
            if not isinstance(current, DirectoryNode):
                return None
            child = current.get(segment)
            if child is None:
                return None
            current = child
        return current

    def locate_parent(self, path: str, cwd: str) -> tuple[Optional[DirectoryNode], str]:
        """Find the directory that holds (or would hold) the last segment of ``path``.

        ``notes.txt`` is looked up in ``cwd``; ``docs/notes.txt`` in ``cwd/docs``.
        A ``.`` or ``..`` segment before the name finds no parent, matching
        ``resolve``, so ``./notes.txt`` is rejected like ``a/../notes.txt``.

        Args:
            path: Path expression naming a child.
            cwd: Absolute current working directory.

        Returns:
            Tuple of (parent directory or None, child name). The child name is
            empty when ``path`` denotes the root.
        """
        segments = split_segments(path)
        if not segments:
            return None, ""
        name = segments[-1]
        if any(segment in (".", "..") for segment in segments[:-1]):
            return None, name
        prefix = "/".join(segments[:-1])
        if path.startswith("/"):
            parent = self.resolve("/" + prefix, cwd)
        elif prefix:
            parent = self.resolve(prefix, cwd)
        else:
            parent = self.resolve(cwd, cwd)
        if not isinstance(parent, DirectoryNode):
            return None, name
        return parent, name

    # ===== Traversal =====

    def walk(self, start: DirectoryNode, start_path: str) -> Iterator[tuple[str, str, AnyNode]]:
        """Yield ``(path, name, node)`` for every descendant in pre-order.

        Paths are built from ``start_path`` exactly as given, so walking from
        ``"."`` yields ``"./docs"``, ``"./docs/readme.txt"``, and so on.
        """
        for name, child in start.children.items():
            child_path = join_path(start_path, name)
            yield child_path, name, child
            if isinstance(child, DirectoryNode):
                yield from self.walk(child, child_path)

    def count_nodes(self) -> tuple[int, int]:
        """Return ``(directories, files)`` below the root, root excluded."""
        directories = files = 0
        for _, _, node in self.walk(self.root, "/"):
            if isinstance(node, DirectoryNode):
                directories += 1
            else:
                files += 1
        return directories, files

    # ===== Validation =====

    def validate_tree(self) -> list[str]:
        """Check tree invariants and return any issues.

        Returns:
            List of validation error messages (empty if valid).
        """
        errors: list[str] = []
        seen: set[int] = set()

        def visit(directory: DirectoryNode, path: str) -> None:
            if id(directory) in seen:
                errors.append(f"{path}: directory reachable more than once")
                return
            seen.add(id(directory))
            for name, child in directory.children.items():
                child_path = join_path(path, name)
                try:
                    validate_child_name(name)
                except ValueError as e:
                    errors.append(f"{child_path}: {e}")
                if isinstance(child, DirectoryNode):
                    visit(child, child_path)
                elif id(child) in seen:
                    errors.append(f"{child_path}: file reachable more than once")
                else:
                    seen.add(id(child))

        visit(self.root, "/")
        return errors

    @property
    def summary(self) -> str:
        """Brief human-readable summary of the tree."""
        directories, files = self.count_nodes()
        return f"{directories} directories, {files} files"
