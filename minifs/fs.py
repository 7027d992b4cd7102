"""An in-memory tree of files and directories with a working directory."""

from __future__ import annotations

import enum
import json
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

# The prompt and pwd build the path in a fixed buffer; longer paths are cut.
_MAX_PATH_BYTES = 1023

_INT = struct.Struct("<i")
_SIZE = struct.Struct("<Q")


class NodeType(enum.IntEnum):
    """Kind of a node; the values are those stored in saved images."""

    FILE = 0
    DIR = 1


class FileSystemError(Exception):
    """Raised when a file system command cannot be carried out."""


@dataclass(eq=False)
class Node:
    """A file or directory in the tree."""

    name: str
    type: NodeType
    content: Optional[str] = None
    parent: Optional[Node] = field(default=None, repr=False)
    children: list[Node] = field(default_factory=list, repr=False)

    def is_dir(self) -> bool:
        return self.type is NodeType.DIR

    def size(self) -> int:
        """Size of the file's content in bytes (0 for no content)."""
        return len(self.content.encode("utf-8")) if self.content else 0

    def path(self) -> str:
        """Absolute path of the node within its tree."""
        names = []
        node = self
        while node.parent is not None:
            names.append(node.name)
            node = node.parent
        return "/" + "/".join(reversed(names))


def _split_path(path: str) -> tuple[str, str]:
    """Return (dirname, basename) with POSIX semantics."""
    if not path:
        return ".", "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/", "/"
    index = stripped.rfind("/")
    if index == -1:
        return ".", stripped
    return stripped[:index].rstrip("/") or "/", stripped[index + 1:]


def _find_child(directory: Optional[Node], name: str) -> Optional[Node]:
    if directory is None or not directory.is_dir():
        return None
    return next((child for child in directory.children if child.name == name), None)


def _attach(parent: Node, child: Node) -> None:
    child.parent = parent
    parent.children.append(child)


def _detach(node: Node) -> None:
    if node.parent is not None:
        node.parent.children.remove(node)
        node.parent = None


def _copy(node: Node) -> Node:
    duplicate = Node(node.name, node.type, node.content)
    for child in node.children:
        _attach(duplicate, _copy(child))
    return duplicate


class FileSystem:
    """A tree rooted at ``/`` with a current working directory."""

    def __init__(self, root: Optional[Node] = None) -> None:
        self.root = root if root is not None else Node("/", NodeType.DIR)
        self.cwd = self.root

    # --- lookup -----------------------------------------------------------

    def resolve(self, path: str) -> Optional[Node]:
        """Return the node at ``path``, or None if there is none."""
        if not path:
            return self.cwd
        if path == "/":
            return self.root
        node: Optional[Node] = self.root if path.startswith("/") else self.cwd
        for part in path.split("/"):
            if node is None:
                break
            if not part or part == ".":
                continue
            if part == "..":
                node = node.parent if node.parent is not None else self.root
            else:
                node = _find_child(node, part)
        return node

    def _parent_and_name(self, path: str) -> tuple[Optional[Node], str]:
        dirname, basename = _split_path(path)
        return self.resolve(dirname), basename

    # --- commands ---------------------------------------------------------

    def mkdir(self, path: str) -> None:
        parent, name = self._parent_and_name(path)
        if parent is None:
            raise FileSystemError(
                f"mkdir: cannot create directory '{path}': No such file or directory"
            )
        if _find_child(parent, name) is not None:
            raise FileSystemError(
                f"mkdir: cannot create directory '{name}': File or directory exists"
            )
        if parent.is_dir():
            _attach(parent, Node(name, NodeType.DIR))

    def touch(self, path: str) -> None:
        parent, name = self._parent_and_name(path)
        if parent is None:
            raise FileSystemError(
                f"touch: cannot create file '{path}': No such file or directory"
            )
        if _find_child(parent, name) is None and parent.is_dir():
            _attach(parent, Node(name, NodeType.FILE))

    def ls(self, path: str = "") -> list[str]:
        """Return the listing lines for ``path``."""
        target = self.resolve(path)
        if target is None:
            raise FileSystemError(
                f"ls: cannot access '{path}': No such file or directory"
            )
        if not target.is_dir():
            return [target.name]
        return [
            f"d {child.name}/" if child.is_dir() else f"- {child.name} ({child.size()} bytes)"
            for child in target.children
        ]

    def cd(self, path: str) -> None:
        target = self.resolve(path)
        if target is None:
            raise FileSystemError(f"cd: {path}: No such file or directory")
        if not target.is_dir():
            raise FileSystemError(f"cd: {path}: Not a directory")
        self.cwd = target

    def pwd(self) -> str:
        """Path of the working directory, cut short if it gets too long."""
        if self.cwd is self.root:
            return "/"
        names = []
        remaining = _MAX_PATH_BYTES
        node = self.cwd
        while node is not self.root and node.parent is not None:
            needed = len(node.name.encode("utf-8")) + 1
            if remaining < needed:
                break
            remaining -= needed
            names.append(node.name)
            node = node.parent
        return "".join("/" + name for name in reversed(names))

    def rm(self, path: str) -> None:
        target = self.resolve(path)
        if target is None:
            raise FileSystemError(
                f"rm: cannot remove '{path}': No such file or directory"
            )
        if target is self.root:
            raise FileSystemError("rm: cannot remove root directory '/'")
        if target.is_dir() and target.children:
            raise FileSystemError(f"rm: cannot remove '{path}': Directory not empty")
        _detach(target)
        if target is self.cwd:
            self.cwd = self.root

    def cat(self, path: str) -> Optional[str]:
        """Return the file's content, or None if it has never been written."""
        target = self.resolve(path)
        if target is None:
            raise FileSystemError(f"cat: {path}: No such file or directory")
        if target.type is not NodeType.FILE:
            raise FileSystemError(f"cat: {path}: Is a directory")
        return target.content

    def echo(self, path: str, content: str) -> None:
        """Replace the content of the file at ``path``, creating it if needed."""
        parent, name = self._parent_and_name(path)
        if parent is None:
            raise FileSystemError(
                f"echo: cannot write to '{path}': No such file or directory"
            )
        target = _find_child(parent, name)
        if target is None:
            self.touch(path)
            target = _find_child(parent, name)
            if target is None:
                return
        if target.type is not NodeType.FILE:
            raise FileSystemError(f"echo: {name}: Is a directory")
        target.content = content

    def _destination(self, source: Node, dest_path: str) -> tuple[Optional[Node], str]:
        dest_target = self.resolve(dest_path)
        if dest_target is not None and dest_target.is_dir():
            return dest_target, source.name
        return self._parent_and_name(dest_path)

    def mv(self, source_path: str, dest_path: str) -> None:
        source = self.resolve(source_path)
        if source is None or source is self.root:
            raise FileSystemError(
                f"mv: cannot move '{source_path}': Invalid source or root"
            )
        dest_parent, new_name = self._destination(source, dest_path)
        if dest_parent is None:
            raise FileSystemError(
                f"mv: cannot move to '{dest_path}': Destination path not found"
            )
        if _find_child(dest_parent, new_name) is not None:
            raise FileSystemError(
                f"mv: cannot move to '{dest_path}': Destination already exists"
            )
        if not dest_parent.is_dir():
            raise FileSystemError(f"mv: cannot move to '{dest_path}': Not a directory")
        ancestor: Optional[Node] = dest_parent
        while ancestor is not None:
            if ancestor is source:
                raise FileSystemError(
                    f"mv: cannot move '{source_path}' to a subdirectory of itself"
                )
            ancestor = ancestor.parent
        _detach(source)
        source.name = new_name
        _attach(dest_parent, source)

    def cp(self, source_path: str, dest_path: str) -> None:
        source = self.resolve(source_path)
        if source is None:
            raise FileSystemError(
                f"cp: cannot stat '{source_path}': No such file or directory"
            )
        dest_parent, new_name = self._destination(source, dest_path)
        if dest_parent is None:
            raise FileSystemError(
                f"cp: cannot copy to '{dest_path}': Destination path not found"
            )
        if _find_child(dest_parent, new_name) is not None:
            raise FileSystemError(
                f"cp: cannot copy to '{dest_path}': Destination already exists"
            )
        if not dest_parent.is_dir():
            return
        duplicate = _copy(source)
        duplicate.name = new_name
        _attach(dest_parent, duplicate)

    # --- serialisation ----------------------------------------------------

    def to_bytes(self) -> bytes:
        """Serialise the whole tree into the binary image format."""
        out = bytearray()
        _write_node(out, self.root)
        return bytes(out)

    def save(self, filepath: Union[str, Path]) -> None:
        Path(filepath).write_bytes(self.to_bytes())

    def to_json(self) -> str:
        """Describe the tree's names and kinds as compact JSON."""
        return json.dumps(_json_node(self.root), separators=(",", ":"), ensure_ascii=False)

    def export_tree_json(self, filepath: Union[str, Path]) -> None:
        Path(filepath).write_text(self.to_json(), encoding="utf-8")


def _json_node(node: Node) -> dict:
    entry: dict = {"name": node.name, "type": "directory" if node.is_dir() else "file"}
    if node.is_dir() and node.children:
        entry["children"] = [_json_node(child) for child in node.children]
    return entry


def _write_node(out: bytearray, node: Node) -> None:
    name = node.name.encode("utf-8") + b"\0"
    out += _INT.pack(node.type)
    out += _SIZE.pack(len(name))
    out += name
    if node.type is NodeType.FILE:
        if node.content is None:
            out += _SIZE.pack(0)
        else:
            content = node.content.encode("utf-8") + b"\0"
            out += _SIZE.pack(len(content))
            out += content
    out += _INT.pack(len(node.children))
    for child in node.children:
        _write_node(out, child)


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = memoryview(data)
        self._offset = 0

    def unpack(self, layout: struct.Struct) -> int:
        try:
            (value,) = layout.unpack_from(self._data, self._offset)
        except struct.error as exc:
            raise FileSystemError("truncated file system image") from exc
        self._offset += layout.size
        return value

    def text(self, length: int) -> str:
        chunk = bytes(self._data[self._offset:self._offset + length])
        if len(chunk) != length:
            raise FileSystemError("truncated file system image")
        self._offset += length
        return chunk.split(b"\0", 1)[0].decode("utf-8")


def _read_node(reader: _Reader) -> Node:
    raw_type = reader.unpack(_INT)
    try:
        node_type = NodeType(raw_type)
    except ValueError as exc:
        raise FileSystemError(f"unknown node type {raw_type}") from exc
    node = Node(reader.text(reader.unpack(_SIZE)), node_type)
    if node_type is NodeType.FILE:
        content_len = reader.unpack(_SIZE)
        if content_len > 0:
            node.content = reader.text(content_len)
    for _ in range(reader.unpack(_INT)):
        _attach(node, _read_node(reader))
    return node


def from_bytes(data: bytes) -> FileSystem:
    """Rebuild a file system from a binary image."""
    return FileSystem(_read_node(_Reader(data)))


def load(filepath: Union[str, Path]) -> FileSystem:
    """Read a file system image; raises FileNotFoundError if it is missing."""
    return from_bytes(Path(filepath).read_bytes())