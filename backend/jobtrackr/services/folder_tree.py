"""
Folder tree construction.

Folders are stored flat with an optional ``parent_id``. The tree is rebuilt on
demand: one pass indexes children by parent id, a second pass walks that index
from the roots. Both passes are linear in the number of folders.

Nothing at the storage layer prevents a parent cycle, so every walk here keeps
a visited set and terminates on any input. Writes go through
``would_create_cycle`` before a parent change is persisted.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol

logger = logging.getLogger(__name__)


class FolderLike(Protocol):
    id: int
    name: str
    parent_id: Optional[int]


@dataclass
class FolderNode:
    id: int
    name: str
    parent_id: Optional[int]
    children: list["FolderNode"] = field(default_factory=list)
    is_expanded: bool = False

    def count(self) -> int:
        total = 0
        stack: list[FolderNode] = [self]
        while stack:
            node = stack.pop()
            total += 1
            stack.extend(node.children)
        return total


def _sort_key(folder: FolderLike):
    return ((folder.name or "").lower(), folder.id)


def index_children(folders: Iterable[FolderLike]) -> dict[Optional[int], list[FolderLike]]:
    """
    Map each parent id to its direct children. Folders whose parent is not in
    the input are filed under ``None`` so they surface as roots.
    """
    folders = list(folders)
    known = {f.id for f in folders}
    by_parent: dict[Optional[int], list[FolderLike]] = defaultdict(list)
    for f in folders:
        parent = f.parent_id if f.parent_id in known else None
        by_parent[parent].append(f)
    for children in by_parent.values():
        children.sort(key=_sort_key)
    return by_parent


def build_folder_tree(
    folders: Iterable[FolderLike],
    expanded_ids: Iterable[int] = (),
) -> list[FolderNode]:
    folders = list(folders)
    expanded = set(expanded_ids or ())
    by_parent = index_children(folders)
    visited: set[int] = set()

    def make(folder: FolderLike) -> FolderNode:
        visited.add(folder.id)
        return FolderNode(
            id=folder.id,
            name=folder.name,
            parent_id=folder.parent_id,
            is_expanded=folder.id in expanded,
        )

    # Explicit stack; nesting depth is unbounded.
    roots: list[FolderNode] = []
    for root in by_parent.get(None, []):
        if root.id in visited:
            continue
        root_node = make(root)
        roots.append(root_node)
        stack = [(root, root_node)]
        while stack:
            folder, node = stack.pop()
            for child in by_parent.get(folder.id, []):
                if child.id in visited:
                    continue
                child_node = make(child)
                node.children.append(child_node)
                stack.append((child, child_node))

    if len(visited) != len(folders):
        unreachable = sorted(f.id for f in folders if f.id not in visited)
        logger.warning("Folder tree has parent cycles; omitting folders %s", unreachable)

    return roots


def ancestor_ids(folders_by_id: dict[int, FolderLike], folder_id: Optional[int]) -> list[int]:
    """
    Parent chain of `folder_id`, nearest first, excluding the folder itself.
    Stops at a root, at a parent outside `folders_by_id`, or when the chain loops.
    """
    out: list[int] = []
    seen: set[int] = set()
    current = folders_by_id.get(folder_id) if folder_id is not None else None
    if current is not None:
        seen.add(current.id)
    while current is not None and current.parent_id is not None:
        pid = current.parent_id
        if pid in seen:
            break
        seen.add(pid)
        out.append(pid)
        current = folders_by_id.get(pid)
    return out


def would_create_cycle(
    folders: Iterable[FolderLike],
    folder_id: int,
    new_parent_id: Optional[int],
) -> bool:
    """True if re-parenting `folder_id` under `new_parent_id` would close a loop."""
    if new_parent_id is None:
        return False
    if new_parent_id == folder_id:
        return True
    folders_by_id = {f.id: f for f in folders}
    return folder_id in ancestor_ids(folders_by_id, new_parent_id)


def subtree_ids(folders: Iterable[FolderLike], folder_id: int) -> list[int]:
    """`folder_id` followed by every descendant, breadth first."""
    by_parent: dict[Optional[int], list[int]] = defaultdict(list)
    for f in folders:
        by_parent[f.parent_id].append(f.id)

    out: list[int] = []
    seen: set[int] = set()
    queue = [folder_id]
    while queue:
        fid = queue.pop(0)
        if fid in seen:
            continue
        seen.add(fid)
        out.append(fid)
        queue.extend(by_parent.get(fid, []))
    return out
