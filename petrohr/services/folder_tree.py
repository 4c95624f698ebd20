"""Recursive folder tree embedded in an employee record.

The tree is a list of root ``Folder`` models, each owning its documents and a
list of child folders, to any depth. Folders are addressed by id alone, so an
id must be unique across the whole tree, not just among siblings.

Two plain recursive algorithms are exposed:

    find_folder_by_id   -- depth-first pre-order search, first match wins
    remove_folder_by_id -- rebuild every level without the matching folder(s),
                           dropping their whole subtrees

``FolderTree`` wraps a loaded tree with an id index built once per load, so
repeated lookups during one mutation do not re-walk the tree.
"""

from typing import Dict, Iterable, Iterator, List, Optional

from ..schemas.folder import Folder, FolderDocument


def iter_folders(folders: Optional[Iterable[Folder]]) -> Iterator[Folder]:
    """Yield every folder in depth-first pre-order."""
    for folder in folders or []:
        yield folder
        yield from iter_folders(folder.subfolders)


def find_folder_by_id(folders: Optional[List[Folder]], folder_id: str) -> Optional[Folder]:
    """Return the first folder with *folder_id*, searching children before
    the next sibling. ``None`` if absent."""
    for folder in folders or []:
        if folder.id == folder_id:
            return folder
        found = find_folder_by_id(folder.subfolders, folder_id)
        if found is not None:
            return found
    return None


def remove_folder_by_id(folders: Optional[List[Folder]], folder_id: str) -> List[Folder]:
    """Return a copy of *folders* with every folder whose id matches removed,
    together with its descendants. Absent ids leave the tree unchanged."""
    kept: List[Folder] = []
    for folder in folders or []:
        if folder.id == folder_id:
            continue
        kept.append(
            folder.model_copy(
                update={"subfolders": remove_folder_by_id(folder.subfolders, folder_id)}
            )
        )
    return kept


def iter_subtree_documents(folder: Folder) -> Iterator[FolderDocument]:
    """Documents of *folder* and of all of its descendants."""
    for node in iter_folders([folder]):
        yield from node.documents


class FolderTree:
    """A loaded folder tree plus an id index over it."""

    def __init__(self, roots: Optional[List[Folder]] = None):
        self.roots: List[Folder] = list(roots or [])
        self._index: Dict[str, Folder] = {}
        self._reindex()

    @classmethod
    def from_json(cls, raw: Optional[list]) -> "FolderTree":
        """Validate the stored JSON tree into typed folders."""
        return cls([Folder.model_validate(item) for item in raw or []])

    def to_json(self) -> list:
        """Serialize for storage. Always a fresh list, never the loaded one."""
        return [folder.model_dump(mode="json", by_alias=True) for folder in self.roots]

    def __contains__(self, folder_id: str) -> bool:
        return folder_id in self._index

    def __len__(self) -> int:
        return len(self._index)

    def find(self, folder_id: str) -> Optional[Folder]:
        return self._index.get(folder_id)

    def add(self, folder: Folder, parent: Optional[Folder] = None) -> Folder:
        """Append *folder* under *parent*, or at the root when no parent is given."""
        if parent is None:
            folder.parent_id = None
            self.roots.append(folder)
        else:
            folder.parent_id = parent.id
            parent.subfolders.append(folder)
        for node in iter_folders([folder]):
            self._index.setdefault(node.id, node)
        return folder

    def remove(self, folder_id: str) -> List[Folder]:
        """Prune every folder with *folder_id* and return the removed subtrees.

        Removing an id that is not in the tree is a no-op returning ``[]``.
        """
        removed = [folder for folder in iter_folders(self.roots) if folder.id == folder_id]
        if not removed:
            return []
        self.roots = remove_folder_by_id(self.roots, folder_id)
        self._reindex()
        return removed

    def _reindex(self) -> None:
        # setdefault keeps the first pre-order occurrence, matching find_folder_by_id.
        self._index = {}
        for folder in iter_folders(self.roots):
            self._index.setdefault(folder.id, folder)
