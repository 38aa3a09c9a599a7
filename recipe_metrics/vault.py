"""Read recipe documents from a folder of Markdown notes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_TABLE_PATH = "Rezepte/Ingredients.md"

# path → (mtime_ns, size)
Snapshot = dict[str, tuple[int, int]]


@dataclass
class Document:
    name: str  # file name without extension
    path: Path
    text: str


@dataclass
class VaultChanges:
    created: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.created or self.modified or self.removed)


class Vault:
    """A directory tree of Markdown documents.

    Hidden directories (``.obsidian``, ``.trash`` ...) are ignored.
    """

    def __init__(
        self,
        root: str | Path,
        table_path: str = DEFAULT_TABLE_PATH,
        extensions: tuple[str, ...] = (".md",),
    ) -> None:
        self.root = Path(root).expanduser()
        self.table_path = self.root / table_path
        self._extensions = tuple(e.lower() for e in extensions)

    def paths(self) -> list[Path]:
        if not self.root.is_dir():
            return []
        result: list[Path] = []
        for p in self.root.rglob("*"):
            rel = p.relative_to(self.root)
            if any(part.startswith(".") for part in rel.parts):
                continue
            if p.is_file() and p.suffix.lower() in self._extensions:
                result.append(p)
        return sorted(result)

    def read(self, path: Path) -> Document | None:
        """Read one document, or None if it can't be read."""
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("could not read %s: %s", path, e)
            return None
        return Document(name=path.stem, path=path, text=text)

    def read_table(self) -> Document | None:
        if not self.table_path.is_file():
            return None
        return self.read(self.table_path)

    def documents(self) -> list[Document]:
        docs: list[Document] = []
        for p in self.paths():
            doc = self.read(p)
            if doc is not None:
                docs.append(doc)
        return docs

    def snapshot(self) -> Snapshot:
        """Modification state of every document, for change polling."""
        snap: Snapshot = {}
        for p in self.paths():
            try:
                st = p.stat()
            except OSError:
                continue
            snap[str(p)] = (st.st_mtime_ns, st.st_size)
        return snap


def diff_snapshots(old: Snapshot, new: Snapshot) -> VaultChanges:
    """Compare two snapshots. A rename shows up as removed + created."""
    changes = VaultChanges()
    for path, state in new.items():
        if path not in old:
            changes.created.append(path)
        elif old[path] != state:
            changes.modified.append(path)
    changes.removed = [p for p in old if p not in new]
    return changes
