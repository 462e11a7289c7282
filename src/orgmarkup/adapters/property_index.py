import logging
from collections import defaultdict
from pathlib import Path
from typing import Iterable, Iterator

from ..core.ports import PropertyLinkHandler
from ..format.patterns import DRAWER_RE, PROPERTY_LINE_RE

logger = logging.getLogger(__name__)


def iter_properties(text: str) -> Iterator[tuple[str, str]]:
    """(KEY, value) pairs from every PROPERTIES drawer in ``text``."""
    for m in DRAWER_RE.finditer(text):
        if m.group("name").upper() != "PROPERTIES":
            continue
        for p in PROPERTY_LINE_RE.finditer(m.group("content")):
            yield p.group("key").upper(), p.group("value")


class PropertyIndex(PropertyLinkHandler):
    """
    Maps (property name, value) to the Org files that declare it.

    Property names are matched case-insensitively, values exactly.
    """

    def __init__(self, root: Path, suffixes: Iterable[str] = (".org",)):
        self.root = root
        self.suffixes = tuple(suffixes)
        self._paths: dict[tuple[str, str], list[Path]] = defaultdict(list)
        self._built = False

    def _files(self) -> Iterator[Path]:
        if not self.root.exists():
            return
        for p in sorted(self.root.rglob("*")):
            if p.is_file() and p.suffix in self.suffixes and not p.name.startswith("."):
                yield p

    def rebuild(self) -> None:
        self._paths.clear()
        for path in self._files():
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Failed to index %s: %s", path, e)
                continue
            for key, value in iter_properties(text):
                self._paths[(key, value)].append(path)
        self._built = True
        logger.debug("Indexed %d properties under %s", len(self._paths), self.root)

    def notes_with_property(self, name: str, value: str) -> list[Path]:
        if not self._built:
            self.rebuild()
        return list(self._paths.get((name.upper(), value), []))

    def open_note_with_property(self, name: str, value: str) -> Path | None:
        paths = self.notes_with_property(name, value)
        return paths[0] if paths else None
