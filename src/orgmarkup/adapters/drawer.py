from dataclasses import dataclass

from ..core.model import Buffer

FOLDED_SUFFIX = "…"


@dataclass
class DrawerBlock:
    """Collapsible drawer as placed in the output by the default materializer."""

    name: str
    content: Buffer
    folded: bool = True

    def toggle(self) -> None:
        self.folded = not self.folded

    def display_text(self) -> str:
        """``:NAME:…`` when folded, the whole drawer otherwise."""
        if self.folded:
            return f":{self.name}:{FOLDED_SUFFIX}"
        return f":{self.name}:\n{self.content.text}\n:END:"


def materialize_drawer(name: str, content: Buffer, folded: bool) -> DrawerBlock:
    return DrawerBlock(name=name, content=content, folded=folded)


def unfold_drawers(buffer: Buffer) -> None:
    """Unfold every DrawerBlock embedded in ``buffer``."""
    for span in buffer.spans:
        if isinstance(span.embed, DrawerBlock):
            span.embed.folded = False
