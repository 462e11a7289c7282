from pathlib import Path
from typing import Any, Protocol

from .model import Buffer


class DrawerMaterializer(Protocol):
    """
    Turn a drawer into something the host can place in its output.

    Called once per drawer, always with ``folded=True``. The returned object
    is opaque to the formatter.
    """

    def __call__(self, name: str, content: Buffer, folded: bool) -> Any:
        pass


class PropertyLinkHandler(Protocol):
    """
    Resolve a property link to the note that carries the property.

    Invoked by the render surface when a PropertyLink span is activated,
    never by the formatter itself.
    """

    def open_note_with_property(self, name: str, value: str) -> Path | None:
        pass


class SettingsStore(Protocol):
    """
    User-configurable rendering switches that live outside the formatter.
    """

    def style_text(self) -> bool:
        pass

    def styled_text_with_marks(self) -> bool:
        pass


class Renderer(Protocol):
    def render(self, buffer: Buffer) -> str:
        pass
