"""Runtime wiring helper for the CLI, API and watch mode."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.drawer import materialize_drawer, unfold_drawers
from .adapters.property_index import PropertyIndex
from .config import OrgMarkupConfig, load_config
from .core.model import Buffer
from .core.ports import DrawerMaterializer
from .format.formatter import FormatConfig, parse


@dataclass
class Runtime:
    """Container for all wired components."""
    config: OrgMarkupConfig
    properties: PropertyIndex
    materialize: DrawerMaterializer = materialize_drawer

    def format_config(
        self,
        style: bool | None = None,
        with_marks: bool | None = None,
        linkify: bool | None = None,
    ) -> FormatConfig:
        """Config from settings, with per-call overrides."""
        base = FormatConfig.from_settings(
            self.config.style,
            linkify=self.config.linkify if linkify is None else linkify,
        )
        return FormatConfig(
            style=base.style if style is None else style,
            with_marks=base.with_marks if with_marks is None else with_marks,
            linkify=base.linkify,
        )

    def format(
        self,
        text: str,
        config: FormatConfig | None = None,
        unfold: bool = False,
    ) -> Buffer:
        """Format ``text``; drawers are unfolded when asked or when [ui] unfold_drawers is set."""
        buffer = parse(text, config or self.format_config(), self.materialize)
        if unfold or self.config.ui.unfold_drawers:
            unfold_drawers(buffer)
        return buffer


def build_runtime(
    notes_path: Path | None = None,
    config_path: Path | None = None,
) -> Runtime:
    """Build and wire all components."""
    config = load_config(config_path=config_path, notes_path=notes_path)

    # Use config value if CLI arg not provided
    if notes_path is None:
        notes_path = config.notes.root

    return Runtime(
        config=config,
        properties=PropertyIndex(notes_path),
    )
