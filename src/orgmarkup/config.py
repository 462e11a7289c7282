"""Configuration loader for orgmarkup.toml."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

CONFIG_NAME = "orgmarkup.toml"


@dataclass
class StyleSettings:
    """Style switches; acts as the SettingsStore for FormatConfig.from_settings."""
    style: bool = True
    with_marks: bool = False

    def style_text(self) -> bool:
        return self.style

    def styled_text_with_marks(self) -> bool:
        return self.with_marks


@dataclass
class NotesConfig:
    """Where property links are resolved."""
    root: Path


@dataclass
class UIConfig:
    """UI configuration."""
    unfold_drawers: bool = False


@dataclass
class OrgMarkupConfig:
    """Complete orgmarkup configuration."""
    style: StyleSettings
    linkify: bool
    notes: NotesConfig
    ui: UIConfig


def load_config(config_path: Path | None = None, notes_path: Path | None = None) -> OrgMarkupConfig:
    """
    Load configuration from orgmarkup.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/orgmarkup.toml
    3. notes_path/orgmarkup.toml

    Args:
        config_path: Explicit path to config file
        notes_path: Notes directory for fallback search

    Returns:
        OrgMarkupConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_NAME)
    if notes_path:
        search_paths.append(notes_path / CONFIG_NAME)

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    format_data = toml_data.get("format", {})
    style = StyleSettings(
        style=bool(format_data.get("style", True)),
        with_marks=bool(format_data.get("with_marks", False)),
    )

    notes_data = toml_data.get("notes", {})
    notes = NotesConfig(root=Path(notes_data.get("root", notes_path or Path("."))))

    ui_data = toml_data.get("ui", {})
    ui = UIConfig(unfold_drawers=bool(ui_data.get("unfold_drawers", False)))

    return OrgMarkupConfig(
        style=style,
        linkify=bool(format_data.get("linkify", True)),
        notes=notes,
        ui=ui,
    )
