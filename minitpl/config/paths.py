from __future__ import annotations

from pathlib import Path

# Single source of truth for the folder convention.
CONFIG_FILE = "minitpl.yaml"
DEFAULT_ROOT_FOLDER = "."
DEFAULT_TEMPLATES_FOLDER = "templates"


def config_path(root: Path) -> Path:
    """Path to the optional configuration file minitpl.yaml."""
    return (root / CONFIG_FILE).resolve()


def template_path(root_folder: str, templates_folder: str, file: str) -> Path:
    """
    Template location under the folder convention:
    <root_folder>/<templates_folder>/<file>.
    """
    return Path(root_folder) / templates_folder / file


__all__ = [
    "CONFIG_FILE",
    "DEFAULT_ROOT_FOLDER",
    "DEFAULT_TEMPLATES_FOLDER",
    "config_path",
    "template_path",
]
