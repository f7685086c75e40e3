"""
Загрузчик конфигурации и файлов переменных.

Конфигурация (minitpl.yaml) необязательна: при её отсутствии используются
значения по умолчанию. Формат:

    root_folder: .
    templates_folder: templates
    globals:
      site: Example
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import MinitplUserError
from .paths import DEFAULT_ROOT_FOLDER, DEFAULT_TEMPLATES_FOLDER

_yaml = YAML(typ="safe")

_KNOWN_KEYS = {"root_folder", "templates_folder", "globals"}


class ConfigError(MinitplUserError):
    """Некорректный файл конфигурации или переменных."""
    pass


@dataclass
class BuilderConfig:
    """Настройки сборщика шаблонов."""
    root_folder: str = DEFAULT_ROOT_FOLDER
    templates_folder: str = DEFAULT_TEMPLATES_FOLDER
    globals: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict, *, source: str = "<config>") -> BuilderConfig:
        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            raise ConfigError(f"{source}: unknown keys: {', '.join(sorted(unknown))}")

        root_folder = data.get("root_folder", DEFAULT_ROOT_FOLDER)
        templates_folder = data.get("templates_folder", DEFAULT_TEMPLATES_FOLDER)
        for key, value in (("root_folder", root_folder), ("templates_folder", templates_folder)):
            if not isinstance(value, str) or not value:
                raise ConfigError(f"{source}: '{key}' must be a non-empty string")

        globals_ = data.get("globals") or {}
        if not isinstance(globals_, dict):
            raise ConfigError(f"{source}: 'globals' must be a mapping")

        return cls(
            root_folder=root_folder,
            templates_folder=templates_folder,
            globals=_normalize_variables(globals_, source),
        )


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8"))
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def _normalize_variables(data: dict, source: str) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for name, value in data.items():
        if isinstance(value, (dict, list)):
            raise ConfigError(f"{source}: variable '{name}' must be a scalar")
        result[str(name)] = value
    return result


def load_config(path: Optional[Path]) -> BuilderConfig:
    """
    Загружает конфигурацию сборщика.

    Args:
        path: Путь к minitpl.yaml; None или отсутствующий файл дают значения по умолчанию

    Returns:
        Конфигурация сборщика

    Raises:
        ConfigError: При некорректном содержимом файла
    """
    if path is None or not path.is_file():
        return BuilderConfig()
    return BuilderConfig.from_dict(_read_yaml_map(path), source=str(path))


def load_variables(path: Path) -> Dict[str, Any]:
    """
    Загружает YAML-файл с переменными (плоское отображение имя → значение).

    Raises:
        ConfigError: Если файл не найден или не является отображением скаляров
    """
    if not path.is_file():
        raise ConfigError(f"Variables file not found: {path}")
    return _normalize_variables(_read_yaml_map(path), str(path))


__all__ = ["BuilderConfig", "ConfigError", "load_config", "load_variables"]
