"""
Tests for minitpl.yaml and variables files loading.
"""

from pathlib import Path

import pytest

from minitpl.config import BuilderConfig, ConfigError, load_config, load_variables
from tests.infrastructure.file_utils import write, write_yaml


class TestLoadConfig:

    def test_missing_file_gives_defaults(self, tmp_path: Path):
        cfg = load_config(tmp_path / "minitpl.yaml")

        assert cfg == BuilderConfig()
        assert cfg.root_folder == "."
        assert cfg.templates_folder == "templates"
        assert cfg.globals == {}

    def test_none_gives_defaults(self):
        assert load_config(None) == BuilderConfig()

    def test_empty_file(self, tmp_path: Path):
        path = write(tmp_path / "minitpl.yaml", "")

        assert load_config(path) == BuilderConfig()

    def test_full_config(self, tmp_path: Path):
        path = write_yaml(tmp_path / "minitpl.yaml", """
        root_folder: site
        templates_folder: parts
        globals:
          title: Главная
          year: 2024
          draft:
        """)

        cfg = load_config(path)

        assert cfg.root_folder == "site"
        assert cfg.templates_folder == "parts"
        assert cfg.globals == {"title": "Главная", "year": 2024, "draft": None}

    def test_not_a_mapping(self, tmp_path: Path):
        path = write(tmp_path / "minitpl.yaml", "- a\n- b\n")

        with pytest.raises(ConfigError, match="must be a mapping"):
            load_config(path)

    def test_unknown_key(self, tmp_path: Path):
        path = write(tmp_path / "minitpl.yaml", "templates: x\n")

        with pytest.raises(ConfigError, match="unknown keys: templates"):
            load_config(path)

    def test_bad_folder_type(self, tmp_path: Path):
        path = write(tmp_path / "minitpl.yaml", "root_folder: [a]\n")

        with pytest.raises(ConfigError, match="root_folder"):
            load_config(path)

    def test_nested_global_rejected(self, tmp_path: Path):
        path = write_yaml(tmp_path / "minitpl.yaml", """
        globals:
          menu:
            - home
        """)

        with pytest.raises(ConfigError, match="menu"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path: Path):
        path = write(tmp_path / "minitpl.yaml", "globals: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)


class TestLoadVariables:

    def test_flat_mapping(self, tmp_path: Path):
        path = write(tmp_path / "vars.yaml", "name: Ada\nflag: ''\n")

        assert load_variables(path) == {"name": "Ada", "flag": ""}

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_variables(tmp_path / "absent.yaml")
