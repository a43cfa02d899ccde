from __future__ import annotations

from pathlib import Path

import pytest

from templater.core.config import DEFAULT_FILE_EXT, DirsConfig, TemplaterConfig
from templater.core.exceptions import ConfigError


def test_defaults() -> None:
    config = TemplaterConfig()
    assert config.dirs.base == Path("templates")
    assert config.dirs.pages_dir == Path("templates/pages")
    assert config.dirs.components_dir == Path("templates/components")
    assert config.dirs.heads_dir == Path("templates/heads")
    assert config.file_ext == DEFAULT_FILE_EXT
    assert config.layout_filename == "layout.html.tmpl"
    assert config.autoescape is True
    assert config.strict_undefined is False


def test_empty_values_fall_back_to_defaults() -> None:
    dirs = DirsConfig(pages="", components=None, layout="")
    assert dirs.pages == "pages"
    assert dirs.components == "components"
    assert dirs.layout == "layout"
    assert TemplaterConfig(file_ext="").file_ext == DEFAULT_FILE_EXT


def test_extension_gets_a_leading_dot() -> None:
    assert TemplaterConfig(file_ext="j2").file_ext == ".j2"
    assert TemplaterConfig(file_ext=".j2").file_ext == ".j2"


def test_unknown_directory_keys_are_rejected() -> None:
    with pytest.raises(ValueError):
        DirsConfig(layouts="x")


def test_functions_are_not_serialised() -> None:
    config = TemplaterConfig(functions=lambda name, props: {})
    assert "functions" not in config.model_dump()


def test_load_templater_table(tmp_path: Path) -> None:
    config_file = tmp_path / "templater.toml"
    config_file.write_text(
        "[templater]\n"
        'file_ext = "j2"\n'
        "strict_undefined = true\n"
        "[templater.dirs]\n"
        'base = "site"\n'
        'pages = "views"\n',
        encoding="utf-8",
    )
    config = TemplaterConfig.load(config_file)
    assert config.file_ext == ".j2"
    assert config.strict_undefined is True
    assert config.dirs.base == (tmp_path / "site").resolve()
    assert config.dirs.pages == "views"


def test_load_top_level_settings_with_overrides(tmp_path: Path) -> None:
    config_file = tmp_path / "templater.toml"
    config_file.write_text("autoescape = false\n", encoding="utf-8")
    config = TemplaterConfig.load(config_file, file_ext=".txt")
    assert config.autoescape is False
    assert config.file_ext == ".txt"
    assert config.dirs.base == Path("templates")


def test_absolute_base_is_kept(tmp_path: Path) -> None:
    config_file = tmp_path / "templater.toml"
    base = tmp_path / "elsewhere"
    config_file.write_text(f"[dirs]\nbase = {str(base)!r}\n", encoding="utf-8")
    assert TemplaterConfig.load(config_file).dirs.base == base


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Unable to read configuration"):
        TemplaterConfig.load(tmp_path / "missing.toml")


def test_load_invalid_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "templater.toml"
    config_file.write_text("file_ext = \n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Unable to read configuration"):
        TemplaterConfig.load(config_file)


def test_load_invalid_settings(tmp_path: Path) -> None:
    config_file = tmp_path / "templater.toml"
    config_file.write_text("[dirs]\nlayouts = 'x'\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid configuration"):
        TemplaterConfig.load(config_file)
