"""Configuration models for the templater.

DirsConfig

`base` (`Path`)
: Directory holding the layout and the page, component and head trees.

`pages` (`str`)
: Sub-directory of `base` searched by `execute_page`.

`components` (`str`)
: Sub-directory of `base` searched by `execute_component`.

`heads` (`str`)
: Sub-directory of `base` holding component head fragments rendered by
  `componentHead`. A missing fragment renders nothing.

`layout` (`str`)
: Stem of the layout file in `base`; it must render a `body` block and may
  render a `head` block.

TemplaterConfig

`dirs` (`DirsConfig`)
: Template tree layout.

`file_ext` (`str`)
: Extension shared by every template file, `.html.tmpl` by default.

`autoescape` (`bool`)
: Escape interpolated values for HTML output.

`strict_undefined` (`bool`)
: Fail when a template reads an undefined variable instead of rendering it empty.

`functions` (`FunctionBuilder | None`)
: Builder returning extra template functions for a template name and its props.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

try:  # Python >=3.11
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.10
    import tomli as tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigError
from .functions import FunctionBuilder


DEFAULT_FILE_EXT = ".html.tmpl"


class DirsConfig(BaseModel):
    """Locations of the template trees."""

    model_config = ConfigDict(extra="forbid")

    base: Path = Path("templates")
    pages: str = "pages"
    components: str = "components"
    heads: str = "heads"
    layout: str = "layout"

    @model_validator(mode="before")
    @classmethod
    def drop_empty(cls, data: Any) -> Any:
        """Treat empty values as unset so the defaults apply."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value not in ("", None)}
        return data

    @property
    def pages_dir(self) -> Path:
        return self.base / self.pages

    @property
    def components_dir(self) -> Path:
        return self.base / self.components

    @property
    def heads_dir(self) -> Path:
        return self.base / self.heads


class TemplaterConfig(BaseModel):
    """Settings shared by every execution of a templater."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    dirs: DirsConfig = Field(default_factory=DirsConfig)
    file_ext: str = DEFAULT_FILE_EXT
    autoescape: bool = True
    strict_undefined: bool = False
    functions: FunctionBuilder | None = Field(default=None, exclude=True)

    @field_validator("file_ext", mode="before")
    @classmethod
    def normalise_extension(cls, value: Any) -> Any:
        """Fall back to the default extension and enforce a leading dot."""
        if value in ("", None):
            return DEFAULT_FILE_EXT
        if isinstance(value, str) and not value.startswith("."):
            return "." + value
        return value

    @property
    def layout_filename(self) -> str:
        return self.dirs.layout + self.file_ext

    @classmethod
    def load(cls, path: str | Path, **overrides: Any) -> TemplaterConfig:
        """Read a TOML configuration file.

        Settings may sit at the top level or under a ``[templater]`` table. A
        relative ``dirs.base`` is resolved against the file's directory.
        """
        config_path = Path(path)
        try:
            with config_path.open("rb") as handle:
                data = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Unable to read configuration '{config_path}': {exc}") from exc

        payload = dict(data.get("templater", data))
        dirs = dict(payload.get("dirs") or {})
        base = dirs.get("base")
        if base and not Path(base).is_absolute():
            dirs["base"] = str((config_path.parent / base).resolve())
        if dirs:
            payload["dirs"] = dirs
        payload.update(overrides)
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration in '{config_path}': {exc}") from exc


__all__ = ["DEFAULT_FILE_EXT", "DirsConfig", "TemplaterConfig"]
