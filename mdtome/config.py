"""The book configuration: an in-memory view of ``book.toml``."""

from __future__ import annotations

import copy
import datetime
import json
import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Any

import tomli_w

from mdtome.html_settings import HtmlConfig
from mdtome.settings import BookConfig, BuildConfig, ConfigError, RustConfig

log = logging.getLogger(__name__)

_ENV_PREFIX = "MDBOOK_"
_LEGACY_KEYS = ("title", "authors", "source", "description", "output.html.destination")
_SCALARS = (str, bool, int, float, datetime.date, datetime.time, datetime.datetime)


def parse_env(key: str) -> str | None:
    """Turn an ``MDBOOK_*`` environment variable name into a dotted config key."""
    if not key.startswith(_ENV_PREFIX):
        return None
    return key[len(_ENV_PREFIX):].lower().replace("__", ".").replace("_", "-")


def _to_toml_value(value: Any) -> Any:
    """Convert ``value`` into something TOML can hold, or raise ConfigError."""
    if isinstance(value, Enum):
        return _to_toml_value(value.value)
    if isinstance(value, PurePath):
        return str(value)
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, Mapping):
        out = {}
        for key, item in value.items():
            if isinstance(key, PurePath):
                key = str(key)
            if not isinstance(key, str):
                raise ConfigError(f"Table keys must be strings, got {key!r}")
            out[key] = _to_toml_value(item)
        return out
    if isinstance(value, (list, tuple)):
        return [_to_toml_value(item) for item in value]
    raise ConfigError(f"Unable to represent {value!r} as a TOML value")


def _read(table: Any, key: str) -> Any:
    current = table
    for part in key.split("."):
        if not isinstance(current, dict) or part not in current:
            return None
        current = current[part]
    return current


def _insert(table: dict[str, Any], key: str, value: Any) -> None:
    *parents, last = key.split(".")
    current = table
    for part in parents:
        child = current.get(part)
        if not isinstance(child, dict):
            child = {}
            current[part] = child
        current = child
    current[last] = value


def _delete(table: dict[str, Any], key: str) -> Any:
    *parents, last = key.split(".")
    current: Any = table
    for part in parents:
        if not isinstance(current, dict) or part not in current:
            return None
        current = current[part]
    if not isinstance(current, dict):
        return None
    return current.pop(last, None)


def _sorted(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _sorted(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [_sorted(item) for item in value]
    return value


def _is_legacy_format(table: Mapping[str, Any]) -> bool:
    return any(_read(table, key) is not None for key in _LEGACY_KEYS)


@dataclass
class Config:
    """The book's configuration: known tables plus arbitrary extra data."""

    book: BookConfig = field(default_factory=BookConfig)
    build: BuildConfig = field(default_factory=BuildConfig)
    rust: RustConfig = field(default_factory=RustConfig)
    _rest: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_str(cls, src: str) -> Config:
        """Load a configuration from TOML text."""
        try:
            return cls.from_dict(tomllib.loads(src))
        except (tomllib.TOMLDecodeError, ConfigError) as exc:
            raise ConfigError(f"Invalid configuration file: {exc}") from exc

    @classmethod
    def from_disk(cls, config_file: str | os.PathLike[str]) -> Config:
        """Load a configuration from a TOML file."""
        try:
            with open(config_file, encoding="utf-8") as fh:
                text = fh.read()
        except OSError as exc:
            raise ConfigError(f"Unable to open the configuration file: {exc}") from exc
        return cls.from_str(text)

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        """Build from a parsed TOML document, accepting the legacy layout too."""
        if not isinstance(data, Mapping):
            raise ConfigError("A config file should always be a toml table")
        table = copy.deepcopy(dict(data))

        if _is_legacy_format(table):
            log.warning("It looks like you are using the legacy book.toml format.")
            log.warning(
                "Move top level entries like `title`, `authors` and `description` "
                "under a `[book]` table, and `destination` from `[output.html]` "
                "to `build-dir` under a `[build]` table."
            )
            return cls._from_legacy(table)

        return cls(
            book=BookConfig.from_dict(table.pop("book", None)),
            build=BuildConfig.from_dict(table.pop("build", None)),
            rust=RustConfig.from_dict(table.pop("rust", None)),
            _rest=table,
        )

    @classmethod
    def _from_legacy(cls, table: dict[str, Any]) -> Config:
        cfg = cls()
        title = table.pop("title", None)
        if isinstance(title, str):
            cfg.book.title = title
        authors = table.pop("authors", None)
        if isinstance(authors, list) and all(isinstance(a, str) for a in authors):
            cfg.book.authors = list(authors)
        source = table.pop("source", None)
        if isinstance(source, str):
            cfg.book.src = source
        description = table.pop("description", None)
        if isinstance(description, str):
            cfg.book.description = description
        destination = _delete(table, "output.html.destination")
        if isinstance(destination, str):
            cfg.build.build_dir = destination
        cfg._rest = table
        return cfg

    def update_from_env(self, environ: Mapping[str, str] | None = None) -> None:
        """Apply overrides from ``MDBOOK_*`` variables (``os.environ`` by default).

        Values are parsed as JSON where possible and used as strings otherwise.
        """
        log.debug("Updating the config from environment variables")
        if environ is None:
            environ = os.environ
        overrides = [
            (key, value)
            for name, value in environ.items()
            if (key := parse_env(name)) is not None
        ]
        for key, value in overrides:
            log.debug("%s => %s", key, value)
            try:
                parsed: Any = json.loads(value)
            except ValueError:
                parsed = value

            if key in ("book", "build") and isinstance(parsed, dict):
                for sub_key, sub_value in parsed.items():
                    self.set(f"{key}.{sub_key}", sub_value)
                return

            self.set(key, parsed)

    def get(self, key: str) -> Any:
        """Fetch an item from the extra data by dotted key, or None."""
        return _read(self._rest, key)

    def set(self, index: str, value: Any) -> None:
        """Set a dotted key, clobbering any existing values along the way."""
        value = _to_toml_value(value)
        if index.startswith("book."):
            self.book = self._updated(self.book, BookConfig, index[len("book."):], value)
        elif index.startswith("build."):
            self.build = self._updated(self.build, BuildConfig, index[len("build."):], value)
        else:
            _insert(self._rest, index, value)

    @staticmethod
    def _updated(current: Any, kind: Any, key: str, value: Any) -> Any:
        raw = current.to_dict()
        _insert(raw, key, value)
        try:
            return kind.from_dict(raw)
        except ConfigError:
            return current

    def get_renderer(self, index: str) -> dict[str, Any] | None:
        """The table of a renderer, if there is one."""
        table = self.get(f"output.{index}")
        return table if isinstance(table, dict) else None

    def get_preprocessor(self, index: str) -> dict[str, Any] | None:
        """The table of a preprocessor, if there is one."""
        table = self.get(f"preprocessor.{index}")
        return table if isinstance(table, dict) else None

    def html_config(self) -> HtmlConfig | None:
        """The HTML renderer settings; None when absent or invalid."""
        table = self.get("output.html")
        if table is None:
            return None
        try:
            return HtmlConfig.from_dict(table)
        except ConfigError as exc:
            log.error("Parsing configuration [output.html]: %s", exc)
            return None

    def to_dict(self) -> dict[str, Any]:
        """The whole configuration as a TOML-ready table."""
        table = copy.deepcopy(self._rest)
        table["book"] = self.book.to_dict()
        if self.build != BuildConfig():
            table["build"] = self.build.to_dict()
        if self.rust != RustConfig():
            table["rust"] = self.rust.to_dict()
        return table

    def to_toml(self) -> str:
        """The configuration as TOML text, keys sorted."""
        return tomli_w.dumps(_sorted(self.to_dict()))