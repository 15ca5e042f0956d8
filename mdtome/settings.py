"""Core book settings: the ``[book]``, ``[build]`` and ``[rust]`` tables."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ConfigError(ValueError):
    """Raised when configuration data cannot be interpreted."""


_RTL_LANGUAGES = frozenset(
    {
        "ar", "ara", "arc", "ae", "ave", "egy", "he", "heb", "nqo", "pal",
        "phn", "sam", "syc", "syr", "fa", "per", "fas", "ku", "kur", "ur",
        "urd", "pus", "ps", "yi", "yid",
    }
)


class TextDirection(Enum):
    """Direction of text in the rendered book."""

    LEFT_TO_RIGHT = "ltr"
    RIGHT_TO_LEFT = "rtl"

    @classmethod
    def from_lang_code(cls, code: str) -> TextDirection:
        """Derive the text direction from a language code."""
        if code in _RTL_LANGUAGES:
            return cls.RIGHT_TO_LEFT
        return cls.LEFT_TO_RIGHT


class RustEdition(Enum):
    """Language edition used for code samples."""

    E2024 = "2024"
    E2021 = "2021"
    E2018 = "2018"
    E2015 = "2015"


def _as_table(data: Any, name: str) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"[{name}] must be a table, got {type(data).__name__}")
    return data


def _opt_str(data: Mapping[str, Any], key: str, default: str | None) -> str | None:
    if key not in data:
        return default
    value = data[key]
    if value is None or isinstance(value, str):
        return value
    raise ConfigError(f"{key!r} must be a string, got {value!r}")


def _str(data: Mapping[str, Any], key: str, default: str) -> str:
    if key not in data:
        return default
    value = data[key]
    if isinstance(value, str):
        return value
    raise ConfigError(f"{key!r} must be a string, got {value!r}")


def _bool(data: Mapping[str, Any], key: str, default: bool) -> bool:
    if key not in data:
        return default
    value = data[key]
    if isinstance(value, bool):
        return value
    raise ConfigError(f"{key!r} must be a boolean, got {value!r}")


def _str_list(data: Mapping[str, Any], key: str) -> list[str]:
    if key not in data:
        return []
    value = data[key]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigError(f"{key!r} must be a list of strings, got {value!r}")


def _enum(data: Mapping[str, Any], key: str, enum_type: type[Enum]) -> Any:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        try:
            return enum_type(value)
        except ValueError:
            pass
    allowed = ", ".join(repr(member.value) for member in enum_type)
    raise ConfigError(f"{key!r} must be one of {allowed}, got {value!r}")


@dataclass
class BookConfig:
    """Metadata about the book and where its sources live."""

    title: str | None = None
    authors: list[str] = field(default_factory=list)
    description: str | None = None
    src: str = "src"
    multilingual: bool = False
    language: str | None = "en"
    text_direction: TextDirection | None = None

    def realized_text_direction(self) -> TextDirection:
        """The explicit text direction, or the one implied by the language."""
        if self.text_direction is not None:
            return self.text_direction
        return TextDirection.from_lang_code(self.language or "")

    @classmethod
    def from_dict(cls, data: Any) -> BookConfig:
        """Build from a ``[book]`` table; missing keys take their defaults."""
        table = _as_table(data, "book")
        return cls(
            title=_opt_str(table, "title", None),
            authors=_str_list(table, "authors"),
            description=_opt_str(table, "description", None),
            src=_str(table, "src", "src"),
            multilingual=_bool(table, "multilingual", False),
            language=_opt_str(table, "language", "en"),
            text_direction=_enum(table, "text-direction", TextDirection),
        )

    def to_dict(self) -> dict[str, Any]:
        """The ``[book]`` table, with unset optional values left out."""
        out: dict[str, Any] = {}
        if self.title is not None:
            out["title"] = self.title
        out["authors"] = list(self.authors)
        if self.description is not None:
            out["description"] = self.description
        out["src"] = str(self.src)
        out["multilingual"] = self.multilingual
        if self.language is not None:
            out["language"] = self.language
        if self.text_direction is not None:
            out["text-direction"] = self.text_direction.value
        return out


@dataclass
class BuildConfig:
    """Settings for the build procedure."""

    build_dir: str = "book"
    create_missing: bool = True
    use_default_preprocessors: bool = True
    extra_watch_dirs: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> BuildConfig:
        """Build from a ``[build]`` table; missing keys take their defaults."""
        table = _as_table(data, "build")
        return cls(
            build_dir=_str(table, "build-dir", "book"),
            create_missing=_bool(table, "create-missing", True),
            use_default_preprocessors=_bool(table, "use-default-preprocessors", True),
            extra_watch_dirs=_str_list(table, "extra-watch-dirs"),
        )

    def to_dict(self) -> dict[str, Any]:
        """The ``[build]`` table."""
        return {
            "build-dir": str(self.build_dir),
            "create-missing": self.create_missing,
            "use-default-preprocessors": self.use_default_preprocessors,
            "extra-watch-dirs": [str(d) for d in self.extra_watch_dirs],
        }


@dataclass
class RustConfig:
    """Settings for code samples, such as the language edition."""

    edition: RustEdition | None = None

    @classmethod
    def from_dict(cls, data: Any) -> RustConfig:
        """Build from a ``[rust]`` table."""
        table = _as_table(data, "rust")
        return cls(edition=_enum(table, "edition", RustEdition))

    def to_dict(self) -> dict[str, Any]:
        """The ``[rust]`` table, empty when no edition is set."""
        if self.edition is None:
            return {}
        return {"edition": self.edition.value}