"""Settings for the HTML renderer: the ``[output.html]`` table."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mdtome.settings import ConfigError

_U8_MAX = 2**8 - 1
_U32_MAX = 2**32 - 1


def _table(data: Any, name: str) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"[{name}] must be a table, got {type(data).__name__}")
    return data


def _bool(data: Mapping[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if isinstance(value, bool):
        return value
    raise ConfigError(f"{key!r} must be a boolean, got {value!r}")


def _int(data: Mapping[str, Any], key: str, default: int, maximum: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key!r} must be an integer, got {value!r}")
    if not 0 <= value <= maximum:
        raise ConfigError(f"{key!r} must be between 0 and {maximum}, got {value}")
    return value


def _opt_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ConfigError(f"{key!r} must be a string, got {value!r}")


def _str_list(data: Mapping[str, Any], key: str) -> list[str]:
    value = data.get(key, [])
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigError(f"{key!r} must be a list of strings, got {value!r}")


def _str_map(data: Mapping[str, Any], key: str) -> dict[str, str]:
    value = data.get(key, {})
    if isinstance(value, Mapping) and all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        return dict(value)
    raise ConfigError(f"{key!r} must be a table of strings, got {value!r}")


@dataclass
class Print:
    """How the print icon, print page and print stylesheet are rendered."""

    enable: bool = True
    page_break: bool = True

    @classmethod
    def from_dict(cls, data: Any) -> Print:
        """Build from a ``[output.html.print]`` table."""
        table = _table(data, "output.html.print")
        return cls(
            enable=_bool(table, "enable", True),
            page_break=_bool(table, "page-break", True),
        )


@dataclass
class Fold:
    """How chapters in the sidebar are folded."""

    enable: bool = False
    level: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> Fold:
        """Build from a ``[output.html.fold]`` table."""
        table = _table(data, "output.html.fold")
        return cls(
            enable=_bool(table, "enable", False),
            level=_int(table, "level", 0, _U8_MAX),
        )


@dataclass
class Playground:
    """How runnable code snippets are presented."""

    editable: bool = False
    copyable: bool = True
    copy_js: bool = True
    line_numbers: bool = False
    runnable: bool = True

    @classmethod
    def from_dict(cls, data: Any) -> Playground:
        """Build from a ``[output.html.playground]`` table."""
        table = _table(data, "output.html.playground")
        return cls(
            editable=_bool(table, "editable", False),
            copyable=_bool(table, "copyable", True),
            copy_js=_bool(table, "copy-js", True),
            line_numbers=_bool(table, "line-numbers", False),
            runnable=_bool(table, "runnable", True),
        )


@dataclass
class Code:
    """How code blocks are rendered."""

    hidelines: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Code:
        """Build from a ``[output.html.code]`` table."""
        table = _table(data, "output.html.code")
        return cls(hidelines=_str_map(table, "hidelines"))


@dataclass
class Search:
    """Settings of the search feature."""

    enable: bool = True
    limit_results: int = 30
    teaser_word_count: int = 30
    use_boolean_and: bool = False
    boost_title: int = 2
    boost_hierarchy: int = 1
    boost_paragraph: int = 1
    expand: bool = True
    heading_split_level: int = 3
    copy_js: bool = True

    @classmethod
    def from_dict(cls, data: Any) -> Search:
        """Build from a ``[output.html.search]`` table."""
        table = _table(data, "output.html.search")
        return cls(
            enable=_bool(table, "enable", True),
            limit_results=_int(table, "limit-results", 30, _U32_MAX),
            teaser_word_count=_int(table, "teaser-word-count", 30, _U32_MAX),
            use_boolean_and=_bool(table, "use-boolean-and", False),
            boost_title=_int(table, "boost-title", 2, _U8_MAX),
            boost_hierarchy=_int(table, "boost-hierarchy", 1, _U8_MAX),
            boost_paragraph=_int(table, "boost-paragraph", 1, _U8_MAX),
            expand=_bool(table, "expand", True),
            heading_split_level=_int(table, "heading-split-level", 3, _U8_MAX),
            copy_js=_bool(table, "copy-js", True),
        )


@dataclass
class HtmlConfig:
    """Configuration of the HTML renderer."""

    theme: str | None = None
    default_theme: str | None = None
    preferred_dark_theme: str | None = None
    smart_punctuation: bool = False
    curly_quotes: bool = False
    mathjax_support: bool = False
    copy_fonts: bool = True
    google_analytics: str | None = None
    additional_css: list[str] = field(default_factory=list)
    additional_js: list[str] = field(default_factory=list)
    fold: Fold = field(default_factory=Fold)
    playground: Playground = field(default_factory=Playground)
    code: Code = field(default_factory=Code)
    print: Print = field(default_factory=Print)
    no_section_label: bool = False
    search: Search | None = None
    git_repository_url: str | None = None
    git_repository_icon: str | None = None
    input_404: str | None = None
    site_url: str | None = None
    cname: str | None = None
    edit_url_template: str | None = None
    live_reload_endpoint: str | None = None
    redirect: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> HtmlConfig:
        """Build from an ``[output.html]`` table; unknown keys are ignored."""
        table = _table(data, "output.html")
        playground = table.get("playground", table.get("playpen"))
        search = table.get("search")
        return cls(
            theme=_opt_str(table, "theme"),
            default_theme=_opt_str(table, "default-theme"),
            preferred_dark_theme=_opt_str(table, "preferred-dark-theme"),
            smart_punctuation=_bool(table, "smart-punctuation", False),
            curly_quotes=_bool(table, "curly-quotes", False),
            mathjax_support=_bool(table, "mathjax-support", False),
            copy_fonts=_bool(table, "copy-fonts", True),
            google_analytics=_opt_str(table, "google-analytics"),
            additional_css=_str_list(table, "additional-css"),
            additional_js=_str_list(table, "additional-js"),
            fold=Fold.from_dict(table.get("fold")),
            playground=Playground.from_dict(playground),
            code=Code.from_dict(table.get("code")),
            print=Print.from_dict(table.get("print")),
            no_section_label=_bool(table, "no-section-label", False),
            search=None if search is None else Search.from_dict(search),
            git_repository_url=_opt_str(table, "git-repository-url"),
            git_repository_icon=_opt_str(table, "git-repository-icon"),
            input_404=_opt_str(table, "input-404"),
            site_url=_opt_str(table, "site-url"),
            cname=_opt_str(table, "cname"),
            edit_url_template=_opt_str(table, "edit-url-template"),
            live_reload_endpoint=_opt_str(table, "live-reload-endpoint"),
            redirect=_str_map(table, "redirect"),
        )

    def theme_dir(self, root: str | Path) -> Path:
        """The theme directory under ``root``, ``theme`` when none is set."""
        return Path(root) / (self.theme if self.theme is not None else "theme")

    def uses_smart_punctuation(self) -> bool:
        """Whether smart punctuation is on, under either of its names."""
        return self.smart_punctuation or self.curly_quotes