# mdtome

Configuration handling for books written in markdown, together with the
parsing of the helpers that chapters use to pull in other files. It loads a
`book.toml`, exposes its well-known tables as typed objects, and finds and
parses `{{#...}}` helpers in chapter text.

## Installing

```
pip install mdtome
```

## Configuration

`mdtome.config.Config` is an in-memory view of `book.toml`. The `[book]`,
`[build]` and `[rust]` tables become `BookConfig`, `BuildConfig` and
`RustConfig` objects (from `mdtome.settings`). Every other table stays
available through dotted keys.

```python
from mdtome.config import Config

cfg = Config.from_str('''
[book]
title = "My Book"
authors = ["Jane Doe"]

[other-table.foo]
bar = 123
''')

cfg.book.title                  # "My Book"
cfg.get("other-table.foo.bar")  # 123
cfg.get("no.such.key")          # None

cfg.set("output.html.theme", "./themes")
html = cfg.html_config()        # an HtmlConfig, or None when [output.html] is absent or invalid
html.theme_dir("/path/to/book") # Path("/path/to/book/themes")
```

`Config.from_disk(path)` reads the same from a file. Text that is not valid
TOML, or whose known tables hold values of the wrong type, raises
`mdtome.settings.ConfigError` with a message beginning
`Invalid configuration file`.

`Config.set` with a key under `book.` or `build.` updates the typed table;
any other key is written into the extra data, creating tables along the way.
`get_renderer(name)` and `get_preprocessor(name)` return the
`[output.<name>]` and `[preprocessor.<name>]` tables, or None.

The older top-level layout, with `title`, `authors`, `source` and
`description` at the top and `[output.html] destination`, is still
accepted. It is converted to the current layout and a warning is logged.

`Config.update_from_env()` applies overrides from environment variables
that begin with `MDBOOK_` (it reads `os.environ` unless a mapping is passed
in). A double underscore separates nested keys, and a single underscore
becomes a dash, so `MDBOOK_BOOK__TITLE` sets `book.title`; `parse_env`
performs that name conversion. Each value is parsed as JSON where it can be,
and is used as a plain string otherwise.

`Config.to_dict()` returns the whole configuration as a table, and
`Config.to_toml()` writes it back out as TOML with keys sorted.

### Book and HTML settings

- `BookConfig.realized_text_direction()` returns the explicit
  `text-direction`, or derives one from the language code through
  `TextDirection.from_lang_code` (right-to-left for languages such as `ar`,
  `he`, `fa` and `ur`).
- `RustConfig.edition` is a `RustEdition` (`2015`, `2018`, `2021`, `2024`).
- `mdtome.html_settings.HtmlConfig` holds the `[output.html]` settings,
  with nested `Fold`, `Playground` (also read from `playpen`), `Code`,
  `Print` and `Search` objects. `uses_smart_punctuation()` is true when
  either `smart-punctuation` or `curly-quotes` is set.

## Chapter helpers

`mdtome.preprocess.link_parser.find_links` yields a `Link` for every
recognised helper in a piece of text, with its start and end offsets, its
`LinkKind` and its parsed arguments:

- `{{#include file}}`, `{{#include file:10:20}}`, `{{#include file:anchor}}`
- `{{#rustdoc_include ...}}`, with the same arguments
- `{{#playground file attrs...}}` (and the older `{{#playpen ...}}`)
- `{{#title ...}}`
- a helper preceded by a backslash, reported as `LinkKind.ESCAPED`

Line numbers are one-based in the text and become a zero-based, half-open
`LineRange`; a non-numeric selection becomes an `Anchor`.
`parse_include_path` and `parse_range_or_anchor` expose that parsing on its
own.

```python
from mdtome.preprocess.link_parser import find_links

for link in find_links("See {{#include code.rs:5:10}} here."):
    print(link.start_index, link.end_index, link.kind, link.path, link.target)
# 4 29 LinkKind.INCLUDE code.rs LineRange(start=4, end=10)
```

`mdtome.preprocess.index` decides which chapter files count as index pages:
`is_readme_file(path)` is true when the file stem is `readme` in any case,
and `index_path_for(path)` renames such a path to `index.md`.

## What this package does not do

It does not build or render books and has no command-line tool. The helpers
are found and parsed but not expanded: nothing here reads the included files
or replaces helpers with their contents. There is no support for running
external preprocessor programs, and no book or chapter model to run
preprocessors over.