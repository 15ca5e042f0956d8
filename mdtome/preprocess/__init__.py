"""Chapter helper parsing and index-page path handling."""

__all__ = ["index", "link_parser"]