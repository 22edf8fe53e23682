"""Plain-text and rich terminal renderers for table summaries."""
from pgtables.render.plain import render_plain
from pgtables.render.rich_renderer import render_rich

__all__ = ["render_plain", "render_rich"]
