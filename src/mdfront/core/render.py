"""Markdown body rendering via markdown-it"""

from markdown_it import MarkdownIt


def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    try:
        return MarkdownIt(preset, options_update={"linkify": False})
    except KeyError as e:
        raise ValueError(f"Unknown markdown-it preset: {preset!r}") from e


def render_html(body: str, preset: str = 'gfm-like') -> str:
    """Render a markdown body to an HTML fragment."""
    return make_parser(preset).render(body)
