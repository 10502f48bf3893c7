"""Markdown to HTML rendering with markdown-it"""

from functools import lru_cache

from markdown_it import MarkdownIt
from mdit_py_plugins.footnote import footnote_plugin

from sitepub.core.site import MarkdownConfig


MORE_MARKER = "<!-- more -->"
EXTERNAL_SCHEMES = ("http://", "https://")


def _render_external_link_open(self, tokens, idx, options, env):
    """link_open rule that opens absolute http(s) links in a new tab."""
    token = tokens[idx]
    if (token.attrGet("href") or "").startswith(EXTERNAL_SCHEMES):
        token.attrSet("target", "_blank")
        token.attrSet("rel", "noopener")
    return self.renderToken(tokens, idx, options, env)


@lru_cache(maxsize=8)
def make_parser(config: MarkdownConfig, preset: str = "gfm-like") -> MarkdownIt:
    """Build a MarkdownIt instance for the given markdown settings."""
    md = MarkdownIt(preset, options_update={"linkify": False, "html": True})
    if config.bottom_footnotes:
        md.use(footnote_plugin)
    if config.external_links_target_blank:
        md.add_render_rule("link_open", _render_external_link_open)
    return md


def render_markdown(text: str, config: MarkdownConfig) -> str:
    """Render a markdown body to HTML."""
    if not text.strip():
        return ""
    return make_parser(config).render(text)


def render_summary(text: str, config: MarkdownConfig) -> str | None:
    """Render the part of the body above the <!-- more --> marker, or None if there is no marker."""
    head, sep, _ = text.partition(MORE_MARKER)
    if not sep:
        return None
    return render_markdown(head, config)
