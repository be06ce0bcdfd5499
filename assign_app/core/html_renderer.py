"""Markdown/HTML rendering helpers for previews shown in QWebEngineView.

Question prompts are authored in a rich text editor and may already contain
HTML, so the prompt renderer lets HTML through. Student answers are untrusted
and go through a renderer with HTML disabled, which escapes any markup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownHtmlRenderer:
    """Converts markdown (optionally with inline HTML) into HTML fragments or documents."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def wrap_document(self, body_html: str, title: str = "AssignQt", font_size: int = 14) -> str:
        """Wrap a fragment inside a minimal HTML document."""

        return f"""<!doctype html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <title>{escape(title)}</title>
    <style>
      body {{ font-family: 'Segoe UI', 'Noto Naskh Arabic', system-ui, sans-serif; margin: 0; padding: 0.75rem; font-size: {font_size}pt; }}
      .preview {{ line-height: 1.6; unicode-bidi: plaintext; }}
      .preview img {{ max-width: 12rem; max-height: 12rem; border-radius: 0.5rem; }}
      .muted {{ color: #64748b; }}
    </style>
  </head>
  <body>
    <div class=\"preview\" dir=\"auto\">{body_html}</div>
  </body>
</html>"""

    def render_full_document(self, markdown_text: str, title: str = "AssignQt", font_size: int = 14) -> str:
        """Convenience wrapper to render markdown into a full page."""

        return self.wrap_document(self.render_fragment(markdown_text), title=title, font_size=font_size)


prompt_renderer = MarkdownHtmlRenderer(enable_html=True)
answer_renderer = MarkdownHtmlRenderer(enable_html=False)
