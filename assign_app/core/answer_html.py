"""HTML rendering of student answers for the review dialog."""

from __future__ import annotations

from html import escape
from typing import Any

from assign_app.core.answer_classifier import RenderStrategy, describe_answer
from assign_app.core.html_renderer import answer_renderer, prompt_renderer


def render_answer_html(answer: Any, base_url: str | None = None) -> str:
    """Render ``answer`` as an HTML fragment according to its shape."""
    view = describe_answer(answer, base_url)
    if view.strategy is RenderStrategy.TEXT:
        return answer_renderer.render_fragment(view.text)
    if view.strategy is RenderStrategy.IMAGE:
        return f'<img src="{escape(view.media_url or "")}" alt="Answer" />'
    if view.strategy is RenderStrategy.AUDIO:
        return (
            "<audio controls>"
            f'<source src="{escape(view.media_url or "")}" type="audio/mpeg" />'
            "</audio>"
        )
    if view.strategy is RenderStrategy.UNKNOWN:
        return f'<p class="muted">{escape(view.text)}</p>'
    return f"<p>{escape(view.text)}</p>"


def render_answer_document(answer: Any, base_url: str | None = None, font_size: int = 14) -> str:
    return answer_renderer.wrap_document(
        render_answer_html(answer, base_url), title="Answer", font_size=font_size
    )


def render_prompt_document(prompt_text: str, font_size: int = 14) -> str:
    """Full-page preview of a question prompt."""
    return prompt_renderer.render_full_document(prompt_text, title="Question", font_size=font_size)
