"""Render a highlighted document for the scrollable panel"""

import copy
from typing import Optional

from config import Config
from core.search_manager import SearchOutcome


class DocumentHighlighter:
    """Turn a search outcome into self-contained panel HTML"""

    def __init__(self, highlight_class: Optional[str] = None,
                 current_class: Optional[str] = None):
        self.highlight_class = highlight_class or Config.HIGHLIGHT_CLASS
        self.current_class = current_class or Config.CURRENT_MATCH_CLASS

    def build_style(self) -> str:
        """CSS for highlighted and current segments"""
        return (
            "<style>"
            f".{self.highlight_class} {{ background: {Config.HIGHLIGHT_BACKGROUND}; "
            f"color: {Config.HIGHLIGHT_COLOR}; }}"
            f".{self.highlight_class}.{self.current_class} {{ "
            f"background: {Config.CURRENT_MATCH_BACKGROUND}; }}"
            "</style>"
        )

    def build_scroll_script(self, current_index: int) -> str:
        """Script that centers the current match once the panel has loaded"""
        if current_index < 0:
            return ""
        return (
            "<script>"
            "window.addEventListener('load', function () {"
            f"  var el = document.getElementById('match-{current_index}');"
            "  if (el) { el.scrollIntoView({behavior: 'smooth', block: 'center'}); }"
            "});"
            "</script>"
        )

    def render_body(self, outcome: SearchOutcome, current_index: int = -1) -> str:
        """Spliced markup with every segment of the current match emphasized"""
        if current_index < 0 or current_index >= outcome.match_count:
            return outcome.html

        # Work on a copy so the outcome's tree keeps its plain highlight classes
        soup = copy.copy(outcome.soup)
        for span in soup.select(f'span[data-match="{current_index}"]'):
            span['class'] = span.get_attribute_list('class') + [self.current_class]
        return soup.decode()

    def render_panel_html(self, outcome: SearchOutcome, current_index: int = -1) -> str:
        """Full panel fragment: style, document and scroll script"""
        return (
            self.build_style()
            + f'<div class="document-panel">{self.render_body(outcome, current_index)}</div>'
            + self.build_scroll_script(current_index)
        )
