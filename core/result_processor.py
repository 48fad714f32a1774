"""Summarize matches for the match table and export"""

from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass

import pandas as pd

from config import Config
from core.search_manager import SearchOutcome
from utils.helpers import create_context

MATCH_MARKERS = ("\u00ab", "\u00bb")


@dataclass
class MatchSummary:
    """One row of the match table"""
    number: int
    start: int
    length: int
    matched_text: str
    context: str
    context_start: int
    context_end: int


class ResultProcessor:
    """Build match summaries from a search outcome"""

    def __init__(self, context_chars: Optional[int] = None):
        self.context_chars = context_chars if context_chars is not None else Config.CONTEXT_CHARS

    def summarize(self, outcome: SearchOutcome) -> List[MatchSummary]:
        """One summary per match, in navigation order"""
        text = outcome.flattened_text
        summaries = []

        for number, match in enumerate(outcome.matches, 1):
            context, rel_start, rel_end = create_context(
                text, match.start, match.end, self.context_chars
            )
            summaries.append(MatchSummary(
                number=number,
                start=match.start,
                length=match.length,
                matched_text=text[match.start:match.end],
                context=context,
                context_start=rel_start,
                context_end=rel_end
            ))

        return summaries

    def mark_context(self, summary: MatchSummary) -> str:
        """Context with the match wrapped in MATCH_MARKERS"""
        left, right = MATCH_MARKERS
        context = summary.context
        return (context[:summary.context_start] + left
                + context[summary.context_start:summary.context_end] + right
                + context[summary.context_end:])

    def to_dataframe(self, summaries: List[MatchSummary]) -> pd.DataFrame:
        """Table of matches for display and export"""
        return pd.DataFrame(
            [{
                'Match': s.number,
                'Offset': s.start,
                'Length': s.length,
                'Matched Text': s.matched_text,
                'Context': self.mark_context(s)
            } for s in summaries],
            columns=['Match', 'Offset', 'Length', 'Matched Text', 'Context']
        )

    def export_to_excel(self, summaries: List[MatchSummary], output_path: Path) -> Path:
        """Write the match table to an Excel file"""
        df = self.to_dataframe(summaries)
        df.to_excel(output_path, index=False, engine='openpyxl')
        return output_path
