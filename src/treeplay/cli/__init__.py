"""treeplay command line and text formatting.

Usage:
    treeplay play prisoners-dilemma "Tit-for-Tat" Pavlov -n 10

Or directly:
    python -m treeplay.cli.app list
"""

from treeplay.cli.app import main
from treeplay.cli.printing import (
    format_location,
    format_score,
    format_summaries,
    format_summary_of_game,
    format_transcript,
    format_transcript_of_game,
)

__all__ = [
    "main",
    "format_location",
    "format_score",
    "format_summaries",
    "format_summary_of_game",
    "format_transcript",
    "format_transcript_of_game",
]
