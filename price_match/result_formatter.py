#!/usr/bin/env python3
"""
Result Formatter - Render match outcomes as paste-back report text

Each matched product becomes "<line#>\t<price>". Two blank lines separate
runs of different categories so the report lines up with the source sheet.
"""

import logging
from typing import Iterable, List, Sequence

from .models import MatchOutcome, MatchStats

logger = logging.getLogger(__name__)

CATEGORY_SEPARATOR = ['', '']


def format_price(value: float) -> str:
    """Render a price the way the spreadsheet shows it: 3700, 3700.5, -15"""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


class ResultFormatter:
    """Build report text and counters from match outcomes"""

    def format_report(self, outcomes: Iterable[MatchOutcome], use_adjusted: bool = False) -> str:
        """
        Render matched outcomes

        Args:
            outcomes: Match outcomes in product order
            use_adjusted: Print the deduction-adjusted price instead of the sheet price

        Returns:
            Newline-joined report (empty string when nothing matched)
        """
        lines: List[str] = []
        last_category = None

        for outcome in outcomes:
            if not outcome.matched:
                continue

            if last_category is not None and outcome.category != last_category:
                lines.extend(CATEGORY_SEPARATOR)

            price = outcome.adjusted_price if use_adjusted and outcome.adjusted_price is not None else outcome.price
            lines.append(f"{outcome.line_number}\t{format_price(price)}")
            last_category = outcome.category

        return '\n'.join(lines)

    def compute_stats(self, outcomes: Sequence[MatchOutcome]) -> MatchStats:
        matched = sum(1 for outcome in outcomes if outcome.matched)
        return MatchStats(matched=matched, unmatched=len(outcomes) - matched, total=len(outcomes))
