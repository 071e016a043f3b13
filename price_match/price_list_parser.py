#!/usr/bin/env python3
"""
Price List Parser - Turn pasted price sheet text into PriceRecord rows

Line format: MODEL <TAB> CAPACITY|PART NUMBER <TAB> QTY <TAB> PRICE [...]
Category banners and header rows set the category for the rows below them.
"""

import math
import re
import logging
from typing import List, Optional, Tuple

from .line_classifier import LineClassifier, LineKind, iter_lines
from .models import PriceRecord

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = 'DEFAULT'

# Part numbers like "MRYN3LL", "MXP93LL" sit where the capacity column usually is
PART_NUMBER_PATTERN = re.compile(r'^[A-Z0-9]{6,10}$', re.IGNORECASE | re.ASCII)
TRAILING_CAPACITY_PATTERN = re.compile(r'\d+(?:GB|TB)$', re.IGNORECASE)

CURRENCY_PREFIX_PATTERN = re.compile(r'^(?:HK|US)?\$\s*', re.IGNORECASE)
LEADING_INT_PATTERN = re.compile(r'^\d+')
LEADING_FLOAT_PATTERN = re.compile(r'^(?:\d+(?:\.\d*)?|\.\d+)')


def _clean_number(text: str) -> str:
    cleaned = CURRENCY_PREFIX_PATTERN.sub('', (text or '').strip())
    return cleaned.replace(',', '')


def parse_quantity(text: str) -> int:
    """Leading integer of a cell, 0 when there is none or it cannot be converted"""
    match = LEADING_INT_PATTERN.match(_clean_number(text))
    if not match:
        return 0
    try:
        return int(match.group(0))
    except ValueError:
        logger.warning(f"Quantity too long to convert ({len(match.group(0))} digits), using 0")
        return 0


def parse_price(text: str) -> float:
    """Leading decimal number of a cell, 0 when there is none or it is not finite"""
    match = LEADING_FLOAT_PATTERN.match(_clean_number(text))
    if not match:
        return 0.0
    value = float(match.group(0))
    if not math.isfinite(value):
        logger.warning(f"Price out of range ({len(match.group(0))} characters), using 0")
        return 0.0
    return value


def is_part_number(text: str) -> bool:
    """6-10 alphanumerics not ending in a capacity token"""
    return bool(PART_NUMBER_PATTERN.match(text)) and not TRAILING_CAPACITY_PATTERN.search(text)


class PriceListParser:
    """Parse price sheet text into PriceRecord rows"""

    def __init__(self, rule_loader=None, classifier: Optional[LineClassifier] = None):
        """
        Initialize price list parser

        Args:
            rule_loader: RuleLoader instance (optional)
            classifier: Shared LineClassifier (built from rule_loader when omitted)
        """
        self.classifier = classifier or LineClassifier(rule_loader)
        self.default_category = rule_loader.get_default_category() if rule_loader else DEFAULT_CATEGORY

    def parse(self, text: str) -> List[PriceRecord]:
        """
        Parse price sheet text

        Args:
            text: Raw pasted price sheet

        Returns:
            PriceRecord rows in sheet order
        """
        category = self.default_category
        records: List[PriceRecord] = []

        for line in iter_lines(text):
            category, record = self.parse_line(category, line)
            if record is not None:
                records.append(record)

        logger.debug(f"Parsed {len(records)} price rows")
        return records

    def parse_line(self, category: str, line: str) -> Tuple[str, Optional[PriceRecord]]:
        """
        Apply one line to the current category

        Returns:
            Tuple of (category for following lines, record or None)
        """
        classified = self.classifier.classify_price_line(line)

        if classified.kind is LineKind.HEADER:
            return classified.category or category, None

        if classified.kind is LineKind.CATEGORY:
            return classified.category, None

        fields = classified.fields
        if len(fields) < 3:
            logger.debug(f"Skipping price line with {len(fields)} column(s): '{line[:50]}'")
            return category, None

        model = fields[0]
        second_col = fields[1]
        capacity = '' if is_part_number(second_col) else second_col

        record = PriceRecord(
            category=category,
            model=model,
            capacity=capacity,
            quantity=parse_quantity(fields[2]),
            price=parse_price(fields[3]) if len(fields) > 3 else 0.0,
        )
        return category, record
