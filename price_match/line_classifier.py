#!/usr/bin/env python3
"""
Line Classifier - Decide whether a pasted line is a header, a category banner or data

Rules come from 10_line_detection.yaml (header keywords, category allow-list) and
shared.yaml (delimiter flags). Built-in defaults apply when the rule files are missing.
"""

import re
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_PRICE_HEADER_GROUPS = [
    ['CAP', 'CAPACITY', '容量'],
    ['QTY', 'QUANTITY', '數量'],
    ['HKD', 'USD', 'CNY', 'RMB', 'PRICE', '人民幣'],
]
DEFAULT_HEADER_CATEGORY_EXCLUSIONS = ['CAP', 'QTY', 'HKD', 'USD', 'CNY', 'RMB']
DEFAULT_PRODUCT_HEADER_KEYWORDS = ['CAP', 'QTY', 'HKD']
DEFAULT_CATEGORY_ALLOW_LIST = [
    'Unlocked N/A', 'Unlocked ACT', 'Locked N/A', 'Locked ACT',
    'Locked', 'Open Box', 'Used Grade A', 'Used Grade B',
]

# A price row needs model, capacity and quantity
MIN_PRICE_DATA_FIELDS = 3
DIGIT_PATTERN = re.compile(r'\d')

# Columns copied without tabs are separated by at least two spaces
SPACE_DELIMITER_PATTERN = re.compile(r'\s{2,}')


class LineKind(Enum):
    HEADER = 'header'
    CATEGORY = 'category'
    DATA = 'data'


@dataclass(frozen=True)
class LineClass:
    """
    Classified line.

    category: new category for CATEGORY lines, or the category adopted from a
              HEADER line's first column (None when the header carries none)
    fields: trimmed columns for DATA lines
    """
    kind: LineKind
    category: Optional[str] = None
    fields: Tuple[str, ...] = ()


def iter_lines(text: str) -> Iterator[str]:
    """Yield trimmed, non-empty lines"""
    for line in (text or '').splitlines():
        line = line.strip()
        if line:
            yield line


def split_fields(line: str, split_on_spaces: bool = True) -> List[str]:
    """
    Split a line into trimmed columns.

    Tabs win when present; otherwise runs of two or more spaces separate columns.
    Single spaces never split, so "IPHONE 15 BLACK" stays one column.
    """
    if '\t' in line:
        return [part.strip() for part in line.split('\t')]
    if split_on_spaces:
        return [part.strip() for part in SPACE_DELIMITER_PATTERN.split(line)]
    return [line]


class LineClassifier:
    """Classify price sheet and product list lines"""

    def __init__(self, rule_loader=None):
        """
        Initialize line classifier

        Args:
            rule_loader: RuleLoader instance (optional)
        """
        detection = rule_loader.get_line_detection_rules() if rule_loader else {}
        flags = rule_loader.get_flags() if rule_loader else {}

        price_header = detection.get('price_header', {}) or {}
        product_header = detection.get('product_header', {}) or {}

        self.price_header_groups = [
            [str(k).upper() for k in group]
            for group in price_header.get('keyword_groups') or DEFAULT_PRICE_HEADER_GROUPS
        ]
        self.header_category_exclusions = [
            str(k).upper() for k in price_header.get('category_exclusions') or DEFAULT_HEADER_CATEGORY_EXCLUSIONS
        ]
        self.product_header_keywords = [
            str(k).upper() for k in product_header.get('keywords') or DEFAULT_PRODUCT_HEADER_KEYWORDS
        ]
        self.category_allow_list = set(
            ' '.join(str(c).split()) for c in detection.get('category_allow_list') or DEFAULT_CATEGORY_ALLOW_LIST
        )
        self.split_on_spaces = bool(flags.get('split_on_spaces', True))

    def split(self, line: str) -> List[str]:
        return split_fields(line, self.split_on_spaces)

    def is_price_header(self, line: str) -> bool:
        upper = line.upper()
        return all(any(keyword in upper for keyword in group) for group in self.price_header_groups)

    def is_product_header(self, line: str) -> bool:
        upper = line.upper()
        return all(keyword in upper for keyword in self.product_header_keywords)

    def _header_category(self, line: str) -> Optional[str]:
        """First column of a header row, when it reads like a category banner"""
        fields = self.split(line)
        if len(fields) < 2:
            return None

        first_col = fields[0]
        if not first_col or first_col != first_col.upper():
            return None
        if any(token in first_col for token in self.header_category_exclusions):
            return None
        return first_col

    def _classify_body(self, line: str, is_data_row: Callable[[List[str]], bool]) -> LineClass:
        """
        Category banner or data line.

        A tab-less line split on space runs ("UNLOCKED  N/A") is still a banner
        when its columns cannot form a data row. Banner whitespace is collapsed.
        """
        fields = self.split(line)
        if len(fields) == 1 or ('\t' not in line and not is_data_row(fields)):
            banner = ' '.join(line.split())
            if banner == banner.upper() or banner in self.category_allow_list:
                return LineClass(LineKind.CATEGORY, category=banner)
        return LineClass(LineKind.DATA, fields=tuple(fields))

    @staticmethod
    def _is_price_row(fields: List[str]) -> bool:
        return len(fields) >= MIN_PRICE_DATA_FIELDS

    @staticmethod
    def _is_product_row(fields: List[str]) -> bool:
        # Two columns are a product row only when the first looks like a line number
        return len(fields) > 2 or bool(DIGIT_PATTERN.search(fields[0]))

    def classify_price_line(self, line: str) -> LineClass:
        """Classify one trimmed, non-empty price sheet line"""
        if self.is_price_header(line):
            return LineClass(LineKind.HEADER, category=self._header_category(line))
        return self._classify_body(line, self._is_price_row)

    def classify_product_line(self, line: str) -> LineClass:
        """Classify one trimmed, non-empty product list line"""
        if self.is_product_header(line):
            return LineClass(LineKind.HEADER)
        return self._classify_body(line, self._is_product_row)
