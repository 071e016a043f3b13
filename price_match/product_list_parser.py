#!/usr/bin/env python3
"""
Product List Parser - Turn pasted sales/inventory list text into ProductRecord rows

Line format:
- LINE# <TAB> DESCRIPTION
- LINE# <TAB> REMARKS <TAB> DESCRIPTION [...]
"""

import logging
from typing import List, Optional, Tuple

from .line_classifier import LineClassifier, LineKind, iter_lines
from .models import ProductRecord
from .price_list_parser import DEFAULT_CATEGORY

logger = logging.getLogger(__name__)


class ProductListParser:
    """Parse product list text into ProductRecord rows"""

    def __init__(self, rule_loader=None, classifier: Optional[LineClassifier] = None):
        self.classifier = classifier or LineClassifier(rule_loader)
        self.default_category = rule_loader.get_default_category() if rule_loader else DEFAULT_CATEGORY

    def parse(self, text: str) -> List[ProductRecord]:
        """
        Parse product list text

        Args:
            text: Raw pasted product list

        Returns:
            ProductRecord rows in list order
        """
        category = self.default_category
        records: List[ProductRecord] = []

        for line in iter_lines(text):
            category, record = self.parse_line(category, line)
            if record is not None:
                records.append(record)

        logger.debug(f"Parsed {len(records)} product rows")
        return records

    def parse_line(self, category: str, line: str) -> Tuple[str, Optional[ProductRecord]]:
        """
        Apply one line to the current category

        Returns:
            Tuple of (category for following lines, record or None)
        """
        classified = self.classifier.classify_product_line(line)

        if classified.kind is LineKind.HEADER:
            return category, None

        if classified.kind is LineKind.CATEGORY:
            return classified.category, None

        fields = classified.fields
        if len(fields) < 2:
            logger.debug(f"Skipping product line without description: '{line[:50]}'")
            return category, None

        line_number = fields[0]
        if len(fields) == 2:
            remarks, description = '', fields[1]
        else:
            remarks, description = fields[1], fields[2]

        if not line_number or not description:
            logger.debug(f"Skipping product line with empty line number or description: '{line[:50]}'")
            return category, None

        return category, ProductRecord(
            line_number=line_number,
            remarks=remarks,
            description=description,
            category=category,
        )
