#!/usr/bin/env python3
"""
Price Matcher - Pair product list rows with price sheet rows

A price row matches a product when:
1. Both sit under the same category (exact, case-sensitive)
2. Normalized model names are word-for-word equal (trailing color ignored
   when the category does not need color)
3. Capacities agree when the product needs capacity (empty on either side is a wildcard)

The first price row that passes wins; later duplicates are never considered.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from .models import MatchOutcome, PriceRecord, ProductRecord
from .normalization import ModelNormalizer

logger = logging.getLogger(__name__)


class PriceMatcher:
    """Match products to price sheet rows, first match wins"""

    def __init__(self, rule_loader=None, normalizer: Optional[ModelNormalizer] = None):
        """
        Initialize price matcher

        Args:
            rule_loader: RuleLoader instance (optional)
            normalizer: ModelNormalizer (built from rule_loader when omitted)
        """
        self.normalizer = normalizer or ModelNormalizer(rule_loader)

    def find_price(self, product: ProductRecord, prices: Sequence[PriceRecord]) -> Optional[PriceRecord]:
        """
        Find the first price row for a product

        Args:
            product: Parsed product row
            prices: Parsed price rows in sheet order

        Returns:
            Matching PriceRecord or None
        """
        normalizer = self.normalizer
        product_capacity = normalizer.extract_capacity(product.description)
        requires_capacity = normalizer.needs_capacity_match(product.description)
        requires_color = normalizer.needs_color_match(product.category)
        product_model = normalizer.extract_model_name(product.description, not requires_color)

        for price in prices:
            if price.category != product.category:
                continue

            price_model = normalizer.extract_model_name(price.model, not requires_color)
            if not normalizer.models_match(product_model, price_model):
                continue

            if requires_capacity:
                price_capacity = (price.capacity or normalizer.extract_capacity(price.model)).upper()
                if price_capacity and product_capacity and price_capacity != product_capacity:
                    continue

            return price

        return None

    def match_products(self, products: Iterable[ProductRecord],
                       prices: Sequence[PriceRecord]) -> List[MatchOutcome]:
        """
        Match every product in list order

        Args:
            products: Parsed product rows
            prices: Parsed price rows

        Returns:
            One MatchOutcome per product (price_record is None when unmatched)
        """
        outcomes = []
        for product in products:
            price = self.find_price(product, prices)
            if price is None:
                logger.debug(f"No price for line {product.line_number} [{product.category}]: {product.description}")
            else:
                logger.debug(f"Line {product.line_number} matched '{price.model}' {price.capacity} @ {price.price:g}")
            outcomes.append(MatchOutcome(product=product, price_record=price))
        return outcomes
