#!/usr/bin/env python3
"""
Model Name Normalization
Extracts capacity tokens (128GB, 1TB) from product text, strips them out along with
trailing color words, and decides which attributes a match has to agree on.

- Capacity: first whole-word "<digits>GB" / "<digits>TB", upper-cased
- Model name: capacity removed, optional trailing color removed, upper-cased, single-spaced
- Color policy: decided per category (UNLOCKED / LOCKED N/A / LOCKED ACT need color)
- Capacity policy: decided per description (iPhone, iPad, MacBook need capacity)
"""

import re
import logging
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

# Capacity tokens: "128GB", "1TB", "256gb"
# ASCII word boundaries so "128GB黑" still yields "128GB"
CAPACITY_PATTERN = re.compile(r'\b(\d+(?:GB|TB))\b', re.IGNORECASE | re.ASCII)

# Order matters: stripping walks the list once, so "SPACE BLACK" loses BLACK first, then SPACE
DEFAULT_COLORS = [
    'BLACK', 'WHITE', 'BLUE', 'ORANGE', 'SILVER', 'GOLD', 'NATURAL', 'DESERT',
    'PINK', 'ULTRAMARINE', 'GRAY', 'GREY', 'GREEN', 'RED', 'PURPLE',
    'YELLOW', 'LAVENDER', 'SAGE', 'MIDNIGHT', 'STARLIGHT', 'TITANIUM',
    'SPACE', 'ROSE', 'CORAL', 'TEAL', 'INDIGO', 'CRIMSON',
]

DEFAULT_CAPACITY_KEYWORDS = ['IPHONE', 'IPAD', 'MACBOOK']

WHITESPACE_PATTERN = re.compile(r'\s+')


def _compile_color_patterns(colors: Iterable[str]) -> List[re.Pattern]:
    return [
        re.compile(rf'\b{re.escape(str(color))}\b\s*$', re.IGNORECASE | re.ASCII)
        for color in colors
    ]


_DEFAULT_COLOR_PATTERNS = _compile_color_patterns(DEFAULT_COLORS)


def extract_capacity(text: str) -> str:
    """
    Extract the first capacity token from text.

    Examples:
    - "IPHONE 15 128GB BLACK" -> "128GB"
    - "ipad air 1tb" -> "1TB"
    - "MACBOOK AIR" -> ""

    Args:
        text: Product description or price sheet model

    Returns:
        Upper-cased capacity token or empty string
    """
    if not text:
        return ''

    match = CAPACITY_PATTERN.search(text)
    return match.group(1).upper() if match else ''


def _strip_model_name(text: str, strip_trailing_color: bool, color_patterns: List[re.Pattern]) -> str:
    if not text:
        return ''

    model = CAPACITY_PATTERN.sub('', text).strip()

    if strip_trailing_color:
        for pattern in color_patterns:
            model = pattern.sub('', model).strip()

    return WHITESPACE_PATTERN.sub(' ', model.upper()).strip()


def extract_model_name(text: str, strip_trailing_color: bool = False,
                       colors: Optional[Iterable[str]] = None) -> str:
    """
    Strip capacity tokens (and optionally trailing colors) from text.

    Args:
        text: Product description or price sheet model
        strip_trailing_color: Remove color words from the end of the name
        colors: Color words to strip (defaults to DEFAULT_COLORS)

    Returns:
        Upper-cased model name with single spaces
    """
    color_patterns = _DEFAULT_COLOR_PATTERNS if colors is None else _compile_color_patterns(colors)
    return _strip_model_name(text, strip_trailing_color, color_patterns)


def needs_color_match(category: str) -> bool:
    """
    Check whether products in a category must match on color.

    UNLOCKED needs color; LOCKED needs it only for N/A or ACT stock;
    DEFAULT does not; any other category does.
    """
    cat = (category or '').upper()
    if 'UNLOCKED' in cat:
        return True
    if 'LOCKED' in cat:
        return 'N/A' in cat or 'ACT' in cat
    if cat == 'DEFAULT':
        return False
    return True


def needs_capacity_match(description: str, keywords: Optional[Iterable[str]] = None) -> bool:
    """Check whether a product description must match on capacity"""
    upper = (description or '').upper()
    keywords = DEFAULT_CAPACITY_KEYWORDS if keywords is None else keywords
    return any(str(keyword).upper() in upper for keyword in keywords)


def models_match(product_model: str, price_model: str) -> bool:
    """
    Check if two normalized model names denote the same model.

    Case-insensitive, word-order-sensitive: words must be identical position by position.
    """
    p = (product_model or '').upper().strip()
    pr = (price_model or '').upper().strip()

    if p == pr:
        return True

    p_words = p.split()
    pr_words = pr.split()

    if len(p_words) != len(pr_words):
        return False

    return all(a == b for a, b in zip(p_words, pr_words))


class ModelNormalizer:
    """Normalization bound to the color list and capacity keywords from 20_normalization.yaml"""

    def __init__(self, rule_loader=None):
        """
        Initialize normalizer

        Args:
            rule_loader: RuleLoader instance (optional, built-in tables are used without it)
        """
        rules = rule_loader.get_normalization_rules() if rule_loader else {}
        self.colors = [str(c).upper() for c in rules.get('colors') or DEFAULT_COLORS]
        self.capacity_keywords = [str(k).upper() for k in rules.get('capacity_keywords') or DEFAULT_CAPACITY_KEYWORDS]
        self._color_patterns = _compile_color_patterns(self.colors)
        logger.debug(f"Normalizer: {len(self.colors)} colors, capacity keywords {self.capacity_keywords}")

    def extract_capacity(self, text: str) -> str:
        return extract_capacity(text)

    def extract_model_name(self, text: str, strip_trailing_color: bool = False) -> str:
        return _strip_model_name(text, strip_trailing_color, self._color_patterns)

    def needs_color_match(self, category: str) -> bool:
        return needs_color_match(category)

    def needs_capacity_match(self, description: str) -> bool:
        return needs_capacity_match(description, self.capacity_keywords)

    def models_match(self, product_model: str, price_model: str) -> bool:
        return models_match(product_model, price_model)
