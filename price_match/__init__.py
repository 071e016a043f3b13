"""
Price Match: Reconcile a pasted price sheet with a pasted product list.
Parses both listings, matches products to price rows by category, model,
color and capacity, and renders the paste-back price report.
"""

from .main import PriceMatchEngine, match_lists, process_files
from .rule_loader import RuleLoader
from .line_classifier import LineClassifier, LineClass, LineKind
from .normalization import (
    ModelNormalizer,
    extract_capacity,
    extract_model_name,
    needs_color_match,
    needs_capacity_match,
    models_match,
)
from .price_list_parser import PriceListParser
from .product_list_parser import ProductListParser
from .price_matcher import PriceMatcher
from .deduction_engine import DeductionEngine, apply_deductions
from .result_formatter import ResultFormatter, format_price
from .models import PriceRecord, ProductRecord, MatchOutcome, MatchStats, MatchReport

__all__ = [
    'PriceMatchEngine',
    'match_lists',
    'process_files',
    'RuleLoader',
    'LineClassifier',
    'LineClass',
    'LineKind',
    'ModelNormalizer',
    'extract_capacity',
    'extract_model_name',
    'needs_color_match',
    'needs_capacity_match',
    'models_match',
    'PriceListParser',
    'ProductListParser',
    'PriceMatcher',
    'DeductionEngine',
    'apply_deductions',
    'ResultFormatter',
    'format_price',
    'PriceRecord',
    'ProductRecord',
    'MatchOutcome',
    'MatchStats',
    'MatchReport',
]
