#!/usr/bin/env python3
"""
Price Match Main Entry Point

Pipeline:
1. Parse price sheet text -> PriceRecord rows (price_list_parser.py)
2. Parse product list text -> ProductRecord rows (product_list_parser.py)
3. Match each product to the first eligible price row (price_matcher.py)
4. Locked mode: subtract flat fee and remark keyword deductions (deduction_engine.py)
5. Render matched report, deduction report and counters (result_formatter.py)

Rules come from price_rules/*.yaml via RuleLoader. Without a rule loader the
built-in tables are used, so the engine also runs with no files on disk.
"""

import logging
from pathlib import Path
from typing import Optional

from . import config
from .deduction_engine import DeductionEngine
from .line_classifier import LineClassifier
from .logger import setup_logger
from .models import MatchOutcome, MatchReport
from .normalization import ModelNormalizer
from .price_list_parser import PriceListParser
from .price_matcher import PriceMatcher
from .product_list_parser import ProductListParser
from .result_formatter import ResultFormatter
from .rule_loader import RuleLoader

logger = logging.getLogger(__name__)


class PriceMatchEngine:
    """Parse both lists, match, adjust and format in one call"""

    def __init__(self, rule_loader: Optional[RuleLoader] = None):
        """
        Initialize engine components

        Args:
            rule_loader: RuleLoader instance (optional, built-in tables are used without it)
        """
        classifier = LineClassifier(rule_loader)
        self.price_parser = PriceListParser(rule_loader, classifier=classifier)
        self.product_parser = ProductListParser(rule_loader, classifier=classifier)
        self.matcher = PriceMatcher(normalizer=ModelNormalizer(rule_loader))
        self.deduction_engine = DeductionEngine(rule_loader)
        self.formatter = ResultFormatter()

    def run(self, price_list_text: str, product_list_text: str, deduction_mode: bool = False) -> MatchReport:
        """
        Match a product list against a price sheet

        Args:
            price_list_text: Pasted price sheet
            product_list_text: Pasted product list
            deduction_mode: Also compute locked mode (deduction-adjusted) prices

        Returns:
            MatchReport with matched_report, deduction_report (empty unless
            deduction_mode), stats and per-product outcomes
        """
        prices = self.price_parser.parse(price_list_text)
        products = self.product_parser.parse(product_list_text)

        outcomes = self.matcher.match_products(products, prices)

        if deduction_mode:
            outcomes = [
                MatchOutcome(
                    product=outcome.product,
                    price_record=outcome.price_record,
                    adjusted_price=self.deduction_engine.apply_deductions(outcome.price, outcome.product.remarks),
                ) if outcome.matched else outcome
                for outcome in outcomes
            ]

        stats = self.formatter.compute_stats(outcomes)
        report = MatchReport(
            matched_report=self.formatter.format_report(outcomes),
            deduction_report=self.formatter.format_report(outcomes, use_adjusted=True) if deduction_mode else '',
            stats=stats,
            outcomes=outcomes,
        )

        logger.info(
            f"Matched {stats.matched}/{stats.total} products "
            f"({stats.unmatched} unmatched, {len(prices)} price rows)"
        )
        return report


def match_lists(price_list_text: str, product_list_text: str, deduction_mode: bool = False,
                rule_loader: Optional[RuleLoader] = None) -> MatchReport:
    """Match a product list against a price sheet (see PriceMatchEngine.run)"""
    return PriceMatchEngine(rule_loader).run(price_list_text, product_list_text, deduction_mode)


def _read_text(path: Path) -> str:
    if not path.exists():
        logger.error(f"Input file not found: {path}")
        raise FileNotFoundError(f"Input file not found: {path}")
    with open(path, 'r', encoding=config.INPUT_ENCODING) as f:
        return f.read()


def _write_text(path: Path, text: str) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)
    logger.info(f"Saved report to: {path}")


def process_files(
    price_file: Path,
    product_file: Path,
    output_dir: Path,
    rules_dir: Optional[Path] = None,
    deduction_mode: bool = False,
    export_excel: bool = False
) -> MatchReport:
    """
    Match pasted text files and write the report files

    Args:
        price_file: Text file with the price sheet
        product_file: Text file with the product list
        output_dir: Directory for price_match_result.txt and friends
        rules_dir: Directory containing rule YAML files (default: rules shipped with the package)
        deduction_mode: Also write the locked mode report
        export_excel: Also write the Excel review workbook

    Returns:
        MatchReport
    """
    output_dir = Path(output_dir)
    rules_dir = Path(rules_dir or config.get_rules_dir())

    rule_loader = RuleLoader(rules_dir)
    engine = PriceMatchEngine(rule_loader)
    report = engine.run(_read_text(Path(price_file)), _read_text(Path(product_file)), deduction_mode)

    output_dir.mkdir(parents=True, exist_ok=True)
    _write_text(output_dir / config.RESULT_FILENAME, report.matched_report)
    if deduction_mode:
        _write_text(output_dir / config.DEDUCTION_RESULT_FILENAME, report.deduction_report)

    if export_excel:
        from .review_export import export_to_excel
        export_to_excel(report.outcomes, output_dir, config.REVIEW_WORKBOOK_FILENAME)

    return report


def main() -> None:
    """Main entry point for price matching"""
    import argparse

    config.load_env_file()
    output_dir = config.get_output_dir()

    parser = argparse.ArgumentParser(
        description='Match a pasted product list against a pasted price sheet',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        'price_file',
        type=str,
        help='Text file with the price sheet (tab or space delimited)'
    )
    parser.add_argument(
        'product_file',
        type=str,
        help='Text file with the product list (tab or space delimited)'
    )
    parser.add_argument(
        'output_dir',
        type=str,
        nargs='?',
        default=output_dir,
        help=f'Output directory (default: {output_dir})'
    )
    parser.add_argument(
        '--rules-dir',
        type=str,
        default=None,
        help='Directory containing rule YAML files (default: PRICE_MATCH_RULES_DIR or the bundled rules)'
    )
    parser.add_argument(
        '--deduction',
        action='store_true',
        help='Locked mode: also write prices after fee and remark deductions'
    )
    parser.add_argument(
        '--excel',
        action='store_true',
        help='Also export an Excel review workbook'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default=config.get_log_level(),
        help='Logging level (DEBUG, INFO, WARNING, ERROR)'
    )

    args = parser.parse_args()

    setup_logger(
        log_level=args.log_level,
        log_dir=Path(config.LOGGING['log_dir']),
        log_format=config.LOGGING['format'],
    )

    logger.info(f"Price file: {args.price_file}")
    logger.info(f"Product file: {args.product_file}")
    logger.info(f"Output directory: {args.output_dir}")
    logger.info(f"Deduction mode: {args.deduction}")

    report = process_files(
        Path(args.price_file),
        Path(args.product_file),
        Path(args.output_dir),
        rules_dir=Path(args.rules_dir) if args.rules_dir else None,
        deduction_mode=args.deduction,
        export_excel=args.excel,
    )

    stats = report.stats
    print(f"Total: {stats.total}  Matched: {stats.matched}  Unmatched: {stats.unmatched}")
    if stats.matched:
        print(f"Success rate: {stats.success_rate:.1f}%")


if __name__ == "__main__":
    main()
