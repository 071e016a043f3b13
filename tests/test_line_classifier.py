#!/usr/bin/env python3
"""
Line Classifier Tests: header rows, category banners and data lines
"""

import os
import sys
import unittest
from pathlib import Path

# Setup path
TEST_DIR = Path(__file__).parent
PROJECT_ROOT = TEST_DIR.parent
RULES_DIR = PROJECT_ROOT / 'price_match' / 'price_rules'
os.chdir(PROJECT_ROOT)
sys.path.insert(0, str(PROJECT_ROOT))

from price_match.line_classifier import LineClassifier, LineKind, iter_lines, split_fields
from price_match.rule_loader import RuleLoader


class TestSplitFields(unittest.TestCase):
    """Column splitting"""

    def test_tabs(self):
        self.assertEqual(split_fields("IPHONE 15\t128GB\t3\t3700"), ["IPHONE 15", "128GB", "3", "3700"])

    def test_empty_cells_kept(self):
        self.assertEqual(split_fields("22\t\tIPHONE 15"), ["22", "", "IPHONE 15"])

    def test_space_runs(self):
        self.assertEqual(split_fields("IPHONE 15 BLACK   128GB  3  3700"), ["IPHONE 15 BLACK", "128GB", "3", "3700"])

    def test_single_spaces_do_not_split(self):
        self.assertEqual(split_fields("UNLOCKED N/A"), ["UNLOCKED N/A"])

    def test_space_splitting_disabled(self):
        self.assertEqual(split_fields("A  B", split_on_spaces=False), ["A  B"])

    def test_iter_lines_skips_blank(self):
        self.assertEqual(list(iter_lines("  A \r\n\n   \nB\t1")), ["A", "B\t1"])


class TestPriceLineClassification(unittest.TestCase):
    """Price sheet lines"""

    def setUp(self):
        self.classifier = LineClassifier()

    def test_plain_header(self):
        result = self.classifier.classify_price_line("MODEL\tCAP\tQTY\tHKD")
        self.assertIs(result.kind, LineKind.HEADER)
        self.assertEqual(result.category, "MODEL")

    def test_header_with_excluded_first_column(self):
        result = self.classifier.classify_price_line("CAPACITY\tQTY\tHKD")
        self.assertIs(result.kind, LineKind.HEADER)
        self.assertIsNone(result.category)

    def test_header_doubles_as_category(self):
        result = self.classifier.classify_price_line("UNLOCKED N/A\tCAP\tQTY\tHKD")
        self.assertIs(result.kind, LineKind.HEADER)
        self.assertEqual(result.category, "UNLOCKED N/A")

    def test_mixed_case_header_first_column_not_adopted(self):
        result = self.classifier.classify_price_line("Model\tCapacity\tQuantity\tPrice")
        self.assertIs(result.kind, LineKind.HEADER)
        self.assertIsNone(result.category)

    def test_chinese_header_keywords(self):
        result = self.classifier.classify_price_line("容量\t數量\t人民幣")
        self.assertIs(result.kind, LineKind.HEADER)

    def test_header_needs_all_three_groups(self):
        result = self.classifier.classify_price_line("CAP\tQTY\tNOTE")
        self.assertIsNot(result.kind, LineKind.HEADER)

    def test_category_line(self):
        result = self.classifier.classify_price_line("UNLOCKED N/A")
        self.assertIs(result.kind, LineKind.CATEGORY)
        self.assertEqual(result.category, "UNLOCKED N/A")

    def test_data_line(self):
        result = self.classifier.classify_price_line("IPHONE 15 BLACK\t128GB\t3\t3700")
        self.assertIs(result.kind, LineKind.DATA)
        self.assertEqual(result.fields, ("IPHONE 15 BLACK", "128GB", "3", "3700"))

    def test_mixed_case_single_column_is_data(self):
        result = self.classifier.classify_price_line("Apple Watch")
        self.assertIs(result.kind, LineKind.DATA)

    def test_allow_list_built_in(self):
        for banner in ["Locked ACT", "Unlocked N/A", "Open Box", "Used Grade B"]:
            result = self.classifier.classify_price_line(banner)
            self.assertIs(result.kind, LineKind.CATEGORY, banner)
            self.assertEqual(result.category, banner)

    def test_space_split_banner_stays_category(self):
        result = self.classifier.classify_price_line("UNLOCKED  N/A")
        self.assertIs(result.kind, LineKind.CATEGORY)
        self.assertEqual(result.category, "UNLOCKED N/A")

    def test_space_split_mixed_case_banner(self):
        result = self.classifier.classify_price_line("Locked   ACT")
        self.assertIs(result.kind, LineKind.CATEGORY)
        self.assertEqual(result.category, "Locked ACT")

    def test_space_split_row_with_enough_columns_is_data(self):
        result = self.classifier.classify_price_line("IPHONE 15  128GB  3")
        self.assertIs(result.kind, LineKind.DATA)

    def test_tabbed_short_row_is_data(self):
        result = self.classifier.classify_price_line("UNLOCKED\tN/A")
        self.assertIs(result.kind, LineKind.DATA)

    def test_allow_list_from_rules(self):
        classifier = LineClassifier(RuleLoader(RULES_DIR))
        result = classifier.classify_price_line("Locked ACT")
        self.assertIs(result.kind, LineKind.CATEGORY)
        self.assertEqual(result.category, "Locked ACT")


class TestProductLineClassification(unittest.TestCase):
    """Product list lines"""

    def setUp(self):
        self.classifier = LineClassifier()

    def test_product_header(self):
        result = self.classifier.classify_product_line("LIST\tCAP\tQTY\tHKD")
        self.assertIs(result.kind, LineKind.HEADER)
        self.assertIsNone(result.category)

    def test_product_header_is_narrower(self):
        result = self.classifier.classify_product_line("CAPACITY\tQUANTITY\tPRICE")
        self.assertIs(result.kind, LineKind.DATA)

    def test_product_data_line(self):
        result = self.classifier.classify_product_line("22\t小花\tIPHONE 15 128GB BLACK")
        self.assertIs(result.kind, LineKind.DATA)
        self.assertEqual(len(result.fields), 3)

    def test_product_category_line(self):
        result = self.classifier.classify_product_line("LOCKED")
        self.assertIs(result.kind, LineKind.CATEGORY)

    def test_product_space_split_banner(self):
        result = self.classifier.classify_product_line("UNLOCKED  N/A")
        self.assertIs(result.kind, LineKind.CATEGORY)
        self.assertEqual(result.category, "UNLOCKED N/A")

    def test_product_space_split_row_with_line_number(self):
        result = self.classifier.classify_product_line("22  IPHONE 15 128GB")
        self.assertIs(result.kind, LineKind.DATA)
        self.assertEqual(result.fields, ("22", "IPHONE 15 128GB"))

    def test_product_space_split_row_with_remarks(self):
        result = self.classifier.classify_product_line("A  B  IPHONE 15")
        self.assertIs(result.kind, LineKind.DATA)


if __name__ == '__main__':
    unittest.main()
