#!/usr/bin/env python3
"""
Deduction Engine Tests: flat fee and accumulating remark keywords
"""

import os
import sys
import tempfile
import unittest
from pathlib import Path

# Setup path
TEST_DIR = Path(__file__).parent
PROJECT_ROOT = TEST_DIR.parent
RULES_DIR = PROJECT_ROOT / 'price_match' / 'price_rules'
os.chdir(PROJECT_ROOT)
sys.path.insert(0, str(PROJECT_ROOT))

from price_match.deduction_engine import DeductionEngine, apply_deductions
from price_match.rule_loader import RuleLoader


class TestApplyDeductions(unittest.TestCase):
    """Built-in table"""

    def test_keywords_accumulate(self):
        self.assertEqual(apply_deductions(3700, "小花 舊機"), 3235)

    def test_flat_fee_only(self):
        self.assertEqual(apply_deductions(3700, ""), 3685)
        self.assertEqual(apply_deductions(3700, None), 3685)
        self.assertEqual(apply_deductions(3700, "good condition"), 3685)

    def test_each_keyword(self):
        expected = {
            '小花': 100, '花機': 150, '大花': 350, '舊機': 350,
            '低保': 100, '過保': 200, '黑機': 200, '配置鎖': 300,
        }
        for keyword, amount in expected.items():
            self.assertEqual(apply_deductions(5000, keyword), 5000 - 15 - amount, keyword)

    def test_overlapping_keywords(self):
        # "小花機" contains both 小花 and 花機
        self.assertEqual(apply_deductions(1000, "小花機"), 1000 - 15 - 100 - 150)

    def test_no_floor(self):
        self.assertEqual(apply_deductions(100, "大花 舊機"), -615)


class TestDeductionEngine(unittest.TestCase):
    """Rule-driven engine"""

    def test_rules_match_defaults(self):
        engine = DeductionEngine(RuleLoader(RULES_DIR))
        self.assertEqual(engine.flat_fee, 15)
        self.assertEqual(engine.keyword_deductions['配置鎖'], 300)
        self.assertEqual(engine.apply_deductions(3700, "小花 舊機"), 3235)

    def test_find_deductions(self):
        engine = DeductionEngine()
        found = engine.find_deductions("過保 黑機")
        self.assertEqual([d['keyword'] for d in found], ['過保', '黑機'])
        self.assertEqual(sum(d['amount'] for d in found), 400)

    def test_custom_rules(self):
        with tempfile.TemporaryDirectory() as tmp:
            rules_dir = Path(tmp)
            (rules_dir / '30_deductions.yaml').write_text(
                "deductions:\n  flat_fee: 0\n  keywords:\n    SCRATCH: 50\n    DENT: 80\n",
                encoding='utf-8'
            )
            engine = DeductionEngine(RuleLoader(rules_dir))
            self.assertEqual(engine.apply_deductions(1000, "SCRATCH DENT"), 870)
            self.assertEqual(engine.apply_deductions(1000, "小花"), 1000)

    def test_invalid_amount_treated_as_zero(self):
        with tempfile.TemporaryDirectory() as tmp:
            rules_dir = Path(tmp)
            (rules_dir / '30_deductions.yaml').write_text(
                "deductions:\n  flat_fee: abc\n  keywords:\n    SCRATCH: 50\n",
                encoding='utf-8'
            )
            engine = DeductionEngine(RuleLoader(rules_dir))
            self.assertEqual(engine.apply_deductions(1000, "SCRATCH"), 950)


if __name__ == '__main__':
    unittest.main()
