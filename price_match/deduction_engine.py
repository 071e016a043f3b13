#!/usr/bin/env python3
"""
Deduction Engine - Adjust matched prices for locked mode
Subtracts a flat handling fee and every condition keyword found in the remarks column
"""

import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_FLAT_FEE = 15

# Keywords are not exclusive: "小花 舊機" takes both deductions
DEFAULT_KEYWORD_DEDUCTIONS = {
    '小花': 100,
    '花機': 150,
    '大花': 350,
    '舊機': 350,
    '低保': 100,
    '過保': 200,
    '黑機': 200,
    '配置鎖': 300,
}


class DeductionEngine:
    """Apply flat fee and keyword deductions to matched prices"""

    def __init__(self, rule_loader=None):
        """
        Initialize deduction engine

        Args:
            rule_loader: RuleLoader instance (optional, built-in table is used without it)
        """
        rules = rule_loader.get_deduction_rules() if rule_loader else {}
        self.flat_fee = self._to_amount(rules.get('flat_fee', DEFAULT_FLAT_FEE), 'flat_fee')
        keywords = rules.get('keywords') or DEFAULT_KEYWORD_DEDUCTIONS
        self.keyword_deductions: Dict[str, float] = {
            str(keyword): self._to_amount(amount, keyword) for keyword, amount in keywords.items()
        }

    @staticmethod
    def _to_amount(value, name: str) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.warning(f"Invalid deduction amount for '{name}': {value!r}, using 0")
            return 0.0

    def find_deductions(self, remarks: str) -> List[Dict]:
        """
        Find keyword deductions in a remarks string

        Args:
            remarks: Remarks column of a product line

        Returns:
            List of deduction dictionaries (keyword, amount) in table order
        """
        remarks = remarks or ''
        return [
            {'keyword': keyword, 'amount': amount}
            for keyword, amount in self.keyword_deductions.items()
            if keyword in remarks
        ]

    def apply_deductions(self, base_price: float, remarks: Optional[str] = None) -> float:
        """
        Compute the locked-mode price

        Args:
            base_price: Matched price sheet price
            remarks: Remarks column of the product line

        Returns:
            Adjusted price (may be negative)
        """
        deductions = self.find_deductions(remarks)
        adjusted = base_price - self.flat_fee - sum(d['amount'] for d in deductions)

        if deductions:
            applied = ', '.join(f"{d['keyword']} -{d['amount']:g}" for d in deductions)
            logger.debug(f"Deductions for '{remarks}': fee -{self.flat_fee:g}, {applied} -> {adjusted:g}")

        return adjusted


def apply_deductions(base_price: float, remarks: Optional[str] = None) -> float:
    """Apply the built-in fee and keyword table"""
    return DeductionEngine().apply_deductions(base_price, remarks)
