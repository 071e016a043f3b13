#!/usr/bin/env python3
"""
Records produced by the list parsers and consumed by the matcher and formatter
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class PriceRecord:
    category: str
    model: str
    capacity: str
    quantity: int
    price: float


@dataclass(frozen=True)
class ProductRecord:
    line_number: str
    remarks: str
    description: str
    category: str


@dataclass(frozen=True)
class MatchOutcome:
    """Result of matching one product: matched when price_record is set"""
    product: ProductRecord
    price_record: Optional[PriceRecord] = None
    adjusted_price: Optional[float] = None

    @property
    def matched(self) -> bool:
        return self.price_record is not None

    @property
    def line_number(self) -> str:
        return self.product.line_number

    @property
    def category(self) -> str:
        return self.product.category

    @property
    def price(self) -> Optional[float]:
        return self.price_record.price if self.price_record else None


@dataclass(frozen=True)
class MatchStats:
    matched: int = 0
    unmatched: int = 0
    total: int = 0

    @property
    def success_rate(self) -> float:
        """Matched share of all products, in percent"""
        if not self.total:
            return 0.0
        return self.matched / self.total * 100

    def to_dict(self) -> dict:
        return {'matched': self.matched, 'unmatched': self.unmatched, 'total': self.total}


@dataclass
class MatchReport:
    matched_report: str = ''
    deduction_report: str = ''
    stats: MatchStats = field(default_factory=MatchStats)
    outcomes: List[MatchOutcome] = field(default_factory=list)
