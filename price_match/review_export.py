#!/usr/bin/env python3
"""
Review Export
Writes every product row with its matched price (or a blank) to Excel so operators
can check the unmatched lines against the price sheet.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Dict, Any

import pandas as pd
from openpyxl.utils import get_column_letter

from .models import MatchOutcome

logger = logging.getLogger(__name__)

SHEET_NAME = 'Price Match'

REVIEW_COLUMNS = [
    'line_number', 'category', 'description', 'remarks', 'matched',
    'price_model', 'price_capacity', 'price_quantity', 'price', 'adjusted_price',
]


def build_review_rows(outcomes: Iterable[MatchOutcome]) -> List[Dict[str, Any]]:
    """Flatten match outcomes into spreadsheet rows"""
    rows = []
    for outcome in outcomes:
        product = outcome.product
        price = outcome.price_record
        rows.append({
            'line_number': product.line_number,
            'category': product.category,
            'description': product.description,
            'remarks': product.remarks,
            'matched': outcome.matched,
            'price_model': price.model if price else '',
            'price_capacity': price.capacity if price else '',
            'price_quantity': price.quantity if price else None,
            'price': price.price if price else None,
            'adjusted_price': outcome.adjusted_price,
        })
    return rows


def export_to_excel(outcomes: Iterable[MatchOutcome], output_dir: Path,
                    filename: str = 'price_match_review.xlsx') -> Path:
    """
    Export match outcomes to Excel for review.

    Args:
        outcomes: Match outcomes in product order
        output_dir: Output directory for Excel file
        filename: Output Excel filename

    Returns:
        Path to generated Excel file
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / filename

    df = pd.DataFrame(build_review_rows(outcomes), columns=REVIEW_COLUMNS)

    with pd.ExcelWriter(output_file, engine='openpyxl') as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
        worksheet = writer.sheets[SHEET_NAME]

        # Auto-adjust column widths, capped at 50 characters
        for idx, col in enumerate(df.columns, start=1):
            values = df[col].map(lambda v: len(str(v)))
            max_length = max(values.max() if len(values) else 0, len(str(col)))
            worksheet.column_dimensions[get_column_letter(idx)].width = min(max_length + 2, 50)

    logger.info(f"Exported {len(df)} rows to {output_file}")
    return output_file
