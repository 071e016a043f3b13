#!/usr/bin/env python3
"""
Configuration for Price List Matcher
Edit these values to change where rules are read from and where results are written.

Environment overrides (shell or a .env file loaded by the CLI):
- PRICE_MATCH_RULES_DIR: directory containing the rule YAML files
- PRICE_MATCH_OUTPUT_DIR: default output directory
- PRICE_MATCH_LOG_LEVEL: default log level
- PRICE_MATCH_HOT_RELOAD: 1 to re-read rule files when they change
"""

import os
from pathlib import Path
from typing import Optional

PACKAGE_DIR = Path(__file__).parent

# Rule files (YAML), shipped with the package
# - shared.yaml: delimiter flags, default category
# - 10_line_detection.yaml: header keywords, category allow-list
# - 20_normalization.yaml: colors, capacity-required keywords
# - 30_deductions.yaml: locked mode fee and keyword deductions
DEFAULT_RULES_DIR = PACKAGE_DIR / 'price_rules'

# Output
DEFAULT_OUTPUT_DIR = 'output'
RESULT_FILENAME = 'price_match_result.txt'                  # Matched price report
DEDUCTION_RESULT_FILENAME = 'price_match_deduction_result.txt'  # Locked mode report
REVIEW_WORKBOOK_FILENAME = 'price_match_review.xlsx'      # Optional Excel review export

# Input files are pasted spreadsheet text
INPUT_ENCODING = 'utf-8'

# Logging Settings
LOGGING = {
    'level': 'INFO',                   # DEBUG, INFO, WARNING, ERROR
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    'log_dir': 'logs',
}


def load_env_file(env_file: Optional[Path] = None) -> int:
    """
    Load KEY=VALUE lines from a .env file into os.environ (existing variables win)

    Args:
        env_file: Path to the file (defaults to .env in the working directory)

    Returns:
        Number of variables set
    """
    env_file = Path(env_file or Path.cwd() / '.env')
    if not env_file.exists():
        return 0

    loaded = 0
    with open(env_file, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith('#') and '=' in line:
                key, value = line.split('=', 1)
                key = key.strip()
                if key not in os.environ:
                    os.environ[key] = value.strip()
                    loaded += 1
    return loaded


def get_rules_dir() -> Path:
    return Path(os.environ.get('PRICE_MATCH_RULES_DIR') or DEFAULT_RULES_DIR)


def get_output_dir() -> str:
    return os.environ.get('PRICE_MATCH_OUTPUT_DIR') or DEFAULT_OUTPUT_DIR


def get_log_level() -> str:
    return os.environ.get('PRICE_MATCH_LOG_LEVEL') or LOGGING['level']
