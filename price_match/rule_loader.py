#!/usr/bin/env python3
"""
Rule Loader - Load YAML rules from price_rules directory
Supports checksum-based hot-reload and counts file reads for cache diagnostics
"""

import os
import yaml
import logging
import hashlib
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)


class RuleLoader:
    """Load and cache YAML rules used by the parsers, matcher and deduction engine"""

    def __init__(self, rules_dir: Path, enable_hot_reload: Optional[bool] = None):
        """
        Initialize rule loader with rules directory

        Args:
            rules_dir: Path to price_rules directory
            enable_hot_reload: Enable checksum-based hot-reload. When None, reads
                              PRICE_MATCH_HOT_RELOAD from the environment (default: off)
        """
        if enable_hot_reload is None:
            enable_hot_reload = os.environ.get('PRICE_MATCH_HOT_RELOAD', '0') == '1'

        self.rules_dir = Path(rules_dir)
        self._rules_cache: Dict[str, Dict[str, Any]] = {}
        self._file_checksums = {} if enable_hot_reload else None  # Only track when enabled
        self._enable_hot_reload = enable_hot_reload
        self._file_read_count = 0

    def _calculate_file_checksum(self, file_path: Path) -> str:
        """Calculate MD5 checksum for a file"""
        try:
            with open(file_path, 'rb') as f:
                return hashlib.md5(f.read()).hexdigest()
        except OSError as e:
            logger.warning(f"Error calculating checksum for {file_path}: {e}")
            return ''

    def _should_reload_file(self, filename: str, rule_file: Path) -> bool:
        """Check if a rule file should be reloaded based on checksum"""
        # Fast path: when hot-reload is disabled, only check cache
        if not self._enable_hot_reload:
            return filename not in self._rules_cache

        if not rule_file.exists():
            return False

        current_checksum = self._calculate_file_checksum(rule_file)
        cached_checksum = self._file_checksums.get(filename)

        if current_checksum != cached_checksum:
            if cached_checksum:
                logger.debug(f"Rule file {filename} modified, reloading...")
            return True

        return False

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load a YAML file directly"""
        self._file_read_count += 1
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading YAML file {file_path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Rule file {file_path} must contain a mapping, got {type(data).__name__}")
            return {}
        return data

    def load_rule_file_by_name(self, filename: str) -> Dict[str, Any]:
        """
        Load a specific rule file by filename (e.g., '10_line_detection.yaml')

        Args:
            filename: Rule file name

        Returns:
            Rule dictionary or empty dict if not found
        """
        rule_file = self.rules_dir / filename

        if not rule_file.exists():
            logger.warning(f"Rule file not found: {rule_file}")
            return {}

        if self._should_reload_file(filename, rule_file):
            self._rules_cache[filename] = self._load_yaml_file(rule_file)
            if self._enable_hot_reload:
                self._file_checksums[filename] = self._calculate_file_checksum(rule_file)
            logger.debug(f"Loaded rule file: {filename}")

        return self._rules_cache.get(filename, {})

    def get_shared_rules(self) -> Dict[str, Any]:
        """Get shared settings from shared.yaml"""
        return self.load_rule_file_by_name('shared.yaml')

    def get_flags(self) -> Dict[str, Any]:
        """Get feature flags from shared.yaml"""
        return self.get_shared_rules().get('flags', {}) or {}

    def get_default_category(self) -> str:
        """Category assigned before any category line appears"""
        return str(self.get_shared_rules().get('default_category', 'DEFAULT'))

    def get_line_detection_rules(self) -> Dict[str, Any]:
        """Get header/category detection rules from 10_line_detection.yaml"""
        rules = self.load_rule_file_by_name('10_line_detection.yaml')
        return rules.get('line_detection', {}) or {}

    def get_normalization_rules(self) -> Dict[str, Any]:
        """Get color and capacity keyword tables from 20_normalization.yaml"""
        rules = self.load_rule_file_by_name('20_normalization.yaml')
        return rules.get('normalization', {}) or {}

    def get_deduction_rules(self) -> Dict[str, Any]:
        """Get flat fee and keyword deductions from 30_deductions.yaml"""
        rules = self.load_rule_file_by_name('30_deductions.yaml')
        return rules.get('deductions', {}) or {}

    def clear_cache(self):
        """Clear the rules cache"""
        logger.debug("Clearing rules cache")
        self._rules_cache.clear()
        if self._file_checksums is not None:
            self._file_checksums.clear()

    def get_file_read_count(self) -> int:
        """Number of YAML files read from disk since the last reset"""
        return self._file_read_count

    def reset_file_read_count(self):
        self._file_read_count = 0
