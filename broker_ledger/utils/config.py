"""
Configuration utilities
"""

import yaml
from pathlib import Path
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)

LEDGER_DEFAULTS: Dict[str, Any] = {
    'reporting_currency': 'USD',
    'encoding': 'utf-8-sig',
    'log_level': 'INFO',
}


class ConfigManager:
    """Manages configuration loading and validation"""

    def __init__(self, config_dir: str = "config"):
        self.config_dir = Path(config_dir)

    def load_config(self, config_type: str) -> Dict[str, Any]:
        """Load configuration of specified type"""
        # Try local config first, then fall back to template
        local_file = self.config_dir / f"{config_type}_local.yml"
        template_file = self.config_dir / f"{config_type}.yml"

        config_file = local_file if local_file.exists() else template_file

        if not config_file.exists():
            logger.error(f"Config file not found: {config_file}")
            return {}

        try:
            with open(config_file, 'r') as f:
                config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load config {config_type}: {e}")
            return {}

        if not isinstance(config, dict):
            logger.error(f"Config {config_file} is not a mapping, ignoring it")
            return {}

        logger.info(f"Loaded config from {config_file}")
        return config

    def get_ledger_config(self) -> Dict[str, Any]:
        """Get statement parsing configuration merged over the defaults"""
        config = dict(LEDGER_DEFAULTS)
        config.update(self.load_config("ledger").get('ledger') or {})

        currency = str(config['reporting_currency']).strip().upper()
        if len(currency) != 3 or not currency.isalpha():
            raise ValueError(f"Invalid reporting currency: {config['reporting_currency']!r}")
        config['reporting_currency'] = currency

        return config
