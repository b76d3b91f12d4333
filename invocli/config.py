"""Configuration for the invocli command line."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from invocli.core.domain import TaxMode

ENV_CURRENCY = "INVOCLI_CURRENCY"
ENV_TAX_TYPE = "INVOCLI_TAX_TYPE"
ENV_LOG_LEVEL = "INVOCLI_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class InvocliConfig:
    """Defaults applied when flags or data files leave a value unset."""

    default_currency: str = "USD"
    default_tax_mode: TaxMode = TaxMode.EXCLUSIVE
    log_level: str = "INFO"

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)


def load_config(env: Optional[Mapping[str, str]] = None) -> InvocliConfig:
    """
    Build the configuration from environment variables.

    Args:
        env: Mapping to read instead of os.environ

    Returns:
        InvocliConfig (defaults for unset variables)

    Raises:
        ValueError: If a variable holds an unusable value
    """
    env = os.environ if env is None else env
    defaults = InvocliConfig()

    currency = env.get(ENV_CURRENCY, "").strip() or defaults.default_currency

    tax_type = env.get(ENV_TAX_TYPE, "").strip().lower()
    try:
        tax_mode = TaxMode(tax_type) if tax_type else defaults.default_tax_mode
    except ValueError:
        raise ValueError(
            f"{ENV_TAX_TYPE} must be 'exclusive' or 'inclusive', got {tax_type!r}"
        ) from None

    log_level = env.get(ENV_LOG_LEVEL, "").strip().upper() or defaults.log_level
    if log_level not in _LOG_LEVELS:
        raise ValueError(
            f"{ENV_LOG_LEVEL} must be one of {', '.join(_LOG_LEVELS)}, got {log_level!r}"
        )

    return InvocliConfig(
        default_currency=currency,
        default_tax_mode=tax_mode,
        log_level=log_level,
    )
