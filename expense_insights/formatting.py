"""Formatting utilities for currency and percentage display.

The currency is always passed in explicitly; nothing here reads a global
setting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Union

from . import config


@dataclass(frozen=True)
class CurrencyConfig:
    code: str
    symbol: str
    name: str


USD = CurrencyConfig(code='USD', symbol='$', name='Dólar estadounidense')
EUR = CurrencyConfig(code='EUR', symbol='€', name='Euro')
DOP = CurrencyConfig(code='DOP', symbol='RD$', name='Peso dominicano')
MXN = CurrencyConfig(code='MXN', symbol='MX$', name='Peso mexicano')

BUILTIN_CURRENCIES: Dict[str, CurrencyConfig] = {c.code: c for c in (USD, EUR, DOP, MXN)}


def get_currency(code: Optional[str] = None, custom: Iterable[CurrencyConfig] = ()) -> CurrencyConfig:
    """Resolve a currency code, preferring user-defined currencies.

    Unknown codes fall back to the configured default, then to USD.

    Example:
        >>> get_currency('EUR').symbol
        '€'
    """
    code = (code or config.DEFAULT_CURRENCY).upper()
    for currency in custom:
        if currency.code.upper() == code:
            return currency
    if code in BUILTIN_CURRENCIES:
        return BUILTIN_CURRENCIES[code]
    return BUILTIN_CURRENCIES.get(config.DEFAULT_CURRENCY.upper(), USD)


def format_amount(amount: Union[float, int], currency: CurrencyConfig = USD) -> str:
    """Format an amount with two decimals and the currency symbol.

    Example:
        >>> format_amount(1234.5)
        '$1,234.50'
        >>> format_amount(-5, DOP)
        '-RD$5.00'
    """
    sign = '-' if amount < 0 else ''
    return f"{sign}{currency.symbol}{abs(amount):,.2f}"


def format_percent(ratio: float, digits: int = 1) -> str:
    """Format a ratio (0.25) as a percentage string ('25.0%')."""
    return f"{ratio * 100:.{digits}f}%"
