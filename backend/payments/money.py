"""
Monetary precision helpers and the Money value type.

CRITICAL: Every total, discount, split and reconciliation in the engine is
integer arithmetic in minor units (paise for INR). Decimals only appear at
the input and display boundaries.

Key Principles:
1. NEVER use float for money (floats are converted through str on input)
2. Always quantize Decimals BEFORE converting to minor units
3. Use ROUND_HALF_EVEN (banker's rounding) to prevent systematic bias
4. Equality is exact: there is no tolerance window anywhere
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_EVEN, getcontext
from fractions import Fraction
from functools import total_ordering
from typing import Optional, Union

# Set high precision for intermediate calculations
getcontext().prec = 28

# Currency minor unit exponents (how many decimal places)
CURRENCY_EXPONENT = {
    "INR": 2,  # Indian Rupee (paise)
    "USD": 2,  # United States Dollar (cents)
    "EUR": 2,  # Euro (cents)
    "GBP": 2,  # British Pound (pence)
    "AED": 2,  # UAE Dirham (fils)
    "LKR": 2,  # Sri Lankan Rupee (cents)
    "NPR": 2,  # Nepalese Rupee (paisa)

    # Zero-decimal currencies
    "JPY": 0,
    "KRW": 0,
    "VND": 0,

    # 3-decimal currencies
    "KWD": 3,
    "BHD": 3,
    "OMR": 3,
}

CURRENCY_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "KRW": "₩",
}

Numeric = Union[Decimal, str, int, float]
Rational = Union[int, Fraction, Decimal, str]


def currency_exponent(currency: str) -> int:
    """
    Get the number of decimal places for a currency.

    Examples:
        >>> currency_exponent("INR")
        2
        >>> currency_exponent("JPY")
        0
    """
    return CURRENCY_EXPONENT.get(currency.upper(), 2)


def quantize_decimal(currency: str) -> Decimal:
    """Decimal representing the smallest unit (e.g., 0.01 for INR)."""
    return Decimal(10) ** -currency_exponent(currency)


def quantize(currency: str, amount: Numeric) -> Decimal:
    """
    Round to currency decimals using banker's rounding (ROUND_HALF_EVEN).

    Examples:
        >>> quantize("INR", "10.127")
        Decimal('10.13')
        >>> quantize("INR", "10.125")
        Decimal('10.12')  # Banker's rounding
    """
    if isinstance(amount, float):
        # Convert float to string first to avoid binary representation noise
        amount = str(amount)

    return Decimal(amount).quantize(quantize_decimal(currency), rounding=ROUND_HALF_EVEN)


def to_minor(currency: str, amount: Numeric) -> int:
    """
    Convert to minor units (e.g., paise) after quantization.

    Examples:
        >>> to_minor("INR", "270")
        27000
        >>> to_minor("INR", "10.125")
        1012  # banker's rounding: 10.12 -> 1012 paise
    """
    quantized = quantize(currency, amount)
    exponent = currency_exponent(currency)
    return int((quantized * (10 ** exponent)).to_integral_value())


def from_minor(currency: str, minor: int) -> Decimal:
    """
    Convert from minor units to Decimal (for display).

    Examples:
        >>> from_minor("INR", 27000)
        Decimal('270.00')
    """
    exponent = currency_exponent(currency)
    return (Decimal(minor) / (10 ** exponent)).quantize(quantize_decimal(currency))


def format_money(currency: str, minor: int) -> str:
    """
    Format minor units as a human-readable currency string.

    Examples:
        >>> format_money("INR", 27000)
        '₹270.00'
        >>> format_money("JPY", 1235)
        '¥1,235'
    """
    amount = from_minor(currency, minor)
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), currency.upper() + " ")
    exponent = currency_exponent(currency)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.{exponent}f}"


def default_currency() -> str:
    from core_backend.config import app_settings

    return app_settings.CURRENCY


def _as_fraction(value: Rational) -> Fraction:
    if isinstance(value, bool):
        raise TypeError("Money cannot be multiplied by a bool")
    if isinstance(value, float):
        value = str(value)
    if isinstance(value, (Fraction, int)):
        return Fraction(value)
    if isinstance(value, (Decimal, str)):
        return Fraction(Decimal(value))
    raise TypeError(f"Unsupported factor type for Money: {type(value).__name__}")


@total_ordering
@dataclass(frozen=True)
class Money:
    """
    An exact amount of money: integer minor units plus an ISO 4217 currency.

    Arithmetic never leaves integer space except in multiply(), which works on
    exact fractions and rounds once, half-to-even, back to minor units.
    """

    minor: int
    currency: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.minor, bool) or not isinstance(self.minor, int):
            raise TypeError(f"Money minor units must be int, got {type(self.minor).__name__}")
        currency = (self.currency or default_currency()).upper()
        object.__setattr__(self, "currency", currency)

    # --- Constructors ---

    @classmethod
    def zero(cls, currency: Optional[str] = None) -> "Money":
        return cls(0, currency)

    @classmethod
    def from_decimal(cls, amount: Numeric, currency: Optional[str] = None) -> "Money":
        """Build from a major-unit amount ("270.50", Decimal, int). Boundary use only."""
        currency = (currency or default_currency()).upper()
        return cls(to_minor(currency, amount), currency)

    parse = from_decimal

    # --- Arithmetic ---

    def _check(self, other) -> "Money":
        if not isinstance(other, Money):
            raise TypeError(f"Cannot combine Money with {type(other).__name__}")
        if other.currency != self.currency:
            raise ValueError(f"Currency mismatch: {self.currency} vs {other.currency}")
        return other

    def __add__(self, other: "Money") -> "Money":
        other = self._check(other)
        return Money(self.minor + other.minor, self.currency)

    def __radd__(self, other):
        # Allows sum(iterable_of_money) with the default start of 0
        if other == 0:
            return self
        return self.__add__(other)

    def __sub__(self, other: "Money") -> "Money":
        other = self._check(other)
        return Money(self.minor - other.minor, self.currency)

    def __neg__(self) -> "Money":
        return Money(-self.minor, self.currency)

    def __abs__(self) -> "Money":
        return Money(abs(self.minor), self.currency)

    def multiply(self, factor: Rational) -> "Money":
        """
        Multiply by a rational factor, rounding half-to-even to minor units.

        Examples:
            >>> Money(12000, "INR").multiply(2)
            Money(minor=24000, currency='INR')
            >>> Money(30000, "INR").multiply(Fraction(1, 10))
            Money(minor=3000, currency='INR')
        """
        product = Fraction(self.minor) * _as_fraction(factor)
        return Money(round(product), self.currency)

    def __mul__(self, factor: Rational) -> "Money":
        if isinstance(factor, Money):
            return NotImplemented
        return self.multiply(factor)

    __rmul__ = __mul__

    def percentage(self, percent: Rational) -> "Money":
        """Percent of this amount, e.g. Money(30000).percentage(10) == Money(3000)."""
        return self.multiply(_as_fraction(percent) / 100)

    # --- Comparison ---

    def __lt__(self, other: "Money") -> bool:
        other = self._check(other)
        return self.minor < other.minor

    def is_zero(self) -> bool:
        return self.minor == 0

    def is_negative(self) -> bool:
        return self.minor < 0

    def clamp(self, low: "Money", high: "Money") -> "Money":
        """Limit this amount to the closed range [low, high]."""
        self._check(low)
        self._check(high)
        return max(low, min(self, high))

    # --- Presentation ---

    def to_decimal(self) -> Decimal:
        return from_minor(self.currency, self.minor)

    def format(self) -> str:
        return format_money(self.currency, self.minor)

    def __str__(self) -> str:
        return self.format()
