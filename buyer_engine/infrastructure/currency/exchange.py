"""Static currency table used for display conversion and buyer localisation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from buyer_engine.core.entities import Currency
from buyer_engine.core.errors import UnsupportedCurrency
from buyer_engine.utils.logger import logger


def parse_currency(value: Currency | str) -> Currency:
    """Return the :class:`Currency` for ``value`` or raise ``UnsupportedCurrency``."""

    if isinstance(value, Currency):
        return value
    try:
        return Currency(str(value).strip().upper())
    except ValueError as error:
        raise UnsupportedCurrency(f"Unsupported currency: {value!r}") from error


@dataclass(frozen=True)
class ExchangeTable:
    """USD-relative rates and display symbols for the supported currencies.

    Rates express how many units of a currency one US dollar buys. All
    computation in the engine happens in USD; this table only feeds display.
    """

    rates: Mapping[Currency, float]
    symbols: Mapping[Currency, str]
    country_currencies: Mapping[str, Currency]
    default_currency: Currency = Currency.USD

    def __post_init__(self) -> None:
        missing = [currency.value for currency in Currency if currency not in self.rates]
        if missing:
            raise ValueError("Exchange rates missing for: " + ", ".join(missing))
        for currency, rate in self.rates.items():
            if rate <= 0:
                raise ValueError(f"Exchange rate for {currency.value} must be positive, got {rate}")
        normalized = {key.strip().lower(): value for key, value in self.country_currencies.items()}
        object.__setattr__(self, "_normalized_countries", normalized)

    @classmethod
    def default(cls) -> "ExchangeTable":
        return cls(
            rates={
                Currency.USD: 1.0,
                Currency.AED: 3.67,
                Currency.GBP: 0.79,
                Currency.EUR: 0.92,
                Currency.INR: 83.12,
            },
            symbols={
                Currency.USD: "$",
                Currency.AED: "AED ",
                Currency.GBP: "£",
                Currency.EUR: "€",
                Currency.INR: "₹",
            },
            country_currencies={
                "UAE": Currency.AED,
                "UK": Currency.GBP,
                "US": Currency.USD,
                "India": Currency.INR,
                "EU": Currency.EUR,
            },
        )

    @classmethod
    def from_config(cls, config: Mapping[str, object]) -> "ExchangeTable":
        defaults = cls.default()
        raw_rates = config.get("rates") or {}
        raw_symbols = config.get("symbols") or {}
        raw_countries = config.get("country_currencies")
        raw_default = config.get("default_currency")

        rates = dict(defaults.rates)
        for code, rate in dict(raw_rates).items():  # type: ignore[call-overload]
            rates[parse_currency(code)] = float(rate)

        symbols = dict(defaults.symbols)
        for code, symbol in dict(raw_symbols).items():  # type: ignore[call-overload]
            symbols[parse_currency(code)] = str(symbol)

        if raw_countries is None:
            countries = dict(defaults.country_currencies)
        else:
            countries = {
                str(country): parse_currency(code)
                for country, code in dict(raw_countries).items()  # type: ignore[call-overload]
            }

        default_currency = (
            parse_currency(str(raw_default)) if raw_default is not None else defaults.default_currency
        )
        return cls(
            rates=rates,
            symbols=symbols,
            country_currencies=countries,
            default_currency=default_currency,
        )

    def rate(self, currency: Currency | str) -> float:
        return self.rates[parse_currency(currency)]

    def symbol(self, currency: Currency | str) -> str:
        code = parse_currency(currency)
        return self.symbols.get(code, f"{code.value} ")

    def convert(self, usd_amount: float, currency: Currency | str) -> float:
        """Convert a USD amount into ``currency``."""

        return usd_amount * self.rate(currency)

    def to_usd(self, amount: float, currency: Currency | str) -> float:
        """Convert an amount denominated in ``currency`` back into USD."""

        return amount / self.rate(currency)

    def format_money(self, usd_amount: float, currency: Currency | str = Currency.USD) -> str:
        """Render a USD amount in ``currency`` the way the site displays money."""

        converted = self.convert(usd_amount, currency)
        symbol = self.symbol(currency)
        if converted >= 1_000_000:
            return f"{symbol}{converted / 1_000_000:.2f}M"
        return f"{symbol}{converted:,.0f}"

    def currency_for_country(self, country: Optional[str]) -> Currency:
        """Total mapping from a country answer to the buyer's currency."""

        if country:
            currency = self._normalized_countries.get(country.strip().lower())  # type: ignore[attr-defined]
            if currency is not None:
                return currency
        logger.debug(
            "No currency configured for country '{}'; defaulting to {}",
            country,
            self.default_currency.value,
        )
        return self.default_currency


__all__ = ["ExchangeTable", "parse_currency"]
