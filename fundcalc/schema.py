"""Scenario schema dataclasses and JSON loading."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any

DISTRIBUTING = "distributing"
RETAINING = "retaining"


class SchemaError(ValueError):
    """Raised when raw JSON cannot be parsed into schema objects."""


def _expect_dict(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError(f"{path}: expected object")
    return value


def _require(data: dict[str, Any], key: str, path: str) -> Any:
    if key not in data:
        raise SchemaError(f"{path}.{key}: missing required field")
    return data[key]


def _optional(data: dict[str, Any], key: str, default: Any = None) -> Any:
    return data.get(key, default)


def _number(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError(f"{path}: expected number")
    return float(value)


def _string(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise SchemaError(f"{path}: expected string")
    return value


def _integer(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError(f"{path}: expected integer")
    return value


@dataclass(frozen=True, slots=True)
class Percent:
    """A change expressed as a percentage of the base amount."""

    rate: float

    def evaluate(self, base_value: float) -> float:
        return base_value * (self.rate / 100.0)

    def to_dict(self) -> dict[str, Any]:
        return {"type": "percent", "value": self.rate}


@dataclass(frozen=True, slots=True)
class Absolute:
    """A fixed amount in EUR. The base amount is ignored."""

    amount: float

    def evaluate(self, base_value: float) -> float:
        return self.amount

    def to_dict(self) -> dict[str, Any]:
        return {"type": "absolute", "value": self.amount}


ValueAdjustment = Percent | Absolute


def parse_adjustment(data: Any, path: str) -> ValueAdjustment:
    raw = _expect_dict(data, path)
    kind = _require(raw, "type", path)
    value = _number(_require(raw, "value", path), f"{path}.value")
    if kind == "percent":
        return Percent(value)
    if kind == "absolute":
        return Absolute(value)
    raise SchemaError(f"{path}.type: '{kind}' is not valid; expected one of [absolute, percent]")


@dataclass(frozen=True, slots=True)
class TaxSettings:
    tax_rate: float = 26.375
    tax_allowance: float = 750.0
    exemption_cut: float = 30.0
    base_interest_rate: float = 3.4

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "tax_settings") -> "TaxSettings":
        defaults = cls()
        return cls(
            tax_rate=_number(_optional(data, "tax_rate", defaults.tax_rate), f"{path}.tax_rate"),
            tax_allowance=_number(_optional(data, "tax_allowance", defaults.tax_allowance), f"{path}.tax_allowance"),
            exemption_cut=_number(_optional(data, "exemption_cut", defaults.exemption_cut), f"{path}.exemption_cut"),
            base_interest_rate=_number(
                _optional(data, "base_interest_rate", defaults.base_interest_rate), f"{path}.base_interest_rate"
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "tax_rate": self.tax_rate,
            "tax_allowance": self.tax_allowance,
            "exemption_cut": self.exemption_cut,
            "base_interest_rate": self.base_interest_rate,
        }


@dataclass(frozen=True, slots=True)
class Configuration:
    """Immutable scenario parameters for one projection run.

    Monetary values are EUR, rates are percentages (``0.22`` means 0.22 %).
    ``transaction_cost`` follows the gross model: it is deducted from each
    contribution before the contribution enters the fund. ``custody_fee`` is
    carried for completeness but is not applied by the engine.
    """

    entry_funds: float
    annual_contribution_base: float
    market_return: ValueAdjustment
    duration_years: int
    contribution_growth: ValueAdjustment = Percent(0.0)
    profit_distribution: str = DISTRIBUTING
    annual_profit_rate: ValueAdjustment = Percent(0.0)
    transaction_cost: ValueAdjustment = Absolute(0.0)
    management_fee_rate: float = 0.0
    custody_fee: ValueAdjustment = Absolute(0.0)
    tax_settings: TaxSettings = field(default_factory=TaxSettings)

    @property
    def is_distributing(self) -> bool:
        return self.profit_distribution == DISTRIBUTING

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "scenario") -> "Configuration":
        defaults = default_configuration()

        def _adjustment(key: str, fallback: ValueAdjustment) -> ValueAdjustment:
            raw = _optional(data, key)
            if raw is None:
                return fallback
            return parse_adjustment(raw, f"{path}.{key}")

        return cls(
            entry_funds=_number(_require(data, "entry_funds", path), f"{path}.entry_funds"),
            annual_contribution_base=_number(
                _require(data, "annual_contribution_base", path), f"{path}.annual_contribution_base"
            ),
            market_return=parse_adjustment(_require(data, "market_return", path), f"{path}.market_return"),
            duration_years=_integer(_require(data, "duration_years", path), f"{path}.duration_years"),
            contribution_growth=_adjustment("contribution_growth", defaults.contribution_growth),
            profit_distribution=_string(
                _optional(data, "profit_distribution", defaults.profit_distribution), f"{path}.profit_distribution"
            ),
            annual_profit_rate=_adjustment("annual_profit_rate", defaults.annual_profit_rate),
            transaction_cost=_adjustment("transaction_cost", defaults.transaction_cost),
            management_fee_rate=_number(
                _optional(data, "management_fee_rate", defaults.management_fee_rate), f"{path}.management_fee_rate"
            ),
            custody_fee=_adjustment("custody_fee", defaults.custody_fee),
            tax_settings=TaxSettings.from_dict(
                _expect_dict(_optional(data, "tax_settings", {}), f"{path}.tax_settings"), f"{path}.tax_settings"
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "entry_funds": self.entry_funds,
            "annual_contribution_base": self.annual_contribution_base,
            "contribution_growth": self.contribution_growth.to_dict(),
            "market_return": self.market_return.to_dict(),
            "profit_distribution": self.profit_distribution,
            "annual_profit_rate": self.annual_profit_rate.to_dict(),
            "duration_years": self.duration_years,
            "transaction_cost": self.transaction_cost.to_dict(),
            "management_fee_rate": self.management_fee_rate,
            "custody_fee": self.custody_fee.to_dict(),
            "tax_settings": self.tax_settings.to_dict(),
        }


def default_configuration() -> Configuration:
    """Equity fund savings plan used when no scenario file is given."""
    return Configuration(
        entry_funds=5000.0,
        annual_contribution_base=1000.0,
        contribution_growth=Percent(15.0),
        market_return=Percent(3.0),
        profit_distribution=DISTRIBUTING,
        annual_profit_rate=Percent(1.38),
        duration_years=21,
        transaction_cost=Percent(1.5),
        management_fee_rate=0.22,
        custody_fee=Absolute(0.0),
        tax_settings=TaxSettings(
            tax_rate=26.375,
            tax_allowance=750.0,
            exemption_cut=30.0,
            base_interest_rate=3.4,
        ),
    )


def load_scenario(path: str | Path) -> Configuration:
    """Load scenario JSON into a Configuration."""
    source = Path(path)
    raw = json.loads(source.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise SchemaError("scenario: root must be a JSON object")
    return Configuration.from_dict(raw)
