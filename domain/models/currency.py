from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RateSet:
    base: str
    date: str
    rates: dict[str, float]
    provider: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            'base': self.base,
            'date': self.date,
            'rates': dict(self.rates),
            'provider': self.provider,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'RateSet':
        return cls(
            base=data['base'],
            date=data['date'],
            rates=dict(data['rates']),
            provider=data.get('provider'),
        )


@dataclass(frozen=True)
class TimeSeries:
    base: str
    start_date: str
    end_date: str
    series: dict[str, dict[str, float]]
    provider: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            'base': self.base,
            'start_date': self.start_date,
            'end_date': self.end_date,
            'series': {day: dict(rates) for day, rates in self.series.items()},
            'provider': self.provider,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'TimeSeries':
        return cls(
            base=data['base'],
            start_date=data['start_date'],
            end_date=data['end_date'],
            series={day: dict(rates) for day, rates in data['series'].items()},
            provider=data.get('provider'),
        )


@dataclass(frozen=True)
class ConversionResult:
    from_currency: str
    to_currency: str
    amount: float
    rate: float
    result: float
    as_of: str | None = field(default=None)
