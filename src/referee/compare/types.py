from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Tuple

from referee.logger import format_timestamp


def _as_tuple(values: Iterable[str]) -> Tuple[str, ...]:
    return tuple(values)


@dataclass(frozen=True)
class ComparisonInput:
    """Validated request: at least two options and one constraint, all trimmed."""

    options: Tuple[str, ...]
    constraints: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", _as_tuple(self.options))
        object.__setattr__(self, "constraints", _as_tuple(self.constraints))


@dataclass(frozen=True)
class OptionAnalysis:
    name: str
    pros: Tuple[str, ...] = ()
    cons: Tuple[str, ...] = ()
    scores: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pros", _as_tuple(self.pros))
        object.__setattr__(self, "cons", _as_tuple(self.cons))
        # Read-only view over a private copy.
        object.__setattr__(self, "scores", MappingProxyType(dict(self.scores)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "pros": list(self.pros),
            "cons": list(self.cons),
            "scores": dict(self.scores),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OptionAnalysis":
        """Rehydrate an already-normalized entry (e.g. from storage)."""
        return cls(
            name=data["name"],
            pros=data.get("pros") or (),
            cons=data.get("cons") or (),
            scores=data.get("scores") or {},
        )


@dataclass(frozen=True)
class TradeOff:
    scenario: str
    recommendation: str

    def to_dict(self) -> Dict[str, str]:
        return {"scenario": self.scenario, "recommendation": self.recommendation}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TradeOff":
        return cls(scenario=data["scenario"], recommendation=data["recommendation"])


@dataclass(frozen=True)
class NormalizedResult:
    """Guaranteed-shape comparison: one or more options, zero or more trade-offs."""

    options: Tuple[OptionAnalysis, ...]
    trade_offs: Tuple[TradeOff, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(self, "trade_offs", tuple(self.trade_offs))

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape, identical to the JSON contract the model is asked for."""
        return {
            "options": [o.to_dict() for o in self.options],
            "tradeOffs": [t.to_dict() for t in self.trade_offs],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NormalizedResult":
        return cls(
            options=[OptionAnalysis.from_dict(o) for o in data.get("options") or []],
            trade_offs=[TradeOff.from_dict(t) for t in data.get("tradeOffs") or []],
        )


@dataclass(frozen=True)
class ComparisonRecord:
    """What a finished comparison hands back to the HTTP boundary."""

    id: str
    options: Tuple[OptionAnalysis, ...]
    trade_offs: Tuple[TradeOff, ...]
    created_at: datetime.datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(self, "trade_offs", tuple(self.trade_offs))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "options": [o.to_dict() for o in self.options],
            "tradeOffs": [t.to_dict() for t in self.trade_offs],
            "createdAt": format_timestamp(self.created_at),
        }
