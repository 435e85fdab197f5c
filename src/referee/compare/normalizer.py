"""Turn free-form completion text into a `NormalizedResult`.

Options fail fast: a single bad option entry rejects the whole response, since
silently dropping one would misrepresent what was compared. Trade-offs degrade:
bad entries are skipped and a missing list becomes empty. Scores are advisory,
so a missing or malformed mapping becomes empty instead of failing.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional

from jsonschema import Draft7Validator

from referee import logger as logger_mod

from .errors import NormalizationFailure
from .types import NormalizedResult, OptionAnalysis, TradeOff

log = logger_mod.get_logger()

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)
_OBJECT_SPAN = re.compile(r"\{[\s\S]*\}")

# Only the top level is a hard contract; entries are checked by hand below.
RESULT_ENVELOPE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["options"],
    "properties": {"options": {"type": "array", "minItems": 1}},
}

_envelope_validator = Draft7Validator(RESULT_ENVELOPE_SCHEMA)


def extract_json(raw: str) -> str:
    """Pull the JSON text out of a reply that may be wrapped in fences or prose."""

    fenced = _FENCED_BLOCK.search(raw)
    if fenced:
        return fenced.group(1).strip()

    span = _OBJECT_SPAN.search(raw)
    if span:
        return span.group(0)

    return raw.strip()


def parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except Exception as e:  # noqa: BLE001
        raise NormalizationFailure(f"Failed to parse JSON response: {e}") from e


def _check_envelope(parsed: Any) -> None:
    errors = sorted(_envelope_validator.iter_errors(parsed), key=lambda e: len(e.path))
    if not errors:
        return

    err = errors[0]
    if not err.path and err.validator == "type":
        raise NormalizationFailure("Parsed response is not a valid object")
    if err.validator == "minItems":
        raise NormalizationFailure('Response "options" array is empty')
    raise NormalizationFailure('Response is missing required "options" array')


def _clean_strings(values: List[Any]) -> List[str]:
    return [v.strip() for v in values if isinstance(v, str) and v.strip()]


def _normalize_scores(raw_scores: Any) -> Dict[str, str]:
    if not isinstance(raw_scores, dict):
        return {}

    scores: Dict[str, str] = {}
    for key, value in raw_scores.items():
        if value is None:
            continue
        if isinstance(value, str):
            scores[key] = value
        else:
            scores[key] = json.dumps(value)
    return scores


def _normalize_option(entry: Any, index: int) -> OptionAnalysis:
    if not isinstance(entry, dict):
        raise NormalizationFailure(f"Option at index {index} is not a valid object")

    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        raise NormalizationFailure(
            f"Option at index {index} is missing a valid 'name' field"
        )

    pros = entry.get("pros")
    if not isinstance(pros, list):
        raise NormalizationFailure(f"Option '{name}' is missing 'pros' array")

    cons = entry.get("cons")
    if not isinstance(cons, list):
        raise NormalizationFailure(f"Option '{name}' is missing 'cons' array")

    return OptionAnalysis(
        name=name.strip(),
        pros=_clean_strings(pros),
        cons=_clean_strings(cons),
        scores=_normalize_scores(entry.get("scores")),
    )


def _normalize_trade_off(entry: Any, index: int) -> Optional[TradeOff]:
    if not isinstance(entry, dict):
        log.warning(f"Trade-off at index {index} is not a valid object, skipping")
        return None

    scenario = entry.get("scenario")
    if not isinstance(scenario, str) or not scenario.strip():
        log.warning(f"Trade-off at index {index} is missing 'scenario', skipping")
        return None

    recommendation = entry.get("recommendation")
    if not isinstance(recommendation, str) or not recommendation.strip():
        log.warning(
            f"Trade-off at index {index} is missing 'recommendation', skipping"
        )
        return None

    return TradeOff(scenario=scenario.strip(), recommendation=recommendation.strip())


def normalize(raw: str) -> NormalizedResult:
    """Validate and reshape raw completion text.

    Raises:
        NormalizationFailure: the text is empty, is not JSON, or has no usable
            top-level ``options`` array, or any option entry is malformed.
    """

    if not isinstance(raw, str) or not raw.strip():
        raise NormalizationFailure("Response is empty or not a string")

    parsed = parse_json(extract_json(raw))
    _check_envelope(parsed)

    options = [
        _normalize_option(entry, index) for index, entry in enumerate(parsed["options"])
    ]

    trade_offs: List[TradeOff] = []
    raw_trade_offs = parsed.get("tradeOffs")
    if isinstance(raw_trade_offs, list):
        for index, entry in enumerate(raw_trade_offs):
            trade_off = _normalize_trade_off(entry, index)
            if trade_off is not None:
                trade_offs.append(trade_off)
    else:
        log.warning('Response is missing "tradeOffs" array, using empty array')

    return NormalizedResult(options=options, trade_offs=trade_offs)
