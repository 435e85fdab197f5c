import datetime
from dataclasses import FrozenInstanceError

import pytest


def test_comparison_input_is_immutable_and_tuple_backed():
    from referee.compare import ComparisonInput

    comparison = ComparisonInput(options=["a", "b"], constraints=["c"])

    assert comparison.options == ("a", "b")
    assert comparison.constraints == ("c",)
    with pytest.raises(FrozenInstanceError):
        comparison.options = ("x",)


def test_record_serializes_with_wire_field_names():
    from referee.compare import ComparisonRecord, OptionAnalysis, TradeOff

    record = ComparisonRecord(
        id="abc",
        options=[OptionAnalysis(name="A", pros=["p"], cons=["c"], scores={"cost": "low"})],
        trade_offs=[TradeOff(scenario="s", recommendation="r")],
        created_at=datetime.datetime(2026, 1, 19, 15, 30, tzinfo=datetime.timezone.utc),
    )

    assert record.to_dict() == {
        "id": "abc",
        "options": [{"name": "A", "pros": ["p"], "cons": ["c"], "scores": {"cost": "low"}}],
        "tradeOffs": [{"scenario": "s", "recommendation": "r"}],
        "createdAt": "2026-01-19T15:30:00.000Z",
    }


def test_normalized_result_from_dict_round_trip():
    from referee.compare import NormalizedResult, OptionAnalysis, TradeOff

    result = NormalizedResult(
        options=[OptionAnalysis(name="A", pros=["p"])],
        trade_offs=[TradeOff(scenario="s", recommendation="r")],
    )

    assert NormalizedResult.from_dict(result.to_dict()) == result


@pytest.mark.parametrize(
    "cls_name, kind, code, status",
    [
        ("AiUnavailableError", "ai_unavailable", "ai_service_error", 502),
        ("NormalizationError", "normalization_failure", "normalization_error", 502),
        ("PersistenceFailure", "persistence_failure", "database_error", 500),
        ("InternalError", "internal", "internal_error", 500),
        ("ValidationError", "validation", "validation_error", 400),
    ],
)
def test_service_errors_map_to_transport_status(cls_name, kind, code, status):
    from referee import compare

    err = getattr(compare, cls_name)(detail="socket reset by 10.0.0.7")

    assert isinstance(err, compare.ServiceError)
    assert err.kind == kind
    assert err.code == code
    assert err.status_code == status
    # Upstream detail is kept for logs but never serialized
    assert "10.0.0.7" not in str(err.to_dict())
    assert err.detail == "socket reset by 10.0.0.7"


def test_option_scores_are_read_only_copies():
    from referee.compare import OptionAnalysis

    source = {"cost": "low"}
    option = OptionAnalysis(name="A", scores=source)
    source["cost"] = "high"

    assert option.scores == {"cost": "low"}
    with pytest.raises(TypeError):
        option.scores["cost"] = "changed"

    exported = option.to_dict()["scores"]
    exported["cost"] = "changed"
    assert option.scores["cost"] == "low"
