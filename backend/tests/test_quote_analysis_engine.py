"""Tests for the quote analysis engine — best quotes, savings, recommendation, timeline."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from freightview.services.quote_analysis import (
    AnalysisConfig,
    ForwarderInput,
    QuoteAnalysisValidationError,
    QuoteInput,
    ShipmentInput,
    analyze,
)

DAY_0 = date(2025, 3, 1)


def day(n: int) -> date:
    return DAY_0 + timedelta(days=n)


def shipment(ready=None, required=None, value=None) -> ShipmentInput:
    return ShipmentInput(
        id="req-1",
        cargo_ready_date=ready,
        delivery_required_date=required,
        value_usd=value,
    )


def quote(qid, mode, amount, eta=None, transit=None, status="active", code=None) -> QuoteInput:
    fwd = ForwarderInput(id=f"fwd-{code}", name=code, short_code=code) if code else None
    return QuoteInput(
        id=qid,
        request_id="req-1",
        forwarder_id=fwd.id if fwd else None,
        mode=mode,
        total_amount=amount,
        transit_days=transit,
        eta=eta,
        status=status,
        forwarder=fwd,
    )


class TestBestQuotes:
    """Partitioning and per-mode ordering."""

    def test_best_is_cheapest_of_each_mode(self):
        quotes = [
            quote("a1", "air", 14000),
            quote("s1", "sea", 4100),
            quote("a2", "air", 12000),
            quote("s2", "sea", 3000),
            quote("a3", "air", 13250),
        ]
        result = analyze(shipment(), quotes)
        assert result.best_air.id == "a2"
        assert result.best_sea.id == "s2"
        assert [q.id for q in result.air_quotes] == ["a2", "a3", "a1"]
        assert [q.id for q in result.sea_quotes] == ["s2", "s1"]

    def test_equal_amounts_keep_input_order(self):
        quotes = [quote("first", "air", 9000), quote("second", "air", 9000)]
        result = analyze(shipment(), quotes)
        assert result.best_air.id == "first"
        assert [q.id for q in result.air_quotes] == ["first", "second"]

    def test_unknown_mode_is_ignored(self):
        quotes = [quote("r1", "rail", 500), quote("s1", "sea", 3000)]
        result = analyze(shipment(), quotes)
        assert result.best_air is None
        assert result.best_sea.id == "s1"
        assert result.chart_air == []
        assert len(result.chart_sea) == 1

    def test_does_not_reorder_caller_list(self):
        quotes = [quote("a1", "air", 14000), quote("a2", "air", 12000)]
        analyze(shipment(), quotes)
        assert [q.id for q in quotes] == ["a1", "a2"]


class TestSavings:

    def test_savings_and_percentage(self):
        result = analyze(shipment(), [quote("a", "air", 12000), quote("s", "sea", 3000)])
        assert result.potential_savings == Decimal("9000")
        assert result.savings_percentage == 75

    def test_negative_savings_when_sea_is_pricier(self):
        result = analyze(shipment(), [quote("a", "air", 2000), quote("s", "sea", 2500)])
        assert result.potential_savings == Decimal("-500")
        assert result.savings_percentage == -25

    def test_percentage_rounds_half_away_from_zero(self):
        up = analyze(shipment(), [quote("a", "air", 200), quote("s", "sea", 199)])
        assert up.savings_percentage == 1  # 0.5%
        down = analyze(shipment(), [quote("a", "air", 200), quote("s", "sea", 201)])
        assert down.savings_percentage == -1  # -0.5%

    def test_zero_air_amount_gives_no_percentage(self):
        result = analyze(shipment(), [quote("a", "air", 0), quote("s", "sea", 0)])
        assert result.potential_savings == Decimal("0")
        assert result.savings_percentage is None

    def test_single_mode_has_no_savings(self):
        result = analyze(shipment(), [quote("s", "sea", 3000)])
        assert result.potential_savings is None
        assert result.savings_percentage is None


class TestRecommendation:

    def test_sea_arrives_with_comfortable_buffer(self):
        result = analyze(
            shipment(required=day(30)),
            [quote("a", "air", 12000, eta=day(5)), quote("s", "sea", 3000, eta=day(25))],
        )
        assert result.recommendation == "sea"
        assert result.recommendation_reason == (
            "Sea freight arrives 5 days before deadline with 75% cost savings ($9,000)"
        )

    def test_sea_misses_deadline(self):
        result = analyze(
            shipment(required=day(30)),
            [quote("a", "air", 12000, eta=day(5)), quote("s", "sea", 3000, eta=day(35))],
        )
        assert result.recommendation == "air"
        assert result.recommendation_reason == (
            "Sea freight does not meet delivery deadline. Air freight required."
        )

    def test_sea_without_eta_falls_back_to_air(self):
        result = analyze(
            shipment(required=day(30)),
            [quote("a", "air", 12000), quote("s", "sea", 3000)],
        )
        assert result.recommendation == "air"

    def test_minimal_buffer(self):
        result = analyze(
            shipment(required=day(30)),
            [quote("a", "air", 12000), quote("s", "sea", 3000, eta=day(28))],
        )
        assert result.recommendation == "sea"
        assert result.recommendation_reason == (
            "Sea freight meets deadline with minimal buffer (2 days). "
            "Consider air if timing is critical."
        )

    def test_buffer_of_exactly_three_days_is_comfortable(self):
        result = analyze(
            shipment(required=day(30)),
            [quote("a", "air", 12000), quote("s", "sea", 3000, eta=day(27))],
        )
        assert result.recommendation_reason.startswith("Sea freight arrives 3 days before deadline")

    def test_arriving_on_deadline_day_is_zero_buffer(self):
        result = analyze(
            shipment(required=day(30)),
            [quote("a", "air", 12000), quote("s", "sea", 3000, eta=day(30))],
        )
        assert result.recommendation == "sea"
        assert "(0 days)" in result.recommendation_reason

    def test_no_deadline_means_no_recommendation(self):
        result = analyze(shipment(), [quote("a", "air", 12000), quote("s", "sea", 3000, eta=day(5))])
        assert result.recommendation is None
        assert result.recommendation_reason is None

    def test_only_sea(self):
        result = analyze(shipment(required=day(30)), [quote("s", "sea", 3000)])
        assert result.best_air is None
        assert result.recommendation == "sea"
        assert result.recommendation_reason == "Only sea freight quotes available."

    def test_only_air(self):
        result = analyze(shipment(required=day(30)), [quote("a", "air", 12000)])
        assert result.best_sea is None
        assert result.recommendation == "air"
        assert result.recommendation_reason == "Only air freight quotes available."

    def test_fractional_buffer_rounds_up(self):
        eta = datetime(2025, 3, 26, 12, 0, tzinfo=timezone.utc)  # 4.5 days before day 30
        result = analyze(
            shipment(required=day(30)),
            [quote("a", "air", 12000), quote("s", "sea", 3000, eta=eta)],
        )
        assert result.recommendation_reason.startswith("Sea freight arrives 5 days")

    def test_savings_with_cents_are_formatted(self):
        result = analyze(
            shipment(required=day(30)),
            [quote("a", "air", "12000.50"), quote("s", "sea", "3000.00", eta=day(20))],
        )
        assert result.recommendation_reason.endswith("($9,000.50)")


class TestTimelineAndCost:

    def test_high_flexibility(self):
        result = analyze(shipment(ready=day(0), required=day(30)), [])
        assert result.timeline_flexibility == "high"
        assert result.available_days == 30

    @pytest.mark.parametrize("days,expected", [(25, "high"), (24, "medium"), (14, "medium"), (13, "low"), (-2, "low")])
    def test_flexibility_thresholds(self, days, expected):
        result = analyze(shipment(ready=day(0), required=day(days)), [])
        assert result.timeline_flexibility == expected
        assert result.available_days == days

    def test_missing_date_is_low_flexibility(self):
        result = analyze(shipment(ready=day(0)), [])
        assert result.timeline_flexibility == "low"
        assert result.available_days is None

    def test_daily_carrying_cost(self):
        result = analyze(shipment(value=100000), [])
        assert result.daily_carrying_cost == 41  # 100000 * 0.15 / 365 = 41.09

    def test_no_value_no_carrying_cost(self):
        assert analyze(shipment(), []).daily_carrying_cost is None


class TestReliabilityAndChart:

    def test_no_quotes(self):
        result = analyze(shipment(ready=day(0), required=day(20)), [])
        assert result.best_air is None and result.best_sea is None
        assert result.recommendation is None
        assert result.is_reliable is False
        assert result.available_days == 20

    def test_single_quote_is_not_reliable(self):
        assert analyze(shipment(), [quote("s", "sea", 3000)]).is_reliable is False

    def test_two_quotes_are_reliable(self):
        assert analyze(shipment(), [quote("s", "sea", 3000), quote("a", "air", 9000)]).is_reliable is True

    def test_chart_points_follow_cost_order(self):
        quotes = [
            quote("s1", "sea", 4100, eta=day(24), transit=20, code="DHL"),
            quote("s2", "sea", 3000, eta=day(25), transit=21, code="KN"),
            quote("s3", "sea", 3500, eta=day(26), transit=22),
        ]
        result = analyze(shipment(), quotes)
        labels = [p.forwarder_label for p in result.chart_sea]
        assert labels == ["KN", "Unknown", "DHL"]
        first = result.chart_sea[0].to_dict()
        assert first == {"forwarder_label": "KN", "transit_days": 21, "cost": 3000.0, "eta": day(25).isoformat()}


class TestConfig:

    def test_safe_buffer_override(self):
        quotes = [quote("a", "air", 12000), quote("s", "sea", 3000, eta=day(25))]
        result = analyze(shipment(required=day(30)), quotes, AnalysisConfig(safe_buffer_days=6))
        assert "minimal buffer (5 days)" in result.recommendation_reason

    def test_excluded_statuses(self):
        quotes = [
            quote("a-old", "air", 8000, status="expired"),
            quote("a", "air", 12000),
            quote("s", "sea", 3000),
        ]
        default = analyze(shipment(), quotes)
        assert default.best_air.id == "a-old"
        assert default.quotes_considered == 3

        filtered = analyze(shipment(), quotes, AnalysisConfig(excluded_statuses=("expired",)))
        assert filtered.best_air.id == "a"
        assert filtered.quotes_considered == 2

    def test_unknown_label_override(self):
        result = analyze(shipment(), [quote("s", "sea", 3000)], AnalysisConfig(unknown_forwarder_label="n/a"))
        assert result.chart_sea[0].forwarder_label == "n/a"


class TestValidation:

    def test_malformed_eta_names_the_field(self):
        with pytest.raises(QuoteAnalysisValidationError) as exc:
            analyze(shipment(), [quote("s", "sea", 3000, eta="2025-13-45")])
        assert exc.value.field == "quotes[0].eta"

    def test_negative_amount(self):
        with pytest.raises(QuoteAnalysisValidationError) as exc:
            analyze(shipment(), [quote("a", "air", 100), quote("s", "sea", -5)])
        assert exc.value.field == "quotes[1].total_amount"

    def test_non_numeric_amount(self):
        with pytest.raises(QuoteAnalysisValidationError) as exc:
            analyze(shipment(), [quote("a", "air", "lots")])
        assert exc.value.field == "quotes[0].total_amount"

    def test_malformed_request_date(self):
        with pytest.raises(QuoteAnalysisValidationError) as exc:
            analyze(shipment(ready="next tuesday", required=day(3)), [])
        assert exc.value.field == "cargo_ready_date"

    def test_amounts_too_far_apart_name_the_air_quote(self):
        with pytest.raises(QuoteAnalysisValidationError) as exc:
            analyze(shipment(), [quote("a", "air", "1e-30"), quote("s", "sea", "1e30")])
        assert exc.value.field == "quotes[0].total_amount"

    def test_oversized_cargo_value(self):
        with pytest.raises(QuoteAnalysisValidationError) as exc:
            analyze(shipment(value="1e40"), [])
        assert exc.value.field == "value_usd"

    def test_iso_strings_are_accepted(self):
        result = analyze(
            shipment(ready="2025-03-01", required="2025-03-31"),
            [quote("a", "air", "12000"), quote("s", "sea", "3000", eta="2025-03-26")],
        )
        assert result.available_days == 30
        assert result.recommendation == "sea"

    def test_from_mapping(self):
        q = QuoteInput.from_mapping({
            "id": "q1", "mode": "sea", "total_amount": 3000, "eta": "2025-03-26",
            "forwarder": {"id": "f1", "name": "Kuehne + Nagel", "short_code": "KN"},
        })
        s = ShipmentInput.from_mapping({"id": "r1", "delivery_required_date": "2025-03-31"})
        result = analyze(s, [q])
        assert result.chart_sea[0].forwarder_label == "KN"
        assert result.recommendation == "sea"


def test_analysis_is_idempotent():
    req = shipment(ready=day(0), required=day(30), value=250000)
    quotes = [
        quote("a", "air", 12000, eta=day(4), code="DHL"),
        quote("s", "sea", 3000, eta=day(25), code="KN"),
    ]
    assert analyze(req, quotes).to_dict() == analyze(req, quotes).to_dict()
