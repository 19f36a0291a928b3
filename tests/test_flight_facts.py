"""Unit tests for deriving claim facts from a looked-up flight."""

from datetime import datetime, timezone

import pytest

from src.domain.eligibility import check_eligibility
from src.domain.entities import Cancellation, Delay, Route
from src.domain.enums import Regulation
from src.domain.errors import FlightDataIncomplete
from src.domain.flight_facts import (
    UNKNOWN_COUNTRY,
    AirportSnapshot,
    FlightSnapshot,
    airport_info,
    arrival_delay_hours,
    carrier_country,
    classify_disruption,
    country_alpha3,
    resolve_claim_facts,
)
from src.infrastructure.aviation import FlightRecord
from tests.conftest import make_flight_payload


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 9, 1, hour, minute, tzinfo=timezone.utc)


def _snapshot(
    status="landed", flight_iata="AF22", departure="CDG", arrival="JFK", **times
) -> FlightSnapshot:
    return FlightSnapshot(
        flight_iata=flight_iata,
        flight_date="2026-09-01",
        status=status,
        departure=AirportSnapshot(iata=departure),
        arrival=AirportSnapshot(iata=arrival, **times),
        airline_iata=flight_iata[:2],
    )


class TestReferenceData:
    @pytest.mark.parametrize(
        "iata, country",
        [("CDG", "FRA"), ("LHR", "GBR"), ("MAD", "ESP"), ("JFK", "USA"), ("DXB", "ARE")],
    )
    def test_airport_country(self, iata, country):
        assert airport_info(iata).country == country

    def test_airport_code_is_normalised(self):
        airport = airport_info(" cdg ")
        assert airport.iata == "CDG"
        assert 48.9 < airport.location.latitude < 49.1
        assert 2.4 < airport.location.longitude < 2.7

    def test_unknown_airport(self):
        assert airport_info("ZZX") is None
        assert airport_info("") is None
        assert airport_info(None) is None

    def test_alpha2_to_alpha3(self):
        assert country_alpha3("gb") == "GBR"
        assert country_alpha3("DE") == "DEU"
        assert country_alpha3("XX") is None
        assert country_alpha3("") is None

    def test_carrier_country(self):
        assert carrier_country("AF") == "FRA"
        assert carrier_country("ba") == "GBR"
        assert carrier_country("FR") == "IRL"
        assert carrier_country("XQ") is None
        assert carrier_country(None) is None


class TestArrivalDelay:
    def test_from_timestamps(self):
        arrival = AirportSnapshot(iata="JFK", scheduled=_at(12), actual=_at(15, 45))
        assert arrival_delay_hours(arrival) == 3.75

    def test_early_arrival_is_zero(self):
        arrival = AirportSnapshot(iata="JFK", scheduled=_at(12), actual=_at(11, 30))
        assert arrival_delay_hours(arrival) == 0.0

    def test_falls_back_to_delay_minutes(self):
        arrival = AirportSnapshot(iata="JFK", scheduled=_at(12), delay_minutes=200)
        assert arrival_delay_hours(arrival) == 3.33

    def test_unknown(self):
        assert arrival_delay_hours(AirportSnapshot(iata="JFK")) is None


class TestClassifyDisruption:
    def test_cancelled(self):
        assert classify_disruption(_snapshot(status="cancelled")) == Cancellation()

    def test_landed_late(self):
        snapshot = _snapshot(scheduled=_at(12), actual=_at(16, 30))
        assert classify_disruption(snapshot) == Delay(hours=4.5)

    def test_landed_on_time(self):
        snapshot = _snapshot(scheduled=_at(12), actual=_at(12))
        assert classify_disruption(snapshot) is None

    def test_scheduled_flight_has_no_disruption(self):
        snapshot = _snapshot(status="scheduled", scheduled=_at(12), actual=_at(16))
        assert classify_disruption(snapshot) is None


class TestResolveClaimFacts:
    def test_resolves_route_disruption_and_distance(self):
        facts = resolve_claim_facts(_snapshot(scheduled=_at(12), actual=_at(16)))
        assert facts.route == Route("FRA", "USA", "FRA")
        assert facts.disruption == Delay(hours=4.0)
        assert 5_800 < facts.distance_km < 5_900

    def test_carrier_falls_back_to_flight_number(self):
        snapshot = FlightSnapshot(
            flight_iata="BA458",
            flight_date="2026-09-01",
            status="cancelled",
            departure=AirportSnapshot(iata="LHR"),
            arrival=AirportSnapshot(iata="MAD"),
        )
        assert resolve_claim_facts(snapshot).route == Route("GBR", "ESP", "GBR")

    def test_unknown_carrier_on_eu_departure(self):
        facts = resolve_claim_facts(
            _snapshot(status="cancelled", flight_iata="XQ100", arrival="MAD")
        )
        assert facts.route.airline_country == UNKNOWN_COUNTRY
        result = check_eligibility(facts.route, facts.disruption, facts.distance_km)
        assert result.regulation == Regulation.EU261
        assert result.is_eligible

    def test_unknown_carrier_on_inbound_flight(self):
        snapshot = _snapshot(
            status="cancelled", flight_iata="XQ100", departure="DXB", arrival="LHR"
        )
        with pytest.raises(FlightDataIncomplete, match="airline_country"):
            resolve_claim_facts(snapshot)

    def test_unknown_airport(self):
        with pytest.raises(FlightDataIncomplete, match="unknown arrival airport"):
            resolve_claim_facts(_snapshot(status="cancelled", arrival="ZZX"))

    def test_no_disruption(self):
        with pytest.raises(FlightDataIncomplete, match="no disruption"):
            resolve_claim_facts(_snapshot(scheduled=_at(12), actual=_at(12)))


class TestFromAviationStackPayload:
    def _evaluate(self, payload):
        facts = resolve_claim_facts(FlightRecord.model_validate(payload).to_snapshot())
        return check_eligibility(facts.route, facts.disruption, facts.distance_km)

    def test_paris_new_york_delay_is_long_haul_eu261(self):
        result = self._evaluate(make_flight_payload())
        assert result.is_eligible
        assert result.amount == 600
        assert result.regulation == Regulation.EU261
        assert result.reason == "Flight delayed by 4.5 hours"

    def test_feed_delay_minutes_without_actual_time(self):
        # Only the provider's own fields: no coordinates, no airline country
        payload = make_flight_payload(actual_arrival=None, arrival_delay=300)
        assert "latitude" not in payload["arrival"]
        assert set(payload["airline"]) == {"name", "iata", "icao"}

        result = self._evaluate(payload)
        assert result.is_eligible
        assert result.amount == 600
        assert result.currency == "EUR"
        assert result.regulation == Regulation.EU261
        assert result.reason == "Flight delayed by 5 hours"

    def test_london_madrid_cancellation_is_uk261(self):
        result = self._evaluate(
            make_flight_payload(
                flight_iata="BA458",
                status="cancelled",
                departure="LHR",
                arrival="MAD",
                actual_arrival=None,
            )
        )
        assert result.is_eligible
        assert result.amount == 220
        assert result.regulation == Regulation.UK261
