"""
Shared test fixtures.

AviationStack is replaced by an ``httpx.MockTransport`` so the real client,
payload models and resolver all run without network access.
"""

from datetime import date, timedelta
from typing import AsyncGenerator, Optional

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.api.dependencies import get_aviation_client
from src.infrastructure.aviation import AviationStackClient

AVIATION_URL = "http://aviation.test/v1/flights"

FLIGHT_DATE = (date.today() - timedelta(days=30)).isoformat()

AIRPORTS = {
    "CDG": {"airport": "Charles De Gaulle", "timezone": "Europe/Paris", "icao": "LFPG"},
    "JFK": {"airport": "John F Kennedy International", "timezone": "America/New_York", "icao": "KJFK"},
    "LHR": {"airport": "Heathrow", "timezone": "Europe/London", "icao": "EGLL"},
    "MAD": {"airport": "Adolfo Suarez Madrid-Barajas", "timezone": "Europe/Madrid", "icao": "LEMD"},
    "DXB": {"airport": "Dubai", "timezone": "Asia/Dubai", "icao": "OMDB"},
}

AIRLINES = {
    "AF": {"name": "Air France", "icao": "AFR"},
    "BA": {"name": "British Airways", "icao": "BAW"},
    "EK": {"name": "Emirates", "icao": "UAE"},
    "XQ": {"name": "SunExpress", "icao": "SXS"},
}


def _airport_block(iata: str, scheduled: str, actual, delay) -> dict:
    return {
        **AIRPORTS[iata],
        "iata": iata,
        "terminal": "1",
        "gate": None,
        "delay": delay,
        "scheduled": scheduled,
        "estimated": scheduled,
        "actual": actual,
        "estimated_runway": None,
        "actual_runway": actual,
    }


def make_flight_payload(
    *,
    flight_iata: str = "AF22",
    status: str = "landed",
    departure: str = "CDG",
    arrival: str = "JFK",
    scheduled_arrival: str = "T12:00:00+00:00",
    actual_arrival: Optional[str] = "T16:30:00+00:00",
    arrival_delay: Optional[int] = None,
) -> dict:
    """One element of AviationStack's ``data`` array, as /v1/flights sends it."""
    carrier = flight_iata[:2]
    return {
        "flight_date": FLIGHT_DATE,
        "flight_status": status,
        "departure": _airport_block(
            departure,
            f"{FLIGHT_DATE}T04:00:00+00:00",
            f"{FLIGHT_DATE}T04:10:00+00:00",
            10,
        ),
        "arrival": {
            **_airport_block(
                arrival,
                f"{FLIGHT_DATE}{scheduled_arrival}",
                f"{FLIGHT_DATE}{actual_arrival}" if actual_arrival else None,
                arrival_delay,
            ),
            "baggage": None,
        },
        "airline": {"iata": carrier, **AIRLINES[carrier]},
        "flight": {
            "number": flight_iata[2:],
            "iata": flight_iata,
            "icao": f"{AIRLINES[carrier]['icao']}{flight_iata[2:]}",
            "codeshared": None,
        },
        "aircraft": None,
        "live": None,
    }


class FakeAviationStack:
    """Records requests and answers with a configurable payload."""

    def __init__(self):
        self.status_code = 200
        self.payload = {"data": []}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest.fixture
def aviation_stack() -> FakeAviationStack:
    return FakeAviationStack()


@pytest_asyncio.fixture
async def aviation_client(
    aviation_stack: FakeAviationStack,
) -> AsyncGenerator[AviationStackClient, None]:
    http = httpx.AsyncClient(transport=httpx.MockTransport(aviation_stack.handler))
    yield AviationStackClient(http, base_url=AVIATION_URL, access_key="test-key")
    await http.aclose()


@pytest_asyncio.fixture
async def client(
    aviation_client: AviationStackClient,
) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient against the app, with the flight provider mocked."""
    app = create_app()
    app.dependency_overrides[get_aviation_client] = lambda: aviation_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
