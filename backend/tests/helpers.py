"""iCal samples and fakes shared by the test modules."""
from datetime import datetime, timezone

import httpx

from hostly.services.ical_fetcher import IcalFetcher


def build_ics(*events: str) -> str:
    """Wrap VEVENT/VTODO blocks in a VCALENDAR envelope."""
    lines = [
        "BEGIN:VCALENDAR",
        "PRODID:-//Airbnb Inc//Hosting Calendar 1.0//EN",
        "CALSCALE:GREGORIAN",
        "VERSION:2.0",
    ]
    for event in events:
        lines.extend(event.strip().splitlines())
    lines.append("END:VCALENDAR")
    return "\r\n".join(lines) + "\r\n"


RESERVED_HM = """
BEGIN:VEVENT
DTSTAMP:20260110T120000Z
DTSTART;VALUE=DATE:20260201
DTEND;VALUE=DATE:20260205
UID:1418fb94e984-hm1234@airbnb.com
SUMMARY:Reserved - Airbnb (HM1234)
DESCRIPTION:Reservation URL: https://www.airbnb.com/hosting/reservations/details/HM1234
END:VEVENT
"""

BLOCKED = """
BEGIN:VEVENT
DTSTAMP:20260110T120000Z
DTSTART;VALUE=DATE:20260210
DTEND;VALUE=DATE:20260215
UID:1418fb94e984-blocked@airbnb.com
SUMMARY:Airbnb (Not available)
END:VEVENT
"""

RESERVED_JANE = """
BEGIN:VEVENT
DTSTAMP:20260110T120000Z
DTSTART;VALUE=DATE:20260220
DTEND;VALUE=DATE:20260223
UID:1418fb94e984-jane@airbnb.com
SUMMARY:Reserved - Jane Doe
END:VEVENT
"""

SAME_DAY = """
BEGIN:VEVENT
DTSTAMP:20260110T120000Z
DTSTART;VALUE=DATE:20260301
DTEND;VALUE=DATE:20260301
UID:1418fb94e984-sameday@airbnb.com
SUMMARY:Reserved - Same Day
END:VEVENT
"""

TODO = """
BEGIN:VTODO
DTSTAMP:20260110T120000Z
UID:todo-1@example.com
SUMMARY:Reserved - Clean the flat
END:VTODO
"""

SAMPLE_FEED = build_ics(RESERVED_HM, BLOCKED, RESERVED_JANE, SAME_DAY, TODO)
EMPTY_FEED = build_ics()


def make_fetcher(handler) -> IcalFetcher:
    """IcalFetcher wired to an httpx.MockTransport, no retry delay."""
    return IcalFetcher(
        timeout=5.0,
        max_attempts=1,
        backoff_seconds=0,
        transport=httpx.MockTransport(handler),
    )


def feed_handler(feeds: dict):
    """
    MockTransport handler serving feeds by URL.

    A value of type int is returned as that HTTP status with no body.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        body = feeds.get(str(request.url))
        if body is None:
            return httpx.Response(404, text="Not Found")
        if isinstance(body, int):
            return httpx.Response(body, text="error")
        return httpx.Response(200, text=body)

    return handler


class FixedClock:
    """Callable clock returning a controllable UTC timestamp."""

    def __init__(self, now: datetime = datetime(2026, 1, 15, 9, 0, tzinfo=timezone.utc)):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


