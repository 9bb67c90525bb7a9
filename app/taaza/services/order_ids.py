"""Human-readable order identifiers.

Format is ``{PREFIX}-{YYYYMMDD}-{SEQ}``. The date is the UTC calendar day the
number was issued on; SEQ comes from the channel counter, which never resets,
so the date segment is informational only.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone

from app.taaza.core.config import settings
from app.taaza.core.error_catalog import InvalidChannel

ADMIN_CHANNEL = "admin"
CUSTOMER_CHANNEL = "customer"

CHANNEL_PREFIXES: dict[str, str] = {
    ADMIN_CHANNEL: "ADM",
    CUSTOMER_CHANNEL: "CUS",
}

_ORDER_ID_PATTERN = re.compile(r"^(?P<prefix>[A-Z]+)-(?P<date>\d{8})-(?P<seq>\d+)$")


@dataclass(frozen=True)
class ParsedOrderId:
    prefix: str
    channel: str
    issued_on: date
    sequence: int


def channel_prefix(channel: str) -> str:
    try:
        return CHANNEL_PREFIXES[channel]
    except KeyError:
        raise InvalidChannel(channel) from None


def _utc_day(now: datetime) -> date:
    if now.tzinfo is None:
        return now.date()
    return now.astimezone(timezone.utc).date()


def generate(channel: str, sequence: int, now: datetime, *, width: int | None = None) -> str:
    prefix = channel_prefix(channel)
    pad = width if width is not None else settings.ORDER_SEQUENCE_WIDTH
    return f"{prefix}-{_utc_day(now):%Y%m%d}-{sequence:0{pad}d}"


def parse_order_id(order_id: str) -> ParsedOrderId | None:
    match = _ORDER_ID_PATTERN.match(order_id or "")
    if not match:
        return None
    channels = {prefix: channel for channel, prefix in CHANNEL_PREFIXES.items()}
    channel = channels.get(match["prefix"])
    if channel is None:
        return None
    try:
        issued_on = datetime.strptime(match["date"], "%Y%m%d").date()
    except ValueError:
        return None
    return ParsedOrderId(
        prefix=match["prefix"],
        channel=channel,
        issued_on=issued_on,
        sequence=int(match["seq"]),
    )


class OrderIdGenerator:
    def __init__(self, width: int | None = None) -> None:
        self.width = width

    def generate(self, channel: str, sequence: int, now: datetime) -> str:
        return generate(channel, sequence, now, width=self.width)
