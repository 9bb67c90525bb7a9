from datetime import datetime, timedelta, timezone

import pytest

from app.taaza.core.error_catalog import InvalidChannel
from app.taaza.services.order_ids import OrderIdGenerator, generate, parse_order_id


def test_admin_order_id_format():
    now = datetime(2024, 3, 5, 10, 30, tzinfo=timezone.utc)
    assert generate("admin", 7, now) == "ADM-20240305-00007"


def test_customer_sequence_is_never_truncated():
    now = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
    assert generate("customer", 100000, now) == "CUS-20240101-100000"


def test_date_segment_uses_utc_day():
    ist = timezone(timedelta(hours=5, minutes=30))
    # 2024-03-06 01:00 IST is still 2024-03-05 in UTC.
    now = datetime(2024, 3, 6, 1, 0, tzinfo=ist)
    assert generate("admin", 1, now) == "ADM-20240305-00001"


def test_naive_datetime_is_taken_as_utc():
    assert generate("customer", 42, datetime(2024, 12, 31, 23, 59)) == "CUS-20241231-00042"


def test_unknown_channel_is_rejected():
    with pytest.raises(InvalidChannel) as excinfo:
        generate("kiosk", 1, datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert excinfo.value.channel == "kiosk"
    assert excinfo.value.error.code == "INVALID_CHANNEL"


def test_generator_width_override():
    generator = OrderIdGenerator(width=3)
    assert generator.generate("admin", 7, datetime(2024, 3, 5)) == "ADM-20240305-007"


def test_parse_order_id_round_trip():
    parsed = parse_order_id("ADM-20240305-00007")
    assert parsed is not None
    assert parsed.channel == "admin"
    assert parsed.sequence == 7
    assert parsed.issued_on.isoformat() == "2024-03-05"


@pytest.mark.parametrize("value", ["", "ADM-2024-1", "XYZ-20240305-00001", "ADM-20241345-00001"])
def test_parse_order_id_rejects_malformed(value):
    assert parse_order_id(value) is None
