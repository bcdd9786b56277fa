import dataclasses
from datetime import datetime, timezone

import pytest

from spanpaxos.messages import (
    ReplicateWriteRequest,
    ReplicateWriteResponse,
    SaveWriteRequest,
    SaveWriteResponse,
    ServiceError,
    Timestamp,
)


def test_epoch_is_zero():
    epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert Timestamp.from_datetime(epoch) == Timestamp(0, 0)
    assert Timestamp(0, 0).to_datetime() == epoch


@pytest.mark.parametrize(
    "value",
    [
        datetime(2024, 5, 17, 12, 30, 45, 123456, tzinfo=timezone.utc),
        datetime(1969, 12, 31, 23, 59, 59, 500000, tzinfo=timezone.utc),
        datetime(2000, 1, 1, tzinfo=timezone.utc),
    ],
)
def test_datetime_round_trip(value):
    stamp = Timestamp.from_datetime(value)
    assert stamp.to_datetime() == value
    assert 0 <= stamp.nanos < 1_000_000_000


def test_naive_datetime_is_utc():
    naive = datetime(2024, 1, 2, 3, 4, 5, 6)
    aware = naive.replace(tzinfo=timezone.utc)
    assert Timestamp.from_datetime(naive) == Timestamp.from_datetime(aware)


def test_timestamps_order_like_datetimes():
    earlier = Timestamp.from_datetime(datetime(2024, 1, 1, tzinfo=timezone.utc))
    later = Timestamp.from_datetime(datetime(2024, 1, 1, 0, 0, 1, tzinfo=timezone.utc))
    assert later.seconds == earlier.seconds + 1


@pytest.mark.parametrize("nanos", [-1, 1_000_000_000])
def test_nanos_out_of_range_rejected(nanos):
    with pytest.raises(ValueError):
        Timestamp(0, nanos)


def test_request_defaults_and_frozen():
    request = ReplicateWriteRequest(term_number=1, slot_number=2, entry="x")
    assert request.write_time is None
    assert request.lease_expiry_time is None
    with pytest.raises(dataclasses.FrozenInstanceError):
        request.entry = "y"


def test_response_fields():
    response = ReplicateWriteResponse(term_number=3, slot_number=4, follower_id="abc")
    assert (response.term_number, response.slot_number, response.follower_id) == (3, 4, "abc")


def test_save_write_messages():
    assert SaveWriteRequest(payload="data").payload == "data"
    assert SaveWriteResponse() == SaveWriteResponse()


def test_service_error_defaults_to_internal():
    error = ServiceError("boom")
    assert str(error) == "boom"
    assert error.message == "boom"
    assert error.code == "internal"
    with pytest.raises(ServiceError):
        raise ServiceError("failed", code="unavailable")