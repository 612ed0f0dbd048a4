from datetime import datetime, timezone

import pytest

from rvps.message import RvpsError
from rvps.reference_value import (
    REFERENCE_VALUE_VERSION,
    HashValuePair,
    ReferenceValue,
    TrustedDigest,
)

EPOCH = datetime(1970, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


def _sample():
    rv = ReferenceValue(version="1.0.0", name="artifact", expired=EPOCH)
    return rv.add_hash_value("sha512", "123")


def test_reference_value_serialize():
    rv = _sample()
    assert rv.version == "1.0.0"
    expected = {
        "expired": "1970-01-01T00:00:00Z",
        "name": "artifact",
        "version": "1.0.0",
        "hash-value": [{"alg": "sha512", "value": "123"}],
    }
    assert rv.to_dict() == expected


def test_reference_value_deserialize():
    rv = _sample()
    assert rv.version == "1.0.0"
    text = """{
        "expired": "1970-01-01T00:00:00Z",
        "name": "artifact",
        "version": "1.0.0",
        "hash-value": [{
            "alg": "sha512",
            "value": "123"
        }]
    }"""
    assert ReferenceValue.from_json(text) == rv


def test_json_round_trip():
    rv = _sample().add_hash_value("sha256", "abc")
    assert ReferenceValue.from_json(rv.to_json()) == rv


def test_new_value_has_whole_seconds_and_default_version():
    rv = ReferenceValue()
    assert rv.expired.microsecond == 0
    assert rv.version == REFERENCE_VALUE_VERSION
    assert rv.hash_value == []


def test_expired_is_truncated_to_seconds():
    rv = ReferenceValue(expired=datetime(2030, 1, 2, 3, 4, 5, 678, tzinfo=timezone.utc))
    assert rv.expired == datetime(2030, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_missing_version_uses_default():
    rv = ReferenceValue.from_dict(
        {"name": "artifact", "expired": "1970-01-01T00:00:00Z", "hash-value": []}
    )
    assert rv.version == REFERENCE_VALUE_VERSION
    assert rv.expired == EPOCH


@pytest.mark.parametrize(
    "data",
    [
        {"name": "a", "hash-value": []},
        {"name": "a", "expired": None, "hash-value": []},
        {"name": "a", "expired": "not a time", "hash-value": []},
        {"expired": "1970-01-01T00:00:00Z", "hash-value": []},
        {"name": "a", "expired": "1970-01-01T00:00:00Z"},
    ],
)
def test_invalid_reference_value_raises(data):
    with pytest.raises(RvpsError):
        ReferenceValue.from_dict(data)


def test_invalid_json_raises():
    with pytest.raises(RvpsError):
        ReferenceValue.from_json("{")


def test_hash_value_pair_round_trip():
    pair = HashValuePair("sha512", "123")
    assert HashValuePair.from_dict(pair.to_dict()) == pair


def test_trusted_digest_to_dict():
    digest = TrustedDigest(name="artifact", hash_values=["123"])
    assert digest.to_dict() == {"name": "artifact", "hash_values": ["123"]}
    assert TrustedDigest() == TrustedDigest(name="", hash_values=[])