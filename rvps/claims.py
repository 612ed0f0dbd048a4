"""Flattening of parsed TEE evidence claims into dotted keys."""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Any

from rvps.message import RvpsError

_UNPREFIXED_KEYS = ("report_data", "init_data")


class Tee(Enum):
    """The trusted execution environments evidence can come from."""

    AZ_SNP_VTPM = "azsnpvtpm"
    AZ_TDX_VTPM = "aztdxvtpm"
    CCA = "cca"
    CSV = "csv"
    SAMPLE = "sample"
    SEV = "sev"
    SGX = "sgx"
    SNP = "snp"
    TDX = "tdx"


def _flatten(value: Any, prefix: str) -> Iterator[tuple[str, Any]]:
    if isinstance(value, dict):
        for key, child in value.items():
            yield from _flatten(child, f"{prefix}.{key}")
    elif isinstance(value, list):
        for position, child in enumerate(value):
            yield from _flatten(child, f"{prefix}.{position}")
    else:
        yield prefix, value


def flatten_claims(tee: Tee | str, claims: Any) -> dict[str, Any]:
    """Flatten nested claims into '.'-joined keys prefixed with the TEE name.

    `report_data` and `init_data` stay at the top level without the prefix
    and default to an empty string when absent.
    """
    try:
        tee_name = Tee(tee).value
    except ValueError:
        raise RvpsError(f"unknown tee `{tee}`") from None
    if not isinstance(claims, dict):
        raise RvpsError("input claims must be a map")

    flattened: dict[str, Any] = {}
    for key, value in claims.items():
        if key in _UNPREFIXED_KEYS:
            continue
        flattened.update(_flatten(value, f"{tee_name}.{key}"))
    for key in _UNPREFIXED_KEYS:
        flattened[key] = claims.get(key, "")
    return flattened