"""Access to the public seed stored inside a packed Kyber public key.

A packed public key is the serialized polynomial vector, which takes
``polyvecbytes`` bytes, followed by the ``symbytes`` bytes of the seed
from which the public matrix is generated.
"""

from __future__ import annotations

from proprf.genmatrix import KyberParams, params_for


def _seed_bounds(params: KyberParams) -> tuple[int, int]:
    start = params.polyvecbytes
    return start, start + params.symbytes


def _check_pk(pk: bytes, params: KyberParams) -> None:
    _, end = _seed_bounds(params)
    if len(pk) < end:
        raise ValueError(
            f"packed public key must hold at least {end} bytes, got {len(pk)}"
        )


def return_seed(pk: bytes, k: int = 3) -> bytes:
    """Return the public seed carried by the packed public key ``pk``."""
    params = params_for(k)
    pk = bytes(pk)
    _check_pk(pk, params)
    start, end = _seed_bounds(params)
    return pk[start:end]


def set_seed(pk: bytes, seed: bytes, k: int = 3) -> bytes:
    """Return a copy of ``pk`` whose public seed is replaced by ``seed``."""
    params = params_for(k)
    pk = bytes(pk)
    seed = bytes(seed)
    _check_pk(pk, params)
    if len(seed) != params.symbytes:
        raise ValueError(
            f"seed must be {params.symbytes} bytes, got {len(seed)}"
        )
    start, end = _seed_bounds(params)
    return pk[:start] + seed + pk[end:]