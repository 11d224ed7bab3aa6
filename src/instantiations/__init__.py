"""Concrete groups for groupcrypt, one sub-package per backend."""

from __future__ import annotations

from typing import Any, Callable, Dict

from groupcrypt.interfaces import Group

from .bls import make_bls_g1_group
from .weierstrass import make_p256_group, make_secp256k1_group

GROUPS: Dict[str, Callable[[], Group[Any]]] = {
    "p256": make_p256_group,
    "secp256k1": make_secp256k1_group,
    "bls12_381_g1": make_bls_g1_group,
}


def make_group(name: str) -> Group[Any]:
    try:
        factory = GROUPS[name]
    except KeyError:
        raise ValueError(f"Unsupported group={name}. Known: {', '.join(sorted(GROUPS))}.") from None
    return factory()
