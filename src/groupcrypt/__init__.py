"""Schnorr signatures, ElGamal encryption and a point-list codec over abstract prime-order groups."""

from .codec import decode_points, encode_points
from .elgamal import Ciphertext, elgamal_decrypt, elgamal_encrypt
from .errors import (
    DecodeError,
    EmbeddingUnsupported,
    GroupCryptError,
    RandomnessFailure,
    VerificationFailure,
)
from .interfaces import Group, PointFactory, RandomSource, Xof
from .ro import ShakeXof, hash_to_scalar
from .schnorr import Signature, schnorr_sign, schnorr_verify

__all__ = [
    "Ciphertext",
    "DecodeError",
    "EmbeddingUnsupported",
    "Group",
    "GroupCryptError",
    "PointFactory",
    "RandomSource",
    "RandomnessFailure",
    "ShakeXof",
    "Signature",
    "VerificationFailure",
    "Xof",
    "decode_points",
    "elgamal_decrypt",
    "elgamal_encrypt",
    "encode_points",
    "hash_to_scalar",
    "schnorr_sign",
    "schnorr_verify",
]
