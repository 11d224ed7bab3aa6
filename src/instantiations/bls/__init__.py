from .inst import BLS12381G1Group, make_bls_g1_group

__all__ = ["BLS12381G1Group", "make_bls_g1_group"]
