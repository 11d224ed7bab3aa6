from .inst import WeierstrassGroup, make_p256_group, make_secp256k1_group

__all__ = ["WeierstrassGroup", "make_p256_group", "make_secp256k1_group"]
