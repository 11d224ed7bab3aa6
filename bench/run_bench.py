from __future__ import annotations

import argparse
import csv
import logging
import os
import secrets
import time
from dataclasses import dataclass
from typing import Any, Callable

from groupcrypt import (
    decode_points,
    elgamal_decrypt,
    elgamal_encrypt,
    encode_points,
    schnorr_sign,
    schnorr_verify,
)
from groupcrypt.interfaces import Group

from instantiations import GROUPS, make_group

logger = logging.getLogger("groupcrypt.bench")

FIELDNAMES = ["group", "op", "warmup", "rep", "elapsed_ns", "msg_len_bytes", "out_len_bytes"]


@dataclass(frozen=True)
class BenchConfig:
    group: str
    warmup: int
    reps: int
    msg_len: int
    list_len: int
    out: str


def _timed_ns(fn: Callable[[], object]) -> int:
    t0 = time.perf_counter_ns()
    fn()
    return time.perf_counter_ns() - t0


def _write_row(
    w: csv.DictWriter,
    group_name: str,
    op: str,
    warmup: int,
    rep: int,
    elapsed_ns: int,
    msg_len: int,
    out_len: int,
) -> None:
    w.writerow(
        {
            "group": group_name,
            "op": op,
            "warmup": warmup,
            "rep": rep,
            "elapsed_ns": elapsed_ns,
            "msg_len_bytes": msg_len,
            "out_len_bytes": out_len,
        }
    )


def _run_generic(cfg: BenchConfig, group: Group[Any]) -> None:
    out_dir = os.path.dirname(cfg.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    x = group.pick_scalar(secrets.token_bytes)
    P = group.mul(x)
    msg = secrets.token_bytes(cfg.msg_len)
    can_embed = group.embed_len() > 0
    points = [group.mul(group.pick_scalar(secrets.token_bytes)) for _ in range(cfg.list_len)]

    with open(cfg.out, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=FIELDNAMES)
        w.writeheader()

        for i in range(cfg.warmup + cfg.reps):
            is_warmup = 1 if i < cfg.warmup else 0
            rep = i if is_warmup else i - cfg.warmup

            def row(op: str, elapsed: int, out_len: int) -> None:
                _write_row(w, group.name, op, is_warmup, rep, elapsed, cfg.msg_len, out_len)

            # ------------------------------------------------------------
            # Schnorr
            # ------------------------------------------------------------
            holder: dict = {}

            def _do_sign():
                holder["sig"] = schnorr_sign(group, msg, x)

            row("Sign", _timed_ns(_do_sign), len(holder["sig"]))

            def _do_verify():
                holder["err"] = schnorr_verify(group, msg, P, holder["sig"])

            row("Verify", _timed_ns(_do_verify), 0)
            if holder["err"] is not None:
                raise RuntimeError(f"signature failed to verify: {holder['err']}")

            # ------------------------------------------------------------
            # ElGamal (groups with embedding only)
            # ------------------------------------------------------------
            if can_embed:

                def _do_encrypt():
                    holder["ct"] = elgamal_encrypt(group, P, msg)

                t_enc = _timed_ns(_do_encrypt)
                ct = holder["ct"]
                row("Encrypt", t_enc, len(ct.to_bytes(group)))

                def _do_decrypt():
                    holder["pt"] = elgamal_decrypt(group, x, ct.K, ct.C)

                row("Decrypt", _timed_ns(_do_decrypt), 0)
                plain, err = holder["pt"]
                if err is not None or plain + ct.remainder != msg:
                    raise RuntimeError(f"decryption mismatch: {err}")

            # ------------------------------------------------------------
            # Point-list codec
            # ------------------------------------------------------------
            def _do_encode():
                holder["wire"] = encode_points(group, points)

            row("EncodePoints", _timed_ns(_do_encode), len(holder["wire"]))

            def _do_decode():
                decode_points(holder["wire"], group.decode_point)

            row("DecodePoints", _timed_ns(_do_decode), 0)

    logger.info("wrote %d reps for %s to %s", cfg.reps, group.name, cfg.out)


def main() -> None:
    ap = argparse.ArgumentParser(description="groupcrypt benchmark harness (Schnorr / ElGamal / point lists).")

    ap.add_argument("--group", choices=sorted(GROUPS), default="p256", help="Group to benchmark")
    ap.add_argument("--warmup", type=int, default=20)
    ap.add_argument("--reps", type=int, default=200)
    ap.add_argument("--msg-len", type=int, default=16, help="Message length in bytes")
    ap.add_argument("--list-len", type=int, default=16, help="Points per encoded list")
    ap.add_argument("--out", type=str, default="bench/outputs/out.csv")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    cfg = BenchConfig(
        group=args.group,
        warmup=args.warmup,
        reps=args.reps,
        msg_len=args.msg_len,
        list_len=args.list_len,
        out=args.out,
    )

    _run_generic(cfg, make_group(cfg.group))


if __name__ == "__main__":
    main()
