"""
Demonstration: prove, serialise, deserialise and verify one DLog proof.

    python -m dlog_proof --session-id sid --party-id 1 -v
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional

from .curve import SecretScalar, Point, zeroized
from .errors import DecodeError
from .proof import DLogProof

logger = logging.getLogger("dlog_proof")


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dlog-proof-demo",
        description="Create and verify a Schnorr proof of knowledge of a "
                    "discrete log on secp256k1.",
    )
    parser.add_argument("--session-id", default="sid",
                        help="session identifier bound into the challenge")
    parser.add_argument("--party-id", type=int, default=1,
                        help="party index bound into the challenge")
    parser.add_argument("--json-only", action="store_true",
                        help="print only the serialised proof")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="enable debug logging")
    args = parser.parse_args(argv)
    if not 0 <= args.party_id < 2 ** 256:
        parser.error("--party-id must be in [0, 2**256)")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sid = args.session_id.encode("utf-8")
    pid = args.party_id

    x = SecretScalar.random()
    with zeroized(x):
        Y = Point.from_scalar(x)
        start = time.perf_counter()
        proof = DLogProof.prove(x, Y, session_id=sid, party_id=pid)
        prove_ms = (time.perf_counter() - start) * 1000

    blob = proof.to_json()
    if args.json_only:
        print(blob)
    else:
        print(f"public point:       {Y.to_bytes().hex()}")
        print(f"proof time:         {prove_ms:.3f} ms")
        print(f"serialised proof:   {blob}")

    try:
        received = DLogProof.from_json(blob)
    except DecodeError as exc:
        logger.error("could not decode proof: %s", exc)
        return 2
    if received != proof:
        logger.error("proof changed across serialisation")
        return 2

    start = time.perf_counter()
    verdict = received.check(Y, session_id=sid, party_id=pid)
    verify_ms = (time.perf_counter() - start) * 1000

    if not args.json_only:
        print(f"commitment x:       0x{received.commitment.x:064x}")
        print(f"commitment y odd:   {bool(received.commitment.y & 1)}")
        print(f"verify time:        {verify_ms:.3f} ms")
        if verdict.accepted:
            print("DLog proof is correct")
        else:
            print(f"DLog proof is not correct ({verdict.name})")
    return 0 if verdict.accepted else 1


if __name__ == "__main__":
    sys.exit(main())
