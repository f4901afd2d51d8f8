# Copyright (C) 2018 DataStorm
#
# This file is part of ZCell.
#
# ZCell is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# ZCell is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# A copy of the GNU General Public License is available in the LICENSE
# file or at <http://www.gnu.org/licenses/>.
"""
Randomized self-check and benchmarks of the cell codecs.

    $ zcell-bench                  # run the self-check
    $ BENCH=1 zcell-bench          # run the benchmarks
    $ SEED=42 N=1000 zcell-bench

The environment variables SEED, N and BENCH can be overridden with the
--seed, --count and --bench options.
"""
import argparse
import logging
import os
import sys
import time

import numpy
import toolz

from . import cell, hexstr

logger = logging.getLogger(__name__)

TOLERANCE = 1e-5
BELOW = -0.0000001
ABOVE = 1.0000001

# Positions (modulo 1000) at which each axis gets an out-of-range value,
# to exercise clamping.
OUT_OF_RANGE = (
    {543: BELOW, 643: ABOVE},
    {264: BELOW, 129: ABOVE},
    {812: BELOW, 362: ABOVE},
    {912: BELOW, 429: ABOVE},
)

CODECS = {
    "xy": (cell.encode_xy, cell.decode_xy, cell.compare_xy,
           hexstr.xy_to_string, hexstr.xy_from_string),
    "xyz": (cell.encode_xyz, cell.decode_xyz, cell.compare_xyz,
            hexstr.xyz_to_string, hexstr.xyz_from_string),
    "xyzm": (cell.encode_xyzm, cell.decode_xyzm, cell.compare_xyzm,
             hexstr.xyzm_to_string, hexstr.xyzm_from_string),
}


class CheckFailed(AssertionError):
    pass


def random_points(rng, count, ndims):
    """Random points in [0, 1) with out-of-range values injected."""
    points = rng.random((count, ndims))
    for axis, overrides in enumerate(OUT_OF_RANGE[:ndims]):
        for pos, value in overrides.items():
            points[pos::1000, axis] = value
    return points


def check(name, points):
    """Run the round-trip checks of one codec over `points`."""
    encode, decode, compare, to_string, from_string = CODECS[name]
    for point in points:
        c = encode(*point)
        decoded = decode(c)
        if not all(abs(p - d) < TOLERANCE for p, d in zip(point, decoded)):
            raise CheckFailed("{}: {} decoded to {}".format(
                name, tuple(point), decoded))
        c2 = from_string(to_string(c))
        if compare(c, c2) != 0:
            raise CheckFailed("{}: {!r} parsed back to {!r}".format(
                name, c, c2))


def bench(label, count, fnc, args):
    """Time `fnc` over `args` and print a summary line."""
    begin = time.perf_counter()
    for arg in args:
        fnc(*arg)
    elapsed = time.perf_counter() - begin
    print("{:<14} {} ops in {:.3f} secs, {:.0f} ns/op, {:.0f} op/sec".format(
        label, count, elapsed, elapsed / count * 1e9, count / elapsed))


def run_benchmarks(rng, count):
    for ndims, name in enumerate(CODECS, start=2):
        encode, decode = CODECS[name][:2]
        points = rng.random((count, ndims)).tolist()
        cells = [(encode(*p),) for p in points]
        bench("{} encode".format(name), count, encode, points)
        bench("{} decode".format(name), count, decode, cells)


def run_checks(rng, count, chunk_size=100000):
    for ndims, name in enumerate(CODECS, start=2):
        logger.info("Checking %s", name)
        points = random_points(rng, count, ndims).tolist()
        for chunk in toolz.partition_all(chunk_size, points):
            check(name, chunk)


def parse_args(argv=None, environ=os.environ):
    parser = argparse.ArgumentParser(
        prog="zcell-bench", description=__doc__.splitlines()[1])
    parser.add_argument(
        "--seed", type=int, default=int(environ.get("SEED", time.time())),
        help="random seed (env SEED, defaults to the current time)")
    parser.add_argument(
        "--count", type=int, default=int(environ.get("N", 1000000)),
        help="number of random points (env N, defaults to 1000000)")
    parser.add_argument(
        "--bench", action="store_true", default=bool(environ.get("BENCH")),
        help="run the benchmarks instead of the checks (env BENCH)")
    args = parser.parse_args(argv)
    if args.count <= 0:
        parser.error("count must be positive, got {}".format(args.count))
    return args


def main(argv=None):
    logging.basicConfig(level=logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    print("seed={}, count={}".format(args.seed, args.count))
    rng = numpy.random.default_rng(args.seed)
    if args.bench:
        print("Running cell benchmarks...")
        run_benchmarks(rng, args.count)
        return 0
    print("Running cell tests...")
    try:
        run_checks(rng, args.count)
    except CheckFailed as exc:
        logger.error("Check failed: %s", exc)
        print("FAILED")
        return 1
    print("PASSED")
    return 0


if __name__ == "__main__":
    sys.exit(main())
