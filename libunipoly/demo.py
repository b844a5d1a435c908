#!/usr/bin/env python3
#
#   Demonstration driver
#

"""
Prints a division, an evaluation and a derivative of a single precision polynomial. Run with --help for options.
"""

import argparse

import numpy as np

from libunipoly import opts
from libunipoly.logging import task
from libunipoly.polynomial import Polynomial

def run(argv=None):
    parser = argparse.ArgumentParser(description="Univariate polynomial arithmetic demo.")
    internal_opts = parser.add_argument_group("Internal parameters")
    opts.setup(internal_opts)
    args = parser.parse_args(argv)
    opts.read(args)

    a = Polynomial(np.array([1, 2, 3, 0], dtype=np.float32))
    b = Polynomial(np.array([1, 0, 1], dtype=np.float32))

    with task("demo"):
        q, r = a.div_rem(b)
        print("({0}) / ({1}) = ({1}) * ({2}) + {3}".format(
            a.to_display("ω"), b.to_display("ω"), q.to_display("ω"), r.to_display("ω")))

        x = np.complex64(1j)
        e = a.eval(x)
        print(f"{a.to_display('x')} = {e} for x = {x}")

        z = np.float32(1)
        d = a.eval_der(z, 2)
        print(f"({a.to_display('z')})'' = {d} for z = {z}")

if __name__ == '__main__':
    run()
