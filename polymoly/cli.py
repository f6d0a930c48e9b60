#!/usr/bin/env python3
#
#   Command line front end: polynomial arithmetic on the command line
#

import argparse
import logging
import sys
from enum import Enum
from typing import List, Optional

from polymoly.euclid import extended_euclidean, extended_euclidean_int
from polymoly.mathml import render_polynomial
from polymoly.polynomial import Polynomial, PolynomialRing
from polymoly.rings import RR, ZZ, IntegersModuloN, IntegersModuloP, Ring

_logger = logging.getLogger(__name__)

class CliError(Exception):
    pass

class OperandRingType(Enum):
    NORMAL = "normal"
    FIELD = "field"
    EUCLIDEAN = "euclidean"

class Operation(Enum):
    SHOW = "show"
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    GCD = "gcd"

    @property
    def operand_ring_type(self) -> OperandRingType:
        if self is Operation.DIV:
            return OperandRingType.FIELD
        if self is Operation.GCD:
            return OperandRingType.EUCLIDEAN
        return OperandRingType.NORMAL

    @property
    def binary(self) -> bool:
        return self is not Operation.SHOW

    def __str__(self):
        return self.value

RING_CHOICES = ("R", "Z", "Zn", "Zp")

def build_ring(name : str, modulus : Optional[int]) -> Ring:
    if name == "R":
        return RR
    if name == "Z":
        return ZZ

    if modulus is None:
        raise CliError(f"ring {name} needs --modulus")
    if modulus < 1:
        raise CliError(f"modulus must be positive, got {modulus}")

    if name == "Zn":
        return IntegersModuloN(modulus)
    ring = IntegersModuloP.checked_new(modulus)
    if ring is None:
        raise CliError(f"{modulus} is not prime, Z/{modulus}Z is not a field")
    return ring

def check_operation(op : Operation, ring : Ring):
    kind = op.operand_ring_type
    if kind is OperandRingType.FIELD and not ring.is_field:
        raise CliError(f"{op} needs a field, {ring} is not one")
    # gcd works on the integers themselves or on polynomials over a field
    if kind is OperandRingType.EUCLIDEAN and not (ring.is_field or ring.is_euclidean):
        raise CliError(f"{op} is not available over {ring}")

def parse_operand(ring : Ring, text : str) -> Polynomial:
    poly = Polynomial.parse(ring, text)
    if poly is None:
        raise CliError(f"couldn't parse polynomial {text!r} over {ring}")
    return poly

def run(op : Operation, ring : Ring, lhs : str, rhs : Optional[str], mathml : bool = False) -> List[str]:
    """
    Performs `op` and returns the output lines
    """
    check_operation(op, ring)
    if op.binary and rhs is None:
        raise CliError(f"{op} needs two operands")

    render = render_polynomial if mathml else str

    if op is Operation.GCD and ring == ZZ:
        a, b = ZZ.parse_elem(lhs.strip()), ZZ.parse_elem(rhs.strip())
        if a is None or b is None:
            raise CliError(f"gcd over {ring} needs two integers")
        result = extended_euclidean_int(a, b)
        if result is None:
            raise CliError("gcd of 0 and 0 is undefined")
        g, s, t = result
        return [f"gcd = {g}", f"s = {s}", f"t = {t}"]

    f = parse_operand(ring, lhs)
    if op is Operation.SHOW:
        return [render(f)]

    g = parse_operand(ring, rhs)
    _logger.debug("%s over %s: (%s, %s)", op, ring, f, g)

    if op is Operation.ADD:
        return [render(f + g)]
    if op is Operation.SUB:
        return [render(f - g)]
    if op is Operation.MUL:
        return [render(f * g)]

    if op is Operation.DIV:
        result = f.polynomial_division(g)
        if result is None:
            raise CliError("division by the zero polynomial")
        q, r = result
        return [f"q = {render(q)}", f"r = {render(r)}"]

    result = extended_euclidean(PolynomialRing(ring), f, g)
    if result is None:
        raise CliError("gcd of 0 and 0 is undefined")
    d, s, t = result
    return [f"gcd = {render(d)}", f"s = {render(s)}", f"t = {render(t)}"]

def main(argv : Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="polymoly", description="Arithmetic on polynomials over rings")
    parser.add_argument("operation", type=Operation, choices=list(Operation), help="operation to perform")
    parser.add_argument("lhs", help="left-hand side, e.g. \"3x^2 + -1x + 4\"")
    parser.add_argument("rhs", nargs="?", help="right-hand side (all operations except show)")
    parser.add_argument("--ring", choices=RING_CHOICES, default="R", help="coefficient ring (default: R)")
    parser.add_argument("--modulus", type=int, help="modulus for Zn and Zp")
    parser.add_argument("--mathml", action="store_true", help="render polynomials as MathML")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    try:
        ring = build_ring(args.ring, args.modulus)
        lines = run(args.operation, ring, args.lhs, args.rhs, mathml=args.mathml)
    except CliError as ex:
        print(f"error: {ex}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0

########################################################################################################################
#   Unit Tests
########################################################################################################################

import contextlib
import io
import unittest

class TestCli(unittest.TestCase):

    def invoke(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_show(self):
        self.assertEqual(self.invoke("show", "0.5x+-3x^2+5x^1+1x^0"), (0, "-3x^2 + 5.5x + 1\n", ""))

    def test_arithmetic(self):
        self.assertEqual(self.invoke("add", "x+1", "x^2+-1", "--ring", "Z")[1], "x^2 + x\n")
        self.assertEqual(self.invoke("sub", "x+1", "x+1", "--ring", "Z")[1], "0\n")
        self.assertEqual(self.invoke("mul", "x+1", "x+4", "--ring", "Zn", "--modulus", "5")[1], "x^2 + 4\n")

    def test_div(self):
        self.assertEqual(self.invoke("div", "x^3+x+1", "x+-1")[1], "q = x^2 + x + 2\nr = 3\n")
        code, _, err = self.invoke("div", "x", "0")
        self.assertEqual(code, 1)
        self.assertIn("zero polynomial", err)

    def test_gcd(self):
        self.assertEqual(self.invoke("gcd", "48", "-30", "--ring", "Z")[1], "gcd = 6\ns = 2\nt = 3\n")
        self.assertEqual(self.invoke("gcd", "x^2+-3x+2", "x^2+-4x+3")[1], "gcd = x + -1\ns = 1\nt = -1\n")
        self.assertEqual(self.invoke("gcd", "0", "0", "--ring", "Z")[0], 1)

    def test_ring_errors(self):
        self.assertEqual(self.invoke("div", "x", "x", "--ring", "Z")[0], 1)
        self.assertEqual(self.invoke("gcd", "x", "x", "--ring", "Zn", "--modulus", "6")[0], 1)
        code, _, err = self.invoke("add", "x", "x", "--ring", "Zp", "--modulus", "7909")
        self.assertEqual(code, 1)
        self.assertIn("not prime", err)
        self.assertEqual(self.invoke("add", "x", "x", "--ring", "Zp")[0], 1)

    def test_operand_errors(self):
        code, _, err = self.invoke("add", "x^", "x")
        self.assertEqual(code, 1)
        self.assertIn("couldn't parse", err)
        self.assertEqual(self.invoke("add", "x")[0], 1)

    def test_mathml(self):
        code, out, _ = self.invoke("show", "x^2+1", "--ring", "Zp", "--modulus", "7", "--mathml")
        self.assertEqual(code, 0)
        self.assertEqual(out, "<math><msup><mi>x</mi><mn>2</mn></msup><mo>+</mo><mn>1</mn></math>\n")

    def test_operation_kinds(self):
        self.assertIs(Operation.DIV.operand_ring_type, OperandRingType.FIELD)
        self.assertIs(Operation.GCD.operand_ring_type, OperandRingType.EUCLIDEAN)
        self.assertIs(Operation.ADD.operand_ring_type, OperandRingType.NORMAL)

if __name__ == "__main__":
    raise SystemExit(main())
