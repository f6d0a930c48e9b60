#!/usr/bin/env python3
#
#   Dense univariate polynomials over an arbitrary coefficient ring
#

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

import numpy as np

from polymoly.rings import EuclideanRing, Ring

_logger = logging.getLogger(__name__)

_EXPONENT = re.compile(r"[0-9]+")

########################################################################################################################
#   Polynomial Rings
########################################################################################################################

class PolynomialRing(EuclideanRing):
    """
    The ring R[x] of polynomials with coefficients in `ring`.

    Polynomial rings nest, PolynomialRing(PolynomialRing(ZZ)) is Z[x][x]. Euclidean division is only available
    when `ring` is a field.
    """

    def __init__(self, ring : Ring):
        self.ring = ring

    def zero(self):
        return Polynomial.zero(self.ring)

    def one(self):
        return Polynomial.constant(self.ring, self.ring.one())

    def add(self, a, b):
        return a + b

    def neg(self, a):
        return -a

    def mul(self, a, b):
        return a * b

    def __call__(self, x):
        if isinstance(x, Polynomial) and x.ring == self.ring:
            return x.copy()
        return Polynomial.constant(self.ring, x)

    @property
    def is_euclidean(self):
        return self.ring.is_field

    def euclidean_function(self, a):
        return a.deg()

    def euclidean_division(self, a, b):
        return a.polynomial_division(b)

    def parse_elem(self, text : str):
        # Only constant coefficients can be written down, the grammar has no parentheses
        return Polynomial.parse(self.ring, text)

    def __eq__(self, other):
        return isinstance(other, PolynomialRing) and self.ring == other.ring

    def __hash__(self):
        return hash((PolynomialRing, self.ring))

    def __repr__(self):
        return f"PolynomialRing({repr(self.ring)})"

    def __str__(self):
        return f"{self.ring}[x]"

########################################################################################################################
#   Display
########################################################################################################################

@dataclass
class DisplayPart:
    """
    One term of a polynomial as it is displayed.

    `coefficient` is None when it is suppressed (a 1 in front of x), `variable` says whether x appears and
    `exponent` is None for x^0 and x^1.
    """
    coefficient : object
    variable : bool
    exponent : Optional[int]

########################################################################################################################
#   Polynomial
########################################################################################################################

class Polynomial:
    """
    sum(coeffs[i] x^i) with coefficients in `ring`.

    The coefficient list is always canonical: every coefficient is in the ring's normal form and the last one is
    nonzero, so the zero polynomial has no coefficients at all. Operators never share coefficient lists between
    polynomials, only the in-place forms (+=, -=, *=, add_elem) modify an existing polynomial.
    """

    def __init__(self, ring : Ring, coeffs=()):
        self.ring = ring
        # Promote to members of the coefficient ring
        self.coeffs = [ring(c) for c in coeffs]
        self._trim()

    @staticmethod
    def _raw(ring : Ring, coeffs : List):
        # coeffs are already canonical ring elements, only trailing zeros may need trimming
        p = Polynomial.__new__(Polynomial)
        p.ring = ring
        p.coeffs = coeffs
        p._trim()
        return p

    @staticmethod
    def zero(ring : Ring):
        return Polynomial._raw(ring, [])

    @staticmethod
    def constant(ring : Ring, c):
        return Polynomial(ring, [c])

    @staticmethod
    def single(ring : Ring, elem, degree : int):
        """
        The monomial elem * x^degree
        """
        assert degree >= 0, f"Degree should be nonnegative, got {degree}"
        coeffs = [ring.zero() for _ in range(degree)]
        coeffs.append(ring(elem))
        return Polynomial._raw(ring, coeffs)

    @staticmethod
    def parse(ring : Ring, text : str) -> Optional["Polynomial"]:
        """
        Parses a sum of terms `c`, `cx`, `x`, `cx^k` or `x^k` separated by `+`, ignoring whitespace.

        Coefficients use the ring's own literal syntax, so negative terms are written as `+-3x^2`. Terms of equal
        degree are added together. Returns None if any term is malformed.
        """
        text = "".join(text.split())

        poly = Polynomial.zero(ring)
        for summand in text.split("+"):
            term = Polynomial._parse_summand(ring, summand)
            if term is None:
                _logger.debug("cannot parse %r as a term over %s", summand, ring)
                return None
            poly.add_elem(*term)
        return poly

    @staticmethod
    def _parse_summand(ring : Ring, summand : str) -> Optional[Tuple[object, int]]:
        coeff_text, x, exponent_text = summand.partition("x")

        if not x:
            coeff = ring.parse_elem(summand)
            if coeff is None:
                return None
            return coeff, 0

        if exponent_text == "":
            degree = 1
        elif exponent_text.startswith("^") and _EXPONENT.fullmatch(exponent_text[1:]):
            degree = int(exponent_text[1:])
        else:
            return None

        if coeff_text == "":
            return ring.one(), degree
        coeff = ring.parse_elem(coeff_text)
        if coeff is None:
            return None
        return coeff, degree

    def _trim(self):
        zero = self.ring.zero()
        while len(self.coeffs) != 0 and self.coeffs[-1] == zero:
            self.coeffs.pop()

    def _pad(self, length : int):
        while len(self.coeffs) < length:
            self.coeffs.append(self.ring.zero())

    def _coerce(self, other):
        """
        Promotes `other` to a constant polynomial over this ring, None if it is not a member of the ring
        """
        if isinstance(other, Polynomial) and other.ring == self.ring:
            return other
        if isinstance(other, (str, bytes)):
            return None
        try:
            return Polynomial.constant(self.ring, other)
        except (TypeError, ValueError):
            return None

    def copy(self):
        return Polynomial._raw(self.ring, list(self.coeffs))

    def add_elem(self, elem, degree : int):
        """
        Adds elem * x^degree to this polynomial in place
        """
        assert degree >= 0, f"Degree should be nonnegative, got {degree}"
        self._pad(degree + 1)
        self.coeffs[degree] = self.ring.add(self.coeffs[degree], self.ring(elem))
        self._trim()

    def deg(self) -> Optional[int]:
        if self.is_zero():
            return None
        return len(self.coeffs) - 1

    def lc(self):
        """
        Leading coefficient, zero for the zero polynomial
        """
        if self.is_zero():
            return self.ring.zero()
        return self.coeffs[-1]

    def is_zero(self) -> bool:
        return len(self.coeffs) == 0

    def __getitem__(self, degree : int):
        # return the coefficient of x^degree, or 0 if not present
        if 0 <= degree < len(self.coeffs):
            return self.coeffs[degree]
        return self.ring.zero()

    def __eq__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.coeffs == other.coeffs

    def __hash__(self):
        # constants compare equal to their coefficient, so they must hash like it
        if len(self.coeffs) <= 1:
            return hash(self.lc())
        return hash(tuple(self.coeffs))

    ####################################################################################################################
    #   Arithmetic
    ####################################################################################################################

    def _combine(self, other, negate : bool):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        neg = self.ring.neg if negate else (lambda c: c)

        if len(self.coeffs) >= len(other.coeffs):
            coeffs = list(self.coeffs)
            for i,c in enumerate(other.coeffs):
                coeffs[i] = self.ring.add(coeffs[i], neg(c))
        else:
            coeffs = [neg(c) for c in other.coeffs]
            for i,c in enumerate(self.coeffs):
                coeffs[i] = self.ring.add(c, coeffs[i])
        return Polynomial._raw(self.ring, coeffs)

    def _combine_in_place(self, other, negate : bool):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        neg = self.ring.neg if negate else (lambda c: c)

        self._pad(len(other.coeffs))
        for i,c in enumerate(list(other.coeffs)):
            self.coeffs[i] = self.ring.add(self.coeffs[i], neg(c))
        self._trim()
        return self

    def __add__(self, other):
        return self._combine(other, negate=False)

    def __radd__(self, other):
        return self._combine(other, negate=False)

    def __iadd__(self, other):
        return self._combine_in_place(other, negate=False)

    def __sub__(self, other):
        return self._combine(other, negate=True)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other - self

    def __isub__(self, other):
        return self._combine_in_place(other, negate=True)

    def __neg__(self):
        """
        Returns the additive inverse of this polynomial
        """
        # negation maps nonzero coefficients to nonzero coefficients, no trimming needed
        p = Polynomial.__new__(Polynomial)
        p.ring = self.ring
        p.coeffs = [self.ring.neg(c) for c in self.coeffs]
        return p

    def __mul__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented

        if self.is_zero() or other.is_zero():
            # Multiplication where one is the 0 polynomial
            return Polynomial.zero(self.ring)

        coeffs = [self.ring.zero() for _ in range(len(self.coeffs) + len(other.coeffs) - 1)]
        for i,a in enumerate(self.coeffs):
            for j,b in enumerate(other.coeffs):
                coeffs[i + j] = self.ring.add(coeffs[i + j], self.ring.mul(a, b))
        return Polynomial._raw(self.ring, coeffs)

    def __rmul__(self, other):
        # Polynomial rings are commutative
        return self.__mul__(other)

    def __imul__(self, other):
        product = self.__mul__(other)
        if product is NotImplemented:
            return NotImplemented
        self.coeffs = product.coeffs
        return self

    def __pow__(self, power : int):
        assert power >= 0, "Polynomials have no negative powers"
        result = Polynomial.constant(self.ring, self.ring.one())
        base = self
        while power != 0:
            if power & 1:
                result = result * base
            base = base * base
            power >>= 1
        return result

    def polynomial_division(self, rhs) -> Optional[Tuple["Polynomial", "Polynomial"]]:
        """
        Long division by `rhs` over a field.

        Returns (q, r) with self = q * rhs + r and r zero or deg(r) < deg(rhs), or None if rhs is zero.
        """
        if not self.ring.is_field:
            raise TypeError(f"Polynomial division needs coefficients in a field, {self.ring} is not one")

        rhs = self._coerce(rhs)
        if rhs is None:
            raise TypeError(f"Cannot divide by a non-member of {self.ring}")
        if rhs.is_zero():
            return None

        d = rhs.deg()
        lc = rhs.lc()
        q = Polynomial.zero(self.ring)
        r = self.copy()

        steps = 0
        while not r.is_zero() and r.deg() >= d:
            r_deg = r.deg()
            quotient = self.ring.div(r.lc(), lc)
            if quotient is None:
                raise ArithmeticError(f"{lc} is not invertible in {self.ring}")

            t = Polynomial.single(self.ring, quotient, r_deg - d)
            q += t
            r -= t * rhs

            # the leading term cancels exactly, anything left there is rounding error
            if r.deg() == r_deg:
                r.coeffs.pop()
                r._trim()
            steps += 1

        _logger.debug("polynomial division finished after %d step(s)", steps)
        return q, r

    def __divmod__(self, other):
        result = self.polynomial_division(other)
        if result is None:
            raise ZeroDivisionError("polynomial division by zero")
        return result

    def __floordiv__(self, other):
        return divmod(self, other)[0]

    def __mod__(self, other):
        return divmod(self, other)[1]

    ####################################################################################################################
    #   Evaluation
    ####################################################################################################################

    def __call__(self, x):
        """
        Evaluate at x with Horner's rule
        """
        x = self.ring(x)
        acc = self.ring.zero()
        for c in reversed(self.coeffs):
            acc = self.ring.add(self.ring.mul(acc, x), c)
        return acc

    def to_numpy(self):
        """
        Coefficient vector as a numpy array, constant term first
        """
        if self.ring.np_dtype is None:
            raise TypeError(f"{self.ring} has no numpy representation")
        return np.array(self.coeffs, dtype=self.ring.np_dtype)

    def evaluate_many(self, xs):
        """
        Evaluate at every entry of `xs` at once
        """
        if self.ring.np_dtype is None:
            raise TypeError(f"{self.ring} has no numpy representation")
        xs = self.ring.np_reduce(np.asarray(xs, dtype=self.ring.np_dtype))
        acc = np.zeros(xs.shape, dtype=self.ring.np_dtype)
        for c in reversed(self.coeffs):
            acc = self.ring.np_reduce(acc * xs + c)
        return acc

    ####################################################################################################################
    #   Display
    ####################################################################################################################

    def display_parts(self) -> List[DisplayPart]:
        """
        The terms to display, highest degree first
        """
        if self.is_zero():
            return [DisplayPart(self.ring.zero(), False, None)]

        zero = self.ring.zero()
        one = self.ring.one()
        parts = []
        for i in reversed(range(len(self.coeffs))):
            c = self.coeffs[i]
            if c == zero:
                continue
            coefficient = c if (c != one or i == 0) else None
            parts.append(DisplayPart(coefficient, i != 0, i if i > 1 else None))
        return parts

    def map_display_parts(self, coeff : Callable, var : Callable, sep : Callable) -> Iterator[Tuple]:
        """
        Yields (coeff(c), var(exponent), sep()) for every displayed term.

        A component is None where the term has no coefficient, no variable, or is the last one (no separator).
        """
        parts = self.display_parts()
        for i,part in enumerate(parts):
            c = coeff(part.coefficient) if part.coefficient is not None else None
            v = var(part.exponent) if part.variable else None
            s = sep() if i < len(parts) - 1 else None
            yield c, v, s

    def _coeff_str(self, c) -> str:
        s = self.ring.display_elem(c)
        if " " in s:
            s = f"({s})"
        return s

    def __str__(self):
        out = []
        for triple in self.map_display_parts(self._coeff_str, _var_str, lambda: " + "):
            out += [s for s in triple if s is not None]
        return "".join(out)

    def __repr__(self):
        return f"Polynomial({repr(self.ring)}, {repr(self.coeffs)})"

def _var_str(exponent : Optional[int]) -> str:
    if exponent is None:
        return "x"
    return f"x^{exponent}"

########################################################################################################################
#   Unit Tests
########################################################################################################################

import random
import unittest

from polymoly.rings import RR, ZZ, IntegersModuloN, IntegersModuloP

def rand_poly(ring, max_deg=6, lo=-9, hi=9):
    return Polynomial(ring, [random.randint(lo, hi) for _ in range(random.randint(0, max_deg + 1))])

class TestConstruction(unittest.TestCase):

    def test_degree(self):
        self.assertIsNone(Polynomial.zero(ZZ).deg())
        self.assertEqual(Polynomial.constant(ZZ, 42).deg(), 0)
        for i in range(3):
            self.assertEqual(Polynomial.single(ZZ, 42, i).deg(), i)
        self.assertIsNone(Polynomial.single(ZZ, 0, 9).deg())

    def test_single_product(self):
        product = Polynomial.single(ZZ, 2, 2) * Polynomial.single(ZZ, 3, 3)
        self.assertEqual(product.deg(), 5)
        self.assertEqual(product.coeffs, [0, 0, 0, 0, 0, 6])

    def test_canonical(self):
        self.assertEqual(Polynomial(ZZ, [1, 2, 0, 0]).coeffs, [1, 2])
        self.assertEqual(Polynomial(ZZ, [0, 0]).coeffs, [])
        self.assertEqual(Polynomial(IntegersModuloN(5), [7, 5, 10]).coeffs, [2])
        self.assertEqual(Polynomial(RR, [1, 2]).coeffs, [1.0, 2.0])

    def test_add_elem_modulo(self):
        p = Polynomial.zero(IntegersModuloN(5))
        p.add_elem(7, 3)
        p.add_elem(1, 0)
        self.assertEqual(p.coeffs, [1, 0, 0, 2])
        p.add_elem(3, 3)
        self.assertEqual(p.coeffs, [1])

    def test_accessors(self):
        p = Polynomial(ZZ, [4, 0, 3])
        self.assertEqual(p[0], 4)
        self.assertEqual(p[2], 3)
        self.assertEqual(p[7], 0)
        self.assertEqual(p.lc(), 3)
        self.assertEqual(Polynomial.zero(ZZ).lc(), 0)

    def test_copy_does_not_alias(self):
        p = Polynomial(ZZ, [1, 2, 3])
        q = p.copy()
        q += Polynomial(ZZ, [1])
        q.add_elem(5, 4)
        self.assertEqual(p.coeffs, [1, 2, 3])
        r = p + Polynomial.zero(ZZ)
        r.add_elem(1, 0)
        self.assertEqual(p.coeffs, [1, 2, 3])

class TestArithmetic(unittest.TestCase):

    def test_add_sub(self):
        p = Polynomial(ZZ, [1, 2, 3])
        q = Polynomial(ZZ, [1, 1, -3])
        self.assertEqual((p + q).coeffs, [2, 3])
        self.assertEqual((p - p).coeffs, [])
        self.assertEqual((q - p).coeffs, [0, -1, -6])
        self.assertEqual((p + 4).coeffs, [5, 2, 3])
        self.assertEqual((4 - p).coeffs, [3, -2, -3])

    def test_in_place(self):
        p = Polynomial(ZZ, [1, 2])
        p += Polynomial(ZZ, [0, -2, 5])
        self.assertEqual(p.coeffs, [1, 0, 5])
        p -= Polynomial(ZZ, [0, 0, 5])
        self.assertEqual(p.coeffs, [1])
        p *= Polynomial(ZZ, [1, 1])
        self.assertEqual(p.coeffs, [1, 1])

    def test_neg(self):
        p = Polynomial(IntegersModuloN(6), [1, 0, 5])
        self.assertEqual((-p).coeffs, [5, 0, 1])
        self.assertEqual(len((-p).coeffs), len(p.coeffs))

    def test_mul(self):
        # (x + 1)(x - 1) = x^2 - 1
        self.assertEqual((Polynomial(ZZ, [1, 1]) * Polynomial(ZZ, [-1, 1])).coeffs, [-1, 0, 1])
        # (2x)(3x) = 0 in Z/6Z
        Z6 = IntegersModuloN(6)
        self.assertTrue((Polynomial(Z6, [0, 2]) * Polynomial(Z6, [0, 3])).is_zero())
        self.assertTrue((Polynomial(ZZ, [1, 2]) * Polynomial.zero(ZZ)).is_zero())
        self.assertEqual((3 * Polynomial(ZZ, [1, 2])).coeffs, [3, 6])

    def test_pow(self):
        x1 = Polynomial(ZZ, [1, 1])
        self.assertEqual((x1 ** 3).coeffs, [1, 3, 3, 1])
        self.assertEqual((x1 ** 0).coeffs, [1])

    def test_ring_laws(self):
        for R in [ZZ, IntegersModuloN(6), IntegersModuloP(7)]:
            zero = Polynomial.zero(R)
            for _ in range(100):
                p, q, r = rand_poly(R), rand_poly(R), rand_poly(R)
                self.assertEqual(p + zero, p)
                self.assertTrue((p + (-p)).is_zero())
                self.assertEqual(p + q, q + p)
                self.assertEqual((p + q) + r, p + (q + r))
                self.assertEqual(p * q, q * p)
                self.assertEqual((p * q) * r, p * (q * r))
                self.assertEqual(p * (q + r), p * q + p * r)
                for s in [p + q, p - q, p * q, -p]:
                    self.assertTrue(s.is_zero() or s.coeffs[-1] != R.zero())

    def test_equality(self):
        self.assertEqual(Polynomial(ZZ, [3]), 3)
        self.assertNotEqual(Polynomial(ZZ, [3, 1]), 3)
        self.assertEqual(Polynomial.zero(ZZ), 0)
        self.assertNotEqual(Polynomial(RR, [3.0]), "3")
        self.assertNotEqual(Polynomial(ZZ, [3]), "3")
        self.assertNotEqual(Polynomial(ZZ, [1]), Polynomial(RR, [1.0]))
        with self.assertRaises(TypeError):
            Polynomial(RR, [1.0]) + "2"

    def test_hash_matches_equality(self):
        self.assertEqual(hash(Polynomial(ZZ, [3])), hash(3))
        self.assertEqual(hash(Polynomial.zero(ZZ)), hash(0))
        self.assertEqual(hash(Polynomial(RR, [2.0])), hash(2))
        self.assertEqual(len({Polynomial(ZZ, [3]), 3}), 1)
        x = Polynomial(ZZ, [0, 1])
        self.assertEqual(hash(Polynomial(PolynomialRing(ZZ), [x])), hash(x))
        self.assertEqual(hash(Polynomial(ZZ, [1, 2])), hash(Polynomial(ZZ, [1, 2])))

    def test_evaluate(self):
        p = Polynomial(ZZ, [1, 0, 1])
        self.assertEqual(p(3), 10)
        self.assertEqual(Polynomial(IntegersModuloN(7), [1, 0, 1])(3), 3)
        self.assertEqual(Polynomial.zero(ZZ)(5), 0)

    def test_evaluate_many(self):
        p = Polynomial(RR, [1.0, -3.0, 0.5])
        xs = np.linspace(-2.0, 2.0, 9)
        np.testing.assert_allclose(p.evaluate_many(xs), 1.0 - 3.0 * xs + 0.5 * xs ** 2)

        F = IntegersModuloP(101)
        q = Polynomial(F, [5, 17, 0, 99])
        xs = np.arange(101)
        self.assertEqual(list(q.evaluate_many(xs)), [q(int(x)) for x in xs])

        np.testing.assert_array_equal(Polynomial(ZZ, [1, 2]).to_numpy(), np.array([1, 2]))

    def test_evaluate_many_unsupported(self):
        p = Polynomial(PolynomialRing(ZZ), [1])
        with self.assertRaises(TypeError):
            p.evaluate_many([1, 2])

class TestDivision(unittest.TestCase):

    def test_reals(self):
        f = Polynomial(RR, [1, 1, 0, 1])
        g = Polynomial(RR, [-1, 1])
        q, r = f.polynomial_division(g)
        self.assertEqual(q.coeffs, [2.0, 1.0, 1.0])
        self.assertEqual(r.coeffs, [3.0])

    def test_round_trip(self):
        for F in [IntegersModuloP(2), IntegersModuloP(7), IntegersModuloP(101)]:
            for _ in range(100):
                p = rand_poly(F, max_deg=8)
                d = rand_poly(F)
                if d.is_zero():
                    self.assertIsNone(p.polynomial_division(d))
                    continue
                q, r = p.polynomial_division(d)
                self.assertEqual(q * d + r, p)
                self.assertTrue(r.is_zero() or r.deg() < d.deg())

    def test_smaller_dividend(self):
        F = IntegersModuloP(7)
        p = Polynomial(F, [1, 2])
        q, r = p.polynomial_division(Polynomial(F, [0, 0, 1]))
        self.assertTrue(q.is_zero())
        self.assertEqual(r, p)

    def test_reals_terminates_with_rounding(self):
        p = Polynomial(RR, [0.1, 0.7, 0.3, 1.9, 0.2])
        d = Polynomial(RR, [0.3, 0.7, 3.0])
        q, r = p.polynomial_division(d)
        self.assertEqual(q.deg(), 2)
        self.assertTrue(r.is_zero() or r.deg() < 2)
        for a, b in zip((q * d + r).coeffs, p.coeffs):
            self.assertAlmostEqual(a, b)

    def test_zero_divisor(self):
        p = Polynomial(RR, [1, 2])
        self.assertIsNone(p.polynomial_division(Polynomial.zero(RR)))
        with self.assertRaises(ZeroDivisionError):
            divmod(p, Polynomial.zero(RR))

    def test_operators(self):
        F = IntegersModuloP(5)
        p = Polynomial(F, [1, 0, 1])
        d = Polynomial(F, [1, 1])
        self.assertEqual(p // d, p.polynomial_division(d)[0])
        self.assertEqual(p % d, p.polynomial_division(d)[1])

    def test_not_a_field(self):
        with self.assertRaises(TypeError):
            Polynomial(ZZ, [1, 1]).polynomial_division(Polynomial(ZZ, [1]))

class TestParse(unittest.TestCase):

    def test_reals(self):
        p = Polynomial.parse(RR, "0.5x+-3x^2+5x^1+1x^0")
        self.assertEqual(p.coeffs, [1.0, 5.5, -3.0])
        self.assertEqual(p.deg(), 2)
        self.assertEqual(str(p), "-3x^2 + 5.5x + 1")

    def test_terms(self):
        self.assertEqual(Polynomial.parse(ZZ, "x").coeffs, [0, 1])
        self.assertEqual(Polynomial.parse(ZZ, "x^3").coeffs, [0, 0, 0, 1])
        self.assertEqual(Polynomial.parse(ZZ, "-4x").coeffs, [0, -4])
        self.assertEqual(Polynomial.parse(ZZ, "7").coeffs, [7])
        self.assertEqual(Polynomial.parse(ZZ, " 3 x ^ 2 +\t1 ").coeffs, [1, 0, 3])

    def test_accumulates(self):
        self.assertEqual(Polynomial.parse(ZZ, "3x+2x"), Polynomial.parse(ZZ, "5x"))
        self.assertTrue(Polynomial.parse(ZZ, "3x+-3x").is_zero())
        self.assertEqual(Polynomial.parse(IntegersModuloN(7), "4x+3x^2+5x^1+1x^0").coeffs, [1, 2, 3])

    def test_failures(self):
        for text in ["", "+", "x+", "3y", "x^", "x^-1", "x^2x", "3x2", "-x", "1.5x", "x^1.5", "(x+1)", "2*x"]:
            self.assertIsNone(Polynomial.parse(ZZ, text), text)
        self.assertIsNone(Polynomial.parse(RR, "ax^2"))

    def test_modulo_coefficients(self):
        p = Polynomial.parse(IntegersModuloN(5), "-1x^2+7")
        self.assertEqual(p.coeffs, [2, 0, 4])

    def test_round_trip(self):
        for R in [ZZ, IntegersModuloN(9), IntegersModuloP(13)]:
            for _ in range(200):
                p = rand_poly(R, max_deg=8)
                self.assertEqual(Polynomial.parse(R, str(p)), p, str(p))
        for text in ["-3x^2 + 5.5x + 1", "x^4 + 0.25", "0", "-1x + -1"]:
            self.assertEqual(str(Polynomial.parse(RR, text)), text)

class TestDisplay(unittest.TestCase):

    def test_str(self):
        self.assertEqual(str(Polynomial(ZZ, [1, 1, 0, 2])), "2x^3 + x + 1")
        self.assertEqual(str(Polynomial(ZZ, [1])), "1")
        self.assertEqual(str(Polynomial(ZZ, [0, 1])), "x")
        self.assertEqual(str(Polynomial(ZZ, [0, -1, 3])), "3x^2 + -1x")
        self.assertEqual(str(Polynomial.zero(ZZ)), "0")
        self.assertEqual(str(Polynomial.zero(RR)), "0")

    def test_parts(self):
        parts = Polynomial(ZZ, [4, 1, 0, 2]).display_parts()
        self.assertEqual(parts, [DisplayPart(2, True, 3), DisplayPart(None, True, None), DisplayPart(4, False, None)])
        self.assertEqual(Polynomial.zero(ZZ).display_parts(), [DisplayPart(0, False, None)])

    def test_map_parts(self):
        triples = list(Polynomial(ZZ, [1, 0, 3]).map_display_parts(lambda c: f"<{c}>", _var_str, lambda: "|"))
        self.assertEqual(triples, [("<3>", "x^2", "|"), ("<1>", None, None)])

    def test_repr(self):
        self.assertEqual(repr(Polynomial(IntegersModuloN(3), [1, 2])), "Polynomial(IntegersModuloN(3), [1, 2])")

class TestPolynomialRing(unittest.TestCase):

    def test_contract(self):
        R = PolynomialRing(ZZ)
        self.assertTrue(R.zero().is_zero())
        self.assertEqual(R.one().coeffs, [1])
        p = Polynomial(ZZ, [1, 1])
        self.assertEqual(R.mul(p, p).coeffs, [1, 2, 1])
        self.assertTrue(R.sub(p, p).is_zero())
        self.assertFalse(R.is_euclidean)
        self.assertTrue(PolynomialRing(RR).is_euclidean)
        self.assertEqual(str(R), "Z[x]")

    def test_nested(self):
        # polynomials in y with coefficients in Z[x]
        R = PolynomialRing(ZZ)
        x = Polynomial(ZZ, [0, 1])
        p = Polynomial(R, [x, Polynomial(ZZ, [1])])
        q = Polynomial(R, [-x, Polynomial(ZZ, [1])])
        self.assertEqual((p + q).coeffs, [Polynomial.zero(ZZ), Polynomial(ZZ, [2])])
        prod = p * q
        self.assertEqual(prod.coeffs, [-(x * x), Polynomial.zero(ZZ), Polynomial(ZZ, [1])])
        self.assertEqual(str(prod), "x^2 + -1x^2")
        self.assertEqual(str(Polynomial(R, [0, Polynomial(ZZ, [1, 1])])), "(x + 1)x")
        self.assertTrue((p - p).is_zero())
        self.assertEqual((p * x).coeffs, [x * x, x])

    def test_nested_inner_on_left(self):
        # an inner ring polynomial on the left is promoted through the reflected operators
        R = PolynomialRing(ZZ)
        x = Polynomial(ZZ, [0, 1])
        p = Polynomial(R, [x, Polynomial(ZZ, [1])])
        self.assertEqual(x * p, p * x)
        self.assertEqual(x + p, p + x)
        self.assertEqual(x - p, -(p - x))
        self.assertEqual((x + p).ring, R)
        self.assertEqual(p, p.copy())
        self.assertEqual(Polynomial(R, [x]), x)
        self.assertEqual(x, Polynomial(R, [x]))
        q = x.copy()
        q *= p
        self.assertEqual(q, p * x)

    def test_nested_parse(self):
        R = PolynomialRing(ZZ)
        p = Polynomial.parse(R, "3x^2+1")
        self.assertEqual(p.coeffs, [Polynomial(ZZ, [1]), Polynomial.zero(ZZ), Polynomial(ZZ, [3])])

    def test_euclidean_division(self):
        R = PolynomialRing(IntegersModuloP(3))
        a = Polynomial(IntegersModuloP(3), [1, 0, 1])
        b = Polynomial(IntegersModuloP(3), [1, 1])
        q, r = R.euclidean_division(a, b)
        self.assertEqual(q * b + r, a)
        self.assertEqual(R.euclidean_function(b), 1)
        self.assertIsNone(R.euclidean_division(a, R.zero()))
