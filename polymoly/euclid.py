#!/usr/bin/env python3
#
#   Extended euclidean algorithm over any euclidean ring
#

import logging

from polymoly.rings import EuclideanRing, extended_euclidean_int, inverse_mod

__all__ = ["extended_euclidean", "extended_euclidean_int", "inverse_mod"]

_logger = logging.getLogger(__name__)

def extended_euclidean(ring : EuclideanRing, a, b):
    """
    Generalized extended euclidean algorithm.

    Returns (g, s, t) such that s * a + t * b = g where g generates the ideal (a, b), or None if a and b are both
    zero. g is not normalised, it is only determined up to a unit (sign for integers, nonzero constant factor for
    polynomials over a field).
    """
    if not ring.is_euclidean:
        raise TypeError(f"{ring} is not a euclidean ring")

    zero, one = ring.zero(), ring.one()

    if a == zero and b == zero:
        return None

    if b == zero:
        return a, one, zero

    _, r = ring.euclidean_division(a, b)
    if r == zero:
        return b, zero, one

    x, y = a, b
    s1, s2 = one, zero
    t1, t2 = zero, one

    steps = 0
    while True:
        q, r = ring.euclidean_division(x, y)
        if r == zero:
            break
        s1, s2 = s2, ring.sub(s1, ring.mul(q, s2))
        t1, t2 = t2, ring.sub(t1, ring.mul(q, t2))
        x, y = y, r
        steps += 1

    _logger.debug("extended euclidean algorithm over %s finished after %d step(s)", ring, steps)
    return y, s2, t2

########################################################################################################################
#   Unit Tests
########################################################################################################################

import random
import unittest

from polymoly.polynomial import Polynomial, PolynomialRing
from polymoly.rings import RR, ZZ, IntegersModuloN, IntegersModuloP

class TestIntegers(unittest.TestCase):

    def test_48_neg30(self):
        self.assertEqual(extended_euclidean(ZZ, 48, -30), (6, 2, 3))
        self.assertEqual(extended_euclidean_int(48, -30), (6, 2, 3))

    def test_degenerate(self):
        self.assertIsNone(extended_euclidean(ZZ, 0, 0))
        self.assertEqual(extended_euclidean(ZZ, 5, 0), (5, 1, 0))
        self.assertEqual(extended_euclidean(ZZ, 12, 4), (4, 0, 1))

    def test_bezout(self):
        for _ in range(1000):
            a = random.randint(-5000, 5000)
            b = random.randint(-5000, 5000)
            result = extended_euclidean(ZZ, a, b)
            if a == 0 and b == 0:
                self.assertIsNone(result)
                continue
            g, s, t = result
            self.assertEqual(s * a + t * b, g)
            self.assertEqual(a % abs(g), 0)
            self.assertEqual(b % abs(g), 0)

    def test_int_fast_path_consistent(self):
        for _ in range(1000):
            a = random.randint(-5000, 5000)
            b = random.randint(-5000, 5000)
            generic = extended_euclidean(ZZ, a, b)
            if generic is None:
                self.assertIsNone(extended_euclidean_int(a, b))
                continue
            g, s, t = generic
            if g < 0:
                g, s, t = -g, -s, -t
            self.assertEqual(extended_euclidean_int(a, b), (g, s, t))

    def test_not_euclidean(self):
        with self.assertRaises(TypeError):
            extended_euclidean(IntegersModuloN(6), 2, 3)
        with self.assertRaises(TypeError):
            extended_euclidean(PolynomialRing(ZZ), Polynomial(ZZ, [1]), Polynomial(ZZ, [1]))

class TestPolynomials(unittest.TestCase):

    def test_reals(self):
        # (x - 1)(x - 2) and (x - 1)(x - 3)
        R = PolynomialRing(RR)
        a = Polynomial(RR, [2, -3, 1])
        b = Polynomial(RR, [3, -4, 1])
        g, s, t = extended_euclidean(R, a, b)
        self.assertEqual(g, Polynomial(RR, [-1, 1]))
        self.assertEqual(s * a + t * b, g)

    def test_prime_field(self):
        for p in [2, 3, 7, 31]:
            F = IntegersModuloP(p)
            R = PolynomialRing(F)
            for _ in range(50):
                a = Polynomial(F, [random.randint(0, p - 1) for _ in range(random.randint(0, 7))])
                b = Polynomial(F, [random.randint(0, p - 1) for _ in range(random.randint(0, 7))])
                result = extended_euclidean(R, a, b)
                if a.is_zero() and b.is_zero():
                    self.assertIsNone(result)
                    continue
                g, s, t = result
                self.assertEqual(s * a + t * b, g)
                self.assertTrue((a % g).is_zero())
                self.assertTrue((b % g).is_zero())

    def test_fast_paths(self):
        F = IntegersModuloP(5)
        R = PolynomialRing(F)
        a = Polynomial(F, [1, 2, 1])
        b = Polynomial(F, [1, 1])
        self.assertEqual(extended_euclidean(R, a, R.zero()), (a, R.one(), R.zero()))
        self.assertEqual(extended_euclidean(R, a, b), (b, R.zero(), R.one()))

    def test_coprime(self):
        # x^2 + 1 and x + 1 are coprime over Z/3Z, so g is a nonzero constant
        F = IntegersModuloP(3)
        R = PolynomialRing(F)
        a = Polynomial(F, [1, 0, 1])
        b = Polynomial(F, [1, 1])
        g, s, t = extended_euclidean(R, a, b)
        self.assertEqual(g.deg(), 0)
        self.assertEqual(s * a + t * b, g)
