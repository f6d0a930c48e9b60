#!/usr/bin/env python3
#
#   Coefficient rings: the Ring / Field / EuclideanRing contracts and their concrete instances
#

import logging
import math
import operator
import re
from typing import Optional, Tuple

import numpy as np

_logger = logging.getLogger(__name__)

########################################################################################################################
#   Modular Arithmetic
########################################################################################################################

def extended_euclidean_int(a : int, b : int) -> Optional[Tuple[int, int, int]]:
    """
    Extended euclidean algorithm on plain integers.

    Returns (g, s, t) with s * a + t * b = g and g >= 0, or None when both a and b are 0.
    Division follows the euclidean convention (remainder in [0, |b|)), so the result agrees step for step with
    `polymoly.euclid.extended_euclidean` over `Integers`.
    """
    if a == 0 and b == 0:
        return None

    if b == 0:
        g, s, t = a, 1, 0
    elif a % abs(b) == 0:
        g, s, t = b, 0, 1
    else:
        prev_s, s = 1, 0
        prev_t, t = 0, 1
        x, y = a, b
        while True:
            r = x % abs(y)
            if r == 0:
                break
            q = (x - r) // y
            prev_s, s = s, prev_s - q * s
            prev_t, t = t, prev_t - q * t
            x, y = y, r
        g = y

    if g < 0:
        return -g, -s, -t
    return g, s, t

def inverse_mod(a : int, n : int) -> Optional[int]:
    """
    Multiplicative inverse of a modulo n, None if a is not a unit
    """
    g, s, _ = extended_euclidean_int(a % n, n)
    if g != 1:
        return None
    return s % n

def is_prime(p : int) -> bool:
    """
    Deterministic trial division, checking 2, 3 and then divisors of the form 6k +- 1
    """
    if p <= 1:
        return False
    if p == 2 or p == 3:
        return True
    if p % 2 == 0 or p % 3 == 0:
        return False

    for i in range(5, math.isqrt(p) + 1, 6):
        if p % i == 0 or p % (i + 2) == 0:
            _logger.debug("%d is composite, divisible by %d", p, i if p % i == 0 else i + 2)
            return False
    return True

# Various useful primes
LARGEST_s32_PRIME = 2147483647
LARGEST_u16_PRIME = 65521
LARGEST_s16_PRIME = 32749

########################################################################################################################
#   Ring Contracts
########################################################################################################################

class Ring:
    """
    A commutative ring with identity.

    A ring object does not hold elements, it tells how to combine them: elements are plain values (float, int,
    Polynomial) and every operation goes through the ring. `id` brings an element into canonical form and is the
    identity unless the ring has a nontrivial normal form (e.g. residues modulo n).
    """

    # numpy dtype used for vectorised evaluation, None if the elements have no numpy representation
    np_dtype = None

    def zero(self):
        raise NotImplementedError()

    def one(self):
        raise NotImplementedError()

    def add(self, a, b):
        raise NotImplementedError()

    def neg(self, a):
        raise NotImplementedError()

    def mul(self, a, b):
        raise NotImplementedError()

    def sub(self, a, b):
        return self.add(a, self.neg(b))

    def id(self, a):
        return a

    def __call__(self, x):
        return self.id(x)

    def parse_elem(self, text : str):
        """
        Parse a single element, returns None if `text` is not an element of this ring
        """
        raise NotImplementedError()

    def display_elem(self, elem) -> str:
        return str(elem)

    def np_reduce(self, arr):
        return arr

    @property
    def is_field(self) -> bool:
        return isinstance(self, Field)

    @property
    def is_euclidean(self) -> bool:
        return isinstance(self, EuclideanRing)

    def __eq__(self, other):
        return type(self) == type(other)

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return f"{type(self).__name__}()"

class Field(Ring):
    """
    A ring where every nonzero element has a multiplicative inverse
    """

    def inv(self, a):
        """
        Returns the inverse of `a`, or None if `a` is zero
        """
        raise NotImplementedError()

    def div(self, a, b):
        ib = self.inv(b)
        if ib is None:
            return None
        return self.mul(a, ib)

class EuclideanRing(Ring):
    """
    A ring with a division algorithm: a = q * b + r where r is smaller than b w.r.t. `euclidean_function`
    """

    def euclidean_function(self, a):
        raise NotImplementedError()

    def euclidean_division(self, a, b):
        """
        Returns (q, r), or None if b is zero
        """
        raise NotImplementedError()

########################################################################################################################
#   Concrete Rings
########################################################################################################################

_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")

def _parse_int(text : str) -> Optional[int]:
    if _INTEGER_LITERAL.fullmatch(text) is None:
        return None
    return int(text)

class Reals(Field):
    """
    The real numbers, modelled by 64-bit floats
    """

    np_dtype = np.float64

    def zero(self):
        return 0.0

    def one(self):
        return 1.0

    def add(self, a, b):
        return a + b

    def neg(self, a):
        return -a

    def mul(self, a, b):
        return a * b

    def id(self, a):
        return float(a)

    def inv(self, a):
        if a == 0.0:
            return None
        return 1.0 / a

    def parse_elem(self, text : str) -> Optional[float]:
        try:
            return float(text)
        except ValueError:
            return None

    def display_elem(self, elem) -> str:
        # shortest round-trip digits in fixed-point, 1.0 reads as "1" and 1e-07 as "0.0000001"
        return np.format_float_positional(elem, trim="-")

    def __str__(self):
        return "R"

class Integers(EuclideanRing):
    """
    The ring of integers
    """

    np_dtype = np.int64

    def zero(self):
        return 0

    def one(self):
        return 1

    def add(self, a, b):
        return a + b

    def neg(self, a):
        return -a

    def mul(self, a, b):
        return a * b

    def __call__(self, x):
        return operator.index(x)

    def euclidean_function(self, a):
        return abs(a)

    def euclidean_division(self, a, b):
        if b == 0:
            return None
        # remainder is always nonnegative, whatever the signs of a and b
        r = a % abs(b)
        return (a - r) // b, r

    def parse_elem(self, text : str) -> Optional[int]:
        return _parse_int(text)

    def __str__(self):
        return "Z"

class IntegersModulo(Ring):
    """
    Residues modulo n, represented by their canonical representative in [0, n)
    """

    def __init__(self, n : int):
        assert n > 0, f"Modulus must be positive, got {n}"
        self.n = n

    @property
    def np_dtype(self):
        # products of two residues must fit into an int64
        return np.int64 if self.n < 2**31 else object

    def zero(self):
        return 0

    def one(self):
        return self.id(1)

    def add(self, a, b):
        return self.id(a + b)

    def neg(self, a):
        return self.id(-a)

    def mul(self, a, b):
        return self.id(a * b)

    def id(self, a):
        return a % self.n

    def __call__(self, x):
        return self.id(operator.index(x))

    def parse_elem(self, text : str) -> Optional[int]:
        x = _parse_int(text)
        if x is None:
            return None
        return self.id(x)

    def np_reduce(self, arr):
        return arr % self.n

    def __eq__(self, other):
        return type(self) == type(other) and self.n == other.n

    def __hash__(self):
        return hash((type(self), self.n))

    def __repr__(self):
        return f"{type(self).__name__}({self.n})"

    def __str__(self):
        return f"Z/{self.n}Z"

class IntegersModuloN(IntegersModulo):
    """
    The ring Z/nZ, n need not be prime
    """

class IntegersModuloP(IntegersModulo, Field):
    """
    The field Z/pZ.

    The constructor trusts that p is prime; use `checked_new` to verify it.
    """

    @property
    def p(self):
        return self.n

    @staticmethod
    def checked_new(p : int) -> Optional["IntegersModuloP"]:
        if not is_prime(p):
            return None
        return IntegersModuloP(p)

    def inv(self, a):
        a = self.id(a)
        if a == 0:
            return None
        # None only if p was not actually prime
        return inverse_mod(a, self.n)

RR = Reals()
ZZ = Integers()

########################################################################################################################
#   Unit Tests
########################################################################################################################

import random
import unittest

PRIMES_TO_127 = [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67, 71, 73, 79, 83, 89, 97,
                 101, 103, 107, 109, 113, 127]

class TestExtendedEuclideanInt(unittest.TestCase):

    def test_xgcd(self):
        self.assertEqual(extended_euclidean_int(48, -30), (6, 2, 3))
        self.assertEqual(extended_euclidean_int(30, 18), (6, -1, 2))
        self.assertEqual(extended_euclidean_int(18, 30), (6, 2, -1))
        self.assertIsNone(extended_euclidean_int(0, 0))

    def test_fast_paths(self):
        self.assertEqual(extended_euclidean_int(-7, 0), (7, -1, 0))
        self.assertEqual(extended_euclidean_int(12, 4), (4, 0, 1))
        self.assertEqual(extended_euclidean_int(12, -4), (4, 0, -1))
        self.assertEqual(extended_euclidean_int(0, 5), (5, 0, 1))

    def test_bezout(self):
        for _ in range(1000):
            a = random.randint(-10000, 10000)
            b = random.randint(-10000, 10000)
            if a == 0 and b == 0:
                continue
            g, s, t = extended_euclidean_int(a, b)
            self.assertEqual(s * a + t * b, g)
            self.assertEqual(g, math.gcd(a, b))

    def test_inverse_mod(self):
        self.assertEqual(inverse_mod(3, 7), 5)
        self.assertEqual(inverse_mod(-3, 7), 2)
        self.assertIsNone(inverse_mod(4, 8))
        for p in PRIMES_TO_127:
            for a in range(1, p):
                self.assertEqual(a * inverse_mod(a, p) % p, 1)

class TestPrimality(unittest.TestCase):

    def test_small_primes(self):
        for p in PRIMES_TO_127:
            self.assertIsNotNone(IntegersModuloP.checked_new(p), p)

    def test_composites(self):
        for n in [0, 1, 4, 6, 8, 9, 25, 49, 121, 333, 7909]:
            self.assertIsNone(IntegersModuloP.checked_new(n), n)

    def test_agrees_with_sieve(self):
        sieve = [True] * 2000
        sieve[0] = sieve[1] = False
        for i in range(2, 2000):
            if sieve[i]:
                for j in range(i * i, 2000, i):
                    sieve[j] = False
        for n in range(2000):
            self.assertEqual(is_prime(n), sieve[n], n)

    def test_larger(self):
        self.assertIsNotNone(IntegersModuloP.checked_new(7793))
        self.assertTrue(is_prime(LARGEST_u16_PRIME))
        self.assertTrue(is_prime(LARGEST_s16_PRIME))
        self.assertTrue(is_prime(LARGEST_s32_PRIME))
        # square of a prime sits right on the trial division bound
        self.assertFalse(is_prime(65521 * 65521))

class TestReals(unittest.TestCase):

    def test_field(self):
        self.assertEqual(RR.inv(4.0), 0.25)
        self.assertIsNone(RR.inv(0.0))
        self.assertEqual(RR.div(3.0, 2.0), 1.5)
        self.assertIsNone(RR.div(3.0, 0.0))
        self.assertEqual(RR.sub(1.0, 3.5), -2.5)

    def test_parse(self):
        self.assertEqual(RR.parse_elem("0.5"), 0.5)
        self.assertEqual(RR.parse_elem("-3"), -3.0)
        self.assertEqual(RR.parse_elem("1e3"), 1000.0)
        self.assertIsNone(RR.parse_elem(""))
        self.assertIsNone(RR.parse_elem("abc"))

    def test_display(self):
        self.assertEqual(RR.display_elem(1.0), "1")
        self.assertEqual(RR.display_elem(-3.0), "-3")
        self.assertEqual(RR.display_elem(0.5), "0.5")
        self.assertEqual(RR.display_elem(5.5), "5.5")
        self.assertEqual(RR.display_elem(1e-07), "0.0000001")
        self.assertEqual(RR.display_elem(-2.5e-05), "-0.000025")
        self.assertEqual(RR.display_elem(1e20), "100000000000000000000")
        self.assertEqual(RR.parse_elem(RR.display_elem(0.1 + 0.2)), 0.1 + 0.2)

class TestIntegers(unittest.TestCase):

    def test_euclidean_division(self):
        for a, b, q, r in [(7, 2, 3, 1), (-7, 2, -4, 1), (7, -2, -3, 1), (-7, -2, 4, 1), (6, 3, 2, 0)]:
            self.assertEqual(ZZ.euclidean_division(a, b), (q, r))
        self.assertIsNone(ZZ.euclidean_division(5, 0))

    def test_euclidean_division_random(self):
        for _ in range(1000):
            a = random.randint(-1000, 1000)
            b = random.choice([i for i in range(-50, 51) if i != 0])
            q, r = ZZ.euclidean_division(a, b)
            self.assertEqual(q * b + r, a)
            self.assertTrue(0 <= r < abs(b))

    def test_parse(self):
        self.assertEqual(ZZ.parse_elem("-12"), -12)
        self.assertEqual(ZZ.parse_elem("+4"), 4)
        self.assertIsNone(ZZ.parse_elem("1.5"))
        self.assertIsNone(ZZ.parse_elem("-"))

    def test_coercion(self):
        self.assertEqual(ZZ(np.int64(3)), 3)
        with self.assertRaises(TypeError):
            ZZ(1.5)

class TestIntegersModulo(unittest.TestCase):

    def test_canonical(self):
        Z5 = IntegersModuloN(5)
        self.assertEqual(Z5.id(7), 2)
        self.assertEqual(Z5.id(-1), 4)
        self.assertEqual(Z5.add(3, 4), 2)
        self.assertEqual(Z5.neg(2), 3)
        self.assertEqual(Z5.mul(3, 4), 2)
        self.assertEqual(Z5.sub(1, 3), 3)
        self.assertEqual(Z5.parse_elem("-8"), 2)
        self.assertEqual(Z5(12), 2)

    def test_id_idempotent(self):
        for n in [1, 2, 6, 97]:
            R = IntegersModuloN(n)
            for x in range(-200, 200):
                self.assertEqual(R.id(R.id(x)), R.id(x))
                self.assertIn(R.id(x), range(n))

    def test_field(self):
        F7 = IntegersModuloP(7)
        self.assertTrue(F7.is_field)
        self.assertFalse(IntegersModuloN(7).is_field)
        self.assertIsNone(F7.inv(0))
        self.assertIsNone(F7.inv(14))
        for a in range(1, 7):
            self.assertEqual(F7.mul(a, F7.inv(a)), 1)
        self.assertEqual(F7.div(3, 5), F7.mul(3, F7.inv(5)))

    def test_unchecked_composite(self):
        Z8 = IntegersModuloP(8)
        self.assertIsNone(Z8.inv(4))
        self.assertEqual(Z8.inv(3), 3)

    def test_equality(self):
        self.assertEqual(IntegersModuloN(5), IntegersModuloN(5))
        self.assertNotEqual(IntegersModuloN(5), IntegersModuloN(6))
        self.assertNotEqual(IntegersModuloN(5), IntegersModuloP(5))
        self.assertEqual(Reals(), RR)
        self.assertNotEqual(RR, ZZ)
        self.assertEqual(str(IntegersModuloP(7)), "Z/7Z")
