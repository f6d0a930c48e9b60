#!/usr/bin/env python3
#
#   MathML rendering of polynomials and coefficient rings
#

import xml.etree.ElementTree as ET

from polymoly.polynomial import Polynomial, PolynomialRing
from polymoly.rings import Integers, IntegersModulo, Reals, Ring

LETTER_R = "ℝ"
LETTER_Z = "ℤ"

def _node(tag : str, *children, text : str = None):
    node = ET.Element(tag)
    node.text = text
    node.extend(children)
    return node

def integers_modulo_string(sub : str) -> str:
    return f"{LETTER_Z}/{sub}{LETTER_Z}"

def ring_name(ring : Ring) -> str:
    if isinstance(ring, Reals):
        return LETTER_R
    if isinstance(ring, Integers):
        return LETTER_Z
    if isinstance(ring, IntegersModulo):
        return integers_modulo_string(str(ring.n))
    raise ValueError(f"No MathML name for {ring}")

def ring_string(name : str, is_polynomial : bool) -> str:
    """
    `name` as MathML, followed by [x] for the polynomial ring over it
    """
    math = _node("math", _node("mi", text=name))
    if is_polynomial:
        math.extend([_node("mo", text="["), _node("mi", text="x"), _node("mo", text="]")])
    return ET.tostring(math, encoding="unicode")

def render_ring(ring : Ring) -> str:
    if isinstance(ring, PolynomialRing):
        return ring_string(ring_name(ring.ring), True)
    return ring_string(ring_name(ring), False)

def render_polynomial(poly : Polynomial) -> str:
    """
    Renders `poly` as a <math> element, one <mn>/<mi>/<msup> group per term joined by <mo>+</mo>
    """
    def coefficient(c):
        return _node("mn", text=poly.ring.display_elem(c))

    def variable(exponent):
        if exponent is None:
            return _node("mi", text="x")
        return _node("msup", _node("mi", text="x"), _node("mn", text=str(exponent)))

    def separator():
        return _node("mo", text="+")

    math = _node("math")
    for triple in poly.map_display_parts(coefficient, variable, separator):
        math.extend(node for node in triple if node is not None)
    return ET.tostring(math, encoding="unicode")

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest

from polymoly.rings import RR, ZZ, IntegersModuloN, IntegersModuloP

class TestMathML(unittest.TestCase):

    def test_polynomial(self):
        p = Polynomial.parse(RR, "0.5x^3+x+-2")
        self.assertEqual(render_polynomial(p),
                         "<math><mn>0.5</mn><msup><mi>x</mi><mn>3</mn></msup><mo>+</mo>"
                         "<mi>x</mi><mo>+</mo><mn>-2</mn></math>")

    def test_zero(self):
        self.assertEqual(render_polynomial(Polynomial.zero(ZZ)), "<math><mn>0</mn></math>")

    def test_rings(self):
        self.assertEqual(ring_string(LETTER_R, False), f"<math><mi>{LETTER_R}</mi></math>")
        self.assertEqual(render_ring(PolynomialRing(ZZ)),
                         f"<math><mi>{LETTER_Z}</mi><mo>[</mo><mi>x</mi><mo>]</mo></math>")
        self.assertEqual(ring_name(IntegersModuloN(6)), f"{LETTER_Z}/6{LETTER_Z}")
        self.assertEqual(ring_name(IntegersModuloP(7)), integers_modulo_string("7"))
        with self.assertRaises(ValueError):
            ring_name(PolynomialRing(ZZ))
