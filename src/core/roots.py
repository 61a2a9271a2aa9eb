# core/roots.py
"""
Closed-form real root finding for the polynomials produced by ray/surface
substitution.

Every solver returns a 1D float64 numpy array of the distinct real roots in
ascending order. A negligible leading coefficient drops the degree of the
polynomial (quartic -> cubic -> quadratic -> linear), which happens for
quartic surfaces hit by axis-aligned rays. An identically zero polynomial has
no reported roots.

The kernels are compiled with numba; the public wrappers coerce arguments to
float so a single specialization is compiled per solver.
"""
import math
from typing import Optional

import numpy as np
from numba import njit

from core.config import COEFFICIENT_EPSILON


@njit(cache=False)
def _cbrt(x):
    return math.copysign(abs(x) ** (1.0 / 3.0), x)


@njit(cache=False)
def _push_linear(b, c, out, n):
    # b x + c = 0
    scale = max(abs(b), abs(c))
    if scale == 0.0 or abs(b) <= COEFFICIENT_EPSILON * scale:
        return n
    out[n] = -c / b
    return n + 1


@njit(cache=False)
def _push_quadratic(a, b, c, out, n):
    scale = max(abs(a), max(abs(b), abs(c)))
    if scale == 0.0:
        return n
    if abs(a) <= COEFFICIENT_EPSILON * scale:
        return _push_linear(b, c, out, n)

    disc = b * b - 4.0 * a * c
    if disc < 0.0:
        # Grazing rays produce tiny negative discriminants from rounding.
        if disc > -COEFFICIENT_EPSILON * max(b * b, abs(4.0 * a * c)):
            disc = 0.0
        else:
            return n

    if disc == 0.0:
        out[n] = -b / (2.0 * a)
        return n + 1

    # Cancellation-free form.
    q = -0.5 * (b + math.copysign(math.sqrt(disc), b))
    out[n] = q / a
    if q != 0.0:
        out[n + 1] = c / q
    else:
        out[n + 1] = -q / a
    return n + 2


@njit(cache=False)
def _push_cubic(a, b, c, d, out, n):
    scale = max(max(abs(a), abs(b)), max(abs(c), abs(d)))
    if scale == 0.0:
        return n
    if abs(a) <= COEFFICIENT_EPSILON * scale:
        return _push_quadratic(b, c, d, out, n)

    bn = b / a
    cn = c / a
    dn = d / a
    shift = -bn / 3.0

    # Depressed cubic y^3 + p y + q = 0 with x = y - bn / 3.
    p = cn - bn * bn / 3.0
    q = 2.0 * bn * bn * bn / 27.0 - bn * cn / 3.0 + dn
    half_q = 0.5 * q
    third_p = p / 3.0
    delta = half_q * half_q + third_p * third_p * third_p
    tol = COEFFICIENT_EPSILON * (half_q * half_q + abs(third_p * third_p * third_p))

    if abs(delta) <= tol:
        if abs(p) <= COEFFICIENT_EPSILON * (1.0 + abs(bn) * abs(bn)):
            out[n] = shift
            return n + 1
        # One simple root and one double root.
        out[n] = 3.0 * q / p + shift
        out[n + 1] = -1.5 * q / p + shift
        return n + 2

    if delta > 0.0:
        root_delta = math.sqrt(delta)
        out[n] = _cbrt(-half_q + root_delta) + _cbrt(-half_q - root_delta) + shift
        return n + 1

    # Three distinct real roots, trigonometric form.
    radius = math.sqrt(-third_p)
    cos_arg = (3.0 * q) / (2.0 * p) * math.sqrt(-3.0 / p)
    cos_arg = min(1.0, max(-1.0, cos_arg))
    phi = math.acos(cos_arg) / 3.0
    for k in range(3):
        out[n + k] = 2.0 * radius * math.cos(phi - 2.0 * math.pi * k / 3.0) + shift
    return n + 3


@njit(cache=False)
def _push_quartic(a, b, c, d, e, out, n):
    scale = max(max(max(abs(a), abs(b)), max(abs(c), abs(d))), abs(e))
    if scale == 0.0:
        return n
    if abs(a) <= COEFFICIENT_EPSILON * scale:
        return _push_cubic(b, c, d, e, out, n)

    bn = b / a
    cn = c / a
    dn = d / a
    en = e / a
    shift = -bn / 4.0

    # Depressed quartic y^4 + p y^2 + q y + r = 0 with x = y - bn / 4.
    bn2 = bn * bn
    p = cn - 3.0 * bn2 / 8.0
    q = dn - bn * cn / 2.0 + bn2 * bn / 8.0
    r = en - bn * dn / 4.0 + bn2 * cn / 16.0 - 3.0 * bn2 * bn2 / 256.0

    # Ferrari: take the largest root m of the resolvent cubic
    # m^3 + 2p m^2 + (p^2 - 4r) m - q^2 = 0, positive whenever q != 0.
    resolvent = np.empty(3)
    count = _push_cubic(1.0, 2.0 * p, p * p - 4.0 * r, -q * q, resolvent, 0)
    m = 0.0
    for i in range(count):
        if resolvent[i] > m:
            m = resolvent[i]

    start = n
    if m <= COEFFICIENT_EPSILON * (1.0 + abs(p)):
        # Biquadratic: z^2 + p z + r = 0 with z = y^2.
        squares = np.empty(2)
        found = _push_quadratic(1.0, p, r, squares, 0)
        for i in range(found):
            z = squares[i]
            if z > 0.0:
                root_z = math.sqrt(z)
                out[n] = root_z + shift
                out[n + 1] = -root_z + shift
                n += 2
            elif z > -COEFFICIENT_EPSILON * (1.0 + abs(p)):
                out[n] = shift
                n += 1
    else:
        s = math.sqrt(m)
        half = 0.5 * (p + m)
        correction = 0.5 * q / s
        n = _push_quadratic(1.0, s, half - correction, out, n)
        n = _push_quadratic(1.0, -s, half + correction, out, n)
        for i in range(start, n):
            out[i] += shift
    return n


@njit(cache=False)
def _quadratic(a, b, c):
    out = np.empty(2)
    n = _push_quadratic(a, b, c, out, 0)
    return np.sort(out[:n])


@njit(cache=False)
def _cubic(a, b, c, d):
    out = np.empty(3)
    n = _push_cubic(a, b, c, d, out, 0)
    return np.sort(out[:n])


@njit(cache=False)
def _quartic(a, b, c, d, e):
    out = np.empty(4)
    n = _push_quartic(a, b, c, d, e, out, 0)
    return np.sort(out[:n])


def solve_quadratic(a: float, b: float, c: float) -> np.ndarray:
    """Real roots of a x^2 + b x + c, ascending."""
    return _quadratic(float(a), float(b), float(c))


def solve_cubic(a: float, b: float, c: float, d: float) -> np.ndarray:
    """Real roots of a x^3 + b x^2 + c x + d, ascending."""
    return _cubic(float(a), float(b), float(c), float(d))


def solve_quartic(a: float, b: float, c: float, d: float, e: float) -> np.ndarray:
    """Real roots of a x^4 + b x^3 + c x^2 + d x + e, ascending."""
    return _quartic(float(a), float(b), float(c), float(d), float(e))


def smallest_positive_root(roots: np.ndarray, epsilon: float) -> Optional[float]:
    """
    Returns the smallest root strictly greater than epsilon.

    The roots are sorted here as well, so callers may pass arrays from any
    source; a negative root behind the origin never wins over a positive one.
    """
    for root in np.sort(roots):
        if root > epsilon and math.isfinite(root):
            return float(root)
    return None
