"""
Hypsometric integral of a fitted curve.

The fitted curve p(x) = b1*x + b2*x² + b3*x³ is known in closed form, so
the integral over [0, 1] is exact:

    HI = b1/2 + b2/3 + b3/4

No numerical quadrature is needed.
"""

from numpy.polynomial import Polynomial


def curve_polynomial(coefficients):
    """Raw-power polynomial b1*x + b2*x² + b3*x³ with a zero constant term."""
    return Polynomial([0.0, *coefficients])


def integrate_polynomial(coefficients, lower=0.0, upper=1.0):
    """Definite integral of the curve polynomial via its antiderivative."""
    antiderivative = curve_polynomial(coefficients).integ()
    return float(antiderivative(upper) - antiderivative(lower))


def hypsometric_integral(coefficients):
    """
    Closed-form integral of the fitted curve over [0, 1].

    Parameters
    ----------
    coefficients : sequence of float
        (b1, b2, b3), linear to cubic terms. The intercept is never included.

    Returns
    -------
    float
    """
    b1, b2, b3 = coefficients
    return b1 / 2.0 + b2 / 3.0 + b3 / 4.0
