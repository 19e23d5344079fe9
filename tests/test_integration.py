"""Tests for the hypsometric integral."""

import pytest
from scipy import integrate

from hypsometry_analysis.integration import (
    curve_polynomial, hypsometric_integral, integrate_polynomial,
)

COEFFICIENTS = [
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
    (2.28463, -3.36411, 2.28994),
    (-0.5, 4.2, -2.7),
]


@pytest.mark.parametrize("coefficients", COEFFICIENTS)
def test_closed_form_matches_antiderivative(coefficients):
    assert hypsometric_integral(coefficients) == pytest.approx(
        integrate_polynomial(coefficients), abs=1e-12)


@pytest.mark.parametrize("coefficients", COEFFICIENTS)
def test_closed_form_matches_quadrature(coefficients):
    numeric, _ = integrate.quad(curve_polynomial(coefficients), 0, 1)
    assert hypsometric_integral(coefficients) == pytest.approx(numeric, abs=1e-9)


def test_unit_line():
    assert hypsometric_integral((1.0, 0.0, 0.0)) == 0.5


def test_curve_passes_through_origin():
    assert curve_polynomial((0.3, 0.2, 0.1))(0.0) == 0.0


def test_partial_bounds():
    assert integrate_polynomial((0.0, 0.0, 4.0), 0.0, 0.5) == pytest.approx(0.5 ** 4)
