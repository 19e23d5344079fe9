"""Tests for the cubic hypsometric fit."""

import warnings

import numpy as np
import pytest

from hypsometry_analysis.curve_fitting import (
    assess_fit_quality, evaluate_fit, fit_hypsometric_curve,
)
from hypsometry_analysis.exceptions import InsufficientDataError
from hypsometry_analysis.integration import hypsometric_integral


def test_straight_line_reduces_to_linear_term():
    x = np.linspace(0.1, 1.0, 10)

    fit = fit_hypsometric_curve(x, x)

    b1, b2, b3 = fit['coefficients']
    assert b1 == pytest.approx(1.0, abs=1e-8)
    assert b2 == pytest.approx(0.0, abs=1e-8)
    assert b3 == pytest.approx(0.0, abs=1e-8)
    assert fit['intercept'] == pytest.approx(0.0, abs=1e-8)
    assert fit['r_squared'] == pytest.approx(1.0)
    assert hypsometric_integral(fit['coefficients']) == pytest.approx(0.5, abs=1e-8)


def test_matches_raw_polynomial_least_squares():
    rng = np.random.default_rng(7)
    x = np.sort(rng.uniform(0, 1, 20))
    y = np.sqrt(x) + rng.normal(0, 0.02, 20)

    fit = fit_hypsometric_curve(x, y)

    # np.polyfit returns highest power first
    b3, b2, b1, b0 = np.polyfit(x, y, 3)
    np.testing.assert_allclose(fit['coefficients'], [b1, b2, b3], atol=1e-8)
    assert fit['intercept'] == pytest.approx(b0, abs=1e-8)
    assert fit['df_resid'] == 16
    assert all(0 <= p <= 1 for p in fit['p_values'])


def test_intercept_is_not_part_of_integral():
    x = np.linspace(0.1, 1.0, 10)

    fit = fit_hypsometric_curve(x, x + 0.1)

    assert fit['intercept'] == pytest.approx(0.1, abs=1e-8)
    assert hypsometric_integral(fit['coefficients']) == pytest.approx(0.5, abs=1e-8)


@pytest.mark.parametrize("n_samples", [1, 2, 3])
def test_too_few_samples(n_samples):
    x = np.linspace(0.2, 1.0, n_samples)
    with pytest.raises(InsufficientDataError):
        fit_hypsometric_curve(x, x)


def test_too_few_distinct_samples():
    x = [0.2, 0.2, 0.5, 0.5, 1.0, 1.0]
    with pytest.raises(InsufficientDataError):
        fit_hypsometric_curve(x, [0.0, 0.0, 0.5, 0.5, 1.0, 1.0])


def test_four_samples_is_exact_fit():
    x = np.array([0.1, 0.4, 0.7, 1.0])
    y = x ** 2

    fit = fit_hypsometric_curve(x, y)

    assert fit['df_resid'] == 0
    assert all(np.isnan(p) for p in fit['p_values'])
    np.testing.assert_allclose(evaluate_fit(fit, x), y, atol=1e-10)


def test_length_mismatch():
    with pytest.raises(ValueError):
        fit_hypsometric_curve([0.1, 0.2, 0.3, 0.4], [0.1, 0.2, 0.3])


def test_evaluate_without_intercept():
    fit = {'intercept': 0.25, 'coefficients': (1.0, 0.0, 0.0)}
    np.testing.assert_allclose(evaluate_fit(fit, [0.0, 1.0], include_intercept=False), [0.0, 1.0])
    np.testing.assert_allclose(evaluate_fit(fit, [0.0, 1.0]), [0.25, 1.25])


class TestFitQuality:

    def test_low_r_squared_warns(self):
        with pytest.warns(UserWarning, match="C007"):
            assert assess_fit_quality({'r_squared': 0.5}, "C007") is True

    def test_undefined_r_squared_is_low(self):
        with pytest.warns(UserWarning):
            assert assess_fit_quality({'r_squared': float('nan')}, "C007") is True

    def test_good_fit_is_silent(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert assess_fit_quality({'r_squared': 0.999}, "C007") is False
