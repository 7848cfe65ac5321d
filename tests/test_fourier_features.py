import numpy as np
import pytest

from src.features.fourier_features import fourier_terms


def test_fourier_columns_per_harmonic():
    X = fourier_terms(10, periods=(7, 365.25), harmonics=(2, 4))
    assert X.shape == (10, 2 * 2 + 2 * 4)
    assert list(X.columns[:4]) == ['S1-7', 'C1-7', 'S2-7', 'C2-7']
    assert 'C4-365.25' in X.columns


def test_fourier_future_terms_continue_phase():
    full = fourier_terms(20, periods=(7,), harmonics=(3,))
    train = fourier_terms(15, periods=(7,), harmonics=(3,))
    future = fourier_terms(5, periods=(7,), harmonics=(3,), offset=15)

    np.testing.assert_allclose(train.to_numpy(), full.to_numpy()[:15])
    np.testing.assert_allclose(future.to_numpy(), full.to_numpy()[15:])


def test_fourier_drops_degenerate_sine():
    X = fourier_terms(8, periods=(4,), harmonics=(2,))
    assert list(X.columns) == ['S1-4', 'C1-4', 'C2-4']


def test_fourier_rejects_too_many_harmonics():
    with pytest.raises(ValueError):
        fourier_terms(10, periods=(7,), harmonics=(4,))


def test_fourier_rejects_length_mismatch():
    with pytest.raises(ValueError):
        fourier_terms(10, periods=(7, 365.25), harmonics=(2,))
