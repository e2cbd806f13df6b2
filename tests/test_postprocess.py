import numpy as np
import pytest

from surface_mint.postprocess import BLUR_WEIGHTS, blur_pass, film_pass, grain, post_process
from surface_mint.settings import RenderSettings


def test_weights_sum_to_one():
    assert sum(BLUR_WEIGHTS) == pytest.approx(1.0)
    assert len(BLUR_WEIGHTS) == 9


def test_blur_keeps_flat_image():
    img = np.full((16, 16, 3), 0.4, dtype=np.float32)
    assert np.allclose(blur_pass(img, 1 / 16), 0.4, atol=1e-5)
    assert np.allclose(blur_pass(img, 1 / 16, horizontal=False), 0.4, atol=1e-5)


def test_zero_spacing_is_identity():
    img = np.random.RandomState(0).rand(8, 8, 3).astype(np.float32)
    assert np.array_equal(blur_pass(img, 0.0), img)


def test_horizontal_blur_spreads_along_rows_only():
    img = np.zeros((21, 21, 3), dtype=np.float32)
    img[10, 10] = 1.0
    out = blur_pass(img, 1 / 21, horizontal=True)
    assert out[10, 10, 0] == pytest.approx(0.1633, abs=1e-4)
    assert out[10, 14, 0] == pytest.approx(0.051, abs=1e-4)
    assert out[10, 15, 0] == pytest.approx(0.0, abs=1e-6)
    assert np.allclose(out[9], 0.0)
    assert out.sum() == pytest.approx(3.0, abs=1e-3)


def test_vertical_blur_spreads_along_columns_only():
    img = np.zeros((21, 21, 3), dtype=np.float32)
    img[10, 10] = 1.0
    out = blur_pass(img, 1 / 21, horizontal=False)
    assert out[6, 10, 1] == pytest.approx(0.051, abs=1e-4)
    assert np.allclose(out[:, 9], 0.0)


def test_grain_in_unit_interval():
    u, v = np.meshgrid(np.linspace(0, 1, 32), np.linspace(0, 1, 32))
    g = grain(u, v)
    assert np.all((g >= 0.0) & (g < 1.0))
    assert g.std() > 0.1


def test_film_zero_intensity_is_identity():
    img = np.random.RandomState(1).rand(8, 8, 3).astype(np.float32)
    assert np.allclose(film_pass(img, noise_intensity=0.0), img)


def test_film_keeps_black():
    img = np.zeros((8, 8, 3), dtype=np.float32)
    assert np.all(film_pass(img) == 0.0)


def test_film_only_brightens_without_scanlines():
    img = np.full((16, 16, 3), 0.5, dtype=np.float32)
    out = film_pass(img)
    assert np.all(out >= img - 1e-6)
    # at most +15% of (base + 2.5% scanline bias)
    assert np.all(out <= 0.5 * (1 + 0.15 * 1.025) + 1e-5)


def test_film_grayscale():
    img = np.random.RandomState(2).rand(8, 8, 3).astype(np.float32)
    out = film_pass(img, grayscale=True)
    assert np.allclose(out[..., 0], out[..., 1])
    assert np.allclose(out[..., 1], out[..., 2])


def test_film_deterministic():
    img = np.random.RandomState(3).rand(8, 8, 3).astype(np.float32)
    assert np.array_equal(film_pass(img), film_pass(img))


def test_post_process_shape():
    img = np.random.RandomState(4).rand(32, 32, 3).astype(np.float32)
    out = post_process(img, RenderSettings(size=32).validated())
    assert out.shape == img.shape
    assert out.dtype == np.float32


def test_film_stays_float32():
    img = np.full((16, 16, 3), 0.5, dtype=np.float32)
    assert film_pass(img).dtype == np.float32
    assert film_pass(img, scanline_count=64).dtype == np.float32


def test_film_scanline_bias_without_count():
    # with no scanlines only green carries the extra term
    img = np.full((4, 4, 3), 0.5, dtype=np.float32)
    out = film_pass(img, noise_intensity=1.0, scanline_intensity=0.1)
    assert np.allclose(out[..., 1] - out[..., 0], 0.05, atol=1e-5)
    assert np.allclose(out[..., 0], out[..., 2])


def test_film_scanlines_vary_by_row():
    img = np.full((32, 8, 3), 0.5, dtype=np.float32)
    out = film_pass(img, noise_intensity=1.0, scanline_intensity=0.5, scanline_count=40)
    green_minus_red = out[..., 1] - out[..., 0]
    assert np.allclose(green_minus_red, green_minus_red[:, :1], atol=1e-5)
    assert green_minus_red[:, 0].std() > 0.01
