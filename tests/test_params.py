import pytest

from surface_mint.color import Palette
from surface_mint.fxrand import FXRand
from surface_mint.params import build_uniforms, generate_params


def test_one_layer(many_hashes):
    for h in many_hashes:
        p = generate_params(1, FXRand(h))
        fx, fy, fz = p.noise_frequency
        assert 2.5 <= fx < 10.0 and fy == fz == 0.0
        assert 2 <= p.octaves[0] <= 8 and p.octaves[1:] == (0, 0)
        lx = p.lacunarity[0]
        assert (4.0 <= lx < 6.0) if fx < 5 else (2.0 <= lx < 4.0)
        assert 0.05 <= p.gain[0] < 0.3
        assert 150 <= p.height < 300
        assert not p.second_layer and not p.third_layer
        assert p.layer_count == 1


def test_two_layers(many_hashes):
    for h in many_hashes:
        p = generate_params(2, FXRand(h))
        fx, fy, fz = p.noise_frequency
        assert 0.5 <= fx < 10.0 and 1.0 <= fy < 15.0 and fz == 0.0
        assert 2 <= p.octaves[0] <= 6 and 2 <= p.octaves[1] <= 7 and p.octaves[2] == 0
        lx, ly, lz = p.lacunarity
        assert 4.0 <= lx < 16.0 and 0.0 <= ly < 10.0 and lz == 0.0
        gx, gy, gz = p.gain
        assert 0.05 <= gx < 0.2 and gz == 0.0
        assert (0.1 <= gy < 0.2) if ly > 2.0 else (0.2 <= gy < 0.5)
        assert 100 <= p.height < 350
        assert p.second_layer and not p.third_layer
        assert p.layer_count == 2


def test_three_layers(many_hashes):
    for h in many_hashes:
        p = generate_params(3, FXRand(h))
        fx, fy, fz = p.noise_frequency
        assert 3.0 <= fx < 6.0 and 3.0 <= fy < 7.0
        assert (2.0 <= fz < 3.0) if fy > 5.0 else (3.0 <= fz < 5.0)
        assert all(3 <= o <= 5 for o in p.octaves)
        lx, ly, lz = p.lacunarity
        # fx never drops below 2.5 here
        assert 2.0 <= lx < 4.0 and 1.0 <= ly < 3.0 and 2.0 <= lz < 10.0
        gx, gy, gz = p.gain
        assert 0.1 <= gx < 0.2
        assert 0.1 <= gy < 0.4
        assert (0.1 <= gz < 0.2) if lz > 4.0 else (0.2 <= gz < 0.5)
        assert 200 <= p.height < 350
        assert p.second_layer and p.third_layer
        assert p.layer_count == 3


def test_other_layer_counts_take_three_layer_branch(fixed_hash):
    assert generate_params(7, FXRand(fixed_hash)) == generate_params(3, FXRand(fixed_hash))


def test_params_deterministic(fixed_hash):
    for layer in (1, 2, 3):
        assert generate_params(layer, FXRand(fixed_hash)) == generate_params(layer, FXRand(fixed_hash))


def test_build_uniforms(fixed_hash):
    rand = FXRand(fixed_hash)
    params = generate_params(2, rand)
    palette = Palette(background=(0, 0.0, 0.9), surface=(0, 0.0, 0.5))
    uniforms = build_uniforms(params, palette, rand, 400)
    assert set(uniforms) == {
        "uNoiseFrequency", "uOctaves", "uLacunarity", "uGain", "uSecondLayer",
        "uThirdLayer", "uHeight", "uResolution", "uRandOffset", "uColor",
    }
    assert uniforms["uResolution"] == [400, 400]
    assert 0 <= uniforms["uRandOffset"] < 512
    assert uniforms["uColor"] == pytest.approx([0.5, 0.5, 0.5])
    assert uniforms["uSecondLayer"] is True
    assert uniforms["uThirdLayer"] is False
    assert uniforms["uOctaves"] == list(params.octaves)


@pytest.mark.parametrize("layer, draws, expected", [
    (1, [0.25, 0.5, 0.75, 0.5, 0.25],
     ((4.375, 0.0, 0.0), (5, 0, 0), (5.5, 0.0, 0.0), (0.175, 0.0, 0.0), 187.5)),
    (2, [0.5, 0.125, 0.75, 0.5, 0.25, 0.5, 0.25, 0.5, 0.5, 0.5],
     ((3.0, 5.5, 0.0), (4, 4, 0), (10.0, 5.0, 0.0), (0.075, 0.15, 0.0), 225.0)),
    (3, [0.5, 0.75, 0.5, 0.0, 0.5, 0.875, 0.5, 0.25, 0.75, 0.5, 0.5, 0.5, 0.25],
     ((4.5, 6.0, 2.5), (3, 4, 5), (3.0, 1.5, 8.0), (0.15, 0.25, 0.15), 237.5)),
])
def test_params_draw_order(scripted, layer, draws, expected):
    rand = scripted(draws)
    p = generate_params(layer, rand)
    freq, octaves, lac, gain, height = expected
    assert p.noise_frequency == pytest.approx(freq)
    assert p.octaves == octaves
    assert p.lacunarity == pytest.approx(lac)
    assert p.gain == pytest.approx(gain)
    assert p.height == pytest.approx(height)
    assert rand.remaining == 0


def test_offset_is_the_last_draw(scripted):
    rand = scripted([0.25, 0.5, 0.75, 0.5, 0.25, 0.5])
    params = generate_params(1, rand)
    palette = Palette(background=(0, 0.0, 0.9), surface=(0, 0.0, 0.5))
    assert build_uniforms(params, palette, rand, 8)["uRandOffset"] == 256.0
    assert rand.remaining == 0
