"""Post-process passes: separable 9-tap blur and film grain."""
import cv2
import numpy as np

# 9-tap Gaussian, offsets -4..4 taps
BLUR_WEIGHTS = (0.051, 0.0918, 0.12245, 0.1531, 0.1633, 0.1531, 0.12245, 0.0918, 0.051)


def _pixel_grid(h: int, w: int):
    return np.meshgrid(np.arange(w, dtype=np.float32), np.arange(h, dtype=np.float32))


def blur_pass(image: np.ndarray, spacing: float, horizontal: bool = True) -> np.ndarray:
    """
    One direction of the separable blur. spacing is the tap distance in uv
    units; taps are sampled bilinearly with clamp-to-edge like a texture fetch.
    """
    img = np.ascontiguousarray(image, dtype=np.float32)
    h, w = img.shape[:2]
    if spacing <= 0:
        return img.copy()
    step = spacing * (w if horizontal else h)
    map_x, map_y = _pixel_grid(h, w)
    out = np.zeros_like(img)
    for k, weight in zip(range(-4, 5), BLUR_WEIGHTS):
        if horizontal:
            mx, my = map_x + k * step, map_y
        else:
            mx, my = map_x, map_y + k * step
        out += weight * cv2.remap(img, mx, my, interpolation=cv2.INTER_LINEAR,
                                  borderMode=cv2.BORDER_REPLICATE)
    return out


def grain(u: np.ndarray, v: np.ndarray) -> np.ndarray:
    # fract(sin(dot(uv, vec2(12.9898, 78.233))) * 43758.5453)
    x = np.sin(u * 12.9898 + v * 78.233) * 43758.5453
    return x - np.floor(x)


def film_pass(image: np.ndarray, noise_intensity: float = 0.15, scanline_intensity: float = 0.025,
              scanline_count: int = 0, grayscale: bool = False, time: float = 0.0) -> np.ndarray:
    """Film grain plus optional scanlines, output not clamped."""
    base = np.asarray(image, dtype=np.float32)
    h, w = base.shape[:2]
    u = ((np.arange(w, dtype=np.float32) + 0.5) / w)[None, :]
    # uv origin is bottom-left
    v = (1.0 - (np.arange(h, dtype=np.float32) + 0.5) / h)[:, None]

    dx = grain(u + np.float32(time), v + np.float32(time)).astype(np.float32)
    delta = base * np.clip(np.float32(0.1) + dx, 0.0, 1.0)[..., None]

    if scanline_count:
        sc_x = np.sin(v * np.float32(scanline_count))
        sc_y = np.cos(v * np.float32(scanline_count))
        scan = np.stack(np.broadcast_arrays(sc_x, sc_y, sc_x), axis=-1).astype(np.float32)
        delta += base * scan * np.float32(scanline_intensity)
    else:
        # sin(0) = 0, cos(0) = 1: only green picks up the scanline term
        delta[..., 1] += base[..., 1] * np.float32(scanline_intensity)

    result = base + np.float32(np.clip(noise_intensity, 0.0, 1.0)) * delta

    if grayscale:
        lum = result[..., 0] * 0.3 + result[..., 1] * 0.59 + result[..., 2] * 0.11
        result = np.repeat(lum[..., None], 3, axis=-1)
    return result.astype(np.float32, copy=False)


def post_process(image: np.ndarray, settings) -> np.ndarray:
    """Horizontal blur, vertical blur, film; in that order."""
    out = blur_pass(image, settings.blur_spacing, horizontal=True)
    out = blur_pass(out, settings.blur_spacing, horizontal=False)
    return film_pass(out, noise_intensity=settings.film_noise,
                     scanline_intensity=settings.film_scanlines,
                     scanline_count=settings.film_scanline_count,
                     grayscale=settings.film_grayscale)
