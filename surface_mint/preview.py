import numpy as np
import pygame
from pygame.locals import QUIT, KEYDOWN, K_ESCAPE

from .mint import to_uint8

MAX_WINDOW = 900


def fit_size(w: int, h: int, limit: int = MAX_WINDOW):
    scale = min(1.0, limit / float(max(w, h)))
    return max(1, int(round(w * scale))), max(1, int(round(h * scale)))


def show_preview(image: np.ndarray, title: str = "Surface Mint Preview (Esc to exit)") -> None:
    """Show the final frame until the window is closed or Esc is pressed."""
    frame8 = to_uint8(image)
    H, W = frame8.shape[:2]
    win_w, win_h = fit_size(W, H)

    pygame.init()
    try:
        surf = pygame.display.set_mode((win_w, win_h))
        pygame.display.set_caption(title)
        frame_surface = pygame.surfarray.make_surface(np.transpose(frame8, (1, 0, 2)))
        if (win_w, win_h) != (W, H):
            frame_surface = pygame.transform.smoothscale(frame_surface, (win_w, win_h))
        surf.blit(frame_surface, (0, 0))
        pygame.display.flip()

        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == QUIT:
                    running = False
                if event.type == KEYDOWN and event.key == K_ESCAPE:
                    running = False
            clock.tick(30)
    finally:
        pygame.quit()
