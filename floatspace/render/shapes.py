import cv2
import numpy as np
import pygame
from typing import Tuple


def draw_text(surface: pygame.Surface, text: str, pos: Tuple[int, int], color=(60, 60, 60), size=24):
    font = pygame.font.SysFont(None, size)
    surface.blit(font.render(text, True, color), pos)


def blit_camera_frame(surface: pygame.Surface, frame_bgr: np.ndarray, mirror: bool = True) -> None:
    """Stretch a webcam frame over the whole surface, flipped horizontally by default."""
    rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
    # surfarray is (x, y); OpenCV frames are (row, col)
    frame_surf = pygame.surfarray.make_surface(rgb.swapaxes(0, 1))
    if frame_surf.get_size() != surface.get_size():
        frame_surf = pygame.transform.scale(frame_surf, surface.get_size())
    if mirror:
        frame_surf = pygame.transform.flip(frame_surf, True, False)
    surface.blit(frame_surf, (0, 0))
