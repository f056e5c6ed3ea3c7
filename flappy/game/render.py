# flappy/game/render.py
from __future__ import annotations
from typing import Optional
import pygame

from .config import COLOR_BG, COLOR_PIPE, COLOR_GROUND, COLOR_BIRD, COLOR_DANGER, COLOR_FG
from .engine import Frame
from .pipes import PipePair


def _pipe_rects(pair: PipePair):
    top = pygame.Rect(int(pair.left), int(pair.top_pipe.top), int(pair.width), int(pair.top_pipe.height))
    bot = pygame.Rect(int(pair.left), int(pair.bottom_pipe.top), int(pair.width), int(pair.bottom_pipe.height))
    return top, bot


def draw_frame(surf: pygame.Surface, frame: Frame, font: Optional[pygame.font.Font] = None):
    """Draw a snapshot. Never touches simulation state."""
    surf.fill(COLOR_BG)

    for pair in frame.pipes:
        if not pair.show:
            continue
        for r in _pipe_rects(pair):
            pygame.draw.rect(surf, COLOR_PIPE, r)

    ground_top = int(frame.height - frame.ground.height)
    pygame.draw.rect(surf, COLOR_GROUND,
                     pygame.Rect(0, ground_top, int(frame.width), int(frame.ground.height)))

    bird = frame.bird
    color = COLOR_DANGER if frame.game_over else COLOR_BIRD
    pygame.draw.rect(surf, color, pygame.Rect(int(bird.left), int(bird.top), int(bird.size), int(bird.size)))

    if font is not None:
        txt = font.render(str(frame.score), True, COLOR_FG)
        surf.blit(txt, (int(frame.width) // 2 - txt.get_width() // 2, 24))
