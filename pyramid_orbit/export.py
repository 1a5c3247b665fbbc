import logging
from pathlib import Path

import numpy as np
import pygame
from PIL import Image

logger = logging.getLogger(__name__)


def surface_to_image(surface: pygame.Surface) -> Image.Image:
    """
    Copy a pygame surface into a PIL RGB image.

    pygame.surfarray indexes pixels as [x, y, c]; PIL expects [y, x, c].
    """
    pixels = pygame.surfarray.array3d(surface)  # (W, H, 3)
    return Image.fromarray(np.ascontiguousarray(pixels.transpose(1, 0, 2)).astype(np.uint8))


def save_snapshot(surface: pygame.Surface, path) -> Path:
    """Write the surface to disk (format from the file extension)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    surface_to_image(surface).save(path)
    logger.info("snapshot written to %s (%dx%d)", path, *surface.get_size())
    return path
