"""Basic drawing primitives on numpy RGB buffers."""

from typing import Sequence, Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int) -> Buffer:
    """Create a black (height, width, 3) buffer."""
    return np.zeros((height, width, 3), dtype=np.uint8)


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
) -> None:
    """Draw a rectangle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw outline only
        thickness: Line thickness for outline (when filled=False)
    """
    h, w = buffer.shape[:2]

    # Clamp to buffer bounds
    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))
    if x1 >= x2 or y1 >= y2:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
        return

    for t in range(thickness):
        buffer[min(y1 + t, y2 - 1), x1:x2] = color
        buffer[max(y2 - 1 - t, y1), x1:x2] = color
        buffer[y1:y2, min(x1 + t, x2 - 1)] = color
        buffer[y1:y2, max(x2 - 1 - t, x1)] = color


def blend_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    alpha: float,
) -> None:
    """Alpha-blend a filled rectangle over the buffer."""
    h, w = buffer.shape[:2]
    x1, y1 = max(0, x), max(0, y)
    x2, y2 = min(w, x + width), min(h, y + height)
    if x1 >= x2 or y1 >= y2:
        return
    region = buffer[y1:y2, x1:x2].astype(np.float32)
    blended = region * (1.0 - alpha) + np.array(color, dtype=np.float32) * alpha
    buffer[y1:y2, x1:x2] = np.clip(blended, 0, 255).astype(np.uint8)


def draw_circle(
    buffer: Buffer,
    cx: int,
    cy: int,
    radius: int,
    color: Color,
    alpha: float = 1.0,
) -> None:
    """Draw a filled circle, optionally alpha-blended."""
    h, w = buffer.shape[:2]
    y_indices, x_indices = np.ogrid[:h, :w]
    mask = (x_indices - cx) ** 2 + (y_indices - cy) ** 2 <= radius ** 2

    if alpha >= 1.0:
        buffer[mask] = color
        return
    pixels = buffer[mask].astype(np.float32)
    blended = pixels * (1.0 - alpha) + np.array(color, dtype=np.float32) * alpha
    buffer[mask] = np.clip(blended, 0, 255).astype(np.uint8)


def vertical_gradient(
    buffer: Buffer,
    top: int,
    bottom: int,
    stops: Sequence[Tuple[float, Color]],
) -> None:
    """Fill rows ``top..bottom`` with a linear gradient through color stops.

    Args:
        stops: (position 0..1, color) pairs in ascending order
    """
    h = buffer.shape[0]
    top, bottom = max(0, top), min(h, bottom)
    if bottom <= top:
        return

    t = np.linspace(0.0, 1.0, bottom - top, dtype=np.float32)
    positions = np.array([p for p, _ in stops], dtype=np.float32)
    colors = np.array([c for _, c in stops], dtype=np.float32)
    rows = np.stack([np.interp(t, positions, colors[:, ch]) for ch in range(3)], axis=1)
    buffer[top:bottom, :] = rows.astype(np.uint8)[:, np.newaxis, :]
