"""Static image plugin: image scaling to the panel size."""

from __future__ import annotations

__all__ = ["scaled_size"]


def scaled_size(width: int, height: int, panel_width: int, panel_height: int,
                horizontal: bool) -> tuple[int, int]:
    """Size of a *width* x *height* image scaled to fit across the panel.

    On a horizontal panel the height becomes the panel height less 2,
    on a vertical one the width becomes the panel width less 2; the
    aspect ratio is kept.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"image: bad image size {width}x{height}")
    if horizontal:
        target = panel_height - 2
        return target * width // height, target
    target = panel_width - 2
    return target, target * height // width