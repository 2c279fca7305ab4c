# watchface/core/canvas.py
"""
Pillow raster canvas: executes draw commands into an RGB image.
Used as the off-device display and as the offscreen layer implementation.
Fractional coordinates are truncated to integer pixels here.
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageDraw

from watchface.core.draw import (
    Blit,
    ClearClip,
    DrawCircle,
    DrawCommand,
    DrawLine,
    DrawText,
    FillCircle,
    FillPolygon,
    FillRect,
    SetClip,
)
from watchface.core.text_metrics import load_font
from watchface.core.theme import to_rgb

_ANCHORS = {"left": "lm", "center": "mm", "right": "rm"}


class PillowCanvas:
    """RGB raster surface with an optional rectangular clip."""

    def __init__(self, width: int, height: int, name: str = "display", background: str = "#000000") -> None:
        self.width = width
        self.height = height
        self.name = name
        self.image = Image.new("RGB", (width, height), to_rgb(background))
        self._clip: tuple[int, int, int, int] | None = None
        self.executed = 0

    @property
    def clip(self) -> tuple[int, int, int, int] | None:
        return self._clip

    def execute(self, command: DrawCommand) -> None:
        self.executed += 1
        if isinstance(command, SetClip):
            self._clip = (command.x, command.y, command.x + command.w, command.y + command.h)
            return
        if isinstance(command, ClearClip):
            self._clip = None
            return
        if self._clip is None:
            self._draw(self.image, command)
            return
        # Draw on a copy, then keep only the clipped rectangle.
        scratch = self.image.copy()
        self._draw(scratch, command)
        self.image.paste(scratch.crop(self._clip), self._clip[:2])

    def _draw(self, image: Image.Image, cmd: DrawCommand) -> None:
        if isinstance(cmd, Blit):
            source = getattr(cmd.source, "image", None)
            if source is None:
                raise TypeError(f"Cannot blit from {cmd.source!r}: not a raster canvas")
            region = source.crop((cmd.sx, cmd.sy, cmd.sx + cmd.w, cmd.sy + cmd.h))
            image.paste(region, (cmd.x, cmd.y))
            return

        draw = ImageDraw.Draw(image)
        if isinstance(cmd, FillRect):
            if cmd.w > 0 and cmd.h > 0:
                draw.rectangle([cmd.x, cmd.y, cmd.x + cmd.w - 1, cmd.y + cmd.h - 1], fill=to_rgb(cmd.color))
        elif isinstance(cmd, FillPolygon):
            pts = [(int(p[0]), int(p[1])) for p in cmd.points]
            if len(pts) >= 3:
                draw.polygon(pts, fill=to_rgb(cmd.color))
        elif isinstance(cmd, DrawLine):
            draw.line(
                [(int(cmd.x1), int(cmd.y1)), (int(cmd.x2), int(cmd.y2))],
                fill=to_rgb(cmd.color),
                width=max(1, cmd.width),
            )
        elif isinstance(cmd, FillCircle):
            bbox = [cmd.cx - cmd.r, cmd.cy - cmd.r, cmd.cx + cmd.r, cmd.cy + cmd.r]
            draw.ellipse(bbox, fill=to_rgb(cmd.color))
        elif isinstance(cmd, DrawCircle):
            bbox = [cmd.cx - cmd.r, cmd.cy - cmd.r, cmd.cx + cmd.r, cmd.cy + cmd.r]
            draw.ellipse(bbox, outline=to_rgb(cmd.color), width=max(1, cmd.width))
        elif isinstance(cmd, DrawText):
            if cmd.text:
                draw.text(
                    (cmd.x, cmd.y),
                    cmd.text,
                    fill=to_rgb(cmd.color),
                    font=load_font(cmd.font_size),
                    anchor=_ANCHORS.get(cmd.justify, "mm"),
                )
        else:
            raise TypeError(f"Unknown draw command: {cmd!r}")

    def pixel(self, x: int, y: int) -> tuple[int, int, int]:
        return self.image.getpixel((x, y))

    def save(self, output_path: str | Path) -> Path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.image.save(path)
        return path


def pillow_layer_factory(width: int, height: int, name: str) -> PillowCanvas:
    """Offscreen layer allocator for FrameCompositor."""
    return PillowCanvas(width, height, name=name)
