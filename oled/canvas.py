"""Pillow-backed 1-bit canvas with the primitive draw commands of the panel."""
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

DEFAULT_FONT_PATHS: Dict[str, Sequence[Path]] = {
	"small": (
		Path("/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf"),
		Path("/usr/share/fonts/truetype/freefont/FreeMono.ttf"),
	),
	"large": (
		Path("/usr/share/fonts/truetype/dejavu/DejaVuSansMono-Bold.ttf"),
		Path("/usr/share/fonts/truetype/freefont/FreeMonoBold.ttf"),
	),
}
# Pixel sizes approximating 6x9 and 9x15 bitmap fonts
DEFAULT_FONT_SIZES: Dict[str, int] = {"small": 9, "large": 14}


class OLEDCanvas:
	"""Off-screen drawing surface for a monochrome panel.

	Colours are ``0`` (pixel off) and ``1`` (pixel on). Rectangles take a
	top-left corner and a size; text is positioned by its left baseline.
	"""

	def __init__(self, width: int = 128, height: int = 64) -> None:
		self.width = width
		self.height = height
		self._image = Image.new("1", (width, height), 0)
		self._draw = ImageDraw.Draw(self._image)
		self._fonts = {
			name: self._load_font(DEFAULT_FONT_PATHS[name], size)
			for name, size in DEFAULT_FONT_SIZES.items()
		}

	@staticmethod
	def _load_font(candidates: Sequence[Path], font_size: int) -> ImageFont.ImageFont:
		for candidate in candidates:
			try:
				return ImageFont.truetype(str(candidate), font_size)
			except (OSError, IOError):
				continue
		return ImageFont.load_default(size=font_size)

	@property
	def image(self) -> Image.Image:
		"""Current backing image used for drawing."""

		return self._image

	def font(self, name: str) -> ImageFont.ImageFont:
		try:
			return self._fonts[name]
		except KeyError:
			raise ValueError(f"unknown font '{name}'") from None

	def clear(self, color: int = 0) -> None:
		self._draw.rectangle((0, 0, self.width, self.height), fill=color)

	def rectangle(
		self,
		top_left: Tuple[int, int],
		size: Tuple[int, int],
		*,
		fill: Optional[int] = None,
		outline: Optional[int] = None,
	) -> None:
		x, y = top_left
		w, h = size
		if w <= 0 or h <= 0:
			return
		self._draw.rectangle((x, y, x + w - 1, y + h - 1), fill=fill, outline=outline)

	def line(
		self,
		start: Tuple[int, int],
		end: Tuple[int, int],
		*,
		color: int = 1,
		width: int = 1,
	) -> None:
		self._draw.line((start, end), fill=color, width=width)

	def circle(
		self,
		center: Tuple[int, int],
		diameter: int,
		*,
		fill: Optional[int] = None,
		outline: Optional[int] = None,
	) -> None:
		if diameter <= 0:
			return
		cx, cy = center
		r = (diameter - 1) // 2
		x0, y0 = cx - r, cy - r
		self._draw.ellipse((x0, y0, x0 + diameter - 1, y0 + diameter - 1), fill=fill, outline=outline)

	def text(
		self,
		position: Tuple[int, int],
		text: str,
		*,
		font: str = "small",
		color: int = 1,
	) -> None:
		face = self.font(font)
		x, y = position
		if isinstance(face, ImageFont.FreeTypeFont):
			self._draw.text((x, y), text, font=face, fill=color, anchor="ls")
		else:
			# bitmap fonts have no anchors, shift the top edge up by the glyph height
			height = face.getbbox("Ay")[3]
			self._draw.text((x, y - height), text, font=face, fill=color)


__all__ = ["OLEDCanvas"]
