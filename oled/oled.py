from __future__ import annotations

"""High-level helper for driving an SSD1309/SSD1306 128x64 OLED over SPI."""
import board
import busio
import digitalio
import adafruit_ssd1306
from PIL import Image

from oled.canvas import OLEDCanvas

# The panel sits upside down in the enclosure.
UPSIDE_DOWN: bool = True


def _pin(name: str):
	try:
		return getattr(board, name)
	except AttributeError:
		raise ValueError(f"board has no pin '{name}'") from None


class OLEDDisplay(OLEDCanvas):
	"""Controller for the monochrome OLED panel.

	Parameters
	----------
	upside_down:
		When ``True`` the frame is rotated 180° before it is sent to the panel.
	dc_pin, reset_pin, cs_pin:
		Board pin names (``board.D2`` is ``"D2"``).
	baudrate:
		SPI clock in Hz.
	"""

	def __init__(
		self,
		*,
		width: int = 128,
		height: int = 64,
		upside_down: bool = UPSIDE_DOWN,
		dc_pin: str = "D2",
		reset_pin: str = "D3",
		cs_pin: str = "D8",
		baudrate: int = 9_000_000,
	) -> None:
		super().__init__(width, height)
		self._upside_down = upside_down

		self._spi = busio.SPI(board.SCK, MOSI=board.MOSI)
		self._dc = digitalio.DigitalInOut(_pin(dc_pin))
		self._reset = digitalio.DigitalInOut(_pin(reset_pin))
		self._cs = digitalio.DigitalInOut(_pin(cs_pin))

		# The driver pulses reset and runs the init sequence.
		self._device = adafruit_ssd1306.SSD1306_SPI(
			width,
			height,
			self._spi,
			self._dc,
			self._reset,
			self._cs,
			baudrate=baudrate,
		)
		self._device.fill(0)
		self._device.show()

	def _frame(self) -> Image.Image:
		if self._upside_down:
			return self._image.rotate(180)
		return self._image

	def refresh(self) -> None:
		self._device.image(self._frame())
		self._device.show()

	def shutdown(self) -> None:
		try:
			self._device.fill(0)
			self._device.show()
		finally:
			self._device.poweroff()


__all__ = ["OLEDDisplay", "UPSIDE_DOWN"]
