"""OLED display wrapper used as the engine's render target."""
import logging
from pathlib import Path
from typing import Optional

from cube.config import Config
from cube.errors import RenderError
from oled.canvas import OLEDCanvas

log = logging.getLogger("display")


class Display:
    """Draws onto the OLED panel, or onto an off-screen canvas when headless.

    If the display is disabled in the configuration or the hardware stack
    cannot be initialised (for example on development hosts), frames are
    still drawn and can be dumped to a PNG file for inspection.
    """

    def __init__(self, cfg: Config):
        self.cfg = cfg
        self.enabled = cfg.display_enabled
        self.device = None
        self.canvas: OLEDCanvas = OLEDCanvas(cfg.display_width, cfg.display_height)
        self.frame_dump_path: Optional[Path] = (
            Path(cfg.frame_dump_path).expanduser() if cfg.frame_dump_path else None
        )
        self._last_dumped: Optional[bytes] = None

    def init(self):
        """Initialize display hardware."""
        if not self.enabled:
            log.info("display: disabled, running headless")
            return

        try:
            self._create_device()
            self.canvas = self.device
            log.info("display: initialized")
        except Exception as e:
            log.warning(f"display: init failed, running headless: {e}")
            self.enabled = False
            self.device = None

    def _create_device(self):
        from oled.oled import OLEDDisplay
        self.device = OLEDDisplay(
            width=self.cfg.display_width,
            height=self.cfg.display_height,
            upside_down=self.cfg.display_upside_down,
            dc_pin=self.cfg.display_dc_pin,
            reset_pin=self.cfg.display_reset_pin,
            cs_pin=self.cfg.display_cs_pin,
            baudrate=self.cfg.display_spi_baudrate,
        )

    @property
    def width(self) -> int:
        return self.canvas.width

    @property
    def height(self) -> int:
        return self.canvas.height

    def _draw(self, command: str, *args, **kwargs):
        try:
            getattr(self.canvas, command)(*args, **kwargs)
        except (ValueError, TypeError, OSError) as e:
            raise RenderError(f"{command} failed: {e}") from e

    def clear(self, color: int = 0):
        self._draw("clear", color)

    def rectangle(self, top_left, size, *, fill=None, outline=None):
        self._draw("rectangle", top_left, size, fill=fill, outline=outline)

    def line(self, start, end, *, color=1, width=1):
        self._draw("line", start, end, color=color, width=width)

    def circle(self, center, diameter, *, fill=None, outline=None):
        self._draw("circle", center, diameter, fill=fill, outline=outline)

    def text(self, position, text, *, font="small", color=1):
        self._draw("text", position, text, font=font, color=color)

    def begin_frame(self):
        """Blank the canvas before the next tick draws into it."""
        self.canvas.clear(0)

    def flush(self):
        """Push the finished frame to the panel (or the dump file)."""
        if self.device:
            try:
                self.device.refresh()
            except (OSError, RuntimeError) as e:
                log.warning(f"display: flush failed: {e}")
        elif self.frame_dump_path:
            self._dump_frame()

    def _dump_frame(self):
        frame = self.canvas.image.tobytes()
        if frame == self._last_dumped:
            return
        self._last_dumped = frame
        try:
            self.canvas.image.save(self.frame_dump_path)
        except OSError as e:
            log.warning(f"display: frame dump failed: {e}")

    def close(self):
        """Clear the panel and power it off."""
        if not self.device:
            return
        try:
            self.device.shutdown()
        except (OSError, RuntimeError) as e:
            log.warning(f"display: shutdown failed: {e}")
        self.device = None
