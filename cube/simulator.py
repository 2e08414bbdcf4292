"""Desktop simulator: shows the OLED frame in a window, keys stand in for the knob.

Up and Down navigate, Return toggles sleep. Closing the window, Escape or
Ctrl-C exits.
"""
import logging
import signal
import time
from typing import List, Optional, Protocol

from PIL import Image, ImageOps

from cube.display import Display
from cube.events import Event
from cube.main import build_engine, load_config
from cube.state import StateEngine

log = logging.getLogger("simulator")

KEY_EVENTS = {
    "up": Event.NAVIGATE_UP,
    "down": Event.NAVIGATE_DOWN,
    "return": Event.TOGGLE_SLEEP,
}
QUIT_KEYS = ("escape",)

# Green pixels on black, like the real panel
COLOR_ON = (0, 255, 0)
COLOR_OFF = (0, 0, 0)


def frame_to_rgb(image: Image.Image, scale: int = 1) -> Image.Image:
    """Colour a 1-bit frame and enlarge it for a desktop window."""
    rgb = ImageOps.colorize(image.convert("L"), black=COLOR_OFF, white=COLOR_ON)
    if scale > 1:
        rgb = rgb.resize((image.width * scale, image.height * scale), Image.NEAREST)
    return rgb


class SimulatorWindow(Protocol):
    def poll_keys(self) -> Optional[List[str]]:
        """Names of keys pressed since the last poll, ``None`` once closed."""
        ...

    def show(self, image: Image.Image) -> None: ...

    def close(self) -> None: ...


class PygameWindow:
    """SDL window via pygame."""

    def __init__(self, width: int, height: int, scale: int = 4):
        import pygame

        self._pygame = pygame
        self.scale = max(1, scale)
        pygame.init()
        self.screen = pygame.display.set_mode((width * self.scale, height * self.scale))
        pygame.display.set_caption("retro-cube display simulator")

    def poll_keys(self) -> Optional[List[str]]:
        pygame = self._pygame
        keys = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return None
            if event.type == pygame.KEYDOWN:
                name = pygame.key.name(event.key)
                if name in QUIT_KEYS:
                    return None
                keys.append(name)
        return keys

    def show(self, image: Image.Image) -> None:
        rgb = frame_to_rgb(image, self.scale)
        surface = self._pygame.image.frombuffer(rgb.tobytes(), rgb.size, "RGB")
        self.screen.blit(surface, (0, 0))
        self._pygame.display.flip()

    def close(self) -> None:
        self._pygame.quit()


class Simulator:
    """Drives the engine from window keys instead of the rotary encoder."""

    def __init__(self, engine: StateEngine, display: Display, window: SimulatorWindow,
                 tick_ms: int = 10, sleep=time.sleep):
        self.engine = engine
        self.display = display
        self.window = window
        self.tick_sec = tick_ms / 1000.0
        self.sleep = sleep

    def step(self) -> bool:
        """Deliver pending keys and one tick. Returns False once the window closed."""
        keys = self.window.poll_keys()
        if keys is None:
            return False

        for key in keys:
            event = KEY_EVENTS.get(key)
            if event is not None:
                log.debug(f"simulator: key {key} -> {event.value}")
                self.engine.update(self.display, event)

        self.display.begin_frame()
        self.engine.update(self.display, Event.TICK)
        self.window.show(self.display.canvas.image)
        return True

    def run(self, max_frames: Optional[int] = None):
        frames = 0
        while self.step():
            frames += 1
            if max_frames is not None and frames >= max_frames:
                break
            self.sleep(self.tick_sec)
        return frames


def main():
    cfg = load_config()
    log.info("retro-cube: starting simulator...")

    # Headless canvas, the window replaces the panel
    display = Display(cfg)
    engine, sources = build_engine(cfg)
    window = PygameWindow(cfg.display_width, cfg.display_height, cfg.simulator_scale)

    try:
        Simulator(engine, display, window, cfg.tick_ms).run()
    finally:
        log.info("retro-cube: simulator closed")
        window.close()
        for source in sources:
            source.close()


def _terminate(signum, frame):
    raise SystemExit(0)


def run():
    signal.signal(signal.SIGTERM, _terminate)
    try:
        main()
    except KeyboardInterrupt:
        log.info("retro-cube: stopped by user")


if __name__ == "__main__":
    run()
