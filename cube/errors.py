"""Error kinds shared by the sources, the display and the engine."""


class FetchError(Exception):
    """A remote source could not produce a fresh value."""
    pass


class HourIndexError(FetchError):
    """The current hour does not index into the fetched hourly series."""
    pass


class RenderError(Exception):
    """The render target rejected a draw command."""
    pass
