"""Mailbox message sources: a random quote or a self-hosted broadcast message."""
import logging
import string
from typing import Optional

import httpx
from pydantic import BaseModel, Field

from cube.config import Config
from cube.errors import FetchError

log = logging.getLogger("message")


# Characters the panel font renders; anything else becomes "?"
ALLOWED_PUNCTUATION = ".,:;!?'\"()-+/&@#%*=_|$<>[]~"
_ALLOWED = frozenset(string.ascii_letters + string.digits + " \t" + ALLOWED_PUNCTUATION)
# The mailbox scrolls a single line, so line breaks become spaces
_LINE_BREAKS = frozenset("\n\r\x0b\x0c")


def _safe_char(c: str) -> str:
    if c in _ALLOWED:
        return c
    if c in _LINE_BREAKS:
        return " "
    return "?"


def sanitize(text: str) -> str:
    """Replace characters outside the display-safe ASCII set and trim."""
    return "".join(_safe_char(c) for c in text).strip()


class QuotePayload(BaseModel):
    text: str = Field(alias="quoteText")
    author: str = Field(default="", alias="quoteAuthor")


class QuoteClient:
    """Random quote from forismatic, formatted as ``"<text> | by <author>"``."""

    def __init__(self, cfg: Config, client: Optional[httpx.Client] = None):
        self.url = cfg.quote_url
        self.client = client or httpx.Client(timeout=cfg.http_timeout_sec)

    def fetch(self) -> str:
        try:
            response = self.client.get(self.url)
            response.raise_for_status()
            quote = QuotePayload.model_validate(response.json())
        except httpx.HTTPError as e:
            raise FetchError(f"fails to fetch quote data: {e}") from e
        except ValueError as e:
            raise FetchError(f"fails to parse quote data: {e}") from e

        log.debug(f"message: quote {quote}")
        author = quote.author.strip() or "???"
        return sanitize(f"{quote.text.strip()} | by {author}")

    def close(self):
        self.client.close()


class MailboxClient:
    """Plain-text broadcast message served behind HTTP basic auth."""

    def __init__(self, cfg: Config, client: Optional[httpx.Client] = None):
        self.url = cfg.mailbox_url
        self.auth = (cfg.mailbox_username, cfg.mailbox_password)
        self.client = client or httpx.Client(timeout=cfg.http_timeout_sec)

    def fetch(self) -> str:
        try:
            response = self.client.get(self.url, auth=self.auth)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise FetchError(f"fails to fetch mailbox message: {e}") from e
        return sanitize(response.text)

    def close(self):
        self.client.close()


def build_message_source(cfg: Config):
    if cfg.message_provider == "quote":
        return QuoteClient(cfg)
    if cfg.message_provider == "mailbox":
        return MailboxClient(cfg)
    raise ValueError(f"unknown message provider '{cfg.message_provider}'")
