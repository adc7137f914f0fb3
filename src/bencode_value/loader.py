"""
Loads Bencoded data from files and HTTP endpoints.
"""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import aiohttp

from .decoder import decode
from .errors import BencodeError
from .structure import Value

logger = logging.getLogger(__name__)

# Seconds allowed for a whole HTTP request
DEFAULT_TIMEOUT = 30


def load(path) -> Value:
    """Reads and decodes a Bencoded file (e.g. a .torrent)."""
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        logger.warning("Could not read %s: %s", path, exc)
        raise BencodeError.io(exc) from exc

    return decode(raw)


async def _read(session: aiohttp.ClientSession, url: str) -> bytes:
    async with session.get(url) as resp:
        resp.raise_for_status()
        return await resp.read()


async def fetch(url: str, session: Optional[aiohttp.ClientSession] = None,
                timeout: float = DEFAULT_TIMEOUT) -> Value:
    """
    Downloads a Bencoded document (e.g. a tracker response) and decodes it.

    A session passed in by the caller is reused and left open. Connection
    failures, error statuses and timeouts are raised as IO_ERROR.
    """
    try:
        if session is not None:
            data = await asyncio.wait_for(_read(session, url), timeout)
        else:
            client_timeout = aiohttp.ClientTimeout(total=timeout)
            async with aiohttp.ClientSession(timeout=client_timeout) as own_session:
                data = await _read(own_session, url)
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        logger.warning("Fetching %s failed: %r", url, exc)
        raise BencodeError.io(exc) from exc

    logger.debug("Fetched %d bytes from %s", len(data), url)
    return decode(data)
