"""
Script Data Parser Adapter

Store pages carry their data as JSON literals passed to inline callbacks:

    <script>AF_initDataCallback({key: 'ds:5', hash: '7', data:[...], sideChannel: {}});</script>

This adapter finds those blocks and returns the decoded payloads keyed by
data-source key ("ds:5", "ds:3", ...).
"""
import json
import logging
import re
from typing import Any, Dict, Iterator, Optional, Tuple

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

SCRIPT_MARKER = "AF_initDataCallback"

KEY_PATTERN = re.compile(r"'(ds:.*?)'")
PAYLOAD_PATTERN = re.compile(r"data:([\s\S]*?), sideChannel: \{\}\}\)")


class ScriptDataParser:
    """
    Extracts embedded data-source payloads from raw page markup.

    Blocks whose key or payload cannot be located, or whose payload is not
    valid JSON, are skipped. The result may be empty; a missing key means
    the page does not carry that section.
    """

    def extract(self, html: str) -> Dict[str, Any]:
        """
        Decode every data block on the page.

        Args:
            html: Raw page markup

        Returns:
            Mapping of data-source key to decoded JSON value
        """
        blocks: Dict[str, Any] = {}
        for key, payload in self._iter_blocks(html):
            try:
                blocks[key] = json.loads(payload)
            except ValueError:
                logger.debug(f"Skipping malformed payload for {key}")
        return blocks

    def extract_one(self, html: str, key: str) -> Optional[Any]:
        """
        Decode only the block for `key`, stopping at the first match.

        Returns:
            Decoded JSON value, or None if the block is absent or malformed
        """
        for block_key, payload in self._iter_blocks(html):
            if block_key == key:
                try:
                    return json.loads(payload)
                except ValueError:
                    logger.debug(f"Malformed payload for {key}")
                    return None
        return None

    def _iter_blocks(self, html: str) -> Iterator[Tuple[str, str]]:
        if not html:
            return
        soup = BeautifulSoup(html, "lxml")
        for script in soup.find_all("script"):
            text = script.string or ""
            if not text.lstrip().startswith(SCRIPT_MARKER):
                continue

            key_match = KEY_PATTERN.search(text)
            payload_match = PAYLOAD_PATTERN.search(text)
            if not key_match or not payload_match:
                logger.debug("Skipping data block without key or payload")
                continue

            yield key_match.group(1), payload_match.group(1)
