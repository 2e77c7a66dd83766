from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from brain.openclaw_client import OpenClawClient
from brain.response_parser import ParsedResponse, parse_response
from locales.keywords import KeywordTable, load_keyword_table, resolve_locale

LOGGER = logging.getLogger(__name__)


class ReplyAnnotator:
    """Binds the active keyword table (and optionally a gateway) to the parser."""

    def __init__(self, table: KeywordTable, client: Optional[OpenClawClient] = None) -> None:
        self._table = table
        self._client = client

    @classmethod
    def from_config(
        cls,
        config: Dict[str, Any],
        prefs: Optional[Dict[str, Any]] = None,
        locale: Optional[str] = None,
    ) -> "ReplyAnnotator":
        prefs = prefs or {}
        locales_dir = config.get("locales_dir")
        code = resolve_locale(
            locale, prefs.get("locale"), config.get("locale"), locales_dir=locales_dir
        )
        table = load_keyword_table(code, locales_dir)
        return cls(table, OpenClawClient(config))

    @property
    def table(self) -> KeywordTable:
        return self._table

    def use_table(self, table: KeywordTable) -> None:
        LOGGER.info("Switching keyword table %s -> %s", self._table.locale, table.locale)
        self._table = table

    def annotate(self, raw: Optional[str]) -> ParsedResponse:
        return parse_response(raw, self._table.sentiment_rules())

    async def ask(self, user_text: str, context: str = "") -> Optional[ParsedResponse]:
        if self._client is None:
            raise RuntimeError("No OpenClaw client configured")

        raw = await self._client.think(context, user_text)
        parsed = self.annotate(raw)
        if not parsed.text:
            LOGGER.warning("OpenClaw response missing text")
            return None
        return parsed
