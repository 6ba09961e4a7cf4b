"""Typed access to the ``{"stat": ..., "<key>": {...}}`` documents Flickr returns.

Every JSON answer carries a ``stat`` field. ``"ok"`` documents hold the payload
under a method-specific key (``photo``, ``photos``, ``sizes``...); ``"fail"``
documents hold ``code`` and ``message`` instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import ValidationError

from flickr_photos.core.errors import FlickrAPIError, ParseError
from flickr_photos.engine.models import Paginated
from flickr_photos.engine.schemas import PageInfoPayload

T = TypeVar("T")

Decoder = Callable[[Any], T]

logger = logging.getLogger(__name__)


class Envelope:
    def __init__(self, document: Any) -> None:
        if not isinstance(document, dict):
            raise ParseError(f"Expected a JSON object, got {type(document).__name__}")
        stat = document.get("stat")
        if stat == "fail":
            code = _coerce_code(document.get("code"))
            message = str(document.get("message") or "Unknown error")
            logger.warning("Flickr API error %s: %s", code, message)
            raise FlickrAPIError(code, message)
        if stat != "ok":
            raise ParseError(f"Unexpected response status: {stat!r}")
        self._document = document

    def entity(self, key: str, decoder: Decoder[T]) -> T:
        return decoder(self._section(key))

    def items(self, key: str, item_key: str, decoder: Decoder[T]) -> list[T]:
        return [decoder(raw) for raw in _as_list(self._section(key).get(item_key))]

    def page(self, key: str, item_key: str, decoder: Decoder[T]) -> Paginated[T]:
        section = self._section(key)
        items = tuple(decoder(raw) for raw in _as_list(section.get(item_key)))
        try:
            info = PageInfoPayload.model_validate(section)
        except ValidationError as exc:
            raise ParseError(f"Invalid pagination for {key!r}: {exc}") from exc

        per_page = info.per_page if info.per_page is not None else len(items)
        if len(items) > per_page:
            raise ParseError(
                f"Page for {key!r} holds {len(items)} items, more than per_page={per_page}"
            )
        return Paginated(
            items=items,
            page=info.page if info.page is not None else 1,
            pages=info.pages if info.pages is not None else 1,
            per_page=per_page,
            total=info.total if info.total is not None else len(items),
        )

    def _section(self, key: str) -> dict[str, Any]:
        section = self._document.get(key)
        if not isinstance(section, dict):
            raise ParseError(f"Response is missing the {key!r} object")
        return section


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        return value
    raise ParseError(f"Expected a JSON array, got {type(value).__name__}")


def _coerce_code(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
