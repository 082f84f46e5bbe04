"""Entry normalization.

Maps the entry descriptions callers hand to :func:`laakhay.archive.stream`
onto a uniform lazy sequence of :class:`Entry` values.

Accepted shapes (see :class:`EntryShape`):
    - an Entry instance
    - one mapping: ``{"path": ..., "source": ..., "options": {...}}``
    - flat ``(key, value)`` pairs describing one entry
    - a list or tuple of mappings
    - any other iterable of mappings, normalized one element per pull

List and mapping shapes are validated eagerly, so a missing field is
reported before any archive bytes are produced.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from ..core.enums import Codec, EntryShape
from ..core.exceptions import InvalidEntryError, MissingFieldError
from ..models.entry import Entry
from ..utils.iterators import close_iterator

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("path", "source")

# per-entry options forwarded to the Entry model
ENTRY_OPTIONS = ("codec", "modified_at", "mode")


def _is_pairs(value: Any) -> bool:
    if not isinstance(value, (list, tuple)) or not value:
        return False
    return all(
        isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str) for item in value
    )


def classify_entries(entries: Any) -> EntryShape:
    """Determine which input shape ``entries`` has.

    Raises:
        InvalidEntryError: If entries is not a supported shape
    """
    if isinstance(entries, Entry):
        return EntryShape.ENTRY
    if isinstance(entries, Mapping):
        return EntryShape.MAPPING
    if isinstance(entries, (str, bytes, bytearray, memoryview)):
        raise InvalidEntryError(
            f"entries must be a mapping or an iterable of mappings, got {type(entries).__name__}"
        )
    if _is_pairs(entries):
        return EntryShape.PAIRS
    if isinstance(entries, (list, tuple)):
        return EntryShape.LIST
    if isinstance(entries, Iterable):
        return EntryShape.LAZY
    raise InvalidEntryError(
        f"entries must be a mapping or an iterable of mappings, got {type(entries).__name__}"
    )


def to_entry(
    params: Any, default_codec: Codec = Codec.DEFLATE, index: int | None = None
) -> Entry:
    """Build one Entry from an entry description.

    Args:
        params: Entry mapping, or an Entry which is returned as is
        default_codec: Codec used when the description names none
        index: Position of the description in the caller's input

    Raises:
        MissingFieldError: If ``path`` or ``source`` is absent
        InvalidEntryError: If the description cannot form a valid Entry
    """
    if isinstance(params, Entry):
        return params
    if not isinstance(params, Mapping):
        raise InvalidEntryError(
            f"entry must be a mapping, got {type(params).__name__}", index=index
        )

    fields = dict(params)
    if "source" not in fields and "content_source" in fields:
        fields["source"] = fields.pop("content_source")
    for name in REQUIRED_FIELDS:
        if fields.get(name) is None:
            raise MissingFieldError(name, index=index)

    options = fields.get("options") or {}
    if not isinstance(options, Mapping):
        raise InvalidEntryError(
            f"entry options must be a mapping, got {type(options).__name__}", index=index
        )

    values: dict[str, Any] = {"codec": fields.get("codec", default_codec)}
    values.update({key: options[key] for key in ENTRY_OPTIONS if key in options})

    try:
        return Entry(path=fields["path"], source=fields["source"], **values)
    except ValidationError as e:
        raise InvalidEntryError(f"invalid entry {fields['path']!r}: {e}", index=index) from e


def normalize_entries(entries: Any, default_codec: Codec = Codec.DEFLATE) -> Iterator[Entry]:
    """Normalize caller input into a lazy sequence of entries.

    Args:
        entries: Entry description(s) in any supported shape
        default_codec: Codec for descriptions that name none

    Returns:
        Iterator of Entry values in input order

    Raises:
        MissingFieldError: Eagerly for mapping and list shapes
        InvalidEntryError: If the input shape or an entry is unusable
    """
    shape = classify_entries(entries)
    logger.debug("entries_normalizing", extra={"shape": shape.value})

    if shape is EntryShape.ENTRY:
        return iter([entries])
    if shape is EntryShape.MAPPING:
        return iter([to_entry(entries, default_codec, index=0)])
    if shape is EntryShape.PAIRS:
        return iter([to_entry(dict(entries), default_codec, index=0)])
    if shape is EntryShape.LIST:
        return iter([to_entry(item, default_codec, index=i) for i, item in enumerate(entries)])
    return _normalize_lazy(entries, default_codec)


def _normalize_lazy(entries: Iterable[Any], default_codec: Codec) -> Iterator[Entry]:
    source = iter(entries)
    try:
        for index, item in enumerate(source):
            yield to_entry(item, default_codec, index=index)
    finally:
        close_iterator(source)
