"""Fixed-size rechunking of lazy byte fragment streams.

This module turns a stream of byte fragments of arbitrary sizes into a
stream of fragments that are exactly ``target_size`` bytes long, except for
the last one which may be shorter but is never empty.

Architecture:
    The algorithm lives in :func:`step`, a state machine step that takes a
    :class:`RechunkState` and an upstream iterator and pulls only as many
    fragments as needed to emit one output fragment. :func:`rechunk` and
    :func:`arechunk` drive that step from a generator, so downstream pulls
    map one to one onto output fragments and memory stays bounded by the
    leftover buffer.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator

from ...utils.iterators import aclose_iterator, close_iterator
from .definitions import RechunkState, validate_chunk_size
from .telemetry import (
    log_fragment_emitted,
    log_rechunk_complete,
    log_rechunk_error,
    log_rechunk_started,
)

BytesLike = bytes | bytearray | memoryview


def _emit(state: RechunkState) -> bytes | None:
    if state.buffered >= state.target_size:
        return state.cut(state.target_size)
    if state.exhausted and state.buffered:
        return state.cut(state.buffered)
    return None


def step(state: RechunkState, source: Iterator[BytesLike]) -> tuple[RechunkState, bytes | None]:
    """Produce the next output fragment.

    Pulls from ``source`` until a full fragment is buffered or the source is
    exhausted.

    Args:
        state: Session state, owned by the caller
        source: Upstream fragment iterator

    Returns:
        The state and the next fragment, or ``None`` once the stream is done
    """
    while state.buffered < state.target_size and not state.exhausted:
        try:
            fragment = next(source)
        except StopIteration:
            state.exhausted = True
        else:
            state.feed(fragment)
    return state, _emit(state)


async def astep(
    state: RechunkState, source: AsyncIterator[BytesLike]
) -> tuple[RechunkState, bytes | None]:
    """Async counterpart of :func:`step`."""
    while state.buffered < state.target_size and not state.exhausted:
        try:
            fragment = await anext(source)
        except StopAsyncIteration:
            state.exhausted = True
        else:
            state.feed(fragment)
    return state, _emit(state)


def rechunk(
    fragments: Iterable[BytesLike] | BytesLike, target_size: int
) -> Iterator[bytes]:
    """Re-segment a fragment stream into ``target_size`` pieces.

    The chunk size is validated before anything is pulled. A bytes-like
    argument is treated as a single resident fragment and sliced directly.

    Args:
        fragments: Upstream fragments, or one resident buffer
        target_size: Exact length of every output fragment but the last

    Returns:
        Lazy iterator of output fragments

    Raises:
        InvalidChunkSizeError: If target_size is not a positive integer
    """
    size = validate_chunk_size(target_size)
    if isinstance(fragments, (bytes, bytearray, memoryview)):
        return _slice_buffer(bytes(fragments), size)
    return _rechunk_iter(fragments, size)


def rechunk_bytes(data: BytesLike, target_size: int) -> Iterator[bytes]:
    """Slice one resident buffer into ``target_size`` pieces."""
    size = validate_chunk_size(target_size)
    return _slice_buffer(bytes(data), size)


def arechunk(fragments: AsyncIterable[BytesLike], target_size: int) -> AsyncIterator[bytes]:
    """Re-segment an async fragment stream into ``target_size`` pieces.

    Raises:
        InvalidChunkSizeError: If target_size is not a positive integer
    """
    size = validate_chunk_size(target_size)
    return _arechunk_iter(fragments, size)


def _slice_buffer(data: bytes, size: int) -> Iterator[bytes]:
    state = RechunkState(target_size=size, exhausted=True, fragments_in=1)
    log_rechunk_started(target_size=size, resident=True)
    view = memoryview(data)
    for offset in range(0, len(view), size):
        fragment = bytes(view[offset : offset + size])
        state.fragments_out += 1
        state.bytes_out += len(fragment)
        log_fragment_emitted(
            fragment_index=state.fragments_out - 1,
            size=len(fragment),
            buffered=len(view) - state.bytes_out,
        )
        yield fragment
    log_rechunk_complete(state=state)


def _rechunk_iter(fragments: Iterable[BytesLike], size: int) -> Iterator[bytes]:
    state = RechunkState(target_size=size)
    log_rechunk_started(target_size=size)
    source = iter(fragments)
    try:
        while True:
            state, fragment = step(state, source)
            if fragment is None:
                break
            log_fragment_emitted(
                fragment_index=state.fragments_out - 1,
                size=len(fragment),
                buffered=state.buffered,
            )
            yield fragment
        log_rechunk_complete(state=state)
    except Exception as e:
        log_rechunk_error(state=state, error_type=type(e).__name__, error_message=str(e))
        raise
    finally:
        close_iterator(source)


async def _arechunk_iter(fragments: AsyncIterable[BytesLike], size: int) -> AsyncIterator[bytes]:
    state = RechunkState(target_size=size)
    log_rechunk_started(target_size=size)
    source = aiter(fragments)
    try:
        while True:
            state, fragment = await astep(state, source)
            if fragment is None:
                break
            log_fragment_emitted(
                fragment_index=state.fragments_out - 1,
                size=len(fragment),
                buffered=state.buffered,
            )
            yield fragment
        log_rechunk_complete(state=state)
    except Exception as e:
        log_rechunk_error(state=state, error_type=type(e).__name__, error_message=str(e))
        raise
    finally:
        await aclose_iterator(source)
