"""Structured logging for rechunking sessions.

This module provides telemetry hooks for the rechunker, emitting
structured logs for observability.
"""

from __future__ import annotations

import logging

from .definitions import RechunkState

logger = logging.getLogger(__name__)


def log_rechunk_started(*, target_size: int, resident: bool = False) -> None:
    """Log the start of a rechunking session.

    Args:
        target_size: Requested output fragment size
        resident: Whether the whole input was handed over as one buffer
    """
    logger.debug(
        "rechunk_started",
        extra={
            "target_size": target_size,
            "resident": resident,
        },
    )


def log_fragment_emitted(*, fragment_index: int, size: int, buffered: int) -> None:
    """Log a single emitted output fragment.

    Args:
        fragment_index: Zero-based index of the fragment in the output
        size: Length of the fragment
        buffered: Bytes left in the leftover buffer after the cut
    """
    logger.debug(
        "rechunk_fragment_emitted",
        extra={
            "fragment_index": fragment_index,
            "size": size,
            "buffered": buffered,
        },
    )


def log_rechunk_complete(*, state: RechunkState) -> None:
    """Log completion of a rechunking session.

    Args:
        state: Final session state
    """
    logger.info(
        "rechunk_complete",
        extra={
            "target_size": state.target_size,
            "fragments_in": state.fragments_in,
            "fragments_out": state.fragments_out,
            "bytes_out": state.bytes_out,
        },
    )


def log_rechunk_error(*, state: RechunkState, error_type: str, error_message: str) -> None:
    """Log a failure raised while pulling from upstream.

    Args:
        state: Session state at the time of the failure
        error_type: Exception class name
        error_message: Exception message
    """
    logger.error(
        "rechunk_error",
        extra={
            "target_size": state.target_size,
            "fragments_in": state.fragments_in,
            "fragments_out": state.fragments_out,
            "error_type": error_type,
            "error_message": error_message,
        },
    )
