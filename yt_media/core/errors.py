# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Error taxonomy shared by the dispatcher, operations, and backends."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a failed invocation, as reported to the caller."""

    UNKNOWN_OPERATION = "unknown_operation"
    INVALID_PARAMETERS = "invalid_parameters"
    OPERATION_FAILED = "operation_failed"
    INTERNAL_ERROR = "internal_error"

    @property
    def code(self) -> int:
        """JSON-RPC error code used on the wire."""
        return _ERROR_CODES[self]


_ERROR_CODES = {
    ErrorKind.UNKNOWN_OPERATION: -32601,
    ErrorKind.INVALID_PARAMETERS: -32602,
    ErrorKind.OPERATION_FAILED: -32000,
    ErrorKind.INTERNAL_ERROR: -32603,
}


class InvalidParametersError(Exception):
    """Raised when parameters are well-typed but semantically invalid."""


class OperationError(Exception):
    """Base class for failures of an operation or one of its backends."""


class InvalidVideoReference(OperationError):
    """Raised when a URL or ID cannot be resolved to a video ID."""


class OutputPathError(OperationError):
    """Raised when a requested output directory is unusable."""


class MetadataError(OperationError):
    """Raised when metadata extraction fails."""


class MediaError(OperationError):
    """Raised when no stream can be selected, opened, or written."""


class TranscodeError(OperationError):
    """Raised when ffmpeg fails to produce the output file."""


class TranscriptError(OperationError):
    """Raised when transcript fetching fails."""


class TranscriptNotFound(TranscriptError):
    """No transcript available for the requested language."""
