# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Single entry point that validates, routes, and categorizes invocations."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import ValidationError

from yt_media.core.errors import ErrorKind, InvalidParametersError, OperationError
from yt_media.core.logging import log_event
from yt_media.core.models import Failure, OperationResult, Outcome, Success
from yt_media.core.registry import OperationDescriptor, OperationRegistry

logger = logging.getLogger("yt_media")

_TYPE_ERRORS = {
    "string_type",
    "int_type",
    "float_type",
    "bool_type",
    "dict_type",
    "model_type",
    "model_attributes_type",
}


class Dispatcher:
    """Route invocations from the registry to the operation handlers.

    `operations` is any object exposing one method per registered operation
    name, each taking the validated parameter model and returning an
    OperationResult.

    Every call returns an Outcome; no exception escapes `dispatch`.
    """

    def __init__(self, registry: OperationRegistry, operations: object) -> None:
        self._registry = registry
        self._operations = operations

    @property
    def registry(self) -> OperationRegistry:
        return self._registry

    def dispatch(self, name: str, raw_parameters: Mapping[str, Any] | None) -> Outcome:
        """Run one invocation.

        Steps:
        1. Look the operation up (UNKNOWN_OPERATION if absent).
        2. Validate parameters against its model (INVALID_PARAMETERS, no side effects).
        3. Invoke the handler and wrap the result with tool name and timestamp.
        4. Map raised errors: InvalidParametersError passes through,
           OperationError becomes OPERATION_FAILED, anything else INTERNAL_ERROR.
        """
        descriptor = self._registry.get(name)
        if descriptor is None:
            return self._fail(name, ErrorKind.UNKNOWN_OPERATION, f"Unknown tool: {name}")

        if raw_parameters is None:
            raw_parameters = {}
        if not isinstance(raw_parameters, Mapping):
            return self._fail(
                name, ErrorKind.INVALID_PARAMETERS, "Parameters must be an object"
            )

        try:
            params = descriptor.parameters.model_validate(dict(raw_parameters))
        except ValidationError as exc:
            return self._fail(
                name, ErrorKind.INVALID_PARAMETERS, describe_validation_error(exc, descriptor)
            )

        log_event(
            logging.DEBUG,
            f"Invoking {name}",
            operation=name,
            event="invoke",
            details={"parameters": sorted(params.model_dump(by_alias=True, exclude_unset=True))},
        )
        started = time.monotonic()

        try:
            handler = getattr(self._operations, descriptor.name)
            result: OperationResult = handler(params)
        except InvalidParametersError as exc:
            return self._fail(name, ErrorKind.INVALID_PARAMETERS, str(exc))
        except OperationError as exc:
            return self._fail(name, ErrorKind.OPERATION_FAILED, str(exc))
        except Exception as exc:
            logger.exception("Unexpected error in %s", name)
            return self._fail(
                name, ErrorKind.INTERNAL_ERROR, f"Error executing tool {name}: {exc}"
            )

        elapsed = time.monotonic() - started
        details: dict[str, Any] = {"elapsed": round(elapsed, 3)}
        if "filepath" in result.metadata:
            details["filepath"] = result.metadata["filepath"]
        log_event(
            logging.INFO,
            f"{name} completed in {elapsed:.2f}s",
            operation=name,
            event="completed",
            details=details,
        )
        metadata = {
            "tool": name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **result.metadata,
        }
        return Success(payload=result.payload, metadata=metadata)

    @staticmethod
    def _fail(name: str, kind: ErrorKind, message: str) -> Failure:
        log_event(
            logging.ERROR,
            f"Tool execution failed for {name}: {message}",
            operation=name,
            event=kind.value,
            error=message,
        )
        return Failure(kind=kind, message=message)


def describe_validation_error(exc: ValidationError, descriptor: OperationDescriptor) -> str:
    """Summarize every offending field in one message, in schema order."""
    properties = descriptor.input_schema.get("properties", {})
    problems: dict[str, str] = {}

    for error in exc.errors():
        loc = error.get("loc") or ()
        field = str(loc[0]) if loc else "parameters"
        if field in problems:
            continue

        kind = error["type"]
        if kind == "missing":
            problems[field] = f"{field} is required"
        elif kind in _TYPE_ERRORS and "type" in properties.get(field, {}):
            problems[field] = f"{field} must be a {properties[field]['type']}"
        elif kind == "value_error" and "error" in error.get("ctx", {}):
            problems[field] = str(error["ctx"]["error"])
        else:
            problems[field] = f"{field}: {error['msg']}"

    return "Invalid parameters: " + "; ".join(problems.values())
