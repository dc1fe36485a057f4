"""
Argument Extractor

Pulls typed, validated scalars out of a tool call's arguments map.

Rules shared by every getter:
- required getters fail when the key is absent or the value has the wrong tag
- optional getters return None when the key is absent OR explicitly null
- float fields accept ints (widened); int fields accept doubles only when
  they have no fractional part, anything else is a NON_EXACT_INTEGER error
"""

import math

from ..exceptions import ParameterError
from ..models.actions import PID_MAX, PID_MIN
from ..models.enums import ParameterErrorKind, ValueKind
from ..models.value import ArgumentsMap, Value
from ..utils.logging import get_logger

logger = get_logger(__name__)


def _coerce_double(value: Value, key: str, requirement: str) -> float:
    if value.kind is ValueKind.INT:
        logger.debug("coerced_int_to_double", key=key, value=value.payload)
        return float(value.payload)
    if value.kind is ValueKind.DOUBLE:
        return value.payload
    raise ParameterError(
        f"Invalid type for {requirement} number argument: '{key}', "
        f"expected Int or Double, got {value!r}",
        kind=ParameterErrorKind.WRONG_TYPE,
        field=key,
    )


def _coerce_int(value: Value, key: str, requirement: str) -> int:
    if value.kind is ValueKind.INT:
        return value.payload
    if value.kind is ValueKind.DOUBLE:
        number = value.payload
        if math.isfinite(number) and number.is_integer():
            logger.debug("coerced_exact_double_to_int", key=key, value=number)
            return int(number)
        logger.warning("non_exact_double_for_integer", key=key, value=number)
        raise ParameterError(
            f"Invalid type for {requirement} integer argument: '{key}', "
            f"received non-exact Double {number}",
            kind=ParameterErrorKind.NON_EXACT_INTEGER,
            field=key,
            value=number,
        )
    raise ParameterError(
        f"Invalid type for {requirement} integer argument: '{key}', "
        f"expected Int or exact Double, got {value!r}",
        kind=ParameterErrorKind.WRONG_TYPE,
        field=key,
    )


def _present(args: ArgumentsMap, key: str) -> Value | None:
    """The value under key, or None when it is absent or null."""
    value = args.get(key)
    if value is None or value.is_null:
        return None
    return value


# ============================================================================
# Required getters
# ============================================================================


def required_string(args: ArgumentsMap, key: str) -> str:
    """
    Extract a required string.

    Raises:
        ParameterError: MISSING_OR_WRONG_TYPE if absent or not a string
    """
    value = args.get(key)
    text = value.string_value if value is not None else None
    if text is None:
        raise ParameterError(
            f"Missing or invalid required string argument: '{key}'",
            kind=ParameterErrorKind.MISSING_OR_WRONG_TYPE,
            field=key,
        )
    return text


def required_double(args: ArgumentsMap, key: str) -> float:
    """
    Extract a required number as float.

    Raises:
        ParameterError: MISSING_REQUIRED if absent, WRONG_TYPE if not numeric
    """
    value = args.get(key)
    if value is None:
        raise ParameterError(
            f"Missing required number argument: '{key}'",
            kind=ParameterErrorKind.MISSING_REQUIRED,
            field=key,
        )
    return _coerce_double(value, key, "required")


def required_int(args: ArgumentsMap, key: str) -> int:
    """
    Extract a required integer.

    Raises:
        ParameterError: MISSING_REQUIRED if absent, NON_EXACT_INTEGER for a
            fractional double, WRONG_TYPE for any other tag
    """
    value = args.get(key)
    if value is None:
        raise ParameterError(
            f"Missing required integer argument: '{key}'",
            kind=ParameterErrorKind.MISSING_REQUIRED,
            field=key,
        )
    return _coerce_int(value, key, "required")


# ============================================================================
# Optional getters
# ============================================================================


def optional_string(args: ArgumentsMap, key: str) -> str | None:
    value = _present(args, key)
    if value is None:
        return None
    if value.kind is not ValueKind.STRING:
        raise ParameterError(
            f"Invalid type for optional string argument: '{key}', expected String, got {value!r}",
            kind=ParameterErrorKind.WRONG_TYPE,
            field=key,
        )
    return value.payload


def optional_double(args: ArgumentsMap, key: str) -> float | None:
    value = _present(args, key)
    return None if value is None else _coerce_double(value, key, "optional")


def optional_int(args: ArgumentsMap, key: str) -> int | None:
    value = _present(args, key)
    return None if value is None else _coerce_int(value, key, "optional")


def optional_bool(args: ArgumentsMap, key: str) -> bool | None:
    value = _present(args, key)
    if value is None:
        return None
    if value.kind is not ValueKind.BOOL:
        raise ParameterError(
            f"Invalid type for optional boolean argument: '{key}', expected Bool, got {value!r}",
            kind=ParameterErrorKind.WRONG_TYPE,
            field=key,
        )
    return value.payload


def optional_pid(args: ArgumentsMap, key: str = "pid") -> int | None:
    """
    Extract an optional process id.

    Same rules as optional_int, plus the value must fit a native pid_t.

    Raises:
        ParameterError: OUT_OF_RANGE (with the offending value) if it does not fit
    """
    pid = optional_int(args, key)
    if pid is None:
        return None
    if not PID_MIN <= pid <= PID_MAX:
        logger.error("pid_out_of_range", key=key, value=pid)
        raise ParameterError(
            f"PID value {pid} is out of range.",
            kind=ParameterErrorKind.OUT_OF_RANGE,
            field=key,
            value=pid,
        )
    return pid
