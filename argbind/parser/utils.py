# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains the stock value transforms used by the matching engine.

Every raw string bound by the engine goes through `coerce_value()` with the
argument's declared `type`. Plain callables are simply called; typing constructs
such as `Literal`, `Union` and `Enum`, as well as `bool` and `datetime`, get
dedicated handling.

Functions:
- coerce_bool: Convert a string to a boolean.
- coerce_enum: Convert a string or raw value to an Enum instance.
- coerce_value: General-purpose coercion to a target type.

All failures are raised as `ValueError` or `TypeError`; the engine turns them into
`invalid_value` parse errors.
"""
import types
from datetime import datetime
from enum import EnumMeta
from typing import Any, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser

from argbind.logger import logger


def coerce_bool(value: str) -> bool:
    """
    Convert a string to a boolean.

    Accepts various truthy and falsy representations such as 'true', 'yes', '0', 'off'.

    Raises:
        ValueError: If the string is not a recognized boolean.
    """
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in {"true", "t", "1", "yes", "y", "on"}:
        return True
    if normalized in {"false", "f", "0", "no", "n", "off"}:
        return False
    raise ValueError(f"'{value}' is not a boolean")


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Convert a raw value or string to an Enum instance.

    Tries to resolve by name, value, or coerced base type.

    Raises:
        ValueError: If the value cannot be resolved to a valid Enum member.
    """
    if isinstance(value, enum_type):
        return value

    if isinstance(value, str):
        try:
            return enum_type[value]
        except KeyError:
            pass

    base_type = type(next(iter(enum_type)).value)
    try:
        coerced_value = base_type(value)
        return enum_type(coerced_value)
    except (ValueError, TypeError):
        values = [str(enum.value) for enum in enum_type]
        raise ValueError(f"'{value}' should be one of {{{', '.join(values)}}}") from None


def coerce_value(value: str, target_type: Any) -> Any:
    """
    Attempt to convert a string to the given target type.

    Args:
        value (str): The input string to convert.
        target_type (Any): The desired type, or any callable taking one string.

    Returns:
        Any: The coerced value.

    Raises:
        ValueError: If conversion fails or the value is invalid.
        TypeError: If the transform rejects its input type.
    """
    if target_type is None or target_type is str:
        return value

    origin = get_origin(target_type)
    args = get_args(target_type)

    if origin is Literal:
        if value not in args:
            raise ValueError(
                f"Value '{value}' is not a valid literal for type {target_type}"
            )
        return value

    if isinstance(target_type, types.UnionType) or origin is Union:
        for arg in args:
            if arg is type(None):
                continue
            try:
                return coerce_value(value, arg)
            except (ValueError, TypeError):
                logger.debug("Value %r is not a %s", value, arg)
                continue
        raise ValueError(f"Value '{value}' could not be coerced to any of {args}")

    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)

    if target_type is bool:
        return coerce_bool(value)

    if target_type is datetime:
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as error:
            raise ValueError(
                f"Value '{value}' could not be parsed as a datetime"
            ) from error

    return target_type(value)
