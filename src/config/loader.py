"""Config coercion and environment helpers shared by every factory.

Factories accept their config as ``None`` (use defaults), as the config
dataclass itself, or as a plain mapping of the same shape. Nested config
slices may be nested mappings:

    CounterApp.create_null({"counters": {"api": {"responses": {...}}}})

coerce_config() is the single place those three forms become one frozen
dataclass, so every factory reports unknown or missing fields the same way.
"""

from __future__ import annotations

import dataclasses
import os
import types
from collections.abc import Mapping
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

from src.domain.errors.construction import InvalidConfigError, MissingConfigError

ConfigT = TypeVar("ConfigT")


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed float value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_str_env(key: str, default: str | None) -> str | None:
    """Get string environment variable, treating empty as unset."""
    value = os.environ.get(key)
    return value if value else default


def _config_type(hint: Any) -> type | None:
    """Return the config dataclass a field annotation refers to, if any."""
    if isinstance(hint, type) and dataclasses.is_dataclass(hint):
        return hint
    if get_origin(hint) in (Union, types.UnionType):
        for arg in get_args(hint):
            if isinstance(arg, type) and dataclasses.is_dataclass(arg):
                return arg
    return None


def coerce_config(config_cls: type[ConfigT], value: Any = None) -> ConfigT:
    """Build a config dataclass from ``None``, an instance, or a mapping.

    Args:
        config_cls: The frozen config dataclass to produce.
        value: ``None`` for defaults, an instance of ``config_cls``, or a
            mapping whose keys are field names. Values for nested config
            dataclasses may themselves be mappings or ``None``.

    Returns:
        An instance of ``config_cls``.

    Raises:
        InvalidConfigError: If the mapping has unknown keys, the value has
            the wrong type, or the dataclass rejects a value.
        MissingConfigError: If a field without a default is not supplied.
    """
    if isinstance(value, config_cls):
        return value
    if value is None:
        value = {}
    if not isinstance(value, Mapping):
        raise InvalidConfigError(
            f"{config_cls.__name__} expects a mapping or {config_cls.__name__}, "
            f"got {type(value).__name__}"
        )

    init_fields = {f.name: f for f in dataclasses.fields(config_cls) if f.init}  # type: ignore[arg-type]
    unknown = sorted(set(value) - set(init_fields))
    if unknown:
        raise InvalidConfigError(
            f"{config_cls.__name__} has no field(s) {', '.join(unknown)}",
            field_name=unknown[0],
        )

    hints = get_type_hints(config_cls)
    kwargs: dict[str, Any] = {}
    for name, config_field in init_fields.items():
        if name not in value:
            if (
                config_field.default is dataclasses.MISSING
                and config_field.default_factory is dataclasses.MISSING
            ):
                raise MissingConfigError(config_cls.__name__, name)
            continue
        nested = _config_type(hints.get(name))
        raw = value[name]
        kwargs[name] = coerce_config(nested, raw) if nested is not None else raw

    return config_cls(**kwargs)


def null_only_overrides(config: Any) -> list[str]:
    """List null-only fields that differ from their defaults.

    Config dataclasses name their test-only fields in a ``NULL_ONLY_FIELDS``
    class attribute. Live factories use this to report (and ignore) canned
    responses that were passed to ``create``.

    Args:
        config: A config dataclass instance.

    Returns:
        Names of null-only fields holding non-default values.
    """
    overridden: list[str] = []
    by_name = {f.name: f for f in dataclasses.fields(config)}
    for name in getattr(config, "NULL_ONLY_FIELDS", ()):
        config_field = by_name[name]
        if config_field.default_factory is not dataclasses.MISSING:
            default = config_field.default_factory()
        else:
            default = config_field.default
        if getattr(config, name) != default:
            overridden.append(name)
    return overridden
