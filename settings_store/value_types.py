"""Setting value kinds and the coercion rules between native values and storage.

Every setting stores its value as text. The declared `SettingType` decides how a
native Python value is turned into that text (`to_storage`) and back
(`from_storage`). Both directions are strict: a value of the wrong kind is a
`SettingTypeMismatchError`, never a silent conversion.

`detect_type` infers a type for callers that pass `SettingType.AUTO`. A string
that parses as JSON is classified as JSON before it is classified as a plain
string, so `'42'`, `'true'` and `'"hello"'` all detect as JSON.
"""

from __future__ import annotations

import json
import math
from enum import Enum
from typing import Any, Callable

from .errors import SettingTypeMismatchError, UnsupportedValueTypeError


class SettingType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    FLOAT = "float"
    JSON = "json"
    AUTO = "auto"  # detection input only, never persisted

    @classmethod
    def parse(cls, raw: SettingType | str) -> SettingType:
        """Accept a member or its exact (case-sensitive) string value."""
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            try:
                return cls(raw)
            except ValueError:
                pass
        allowed = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown setting type {raw!r} (expected one of: {allowed})")

    @property
    def is_concrete(self) -> bool:
        return self is not SettingType.AUTO


class UpdateType(str, Enum):
    KEEP_CURRENT = "keep_current"  # validate against the stored type
    OVERRIDE = "override"  # re-detect the type from the new value


CONCRETE_TYPES: tuple[SettingType, ...] = tuple(t for t in SettingType if t.is_concrete)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _parse_finite_float(text: str) -> float:
    f = float(text)
    if not math.isfinite(f):
        raise ValueError(f"number out of float range: {text}")
    return f


def _loads_json(raw: str) -> Any:
    """`json.loads` limited to finite numbers: NaN, Infinity and 1e999 are rejected."""
    return json.loads(raw, parse_constant=_reject_constant, parse_float=_parse_finite_float)


def _is_json_text(value: str) -> bool:
    try:
        _loads_json(value)
    except ValueError:
        return False
    return True


def _mismatch(type_: SettingType, value: Any) -> SettingTypeMismatchError:
    return SettingTypeMismatchError(
        f"Value {value!r} of kind '{type(value).__name__}' does not match setting type '{type_.value}'."
    )


# --- native -> storage -----------------------------------------------------


def _encode_string(value: Any) -> str:
    if not isinstance(value, str):
        raise _mismatch(SettingType.STRING, value)
    return value


def _encode_integer(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        raise _mismatch(SettingType.INTEGER, value)
    return str(value)


def _encode_boolean(value: Any) -> str:
    if not isinstance(value, bool):
        raise _mismatch(SettingType.BOOLEAN, value)
    return "true" if value else "false"


def _encode_float(value: Any) -> str:
    # ints are widened; bools are not numbers here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _mismatch(SettingType.FLOAT, value)
    try:
        f = float(value)
    except OverflowError as e:
        raise _mismatch(SettingType.FLOAT, value) from e
    if not math.isfinite(f):
        raise _mismatch(SettingType.FLOAT, value)
    return repr(f)


def _encode_json(value: Any) -> str:
    if isinstance(value, str):
        # strings are taken as JSON text and stored verbatim
        if not _is_json_text(value):
            raise SettingTypeMismatchError(f"String {value!r} is not valid JSON text.")
        return value
    try:
        return json.dumps(value, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SettingTypeMismatchError(f"Value {value!r} is not JSON-serializable: {e}") from e


_ENCODERS: dict[SettingType, Callable[[Any], str]] = {
    SettingType.STRING: _encode_string,
    SettingType.INTEGER: _encode_integer,
    SettingType.BOOLEAN: _encode_boolean,
    SettingType.FLOAT: _encode_float,
    SettingType.JSON: _encode_json,
}


# --- storage -> native -----------------------------------------------------

_TRUE_TEXT = {"true", "1"}
_FALSE_TEXT = {"false", "0", ""}


def _decode_boolean(raw: str) -> bool:
    if raw in _TRUE_TEXT:
        return True
    if raw in _FALSE_TEXT:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


_DECODERS: dict[SettingType, Callable[[str], Any]] = {
    SettingType.STRING: lambda raw: raw,
    SettingType.INTEGER: int,
    SettingType.BOOLEAN: _decode_boolean,
    SettingType.FLOAT: _parse_finite_float,
    SettingType.JSON: _loads_json,
}


def to_storage(type_: SettingType, value: Any) -> str:
    """Validate `value` against `type_` and return its canonical text form."""
    encoder = _ENCODERS.get(type_)
    if encoder is None:
        raise SettingTypeMismatchError(f"Setting type '{type_.value}' cannot be stored; resolve it first.")
    return encoder(value)


def from_storage(type_: SettingType, raw: str) -> Any:
    """Decode stored text back into a native value of `type_`."""
    decoder = _DECODERS.get(type_)
    if decoder is None:
        raise SettingTypeMismatchError(f"Setting type '{type_.value}' is never stored.")
    try:
        return decoder(raw)
    except (TypeError, ValueError) as e:
        raise SettingTypeMismatchError(
            f"Stored text {raw!r} cannot be decoded as '{type_.value}': {e}"
        ) from e


def detect_type(value: Any) -> SettingType:
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return SettingType.BOOLEAN
    if isinstance(value, int):
        return SettingType.INTEGER
    if isinstance(value, float):
        return SettingType.FLOAT
    if isinstance(value, str):
        return SettingType.JSON if _is_json_text(value) else SettingType.STRING
    raise UnsupportedValueTypeError(
        f"Cannot detect a setting type for values of kind '{type(value).__name__}'."
    )


def resolve_type(type_: SettingType | str, value: Any) -> SettingType:
    """Return the concrete type to store `value` under."""
    t = SettingType.parse(type_)
    if t is SettingType.AUTO:
        return detect_type(value)
    return t
