"""
Decode JSON response bodies into caller-owned targets.

Targets are populated in place. Supported shapes are dataclass instances,
mutable mappings, mutable sequences, objects providing
``from_json_data(data)``, and None (validate, then discard).
"""

import dataclasses
import json
import typing
from collections.abc import MutableMapping, MutableSequence
from typing import Any

from jsonrelay.exceptions import DecodeError, UnsupportedTargetError

# annotation -> accepted JSON value types
_PLAIN_TYPES: dict[type, tuple[type, ...]] = {
    str: (str,),
    int: (int,),
    float: (int, float),
    bool: (bool,),
    list: (list,),
    dict: (dict,),
}


def parse_json(body: bytes) -> Any:
    """
    Parse a response body as UTF-8 JSON.

    Parameters
    ----------
    body
        Raw response body.

    Returns
    -------
    data
        Parsed JSON value.

    Raises
    ------
    DecodeError
        If `body` is empty, not UTF-8, or not valid JSON.
    """
    if not body:
        raise DecodeError("unexpected end of JSON input")
    try:
        return json.loads(body.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise DecodeError(f"response body is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise DecodeError(f"invalid JSON: {e}") from e


def decode_into(body: bytes, target: Any) -> Any:
    """
    Parse `body` and populate `target` with the result.

    Parameters
    ----------
    body
        Raw response body.
    target
        Caller-owned structure to populate.

    Returns
    -------
    target
        The same object, populated.

    Raises
    ------
    DecodeError
        If the body cannot be parsed or does not fit the target. The target may
        be partially populated.
    UnsupportedTargetError
        If `target` has an unsupported shape.
    """
    _check_target(target)
    data = parse_json(body)
    if target is None or data is None:
        return target
    _populate(target, data, path="$")
    return target


def _check_target(target: Any) -> None:
    if target is None or _is_supported(target):
        return
    raise UnsupportedTargetError(
        f"cannot decode into {type(target).__name__}; pass a dataclass instance, "
        "mutable mapping, mutable sequence or an object with from_json_data()"
    )


def _is_supported(target: Any) -> bool:
    return (
        callable(getattr(target, "from_json_data", None))
        or _is_dataclass_instance(target)
        or isinstance(target, (MutableMapping, MutableSequence))
    )


def _is_dataclass_instance(obj: Any) -> bool:
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def _populate(target: Any, data: Any, path: str) -> None:
    hook = getattr(target, "from_json_data", None)
    if callable(hook):
        hook(data)
    elif _is_dataclass_instance(target):
        _populate_dataclass(target, data, path)
    elif isinstance(target, MutableMapping):
        if not isinstance(data, dict):
            raise DecodeError(
                f"{path}: cannot decode JSON {_json_kind(data)} into a mapping"
            )
        target.update(data)
    elif isinstance(target, MutableSequence):
        if not isinstance(data, list):
            raise DecodeError(
                f"{path}: cannot decode JSON {_json_kind(data)} into a sequence"
            )
        target[:] = data


def _populate_dataclass(target: Any, data: Any, path: str) -> None:
    cls = type(target)
    if not isinstance(data, dict):
        raise DecodeError(
            f"{path}: cannot decode JSON {_json_kind(data)} into {cls.__name__}"
        )

    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError):
        hints = {}

    folded = {}
    for key in data:
        folded.setdefault(key.lower(), key)

    for f in dataclasses.fields(target):
        key = f.metadata.get("json", f.name)
        if key in data:
            value = data[key]
        elif key.lower() in folded:
            value = data[folded[key.lower()]]
        else:
            continue

        field_path = f"{path}.{key}"
        current = getattr(target, f.name, None)
        # null leaves plain-typed fields and nested structures as they are
        if value is None and (
            hints.get(f.name) in _PLAIN_TYPES or _is_dataclass_instance(current)
        ):
            continue
        if _is_dataclass_instance(current):
            _populate_dataclass(current, value, field_path)
            continue

        _check_value(value, hints.get(f.name), field_path)
        setattr(target, f.name, value)


def _check_value(value: Any, annotation: Any, path: str) -> None:
    accepted = _PLAIN_TYPES.get(annotation)
    if accepted is None or value is None:
        return
    if isinstance(value, bool) and annotation is not bool:
        ok = False
    else:
        ok = isinstance(value, accepted)
    if not ok:
        raise DecodeError(
            f"{path}: cannot decode JSON {_json_kind(value)} into {annotation.__name__}"
        )


def _json_kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"
