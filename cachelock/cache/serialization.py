"""Cache value serialization using orjson.

Handles Pydantic BaseModel, dicts, lists, tuples, and primitive types.
Stores a type wrapper envelope so deserialization can reconstruct the original type.
"""

from __future__ import annotations

import importlib
from typing import Any, Type

import orjson
from pydantic import BaseModel


def serialize(value: Any) -> str:
    """Serialize a value to the JSON text stored under a cache key.

    Raises:
        TypeError: the value (or something nested in it) is not JSON-serializable.
    """
    envelope = _serialize_element(value)
    return orjson.dumps(envelope).decode("utf-8")


def deserialize(raw: str | bytes) -> Any:
    """Rebuild a value written by :func:`serialize`."""
    envelope = orjson.loads(raw)
    return _deserialize_envelope(envelope)


def _serialize_element(item: Any) -> dict:
    if isinstance(item, BaseModel):
        return {
            "_type": "pydantic",
            "_model": f"{item.__class__.__module__}.{item.__class__.__name__}",
            "data": item.model_dump(mode="json"),
        }
    elif isinstance(item, tuple):
        return {"_type": "tuple", "data": [_serialize_element(sub) for sub in item]}
    elif isinstance(item, list):
        return {"_type": "list", "data": [_serialize_element(sub) for sub in item]}
    elif isinstance(item, dict):
        for k in item:
            if not isinstance(k, str):
                raise TypeError(f"Cache dict keys must be str, got {type(k).__name__}")
        return {
            "_type": "dict",
            "data": {k: _serialize_element(v) for k, v in item.items()},
        }
    elif item is None or isinstance(item, (str, int, float, bool)):
        return {"_type": "plain", "data": item}
    else:
        raise TypeError(f"Cannot cache value of type {type(item).__name__}")


def _deserialize_envelope(envelope: dict) -> Any:
    t = envelope["_type"]

    if t == "pydantic":
        model_cls = _resolve_model(envelope["_model"])
        return model_cls.model_validate(envelope["data"])
    elif t == "tuple":
        return tuple(_deserialize_envelope(elem) for elem in envelope["data"])
    elif t == "list":
        return [_deserialize_envelope(elem) for elem in envelope["data"]]
    elif t == "dict":
        return {k: _deserialize_envelope(v) for k, v in envelope["data"].items()}
    elif t == "plain":
        return envelope["data"]
    raise ValueError(f"Unknown cache envelope type: {t!r}")


def _resolve_model(model_path: str) -> Type[BaseModel]:
    """Resolve a Pydantic model class from its module.ClassName string."""
    module_name, class_name = model_path.rsplit(".", 1)
    module = importlib.import_module(module_name)
    cls = getattr(module, class_name)
    if not (isinstance(cls, type) and issubclass(cls, BaseModel)):
        raise TypeError(f"{model_path} is not a Pydantic BaseModel subclass")
    return cls
