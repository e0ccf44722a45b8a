"""Turning raw JSON documents into resource dataclasses."""

from typing import Any, Callable, Dict, Type, TypeVar

from dacite import Config, DaciteError, from_dict

from speedrun_client.embeds import Relation
from speedrun_client.errors import DecodeError

T = TypeVar("T")

# resource classes register a hook that renames their relation keys
TYPE_HOOKS: Dict[Type, Callable[[Any], Any]] = {Relation: Relation.from_raw}

DACITE_CONFIG = Config(
    type_hooks=TYPE_HOOKS,
    # the API writes whole seconds as integers
    cast=[float],
)


def register_type_hook(cls: Type, hook: Callable[[Any], Any]) -> None:
    """Run ``hook`` on raw data before it is decoded into ``cls``."""
    TYPE_HOOKS[cls] = hook


def normalize_keys(value: Any) -> Any:
    """Recursively replace hyphens in mapping keys (``run-times`` -> ``run_times``)."""
    if isinstance(value, dict):
        return {
            str(key).replace("-", "_"): normalize_keys(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [normalize_keys(item) for item in value]
    return value


def decode(cls: Type[T], data: Any) -> T:
    """Decode one raw JSON object into ``cls``.

    Raises:
        DecodeError: if ``data`` is not an object or does not fit ``cls``

    """
    if not isinstance(data, dict):
        raise DecodeError(
            f"Expected an object for {cls.__name__}, got {type(data).__name__}"
        )

    data = normalize_keys(data)
    hook = TYPE_HOOKS.get(cls)
    if hook is not None:
        data = hook(data)

    try:
        return from_dict(data_class=cls, data=data, config=DACITE_CONFIG)
    except (DaciteError, TypeError, ValueError) as exc:
        raise DecodeError(f"Could not decode {cls.__name__}: {exc}") from exc
