"""
Common Models
=============

Base model configuration and read-only containers shared by engine models.

Version: 0.1.0
"""

from typing import Annotated, Any, NoReturn, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


K = TypeVar("K")
V = TypeVar("V")


class FrozenDict(dict):
    """
    Dict that rejects mutation after construction.

    Still a real dict, so pydantic validates and serializes it like any
    other mapping field.
    """

    def _read_only(self, *args: Any, **kwargs: Any) -> NoReturn:
        raise TypeError(f"{type(self).__name__} is read-only")

    __setitem__ = _read_only
    __delitem__ = _read_only
    __ior__ = _read_only
    clear = _read_only
    pop = _read_only
    popitem = _read_only
    setdefault = _read_only
    update = _read_only

    def __reduce__(self) -> tuple[type["FrozenDict"], tuple[dict[Any, Any]]]:
        return (type(self), (dict(self),))


def freeze(value: dict[Any, Any]) -> FrozenDict:
    """Wrap a validated dict as a FrozenDict."""
    return FrozenDict(value)


# dict field that is read-only once validated
ReadOnlyDict = Annotated[dict[K, V], AfterValidator(freeze)]


class EngineModel(BaseModel):
    """
    Immutable base model with camelCase wire names.

    Attributes are snake_case in Python; `model_dump(by_alias=True)` and
    `model_validate` both speak the camelCase shape used by callers.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )
