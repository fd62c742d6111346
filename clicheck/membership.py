"""Membership checks, value translation and number-with-unit validators."""

from __future__ import annotations

import enum
import math
from collections.abc import Callable, Iterable, Mapping, Set
from functools import lru_cache
from typing import Any

from clicheck.strings import is_alpha, join, remove_underscore, rtrim, to_lower, trim
from clicheck.validators import ValidationError, Validator, _parse_float, _parse_int

__all__ = [
    "ignore_case",
    "ignore_underscore",
    "ignore_space",
    "generate_set",
    "generate_map",
    "search",
    "checked_multiply",
    "IsMember",
    "Transformer",
    "CheckedTransformer",
    "UnitOptions",
    "AsNumberWithUnit",
    "AsSizeValue",
]

FilterFunc = Callable[[Any], Any]
UINT64_BOUNDS = (0, 2**64 - 1)


def ignore_case(item: str) -> str:
    """Filter that lower-cases an item."""
    return to_lower(item)


def ignore_underscore(item: str) -> str:
    """Filter that drops underscores from an item."""
    return remove_underscore(item)


def ignore_space(item: str) -> str:
    """Filter that drops spaces and tabs from an item."""
    return item.replace(" ", "").replace("\t", "")


def _as_string(value: Any) -> str:
    """Render a value as text; enums render as their underlying value."""
    if isinstance(value, enum.Enum):
        value = value.value
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _keys(collection: Any) -> Iterable[Any]:
    """Iterate the searchable items: keys of a mapping, otherwise the items."""
    if isinstance(collection, Mapping):
        return collection.keys()
    if isinstance(collection, (set, frozenset)):
        try:
            return sorted(collection)
        except TypeError:
            return collection
    return collection


def _pairs(mapping: Any) -> Iterable[tuple[Any, Any]]:
    if isinstance(mapping, Mapping):
        return mapping.items()
    return mapping


def generate_set(items: Any) -> str:
    """Render a collection (or a mapping's keys) as ``{a,b,c}``."""
    return "{" + join(_keys(items), ",", key=_as_string) + "}"


def generate_map(mapping: Any, key_only: bool = False) -> str:
    """Render a mapping as ``{k->v,...}``, or ``{k,...}`` when ``key_only``."""

    def render(pair: tuple[Any, Any]) -> str:
        key, value = pair
        text = _as_string(key)
        return text if key_only else f"{text}->{_as_string(value)}"

    return "{" + join(_pairs(mapping), ",", key=render) + "}"


def search(
    collection: Any, value: Any, filter_func: FilterFunc | None = None
) -> tuple[bool, Any]:
    """Look ``value`` up in ``collection``.

    Returns ``(found, item)`` where ``item`` is the matching stored item (a key
    for mappings). If a direct lookup fails and ``filter_func`` is given, every
    item is passed through it and compared with ``value``.
    """
    if isinstance(collection, (Mapping, Set)):
        try:
            if value in collection:
                return True, value
        except TypeError:
            pass
    else:
        for item in collection:
            if item == value:
                return True, item
    if filter_func is not None:
        for item in _keys(collection):
            if filter_func(item) == value:
                return True, item
    return False, None


def checked_multiply(
    a: int | float, b: int | float, bounds: tuple[int | float, int | float] | None = None
) -> int | float:
    """Return ``a * b``, raising :class:`OverflowError` if it overflows.

    Floats overflow when the product becomes infinite from finite inputs;
    any result outside ``bounds`` (inclusive) also counts as overflow.
    """
    product = a * b
    if isinstance(product, float) and math.isinf(product):
        if not math.isinf(a) and not math.isinf(b):
            raise OverflowError(f"{a} * {b} overflows")
        return product
    if bounds is not None and not bounds[0] <= product <= bounds[1]:
        raise OverflowError(f"{a} * {b} is outside {bounds[0]}..{bounds[1]}")
    return product


def _compose(filters: Iterable[FilterFunc | None]) -> FilterFunc | None:
    chain = [func for func in filters if func is not None]
    if not chain:
        return None

    def composed(item: Any) -> Any:
        for func in chain:
            item = func(item)
        return item

    return composed


def _item_type(collection: Any) -> type:
    for item in _keys(collection):
        return type(item)
    return str


def _convert(text: str, item_type: type) -> Any:
    """Convert input text to ``item_type``; return None if it cannot be."""
    if item_type is str:
        return text
    if issubclass(item_type, int) and not issubclass(item_type, bool):
        return _parse_int(text)
    if issubclass(item_type, float):
        return _parse_float(text)
    try:
        return item_type(text)
    except (TypeError, ValueError):
        return None


class IsMember(Validator):
    """Accept only values found in a collection (or a mapping's keys).

    Extra positional arguments are filter functions applied, in order, to both
    the input and the stored items before comparing. When filters are given,
    the input is rewritten to the stored item that matched. The collection is
    held by reference, so later changes to it are seen.
    """

    def __init__(self, collection: Any, *args: FilterFunc | None) -> None:
        filter_fn = _compose(args)

        def check(value: str) -> str:
            converted = _convert(value, _item_type(collection))
            if converted is None:
                raise ValidationError(value)
            if filter_fn is not None:
                converted = filter_fn(converted)
            found, item = search(collection, converted, filter_fn)
            if found:
                return _as_string(item) if filter_fn is not None else value
            raise ValidationError(" not in " + generate_set(collection))

        super().__init__(check, lambda: generate_set(collection))


def _as_mapping(mapping: Any) -> Mapping[Any, Any]:
    return mapping if isinstance(mapping, Mapping) else dict(mapping)


class Transformer(Validator):
    """Translate values found among a mapping's keys; pass others through."""

    def __init__(self, mapping: Any, *args: FilterFunc | None) -> None:
        table = _as_mapping(mapping)
        filter_fn = _compose(args)

        def transform(value: str) -> str:
            converted = _convert(value, _item_type(table))
            if converted is None:
                return value
            if filter_fn is not None:
                converted = filter_fn(converted)
            found, key = search(table, converted, filter_fn)
            return _as_string(table[key]) if found else value

        super().__init__(transform, lambda: generate_map(table))


class CheckedTransformer(Validator):
    """Translate keys of a mapping; accept its values as they are; reject the rest."""

    def __init__(self, mapping: Any, *args: FilterFunc | None) -> None:
        table = _as_mapping(mapping)
        filter_fn = _compose(args)

        def describe() -> str:
            values = join(table.values(), ",", key=_as_string)
            return f"value in {generate_map(table)} OR {{{values}}}"

        def transform(value: str) -> str:
            converted = _convert(value, _item_type(table))
            if converted is not None:
                if filter_fn is not None:
                    converted = filter_fn(converted)
                found, key = search(table, converted, filter_fn)
                if found:
                    return _as_string(table[key])
            if any(_as_string(target) == value for target in table.values()):
                return value
            raise ValidationError(f"Check {value} {describe()} FAILED")

        super().__init__(transform, describe)


class UnitOptions(enum.IntFlag):
    """How units are matched and whether one is required."""

    CASE_SENSITIVE = 0
    CASE_INSENSITIVE = 1
    UNIT_OPTIONAL = 0
    UNIT_REQUIRED = 2
    DEFAULT = 1


class AsNumberWithUnit(Validator):
    """Read ``<number> [unit]`` and multiply the number by the unit's factor.

    The result type follows the mapping: integer factors give integers,
    any float factor gives floats.
    """

    def __init__(
        self,
        mapping: Mapping[str, int | float],
        options: UnitOptions | int = UnitOptions.DEFAULT,
        unit_name: str = "UNIT",
    ) -> None:
        options = UnitOptions(options)
        is_float = any(isinstance(factor, float) for factor in mapping.values())
        self._number_type: type = float if is_float else int
        self._number_name = "FLOAT" if is_float else "INT"
        self._bounds: tuple[int, int] | None = None
        units = self._validate_mapping(mapping, options)
        if is_float:
            units = {unit: float(factor) for unit, factor in units.items()}

        def convert(value: str) -> str:
            text = rtrim(value)
            if not text:
                raise ValidationError("Input is empty")
            cut = len(text)
            while cut > 0 and text[cut - 1].isascii() and text[cut - 1].isalpha():
                cut -= 1
            unit = text[cut:]
            number_text = trim(text[:cut])
            if options & UnitOptions.UNIT_REQUIRED and not unit:
                raise ValidationError("Missing mandatory unit")
            if options & UnitOptions.CASE_INSENSITIVE:
                unit = to_lower(unit)
            number = self._parse(number_text)
            if number is None:
                raise ValidationError(
                    f"Value {number_text} could not be converted to {self._number_name}"
                )
            if not unit:
                return number_text
            if unit not in units:
                raise ValidationError(
                    f"{unit} unit not recognized. Allowed values: {generate_map(units, True)}"
                )
            try:
                product = checked_multiply(number, units[unit], self._bounds)
            except OverflowError:
                raise ValidationError(
                    f"{_as_string(number)} multiplied by {unit} factor would cause "
                    "number overflow. Use smaller value."
                ) from None
            return _as_string(product)

        if options & UnitOptions.UNIT_REQUIRED:
            description = f"{self._number_name} {unit_name}"
        else:
            description = f"{self._number_name} [{unit_name}]"
        super().__init__(convert, description)

    def _parse(self, text: str) -> int | float | None:
        if self._number_type is float:
            return _parse_float(text)
        number = _parse_int(text)
        if number is not None and self._bounds is not None:
            if not self._bounds[0] <= number <= self._bounds[1]:
                return None
        return number

    @staticmethod
    def _validate_mapping(
        mapping: Mapping[str, int | float], options: UnitOptions
    ) -> dict[str, int | float]:
        for unit in mapping:
            if not unit:
                raise ValidationError("Unit must not be empty.")
            if not is_alpha(unit):
                raise ValidationError("Unit must contain only letters.")
        if not options & UnitOptions.CASE_INSENSITIVE:
            return dict(mapping)
        lowered: dict[str, int | float] = {}
        for unit, factor in mapping.items():
            key = to_lower(unit)
            if key in lowered:
                raise ValidationError(
                    f"Several matching lowercase unit representations are found: {key}"
                )
            lowered[key] = factor
        return lowered


@lru_cache(maxsize=2)
def _size_units(kb_is_1000: bool) -> tuple[tuple[str, int], ...]:
    k_factor = 1000 if kb_is_1000 else 1024
    units: dict[str, int] = {"b": 1}
    k = ki = 1
    for prefix in ("k", "m", "g", "t", "p", "e"):
        k *= k_factor
        ki *= 1024
        units[prefix] = k
        units[prefix + "b"] = k
        units[prefix + "i"] = ki
        units[prefix + "ib"] = ki
    return tuple(units.items())


class AsSizeValue(AsNumberWithUnit):
    """Read a human-readable size such as ``10 KB`` as an unsigned 64-bit byte count.

    ``*i`` and ``*ib`` units are always powers of 1024; plain ``k``/``kb`` and
    friends are powers of 1000 when ``kb_is_1000`` is set, otherwise of 1024.
    """

    def __init__(self, kb_is_1000: bool) -> None:
        super().__init__(dict(_size_units(bool(kb_is_1000))))
        self._bounds = UINT64_BOUNDS
        self._number_name = "UINT"
        if kb_is_1000:
            self.set_description("SIZE [b, kb(=1000b), kib(=1024b), ...]")
        else:
            self.set_description("SIZE [b, kb(=1024b), ...]")