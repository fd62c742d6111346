"""Validators that check, and optionally rewrite, option input strings."""

from __future__ import annotations

import math
import os
import re
from collections.abc import Callable

from clicheck.strings import ltrim, rtrim, split, trim

__all__ = [
    "ValidationError",
    "Validator",
    "ExistingFileValidator",
    "ExistingDirectoryValidator",
    "ExistingPathValidator",
    "NonexistentPathValidator",
    "IPV4Validator",
    "PositiveNumberValidator",
    "NumberValidator",
    "ExistingFile",
    "ExistingDirectory",
    "ExistingPath",
    "NonexistentPath",
    "ValidIPV4",
    "PositiveNumber",
    "Number",
    "Range",
    "Bound",
    "split_program_name",
]

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_SPECIAL_FLOAT_RE = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_GENERIC_FAILURE = "Validation failed"


class ValidationError(ValueError):
    """Raised when a value does not pass a validator."""


def _parse_int(text: str, bounded: bool = False) -> int | None:
    """Parse a whole decimal integer; return None if the text is not one."""
    if not _INT_RE.fullmatch(text):
        return None
    number = int(text)
    if bounded and not _INT32_MIN <= number <= _INT32_MAX:
        return None
    return number


def _parse_float(text: str) -> float | None:
    """Parse a decimal floating-point number; return None on failure or overflow."""
    if _SPECIAL_FLOAT_RE.fullmatch(text):
        return float(text)
    if not _FLOAT_RE.fullmatch(text):
        return None
    number = float(text)
    if math.isinf(number):
        return None
    return number


def _stream(value: int | float) -> str:
    """Render a number the way a default text stream does."""
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _fixed(value: int | float) -> str:
    """Render a number in fixed notation for floats, plainly for integers."""
    if isinstance(value, float):
        return f"{value:f}"
    return str(value)


def _type_name(value_type: type) -> str:
    return "INT" if value_type is int else "FLOAT"


def _identity(value: str) -> str:
    return value


def _run(func: Callable[[str], str], value: str) -> tuple[str, str]:
    """Run ``func`` and return (resulting value, error message or '')."""
    try:
        return func(value), ""
    except ValidationError as exc:
        return value, str(exc) or _GENERIC_FAILURE


class Validator:
    """A check on an input string that may also transform it.

    ``func`` takes the input and returns the (possibly rewritten) value,
    raising :class:`ValidationError` when the input is rejected.
    ``description`` is a string or a callable producing one on demand.
    """

    def __init__(
        self,
        func: Callable[[str], str] | None = None,
        description: str | Callable[[], str] = "",
        name: str = "",
    ) -> None:
        self.func: Callable[[str], str] = func if func is not None else _identity
        self._description: Callable[[], str] = (
            description if callable(description) else (lambda: description)
        )
        self.name = name
        self.active = True
        self.modifying = True

    def set_description(self, description: str | Callable[[], str]) -> None:
        """Replace the description with a fixed string or a callable."""
        self._description = description if callable(description) else (lambda: description)

    def __call__(self, value: str) -> str:
        """Return the error message for ``value``, or '' if it is accepted."""
        if not self.active:
            return ""
        return _run(self.func, value)[1]

    def apply(self, value: str) -> str:
        """Validate ``value`` and return it, rewritten if the validator modifies.

        Raises :class:`ValidationError` if the value is rejected.
        """
        if not self.active:
            return value
        result, error = _run(self.func, value)
        if error:
            raise ValidationError(error)
        return result if self.modifying else value

    def describe(self) -> str:
        """Return the description, or '' when the validator is inactive."""
        return self._description() if self.active else ""

    def _merged_description(self, other: Validator, merger: str) -> Callable[[], str]:
        first, second = self._description, other._description

        def describe() -> str:
            d1, d2 = first(), second()
            if not d1 or not d2:
                return d1 + d2
            return f"({d1}){merger}({d2})"

        return describe

    def __and__(self, other: Validator) -> Validator:
        f1, f2 = self.func, other.func

        def both(value: str) -> str:
            value, err1 = _run(f1, value)
            value, err2 = _run(f2, value)
            if err1 and err2:
                raise ValidationError(f"({err1}) AND ({err2})")
            if err1 or err2:
                raise ValidationError(err1 + err2)
            return value

        combined = Validator(both, self._merged_description(other, " AND "))
        combined.active = self.active and other.active
        return combined

    def __or__(self, other: Validator) -> Validator:
        f1, f2 = self.func, other.func

        def either(value: str) -> str:
            value, err1 = _run(f1, value)
            value, err2 = _run(f2, value)
            if err1 and err2:
                raise ValidationError(f"({err1}) OR ({err2})")
            return value

        combined = Validator(either, self._merged_description(other, " OR "))
        combined.active = self.active and other.active
        return combined

    def __invert__(self) -> Validator:
        func, base_description = self.func, self._description

        def describe() -> str:
            text = base_description()
            return f"NOT {text}" if text else ""

        def negated(value: str) -> str:
            _, error = _run(func, value)
            if not error:
                raise ValidationError(f"check {base_description()} succeeded improperly")
            return value

        inverted = Validator(negated, describe)
        inverted.active = self.active
        return inverted


class ExistingFileValidator(Validator):
    """Accept only paths to existing files that are not directories."""

    def __init__(self) -> None:
        super().__init__(self._check, "FILE")

    @staticmethod
    def _check(filename: str) -> str:
        if not os.path.exists(filename):
            raise ValidationError(f"File does not exist: {filename}")
        if os.path.isdir(filename):
            raise ValidationError(f"File is actually a directory: {filename}")
        return filename


class ExistingDirectoryValidator(Validator):
    """Accept only paths to existing directories."""

    def __init__(self) -> None:
        super().__init__(self._check, "DIR")

    @staticmethod
    def _check(filename: str) -> str:
        if not os.path.exists(filename):
            raise ValidationError(f"Directory does not exist: {filename}")
        if not os.path.isdir(filename):
            raise ValidationError(f"Directory is actually a file: {filename}")
        return filename


class ExistingPathValidator(Validator):
    """Accept any existing path."""

    def __init__(self) -> None:
        super().__init__(self._check, "PATH(existing)")

    @staticmethod
    def _check(filename: str) -> str:
        if not os.path.exists(filename):
            raise ValidationError(f"Path does not exist: {filename}")
        return filename


class NonexistentPathValidator(Validator):
    """Accept only paths that do not exist yet."""

    def __init__(self) -> None:
        super().__init__(self._check, "PATH(non-existing)")

    @staticmethod
    def _check(filename: str) -> str:
        if os.path.exists(filename):
            raise ValidationError(f"Path already exists: {filename}")
        return filename


class IPV4Validator(Validator):
    """Accept dotted-quad IPv4 addresses."""

    def __init__(self) -> None:
        super().__init__(self._check, "IPV4")

    @staticmethod
    def _check(ip_addr: str) -> str:
        parts = split(ip_addr, ".")
        if len(parts) != 4:
            raise ValidationError(f"Invalid IPV4 address must have four parts {ip_addr}")
        for part in parts:
            number = _parse_int(part, bounded=True)
            if number is None:
                raise ValidationError(f"Failed parsing number {part}")
            if not 0 <= number <= 255:
                raise ValidationError(f"Each IP number must be between 0 and 255 {part}")
        return ip_addr


class PositiveNumberValidator(Validator):
    """Accept integers greater than or equal to zero."""

    def __init__(self) -> None:
        super().__init__(self._check, "POSITIVE")

    @staticmethod
    def _check(number_str: str) -> str:
        number = _parse_int(number_str, bounded=True)
        if number is None:
            raise ValidationError(f"Failed parsing number {number_str}")
        if number < 0:
            raise ValidationError(f"Number less then 0 {number_str}")
        return number_str


class NumberValidator(Validator):
    """Accept anything that parses as a floating-point number."""

    def __init__(self) -> None:
        super().__init__(self._check, "NUMBER")

    @staticmethod
    def _check(number_str: str) -> str:
        if _parse_float(number_str) is None:
            raise ValidationError(f"Failed parsing as a number {number_str}")
        return number_str


ExistingFile = ExistingFileValidator()
ExistingDirectory = ExistingDirectoryValidator()
ExistingPath = ExistingPathValidator()
NonexistentPath = NonexistentPathValidator()
ValidIPV4 = IPV4Validator()
PositiveNumber = PositiveNumberValidator()
Number = NumberValidator()


def _numeric_bounds(
    minimum: int | float, maximum: int | float | None
) -> tuple[type, int | float, int | float, Callable[[str], int | float | None]]:
    """Normalise bounds; a single bound means 0 up to that bound."""
    if maximum is None:
        minimum, maximum = type(minimum)(0), minimum
    is_int = all(isinstance(v, int) and not isinstance(v, bool) for v in (minimum, maximum))
    if is_int:
        return int, minimum, maximum, _parse_int
    return float, float(minimum), float(maximum), _parse_float


class Range(Validator):
    """Accept numbers within ``[minimum, maximum]``; one argument means ``[0, minimum]``."""

    def __init__(self, minimum: int | float, maximum: int | float | None = None) -> None:
        value_type, low, high, parse = _numeric_bounds(minimum, maximum)

        def check(value: str) -> str:
            number = parse(value)
            if number is None or number < low or number > high:
                raise ValidationError(
                    f"Value {value} not in range {_fixed(low)} to {_fixed(high)}"
                )
            return value

        super().__init__(
            check, f"{_type_name(value_type)} in [{_stream(low)} - {_stream(high)}]"
        )


class Bound(Validator):
    """Clamp numbers into ``[minimum, maximum]``; one argument means ``[0, minimum]``."""

    def __init__(self, minimum: int | float, maximum: int | float | None = None) -> None:
        value_type, low, high, parse = _numeric_bounds(minimum, maximum)

        def clamp(value: str) -> str:
            number = parse(value)
            if number is None:
                raise ValidationError(f"Value {value} could not be converted")
            if number < low:
                return _stream(low)
            if number > high:
                return _stream(high)
            return value

        super().__init__(
            clamp, f"{_type_name(value_type)} bounded to [{_stream(low)} - {_stream(high)}]"
        )


def split_program_name(commandline: str) -> tuple[str, str]:
    """Split a command line into the program name and the remaining arguments.

    The longest space-separated prefix naming an existing file is taken as the
    program; if none exists, the first word is used.
    """
    commandline = trim(commandline)

    def prefix(end: int) -> str:
        return commandline if end == -1 else commandline[:end]

    esp = commandline.find(" ", 1)
    while ExistingFile(prefix(esp)):
        esp = commandline.find(" ", esp + 1)
        if esp == -1:
            esp = commandline.find(" ", 1)
            break
    program = rtrim(prefix(esp))
    rest = ltrim(commandline[esp + 1:]) if esp != -1 else ""
    return program, rest