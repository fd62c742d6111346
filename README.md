# clicheck

Building blocks for checking and transforming command-line argument values,
and for laying out help text. Pure Python, no dependencies.

## Installation

```
pip install clicheck
```

For running the test suite:

```
pip install "clicheck[test]"
pytest
```

## Validators

`clicheck.validators.Validator` wraps a function that takes an input string and
returns it, possibly rewritten, raising `ValidationError` to reject it.
Calling a validator returns `""` on success or the error message on failure;
`apply` returns the resulting value and raises `ValidationError` on failure;
`describe` returns its description text.

```python
from clicheck.validators import Range, Bound, ExistingFile, ValidIPV4

in_range = Range(3, 6)
in_range("4")        # ""
in_range("9")        # "Value 9 not in range 3 to 6"

either = Range(0, 4) | Range(8, 12)
both = Range(0, 12) & Range(4, 16)
not_a_file = ~ExistingFile

ValidIPV4("224.255.0.1")   # ""
Bound(0, 10).apply("15")   # "10"
```

`Range(maximum)` and `Bound(maximum)` with a single argument cover `0` up to
that value. `Bound` clamps a value into the range instead of rejecting it.

Ready-made validator classes are `ExistingFileValidator`,
`ExistingDirectoryValidator`, `ExistingPathValidator`,
`NonexistentPathValidator`, `IPV4Validator`, `PositiveNumberValidator` and
`NumberValidator`, with shared instances `ExistingFile`, `ExistingDirectory`,
`ExistingPath`, `NonexistentPath`, `ValidIPV4`, `PositiveNumber` and `Number`.

`split_program_name(commandline)` splits a command line into the program
name (the longest leading part naming an existing file, otherwise the first
word) and the rest.

## Membership and transforms

```python
from clicheck.membership import (
    IsMember, Transformer, CheckedTransformer, AsNumberWithUnit, AsSizeValue,
    ignore_case, ignore_underscore,
)

choice = IsMember(["one", "Two", "THREE"], ignore_case)
choice.apply("two")      # "Two" - spelling from the collection is kept

to_number = Transformer({"one": 1, "two": 2})
to_number.apply("one")   # "1"

checked = CheckedTransformer({"a": "b"})
checked.apply("a")       # "b"; "b" is also accepted, anything else raises

sizes = AsSizeValue(kb_is_1000=False)
sizes.apply("10 kb")     # "10240"
```

Filters such as `ignore_case`, `ignore_underscore` and `ignore_space` can be
given in any number and are applied in order to both sides of a comparison.
`IsMember` keeps a reference to its collection, so later changes to it are
seen. `AsNumberWithUnit(mapping, options, unit_name)` multiplies a number by
the factor of its unit, with `UnitOptions` choosing case sensitivity and
whether a unit is required. `generate_set`, `generate_map`, `search` and
`checked_multiply` are available as helpers.

## String tools and help layout

`clicheck.strings` holds helpers for splitting (`split`, `split_up`), joining
(`join`, `rjoin`), trimming (`ltrim`, `rtrim`, `trim`), quoting
(`add_quotes_if_needed`), name checks (`valid_name_string`) and formatting
two-column help lines (`format_help`). `clicheck.formatting` provides the
abstract `FormatterBase`, `FormatterLambda` (which delegates to a callable)
and the `AppFormatMode` enum.

## What it does not do

clicheck has no argument parser or application object: it does not read
`sys.argv`, define options or subcommands, or print help by itself. Nor does
it ship a ready-made help formatter; `FormatterBase` must be subclassed, or a
callable given to `FormatterLambda`.