import pytest

from clicheck import strings


def test_split_simple_by_token():
    assert strings.split("one.two.three", ".") == ["one", "two", "three"]


def test_split_single():
    assert strings.split("one", ".") == ["one"]


def test_split_empty():
    assert strings.split("", ".") == [""]


def test_split_trailing_delimiter_dropped():
    assert strings.split("a.b.", ".") == ["a", "b"]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("valid", True),
        ("-invalid", False),
        ("va-li-d", True),
        ("vali&d", False),
        ("_valid", True),
        ("/valid", False),
        ("vali?d", True),
        ("@@@@", True),
        ("b@d2?", True),
        ("2vali?d", True),
        ("", False),
    ],
)
def test_valid_name_string(name, expected):
    assert strings.valid_name_string(name) is expected


def test_find_and_modify_every_second():
    count = 0

    def modify(text, index):
        nonlocal count
        count += 1
        if count % 2 == 0:
            text = text[:index] + ":" + text[index + 1:]
        return text, index + 1

    assert strings.find_and_modify("======", "=", modify) == "=:=:=:"


def test_find_and_modify_word():
    def modify(text, index):
        if index > 1 and text[index - 1] != " ":
            text = text[:index] + "at" + text[index + 2:]
        return text, index + 1

    assert strings.find_and_modify("this is a string test", "is", modify) == "that is a string test"


def test_find_and_modify_collapse():
    def modify(text, index):
        text = text[:index] + text[index + 3:]
        return "a" + text, 0

    assert strings.find_and_modify("baaaaaaaaaa", "aaa", modify) == "aba"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", True),
        ("a", True),
        ("abcd", True),
        ("_", False),
        ("2", False),
        ("test test", False),
        ("test ", False),
        (" test", False),
        ("test2", False),
    ],
)
def test_is_alpha(text, expected):
    assert strings.is_alpha(text) is expected


def test_trim_various():
    assert strings.trim("  sdlfkj sdflk sd s  ") == "sdlfkj sdflk sd s"
    assert strings.trim(" a \t") == "a"
    assert strings.trim(" a \n") == "a"
    assert strings.trim(" a b ") == "a b"


def test_trim_various_filters():
    assert strings.trim("  sdlfkj sdflk sd s  ", " ") == "sdlfkj sdflk sd s"
    assert strings.trim(" a \t", " ") == "a \t"
    assert strings.trim("abdavda", "a") == "bdavd"
    assert strings.trim("abcabcabc", "ab") == "cabcabc"


def test_trim_leaves_original():
    orig = " cabc  "
    trimmed = strings.trim(orig)
    assert trimmed == "cabc"
    assert orig == " cabc  "
    assert strings.trim("abcabcabc", "ab") == "cabcabc"


def test_ltrim_rtrim():
    assert strings.ltrim("  a  ") == "a  "
    assert strings.rtrim("  a  ") == "  a"
    assert strings.ltrim("xxay", "x") == "ay"
    assert strings.rtrim("xayy", "y") == "xa"


def test_to_lower():
    assert strings.to_lower("one And TWO") == "one and two"


def test_join_forward():
    values = ["one", "two", "three"]
    assert strings.join(values) == "one,two,three"
    assert strings.join(values, ";") == "one;two;three"


def test_join_with_key():
    assert strings.join([1, 2, 3], key=lambda x: x * 2) == "2,4,6"
    assert strings.join([]) == ""


def test_join_backward():
    values = ["three", "two", "one"]
    assert strings.rjoin(values) == "one,two,three"
    assert strings.rjoin(values, ";") == "one;two;three"


@pytest.mark.parametrize(
    "text, expected",
    [
        ('one "two three"', ["one", "two three"]),
        ("one `two three`", ["one", "two three"]),
        ("one 'two three'", ["one", "two three"]),
        ("\"one 'two three'\"", ["one 'two three'"]),
        ('  one  "  two three" ', ["one", "  two three"]),
        ('  one  "  two three ', ["one", "  two three"]),
        ("  one  '  two three ", ["one", "  two three"]),
    ],
)
def test_split_up(text, expected):
    assert strings.split_up(text) == expected


def test_split_up_escaped_quote():
    assert strings.split_up('a "b\\"c"') == ["a", 'b"c']


def test_fix_newlines_basic():
    assert strings.fix_newlines("; ", "one\ntwo") == "one\n; two"


def test_fix_newlines_edges():
    assert strings.fix_newlines("; ", "\none\ntwo\n") == "\n; one\n; two\n; "


def test_format_help_short_name():
    assert strings.format_help("--one", "Help", 10) == "  --one   Help\n"


def test_format_help_long_name_wraps():
    assert strings.format_help("--a-very-long", "d", 10) == "  --a-very-long\n          d\n"


def test_format_help_multiline_description():
    assert strings.format_help("-a", "x\ny", 6) == "  -a  x\n      y\n"


def test_format_help_no_description():
    assert strings.format_help("-a", "", 6) == "  -a  \n"


def test_remove_underscore_and_replace():
    assert strings.remove_underscore("_a_b_") == "ab"
    assert strings.find_and_replace("aXbXc", "X", "--") == "a--b--c"


def test_default_flag_values():
    assert strings.has_default_flag_values("--flag{false}")
    assert strings.has_default_flag_values("!--no-flag")
    assert not strings.has_default_flag_values("--flag,-f")


def test_remove_default_flag_values():
    assert strings.remove_default_flag_values("--flag{false},-f!") == "--flag,-f"
    assert strings.remove_default_flag_values("-a{,b}") == "-a{,b}"


def test_find_member():
    names = ["one", "Two", "th_ree"]
    assert strings.find_member("one", names) == 0
    assert strings.find_member("two", names) == -1
    assert strings.find_member("two", names, ignore_case=True) == 1
    assert strings.find_member("three", names, ignore_underscore=True) == 2
    assert strings.find_member("T_WO", names, True, True) == 1


def test_escape_detect_long():
    text, offset = strings.escape_detect('--opt="x"', 5)
    assert text == '--opt "x"'
    assert offset == 6


def test_escape_detect_windows():
    text, offset = strings.escape_detect('/opt:"x"', 4)
    assert text == '/opt "x"'
    assert offset == 5


def test_escape_detect_no_quote_unchanged():
    text, offset = strings.escape_detect("--opt=x", 5)
    assert text == "--opt=x"
    assert offset == 6


def test_add_quotes_if_needed():
    assert strings.add_quotes_if_needed("a b") == '"a b"'
    assert strings.add_quotes_if_needed('say "hi" there') == "'say \"hi\" there'"
    assert strings.add_quotes_if_needed("nospace") == "nospace"
    assert strings.add_quotes_if_needed('"a b"') == '"a b"'


def test_valid_chars():
    assert strings.valid_first_char("a")
    assert not strings.valid_first_char("-")
    assert strings.valid_later_char("-")
    assert strings.valid_later_char(".")
    assert not strings.valid_later_char("&")