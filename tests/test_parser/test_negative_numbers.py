from argbind.exceptions import ParseErrorKind
from argbind.parser import ArgumentSet, CommandParser, CommandSpec


def parse(arguments, argv):
    return CommandParser(CommandSpec("tool", arguments=arguments)).parse(argv)


def test_negative_number_binds_to_int_positional():
    arguments = ArgumentSet()
    arguments.add_argument("n", type=int)
    result = parse(arguments, ["-5"])
    assert result.ok
    assert result.values["n"] == -5


def test_multi_digit_negative_number():
    arguments = ArgumentSet()
    arguments.add_argument("n", type=int)
    assert parse(arguments, ["-12"]).values["n"] == -12


def test_negative_float_positional():
    arguments = ArgumentSet()
    arguments.add_argument("x", type=float)
    assert parse(arguments, ["-3.5"]).values["x"] == -3.5


def test_negative_number_as_option_value():
    arguments = ArgumentSet()
    arguments.add_argument("--offset", type=int)
    assert parse(arguments, ["--offset", "-5"]).values["offset"] == -5


def test_declared_digit_name_wins():
    arguments = ArgumentSet()
    arguments.add_argument("-5", action="store_true", dest="five")
    arguments.add_argument("n", type=int, default=0)
    result = parse(arguments, ["-5"])
    assert result.values["five"] is True
    assert result.values["n"] == 0


def test_declared_digit_name_is_not_an_option_value():
    arguments = ArgumentSet()
    arguments.add_argument("-1", action="store_true", dest="one")
    arguments.add_argument("--offset", type=int)
    result = parse(arguments, ["--offset", "-1"])
    assert result.error.kind == ParseErrorKind.MISSING_VALUE


def test_declared_digit_in_cluster_is_not_an_option_value():
    arguments = ArgumentSet()
    arguments.add_argument("-1", action="store_true", dest="one")
    arguments.add_argument("--offset", type=int)
    result = parse(arguments, ["--offset", "-12"])
    assert result.error.kind == ParseErrorKind.MISSING_VALUE


def test_undeclared_cluster_digits_stay_a_negative_value():
    arguments = ArgumentSet()
    arguments.add_argument("-5", action="store_true", dest="five")
    arguments.add_argument("--offset", type=int)
    result = parse(arguments, ["--offset", "-12"])
    assert result.ok
    assert result.values["offset"] == -12


def test_negative_number_without_positional_is_unexpected():
    result = parse(ArgumentSet(), ["-5"])
    assert result.error.kind == ParseErrorKind.UNEXPECTED_VALUE
    assert result.error.message == "Unexpected argument '-5'"


def test_negative_numbers_in_repeating_positional():
    arguments = ArgumentSet()
    arguments.add_argument("values", action="append", type=int)
    assert parse(arguments, ["1", "-2", "-30"]).values["values"] == [1, -2, -30]
