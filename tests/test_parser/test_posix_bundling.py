from argbind.exceptions import ParseErrorKind
from argbind.parser import ArgumentSet, CommandParser, CommandSpec


def parse(arguments, argv):
    return CommandParser(CommandSpec("tool", arguments=arguments)).parse(argv)


def flags():
    arguments = ArgumentSet()
    arguments.add_argument("-a", "--alpha", action="store_true")
    arguments.add_argument("-b", "--beta", action="store_true")
    arguments.add_argument("-c", "--charlie", action="store_true")
    return arguments


def test_cluster_equals_separate_flags():
    clustered = parse(flags(), ["-abc"])
    separate = parse(flags(), ["-a", "-b", "-c"])
    assert clustered.ok and separate.ok
    assert clustered.values.as_dict() == separate.values.as_dict()
    assert clustered.values.as_dict() == {"alpha": True, "beta": True, "charlie": True}


def test_cluster_last_member_takes_value():
    arguments = flags()
    arguments.add_argument("-o", "--output")
    result = parse(arguments, ["-abo", "out.txt"])
    assert result.values["output"] == "out.txt"
    assert result.values["alpha"] is True


def test_cluster_members_take_values_in_order():
    arguments = ArgumentSet()
    arguments.add_argument("-f", dest="file")
    arguments.add_argument("-n", dest="name")
    result = parse(arguments, ["-fn", "f-value", "n-value"])
    assert result.values["file"] == "f-value"
    assert result.values["name"] == "n-value"


def test_unknown_member_of_cluster():
    result = parse(flags(), ["-abz"])
    assert result.error.kind == ParseErrorKind.UNKNOWN_OPTION
    assert result.error.message == "Unknown option '-z'"


def test_single_dash_long_name_beats_cluster():
    arguments = flags()
    arguments.add_argument("-abc", action="store_true", dest="abc")
    result = parse(arguments, ["-abc"])
    assert result.values["abc"] is True
    assert result.values["alpha"] is False


def test_cluster_origin_points_at_member():
    result = parse(flags(), ["-ab"])
    origin = result.values.origin("beta")
    assert [str(index) for index in origin] == ["0.1"]
