from argbind.parser.token_stream import tokenize
from argbind.parser.tokens import Index


def test_removing_complete_index_removes_cluster():
    stream = tokenize(["-abc", "x"])
    stream.remove(Index(0))
    assert [str(element.index) for element in stream] == ["1"]


def test_removing_sub_index_splits_cluster():
    stream = tokenize(["-abc"])
    stream.remove(Index(0, 1))
    assert Index(0) in stream
    assert Index(0, 1) not in stream
    assert stream.is_split(0)
    assert [str(element.index) for element in stream.visible_elements()] == ["0.0", "0.2"]


def test_removal_never_renumbers():
    stream = tokenize(["a", "b", "c"])
    stream.remove(Index(1))
    assert stream.get(Index(2)).text == "c"
    assert stream.original(Index(2)) == "c"


def test_pop_next_element_if_value():
    stream = tokenize(["--name", "value", "other"])
    assert stream.pop_next_element_if_value(Index(0)) == (Index(1), "value")
    assert Index(1) not in stream


def test_pop_next_element_if_value_stops_at_option():
    stream = tokenize(["--name", "--other", "value"])
    assert stream.pop_next_element_if_value(Index(0)) is None
    assert len(stream) == 3


def test_pop_next_element_if_value_skips_cluster_members():
    stream = tokenize(["-fn", "f-value", "n-value"])
    assert stream.pop_next_element_if_value(Index(0, 0)) == (Index(1), "f-value")
    assert stream.pop_next_element_if_value(Index(0, 1)) == (Index(2), "n-value")


def test_possible_negative_needs_acceptance():
    stream = tokenize(["--offset", "-5"])
    assert stream.pop_next_element_if_value(Index(0)) is None
    assert stream.pop_next_element_if_value(Index(0), lambda token: True) == (
        Index(1),
        "-5",
    )


def test_pop_next_value_scans_past_options():
    stream = tokenize(["--name", "--flag", "value"])
    assert stream.pop_next_value(Index(0)) == (Index(2), "value")
    assert Index(1) in stream


def test_pop_next_element_as_value_takes_anything():
    stream = tokenize(["--a", "--b", "foo"])
    assert stream.pop_next_element_as_value(Index(0)) == (Index(1), "--b")


def test_pop_front_if_value():
    stream = tokenize(["a", "--b"])
    assert stream.pop_front_if_value() == (Index(0), "a")
    assert stream.pop_front_if_value() is None


def test_extract_joined_value():
    stream = tokenize(["-Ddebug"])
    assert stream.extract_joined_value(Index(0, 0)) == (Index(0), "debug")
    assert stream.extract_joined_value(Index(0, 1)) is None


def test_copy_is_independent():
    stream = tokenize(["a", "b"])
    clone = stream.copy()
    clone.remove(Index(0))
    assert Index(0) in stream
    assert len(clone) == 1


def test_coalesced_extra_elements():
    stream = tokenize(["x", "-ab", "--", "y"])
    stream.remove(Index(1, 0))
    assert stream.coalesced_extra_elements() == [
        (Index(0), "x"),
        (Index(1, 1), "-b"),
        (Index(3), "y"),
    ]


def test_coalesced_extra_elements_reports_untouched_cluster_once():
    stream = tokenize(["-ab"])
    assert stream.coalesced_extra_elements() == [(Index(0), "-ab")]
