import pytest

from plfront.syntax.nodes import (
    CommentGroup,
    CommentGroups,
    Emitter,
    Expression,
    Location,
    LocationError,
    NodeList,
    Token,
    Visitor,
    new_comment_group,
    new_implicit_node_list,
    reduce_add,
)


def at(line, col=1):
    return Location("f.pl", line, col)


def tok(value, line, col=1, width=1):
    return Token(value=value, start_pos=at(line, col), end_pos=at(line, col + width))


def groups(*texts):
    return CommentGroups([CommentGroup(at(0), at(0), [t]) for t in texts])


def texts(cgs):
    return [c for g in cgs.groups for c in g.comments]


class Recorder(Visitor):
    def __init__(self):
        self.events = []

    def enter(self, node):
        self.events.append(("enter", node))

    def exit(self, node):
        self.events.append(("exit", node))


def test_location_str():
    assert str(Location("f.pl", 3, 4)) == "f.pl:3:4"


def test_emitter_formats_message():
    emitter = Emitter()
    emitter.emit(at(2), "unexpected %s argument", "variadic")
    (err,) = emitter.errors()
    assert isinstance(err, LocationError)
    assert err.loc == at(2)
    assert err.err == "unexpected variadic argument"


def test_emitter_keeps_message_without_args():
    emitter = Emitter()
    emitter.emit(at(1), "100% wrong")
    assert [e.err for e in emitter.errors()] == ["100% wrong"]


def test_emit_errors_preserves_order():
    emitter = Emitter()
    first = LocationError(at(1), "a")
    second = LocationError(at(2), "b")
    emitter.emit_errors(first, second)
    assert emitter.errors() == [first, second]


def test_errors_returns_copy():
    emitter = Emitter()
    emitter.emit(at(1), "x")
    emitter.errors().clear()
    assert len(emitter.errors()) == 1


def test_comment_group_add():
    first = tok("// a", 1)
    second = tok("// b", 2, width=4)
    group = new_comment_group(first)
    group.add(second)
    assert group.comments == ["// a", "// b"]
    assert group.loc() == first.loc()
    assert group.end() == second.end()


def test_comment_groups_prepend_append_order():
    cgs = groups("b")
    cgs.prepend(groups("a"))
    cgs.append(groups("c"))
    assert texts(cgs) == ["a", "b", "c"]


def test_comment_groups_loc_end():
    cgs = CommentGroups(
        [CommentGroup(at(1), at(2), ["x"]), CommentGroup(at(3), at(4), ["y"])]
    )
    assert cgs.loc() == at(1)
    assert cgs.end() == at(4)


def test_empty_comment_groups_loc_raises():
    with pytest.raises(IndexError):
        CommentGroups().loc()


def test_take_leading_resets():
    node = Expression(leading_comment=groups("x"))
    taken = node.take_leading()
    assert texts(taken) == ["x"]
    assert len(node.leading_comment) == 0


def test_take_comments():
    node = Expression(leading_comment=groups("l"), trailing_comment=groups("t"))
    leading, trailing = node.take_comments()
    assert (texts(leading), texts(trailing)) == (["l"], ["t"])
    assert len(node.leading_comment) == 0 and len(node.trailing_comment) == 0


def test_prepend_and_append_to_trailing():
    node = Expression(trailing_comment=groups("m"))
    node.prepend_to_trailing(groups("f"))
    node.append_to_trailing(groups("z"))
    assert texts(node.trailing_comment) == ["f", "m", "z"]


def test_walk_order():
    a, b = tok("a", 1), tok("b", 2)
    lst = NodeList(elements=[a, b])
    rec = Recorder()
    lst.walk(rec)
    assert rec.events == [
        ("enter", lst),
        ("enter", a),
        ("exit", a),
        ("enter", b),
        ("exit", b),
        ("exit", lst),
    ]


def test_nodes_hash_by_identity():
    first, second = Expression(), Expression()
    assert len({first, second}) == 2


def test_node_list_add_updates_positions():
    lst = NodeList()
    a, b = tok("a", 1), tok("b", 5)
    lst.add(a)
    lst.add(b)
    assert lst.loc() == a.loc()
    assert lst.end() == b.end()
    assert list(lst) == [a, b]


def test_reduce_add_moves_separator_comments():
    a = tok("a", 1)
    comma = Token(value=",", leading_comment=groups("x"), trailing_comment=groups("y"))
    b = tok("b", 3)
    lst = NodeList(elements=[a])
    lst.reduce_add(comma, b)
    assert lst.elements == [a, b]
    assert texts(a.trailing_comment) == ["x", "y"]
    assert lst.end() == b.end()
    assert len(comma.leading_comment) == 0


def test_reduce_add_function():
    a, b = tok("a", 1), tok("b", 2)
    sep = Token(value=",", trailing_comment=groups("s"))
    result = reduce_add([a], sep, b)
    assert result == [a, b]
    assert texts(a.trailing_comment) == ["s"]


def test_reduce_improper():
    a = tok("a", 1)
    comma = Token(
        value=",", start_pos=at(1, 2), end_pos=at(1, 3), trailing_comment=groups("t")
    )
    lst = NodeList(elements=[a])
    lst.reduce_improper(comma)
    assert lst.end() == comma.end()
    assert texts(a.trailing_comment) == ["t"]


def test_reduce_markers_nonempty():
    a, b = tok("a", 2), tok("b", 3)
    lparen = Token(
        value="(",
        start_pos=at(1),
        end_pos=at(1, 2),
        leading_comment=groups("lead"),
        trailing_comment=groups("after-open"),
    )
    rparen = Token(
        value=")",
        start_pos=at(4),
        end_pos=at(4, 2),
        leading_comment=groups("before-close"),
        trailing_comment=groups("trail"),
    )
    lst = NodeList(elements=[a, b])
    lst.reduce_markers(lparen, rparen)
    assert (lst.loc(), lst.end()) == (lparen.loc(), rparen.end())
    assert texts(lst.leading_comment) == ["lead"]
    assert texts(lst.trailing_comment) == ["trail"]
    assert texts(a.leading_comment) == ["after-open"]
    assert texts(b.trailing_comment) == ["before-close"]
    assert len(lst.middle_comment) == 0


def test_reduce_markers_empty_uses_middle_comment():
    lparen = Token(value="(", trailing_comment=groups("one"))
    rparen = Token(value=")", leading_comment=groups("two"))
    lst = NodeList()
    lst.reduce_markers(lparen, rparen)
    assert texts(lst.middle_comment) == ["one", "two"]


def test_new_implicit_node_list():
    lst = new_implicit_node_list(at(7))
    assert lst.is_implicit
    assert lst.loc() == at(7) and lst.end() == at(7)
    assert lst.elements == []