"""Core syntax tree machinery: locations, diagnostics, comments, nodes and lists."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Iterator, TypeVar

# Decorator shared by every syntax tree node class.  Nodes compare and hash by
# identity, since analysis passes key tables on specific node instances.
syntax_node = dataclass(kw_only=True, eq=False)


class TextEnum(str, Enum):
    """String valued enum that prints as its value."""

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class Location:
    """A position in a source file."""

    file_name: str = ""
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f"{self.file_name}:{self.line}:{self.column}"


class LocationError(Exception):
    """An error attached to a source location."""

    def __init__(self, loc: Location, err: object) -> None:
        super().__init__(loc, err)
        self.loc = loc
        self.err = err

    def __str__(self) -> str:
        return f"{self.loc}: {self.err}"


class Emitter:
    """Thread-safe collector of diagnostics."""

    def __init__(self) -> None:
        self._errors: list[Exception] = []
        self._lock = threading.Lock()

    def emit(self, loc: Location, message: str, *args: object) -> None:
        text = message % args if args else message
        self.emit_errors(LocationError(loc, text))

    def emit_errors(self, *args: Exception) -> None:
        with self._lock:
            self._errors.extend(args)

    def errors(self) -> list[Exception]:
        with self._lock:
            return list(self._errors)


class Visitor:
    """Receives nodes before and after their children are walked."""

    def enter(self, node: Node) -> None:
        pass

    def exit(self, node: Node) -> None:
        pass


@dataclass
class CommentGroup:
    """A block comment, or consecutive line comments."""

    start_pos: Location = field(default_factory=Location)
    end_pos: Location = field(default_factory=Location)
    comments: list[str] = field(default_factory=list)

    def loc(self) -> Location:
        return self.start_pos

    def end(self) -> Location:
        return self.end_pos

    def add(self, value: Token) -> None:
        self.end_pos = value.end()
        self.comments.append(value.value)


def new_comment_group(value: Token) -> CommentGroup:
    return CommentGroup(value.loc(), value.end(), [value.value])


@dataclass
class CommentGroups:
    """An ordered sequence of comment groups attached to a node."""

    groups: list[CommentGroup] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.groups)

    def loc(self) -> Location:
        return self.groups[0].loc()

    def end(self) -> Location:
        return self.groups[-1].end()

    def prepend(self, other: CommentGroups) -> None:
        self.groups = [*other.groups, *self.groups]

    def append(self, other: CommentGroups) -> None:
        self.groups = [*self.groups, *other.groups]


@syntax_node
class Node:
    """Base of every syntax tree node."""

    start_pos: Location = field(default_factory=Location)
    end_pos: Location = field(default_factory=Location)
    leading_comment: CommentGroups = field(default_factory=CommentGroups)
    trailing_comment: CommentGroups = field(default_factory=CommentGroups)

    def loc(self) -> Location:
        return self.start_pos

    def end(self) -> Location:
        return self.end_pos

    def children(self) -> Iterator[Node]:
        """Yield the direct child nodes in walk order."""
        return iter(())

    def walk(self, visitor: Visitor) -> None:
        visitor.enter(self)
        for child in self.children():
            child.walk(visitor)
        visitor.exit(self)

    def validate(self, emitter: Emitter) -> None:
        """Check this node's own structure; plain nodes have nothing to check."""

    def prepend_to_leading(self, other: CommentGroups) -> None:
        self.leading_comment.prepend(other)

    def append_to_leading(self, other: CommentGroups) -> None:
        self.leading_comment.append(other)

    def prepend_to_trailing(self, other: CommentGroups) -> None:
        self.trailing_comment.prepend(other)

    def append_to_trailing(self, other: CommentGroups) -> None:
        self.trailing_comment.append(other)

    def take_leading(self) -> CommentGroups:
        taken = self.leading_comment
        self.leading_comment = CommentGroups()
        return taken

    def take_trailing(self) -> CommentGroups:
        taken = self.trailing_comment
        self.trailing_comment = CommentGroups()
        return taken

    def take_comments(self) -> tuple[CommentGroups, CommentGroups]:
        """Return (leading, trailing) comments and clear both."""
        return self.take_leading(), self.take_trailing()


@syntax_node
class Token(Node):
    """A lexical token carrying its text."""

    value: str = ""


@syntax_node
class Statement(Node):
    """A statement."""


@syntax_node
class Expression(Statement):
    """An expression; every expression may stand as a statement."""


@syntax_node
class TypeExpression(Node):
    """A type expression."""


@syntax_node
class TypeProperty(Node):
    """A property of a struct, enum or trait type."""


@syntax_node
class DirectiveExpression(Node):
    """An expression inside a directive."""


T = TypeVar("T", bound=Node)


def reduce_add(elements: list[T], separator: Node, element: T) -> list[T]:
    """Append element, moving the separator's comments onto the previous one."""
    prev = elements[-1]
    prev.append_to_trailing(separator.take_leading())
    prev.append_to_trailing(separator.take_trailing())
    elements.append(element)
    return elements


@syntax_node
class NodeList(Node, Generic[T]):
    """A delimited list of nodes."""

    middle_comment: CommentGroups = field(default_factory=CommentGroups)
    is_implicit: bool = False
    elements: list[T] = field(default_factory=list)

    def __iter__(self) -> Iterator[T]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def children(self) -> Iterator[Node]:
        yield from self.elements

    def add(self, element: T) -> None:
        if not self.elements:
            self.start_pos = element.loc()
        self.end_pos = element.end()
        self.elements.append(element)

    def reduce_add(self, separator: Node, element: T) -> None:
        self.elements = reduce_add(self.elements, separator, element)
        self.end_pos = element.end()

    def reduce_improper(self, separator: Node) -> None:
        self.end_pos = separator.end()
        last = self.elements[-1]
        last.append_to_trailing(separator.take_leading())
        last.append_to_trailing(separator.take_trailing())

    def reduce_markers(self, start: Node, end: Node) -> None:
        self.start_pos = start.loc()
        self.end_pos = end.end()
        self.leading_comment = start.take_leading()
        if self.elements:
            self.elements[0].prepend_to_leading(start.take_trailing())
            self.elements[-1].append_to_trailing(end.take_leading())
        else:
            self.middle_comment = start.take_trailing()
            self.middle_comment.append(end.take_leading())
        self.trailing_comment = end.take_trailing()


def new_implicit_node_list(pos: Location) -> NodeList:
    return NodeList(start_pos=pos, end_pos=pos, is_implicit=True)