"""
Newick reader.

Grammar::

    tree     := subtree ';'
    subtree  := leaf | internal
    internal := '(' subtree (',' subtree)+ ')' label? length?
    leaf     := label length?
    label    := unquoted | "'" any-char* "'"
    length   := ':' signed-decimal

Whitespace outside quoted labels is ignored and ``[...]`` comments are
discarded. The character stream is consumed in a single pass with one
character of look-ahead; clades are tracked on an explicit node stack rather
than by recursion, so nesting depth is bounded only by memory.
"""

import io
import logging
import math
import re
from typing import IO, Iterator, List, NamedTuple, Optional

from ecotree.exceptions import InvalidTreeError, InvalidTreeKind
from ecotree.node import Node

logger = logging.getLogger(__name__)

# Characters that terminate an unquoted label
LABEL_DELIMITERS = frozenset("()[],:;'")

_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

_CHUNK_SIZE = 8192


# ===================================================================
# 1. CHARACTER STREAM & TOKENIZER
# ===================================================================


class Token(NamedTuple):
    kind: str  # one of "(", ")", ",", ":", ";", "label", "end"
    value: str
    offset: int
    quoted: bool = False


class _CharStream:
    """Buffered character reader with a single character of look-ahead."""

    def __init__(self, reader: IO[str]):
        self._reader = reader
        self._buffer = ""
        self._position = 0
        self.offset = 0

    def _fill(self) -> bool:
        if self._position < len(self._buffer):
            return True
        self._buffer = self._reader.read(_CHUNK_SIZE)
        self._position = 0
        return bool(self._buffer)

    def peek(self) -> Optional[str]:
        if not self._fill():
            return None
        return self._buffer[self._position]

    def next(self) -> Optional[str]:
        if not self._fill():
            return None
        char = self._buffer[self._position]
        self._position += 1
        self.offset += 1
        return char


class Tokenizer:
    """Splits a Newick character stream into tokens, one token of push-back."""

    def __init__(self, reader: IO[str]):
        self._chars = _CharStream(reader)
        self._pushed: Optional[Token] = None

    def push_back(self, token: Token) -> None:
        self._pushed = token

    def next(self) -> Token:
        if self._pushed is not None:
            token, self._pushed = self._pushed, None
            return token

        chars = self._chars
        while True:
            char = chars.peek()
            if char is None:
                return Token("end", "", chars.offset)
            if char.isspace():
                chars.next()
            elif char == "[":
                self._skip_comment()
            else:
                break

        offset = chars.offset
        if char in "(),:;":
            chars.next()
            return Token(char, char, offset)
        if char == "'":
            return self._read_quoted_label()
        if char == "]":
            InvalidTreeError.raise_unexpected(char, offset)
        return self._read_unquoted_label()

    def _skip_comment(self) -> None:
        chars = self._chars
        chars.next()  # '['
        while True:
            char = chars.next()
            if char is None:
                raise InvalidTreeError(
                    InvalidTreeKind.TRUNCATED, chars.offset, "unterminated comment"
                )
            if char == "]":
                return

    def _read_quoted_label(self) -> Token:
        chars = self._chars
        start = chars.offset
        chars.next()  # opening quote
        buffer: List[str] = []
        while True:
            char = chars.next()
            if char is None:
                raise InvalidTreeError(
                    InvalidTreeKind.UNTERMINATED_QUOTED_LABEL, start
                )
            if char == "'":
                # A doubled quote stands for a literal quote
                if chars.peek() == "'":
                    chars.next()
                    buffer.append("'")
                    continue
                return Token("label", "".join(buffer), start, quoted=True)
            buffer.append(char)

    def _read_unquoted_label(self) -> Token:
        chars = self._chars
        start = chars.offset
        buffer: List[str] = []
        while True:
            char = chars.peek()
            if char is None or char in LABEL_DELIMITERS or char.isspace():
                return Token("label", "".join(buffer), start)
            buffer.append(char)
            chars.next()

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next()
            yield token
            if token.kind == "end":
                return


# ===================================================================
# 2. PARSER
# ===================================================================


def parse_length(token: Token) -> float:
    """Convert the token following ``:`` into a non-negative, finite length."""
    if token.kind == "end":
        raise InvalidTreeError(InvalidTreeKind.TRUNCATED, token.offset)
    if (
        token.kind != "label"
        or token.quoted
        or not _NUMBER_PATTERN.fullmatch(token.value)
    ):
        raise InvalidTreeError(
            InvalidTreeKind.NON_NUMERIC_LENGTH, token.offset, repr(token.value)
        )
    value = float(token.value)
    if not math.isfinite(value):
        raise InvalidTreeError(
            InvalidTreeKind.NON_NUMERIC_LENGTH, token.offset, repr(token.value)
        )
    if value < 0:
        raise InvalidTreeError(
            InvalidTreeKind.NEGATIVE_LENGTH, token.offset, token.value
        )
    return value


class NewickReader:
    """
    Reads a single Newick tree from a character source.

    The reader owns ``reader`` for the duration of :meth:`read_tree` and
    closes it on every exit path.
    """

    def __init__(self, reader: IO[str]):
        self.reader = reader
        self.tokens = Tokenizer(reader)

    def read_tree(self) -> Node:
        """
        Parse the input and return the root node.

        Raises:
            InvalidTreeError: On any syntax error or if the root has fewer
                than two children. No partial tree is returned.
        """
        try:
            root = self._parse()
        finally:
            self.reader.close()

        if len(root.children) < 2:
            raise InvalidTreeError(InvalidTreeKind.NOT_ENOUGH_LEAVES)
        return root

    def _parse(self) -> Node:
        tokens = self.tokens
        stack: List[Node] = []
        root: Optional[Node] = None
        expect_subtree = True
        node_count = 0

        while True:
            token = tokens.next()

            if expect_subtree:
                if token.kind == "end":
                    raise InvalidTreeError(InvalidTreeKind.TRUNCATED, token.offset)
                node = Node()
                node_count += 1
                if stack:
                    stack[-1].add_child(node)
                else:
                    root = node
                if token.kind == "(":
                    stack.append(node)
                    continue
                # Anything else starts a leaf, possibly with an empty label
                self._read_label_and_length(node, token)
                expect_subtree = False
                continue

            if token.kind == ",":
                if not stack:
                    InvalidTreeError.raise_unexpected(token.value, token.offset)
                expect_subtree = True
            elif token.kind == ")":
                if not stack:
                    InvalidTreeError.raise_unexpected(token.value, token.offset)
                node = stack.pop()
                if len(node.children) < 2 and stack:
                    raise InvalidTreeError(
                        InvalidTreeKind.NOT_ENOUGH_LEAVES,
                        token.offset,
                        "a clade needs at least two children",
                    )
                self._read_label_and_length(node, tokens.next())
            elif token.kind == ";":
                if stack:
                    InvalidTreeError.raise_unexpected(token.value, token.offset)
                trailing = tokens.next()
                if trailing.kind != "end":
                    InvalidTreeError.raise_unexpected(
                        trailing.value[:1], trailing.offset
                    )
                break
            elif token.kind == "end":
                raise InvalidTreeError(InvalidTreeKind.TRUNCATED, token.offset)
            else:
                InvalidTreeError.raise_unexpected(token.value[:1], token.offset)

        if root is None:
            raise InvalidTreeError(InvalidTreeKind.TRUNCATED, token.offset)
        # The root has no parent edge; a length written on it is dropped
        root.distance = 0.0
        logger.debug("Parsed Newick tree with %d nodes", node_count)
        return root

    def _read_label_and_length(self, node: Node, token: Token) -> None:
        tokens = self.tokens
        if token.kind == "label":
            node.name = token.value
            token = tokens.next()
        if token.kind == ":":
            node.distance = parse_length(tokens.next())
            token = tokens.next()
        tokens.push_back(token)


# ===================================================================
# 3. PUBLIC API FUNCTIONS
# ===================================================================


def parse_newick(text: str) -> Node:
    """
    Parse a Newick string and return its root node.

    Args:
        text: Newick formatted tree, terminated by ``;``.

    Returns:
        The root Node of the parsed tree.

    Raises:
        InvalidTreeError: If the text is not a valid tree.
    """
    return NewickReader(io.StringIO(text)).read_tree()
