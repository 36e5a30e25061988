"""Character-by-character tokenizer for dice expressions.

Grammar::

    expression := [sign] term ((sign | whitespace) term)*
    sign       := '+' | '-'
    term       := digits | digits 'd' digits

Whitespace may sit between a sign and its term. Whitespace alone between
two terms separates them, and the second term is positive.
"""

from __future__ import annotations

from rollctl.domain.errors import MalformedExpression
from rollctl.domain.terms import Constant, DiceThrow, Expression, Term

DICE_DELIMITER = "d"
SIGNS = frozenset("+-")
DIGITS = frozenset("0123456789")


class _Scanner:
    """Cursor over the input with one-character lookahead."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def skip_spaces(self) -> bool:
        start = self.pos
        while self.peek().isspace():
            self.pos += 1
        return self.pos > start

    def digits(self) -> str:
        start = self.pos
        while self.peek() in DIGITS:
            self.pos += 1
        return self.text[start : self.pos]

    def error(self, message: str) -> MalformedExpression:
        found = repr(self.peek()) if not self.at_end() else "end of input"
        return MalformedExpression(
            f"{message} at column {self.pos + 1}, found {found}.",
            column=self.pos,
        )


def _to_int(digits: str, column: int) -> int:
    try:
        return int(digits)
    except ValueError:
        # CPython caps str -> int conversion at sys.get_int_max_str_digits()
        raise MalformedExpression(
            f"Number too long in term at column {column + 1} ({len(digits)} digits).",
            column=column,
        ) from None


def _read_term(scanner: _Scanner, *, negative: bool) -> Term:
    column = scanner.pos
    count = scanner.digits()
    if not count:
        if scanner.peek() == DICE_DELIMITER:
            raise scanner.error("Expected a dice count before 'd'")
        raise scanner.error("Expected a number or dice term")

    if scanner.peek() != DICE_DELIMITER:
        value = _to_int(count, column)
        return Constant(-value if negative else value, column=column)

    scanner.pos += 1
    sides = scanner.digits()
    if not sides:
        raise scanner.error("Expected the number of sides after 'd'")
    return DiceThrow(
        _to_int(count, column), _to_int(sides, column), negative=negative, column=column
    )


def parse(text: str) -> Expression:
    """Parse *text* into an :class:`Expression`.

    Raises:
        MalformedExpression: If *text* does not match the grammar. The
            error carries the zero-based column of the offending character.
    """
    scanner = _Scanner(text)
    terms: list[Term] = []

    scanner.skip_spaces()
    if scanner.at_end():
        raise scanner.error("Expected a dice expression")

    while True:
        negative = False
        if scanner.peek() in SIGNS:
            negative = scanner.peek() == "-"
            scanner.pos += 1
            scanner.skip_spaces()
        terms.append(_read_term(scanner, negative=negative))

        separated = scanner.skip_spaces()
        if scanner.at_end():
            break
        if scanner.peek() in SIGNS:
            continue
        if not separated:
            raise scanner.error("Expected '+', '-' or a space between terms")

    return Expression(tuple(terms))


def tokenize(text: str) -> tuple[list[str], list[str]]:
    """Split *text* into ``(constant tokens, dice-term tokens)``.

    Tokens keep a leading ``-`` and drop whitespace and a leading ``+``.

    Examples:
        >>> tokenize("3d20 + 5 - 1d4")
        (['5'], ['3d20', '-1d4'])
        >>> tokenize("-2 + 1d6 1d8")
        (['-2'], ['1d6', '1d8'])
    """
    expression = parse(text)
    constants = [t.notation for t in expression.constants]
    dice = [t.notation for t in expression.dice]
    return constants, dice
