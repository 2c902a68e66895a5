"""Hypothesis strategies for authoring markup, structured messages and plural rules.

Markup strategies only generate well-formed input: literal text never contains
a reserved character, and text following a block starts with a space so a
closing ``$`` is never read as the start of a nested ``$name$``.
"""

from __future__ import annotations

import string

from hypothesis import strategies as st
from hypothesis.strategies import composite

from plurimark.plural import OPERANDS, AndChain, OrExpr, Range, Relation

# Characters with syntactic meaning in markup or structured messages
RESERVED_CHARACTERS = "$|#~{}=<>"

IDENTIFIER_FIRST = string.ascii_lowercase
IDENTIFIER_REST = string.ascii_lowercase + string.digits + "_"


@composite
def identifiers(draw: st.DrawFn) -> str:
    """Generate variable names: a lowercase letter, then letters, digits or '_'."""
    first = draw(st.sampled_from(IDENTIFIER_FIRST))
    rest = draw(st.text(alphabet=IDENTIFIER_REST, max_size=8))
    return first + rest


def plain_text(min_size: int = 0, max_size: int = 20) -> st.SearchStrategy[str]:
    """Literal text without reserved characters."""
    return st.text(
        alphabet=st.characters(
            categories=("L", "N", "P", "Zs"),
            exclude_characters=RESERVED_CHARACTERS,
        ),
        min_size=min_size,
        max_size=max_size,
    )


@composite
def markup_variables(draw: st.DrawFn) -> str:
    """Generate a simple variable block: $name$"""
    return f"${draw(identifiers())}$"


@composite
def plural_blocks(draw: st.DrawFn) -> str:
    """Generate a well-formed plural block, optionally hidden or with a zero form."""
    name = draw(identifiers())
    hidden = draw(st.booleans())
    zero_form = draw(st.booleans())

    declaration = f"#{'~' if hidden else ''}{name}{'=0' if zero_form else ''}#"
    forms: list[str] = []
    for index in range(3 if zero_form else 2):
        reference = declaration if index == 0 else f"#{name}#"
        body = draw(plain_text(max_size=10))
        if draw(st.booleans()):
            body += f" ${draw(identifiers())}$"
        forms.append(reference + body)
    return "$" + "|".join(forms) + "$"


@composite
def markup_messages(draw: st.DrawFn) -> str:
    """Generate non-empty markup mixing text, variables and plural blocks."""
    block_count = draw(st.integers(min_value=0, max_value=3))
    if block_count == 0:
        return draw(plain_text(min_size=1))

    parts = [draw(plain_text())]
    for _ in range(block_count):
        parts.append(draw(st.one_of(markup_variables(), plural_blocks())))
        parts.append(" " + draw(plain_text(max_size=10)))
    return "".join(parts)


# =============================================================================
# PLURAL RULES
# =============================================================================


@composite
def ranges(draw: st.DrawFn) -> Range:
    """Generate a single value or an inclusive range."""
    low = draw(st.integers(min_value=0, max_value=120))
    if draw(st.booleans()):
        return Range(low)
    return Range(low, low + draw(st.integers(min_value=0, max_value=30)))


@composite
def relations(draw: st.DrawFn) -> Relation:
    """Generate a relation over any CLDR operand."""
    return Relation(
        operand=draw(st.sampled_from(sorted(OPERANDS))),
        ranges=tuple(draw(st.lists(ranges(), min_size=1, max_size=3))),
        modulus=draw(st.one_of(st.none(), st.sampled_from([10, 100, 1000]))),
        negated=draw(st.booleans()),
    )


@composite
def rules(draw: st.DrawFn) -> OrExpr:
    """Generate a rule: 1-3 OR-branches of 1-3 relations each."""
    branches = draw(
        st.lists(
            st.lists(relations(), min_size=1, max_size=3).map(
                lambda items: AndChain(tuple(items))
            ),
            min_size=1,
            max_size=3,
        )
    )
    return OrExpr(tuple(branches))


counts = st.integers(min_value=0, max_value=1_000_000)
