# topmark:header:start
#
#   project      : Polyrun
#   file         : strategies_polyrun.py
#   file_relpath : tests/strategies_polyrun.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for editor sources and runtime output.

The generated text stays within the default source length limit and avoids
surrogate code points, which cannot be encoded as UTF-8.
"""

from __future__ import annotations

from hypothesis import strategies as st

BLACKLIST_CATEGORIES: tuple[str, ...] = ("Cs",)

PADDING: tuple[str, ...] = ("", " ", "\n", "\t", "\r\n", "  \n\n")


def s_text(*, max_size: int = 200, newlines: bool = True) -> st.SearchStrategy[str]:
    """Arbitrary printable-ish text, optionally without newline characters."""
    return st.text(
        alphabet=st.characters(
            blacklist_categories=BLACKLIST_CATEGORIES,
            blacklist_characters=() if newlines else ("\n",),
        ),
        max_size=max_size,
    )


@st.composite
def s_padded_source(draw: st.DrawFn) -> str:
    """A source body wrapped in leading and trailing whitespace."""
    body: str = draw(s_text())
    return draw(st.sampled_from(PADDING)) + body + draw(st.sampled_from(PADDING))


def s_output_lines() -> st.SearchStrategy[list[str]]:
    """Lines a program could print; each line holds at least one visible character."""
    return st.lists(
        s_text(max_size=40, newlines=False).filter(lambda line: line.strip() != ""),
        max_size=12,
    )
