"""
Display formatting shared by the UI.

Streamlit renders titles, captions, alerts and markdown blocks as
Markdown, so user-entered text must be escaped before it is shown there.
A bare "$" also starts inline LaTeX, which affects money amounts.
"""

import re


_MARKDOWN_SPECIALS = re.compile(r"([\\`*_{}\[\]()#+\-.!|<>~$])")


def escape_markdown(text: str) -> str:
    """Backslash-escape every character Markdown (or LaTeX) would interpret."""
    return _MARKDOWN_SPECIALS.sub(r"\\\1", text)


def format_money(value: float, symbol: str = "$") -> str:
    """
    Format an amount to cents with thousands separators.

    Rounding here hides float noise in summed amounts.

    Example:
        format_money(1234.5) -> "$1,234.50"
        format_money(-100) -> "-$100.00"
    """
    sign = "-" if round(value, 2) < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"
