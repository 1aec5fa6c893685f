"""Share link construction for a composed concept."""

from __future__ import annotations

from urllib.parse import quote

DEFAULT_SUBJECT = "Concept"


def _encode(text: str) -> str:
    # Match encodeURIComponent: only unreserved marks stay literal.
    return quote(text, safe="-_.!~*'()")


def mailto_url(body: str, subject: str = DEFAULT_SUBJECT) -> str:
    """``mailto:`` link; line breaks become CRLF as mail clients expect."""
    encoded = _encode(body).replace("%0A", "%0D%0A")
    return f"mailto:?subject={_encode(subject)}&body={encoded}"


def sms_url(body: str, ios: bool = False) -> str:
    """``sms:`` link; iOS wants ``&`` instead of ``?`` before the body."""
    separator = "&" if ios else "?"
    return f"sms:{separator}body={_encode(body)}"
