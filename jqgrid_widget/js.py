"""JSON encoding for configuration that ends up inside a <script> element.

Values wrapped in :class:`JsExpression` are written out as raw JavaScript, so
callbacks and references to client-side globals can be mixed into otherwise
plain settings dicts.
"""

import json
import re
import uuid

from django.core.serializers.json import DjangoJSONEncoder

from jqgrid_widget.conf import get_setting

NUMERIC_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

# Same escapes django.utils.html.json_script applies
SCRIPT_SAFE_ESCAPES = {
    ord(">"): "\\u003E",
    ord("<"): "\\u003C",
    ord("&"): "\\u0026",
}


class JsExpression:
    """A snippet of JavaScript that is embedded unquoted when encoded."""

    def __init__(self, expression: str):
        self.expression = expression

    def __str__(self):
        return self.expression

    def __repr__(self):
        return f"JsExpression({self.expression!r})"

    def __eq__(self, other):
        return isinstance(other, JsExpression) and other.expression == self.expression

    def __hash__(self):
        return hash(self.expression)


def to_number(value: str):
    """Convert a numeric looking string to an int or float, otherwise return it unchanged."""
    if not NUMERIC_RE.fullmatch(value):
        return value
    if "." in value or "e" in value.lower():
        number = float(value)
        # inf/nan are not valid JSON
        if number in (float("inf"), float("-inf")):
            return value
        return number
    return int(value)


def _prepare(value, expressions, token, numeric_check):
    if isinstance(value, JsExpression):
        placeholder = f"{token}{len(expressions)}"
        expressions[placeholder] = value.expression
        return placeholder
    if isinstance(value, dict):
        return {key: _prepare(item, expressions, token, numeric_check) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_prepare(item, expressions, token, numeric_check) for item in value]
    if isinstance(value, str) and numeric_check:
        return to_number(value)
    return value


def encode(value, pretty=None, numeric_check=None) -> str:
    """Encode ``value`` as JSON suitable for embedding in a script.

    Slashes and non-ASCII characters are left as they are, while ``<``, ``>``
    and ``&`` inside strings are escaped so the output can not close the
    surrounding script element. With ``numeric_check`` on, strings holding a
    number are written as numbers.
    """
    if pretty is None:
        pretty = get_setting("PRETTY_JSON")
    if numeric_check is None:
        numeric_check = get_setting("NUMERIC_CHECK")

    expressions = {}
    token = f"__jqgrid_js_{uuid.uuid4().hex}_"
    prepared = _prepare(value, expressions, token, numeric_check)

    if pretty:
        encoded = json.dumps(prepared, cls=DjangoJSONEncoder, ensure_ascii=False, indent=4)
    else:
        encoded = json.dumps(prepared, cls=DjangoJSONEncoder, ensure_ascii=False, separators=(",", ":"))
    encoded = encoded.translate(SCRIPT_SAFE_ESCAPES)

    for placeholder, expression in expressions.items():
        encoded = encoded.replace(f'"{placeholder}"', expression)
    return encoded
