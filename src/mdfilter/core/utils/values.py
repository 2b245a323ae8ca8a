"""String forms of frontmatter values for equals/contains comparisons"""

from datetime import date, datetime
from typing import Any


def js_string(value: Any) -> str:
    """Render a YAML scalar or array the way note frontmatter is displayed.

    Booleans are 'true'/'false', null is 'null', lists are comma-joined,
    integral floats drop the fractional part and dates use ISO format.
    """
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ','.join('' if v is None else js_string(v) for v in value)
    return str(value)
