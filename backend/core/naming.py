"""Identifier naming — snake_case catalog names to PascalCase / camelCase."""
from typing import Optional


def _is_mixed_case(segment: str) -> bool:
    return any(c.isupper() for c in segment) and any(c.islower() for c in segment)


def _capitalize(segment: str) -> str:
    # Already camel-cased text keeps its inner humps: UserAccount stays UserAccount.
    tail = segment[1:] if _is_mixed_case(segment) else segment[1:].lower()
    return segment[:1].upper() + tail


def transform_identifier(value: Optional[str], capitalize_first: bool) -> Optional[str]:
    """
    Convert a catalog name to an identifier.

    user_account → UserAccount (capitalize_first) / userAccount (otherwise).
    None and "" are returned unchanged.

    Re-applying the capitalized transform is a no-op except when every segment
    is a single letter: a_b gives AB, which reads as one all-caps word and
    becomes Ab on a second pass.
    """
    if not value:
        return value

    parts = value.split("_")
    out = []
    for i, part in enumerate(parts):
        if i == 0 and not capitalize_first:
            out.append(part.lower())
        else:
            out.append(_capitalize(part))
    return "".join(out)
