"""
URL reconstruction from Field Records and exclusion templates.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Callable, Optional, Union
from urllib.parse import quote_plus

from url_fields.exceptions import InvalidInput

from .fields import CANONICAL_ORDER, SIMPLE, Field, FieldRecord

# How each field contributes to the output; host/user/pass contribute nothing
_RENDERERS: dict[Field, Callable[[str], str]] = {
    Field.HOST: lambda value: "",
    Field.SCHEME: lambda value: f"{value}://",
    Field.USER: lambda value: "",
    Field.PASS: lambda value: "",
    Field.SUBDOMAIN: lambda value: f"{value}.",
    Field.DOMAIN: lambda value: value,
    Field.PORT: lambda value: f":{value}",
    Field.PATH: lambda value: value,
    Field.QUERY: lambda value: f"?{value}",
    Field.FRAGMENT: lambda value: f"#{value}",
}

if set(_RENDERERS) != set(Field) or set(CANONICAL_ORDER) != set(Field):
    raise RuntimeError("Every URL field needs a renderer and a canonical position")


def _as_text(value: Any) -> str:
    """
    Render a field value.

    Flattened queries hold raw keys and decoded values, so only the
    values are encoded again.
    """
    if isinstance(value, Mapping):
        return "&".join(f"{key}={quote_plus(str(item))}" for key, item in value.items())
    return str(value)


def join(
    fields: Union[FieldRecord, Mapping[str, Any]],
    exclude: Optional[Iterable[Union[Field, str]]] = None,
    remove_www_subdomain: bool = True,
) -> str:
    """
    Rebuild a URL string from a Field Record.

    With no exclusions the result is
    {scheme}://{subdomain}.{domain}:{port}{path}?{query}#{fragment},
    leaving out absent pieces with their separators.

    Args:
        fields: FieldRecord, or a mapping keyed by field identifier
        exclude: Fields to leave out (defaults to the SIMPLE template)
        remove_www_subdomain: Also leave out a subdomain that is exactly 'www'

    Returns:
        Reconstructed URL string

    Raises:
        InvalidInput: If fields is not a record or mapping, or exclude
            names an unknown field
    """
    if isinstance(fields, Mapping):
        fields = FieldRecord.from_mapping(fields)
    elif not isinstance(fields, FieldRecord):
        raise InvalidInput(f"Cannot join URL from {type(fields).__name__}")

    if exclude is None:
        exclude = SIMPLE
    excluded = {Field.coerce(f) for f in exclude}

    if remove_www_subdomain and fields.subdomain == "www":
        excluded.add(Field.SUBDOMAIN)

    url = ""
    for field_id in CANONICAL_ORDER:
        if field_id in excluded:
            continue

        value = fields.get(field_id)
        if value is None or value == "" or (isinstance(value, Mapping) and not value):
            continue

        url += _RENDERERS[field_id](_as_text(value))

    return url
