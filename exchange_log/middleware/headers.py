"""Header snapshots for HTTP exchange log records."""

from typing import Dict, Iterable, Tuple, Union

from starlette.datastructures import Headers

HeaderValue = Union[str, bytes]
RawHeaders = Iterable[Tuple[HeaderValue, HeaderValue]]


def keep_first(existing: str, _replacement: str) -> str:
    """Merge rule for repeated header names."""
    return existing


def _decode(value: HeaderValue) -> str:
    # Starlette decodes header bytes as latin-1
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return value


def header_snapshot(headers: Union[Headers, RawHeaders]) -> Dict[str, str]:
    """
    Flatten headers into an independently owned name -> value mapping.

    Names are kept exactly as reported. When a name occurs more than once,
    the first value wins.

    Args:
        headers: Starlette ``Headers`` view or raw ``(name, value)`` pairs

    Returns:
        New dict, unaffected by later changes to ``headers``
    """
    if isinstance(headers, Headers):
        headers = headers.raw

    snapshot: Dict[str, str] = {}
    for raw_name, raw_value in headers:
        name = _decode(raw_name)
        value = _decode(raw_value)
        if name in snapshot:
            snapshot[name] = keep_first(snapshot[name], value)
        else:
            snapshot[name] = value
    return snapshot
