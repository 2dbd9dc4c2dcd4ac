"""Decoder from WorldWeatherOnline XML payloads to the wwo_types data model.

The decoder walks the dataclass fields of the target report and fills each
one from the element named in its metadata. The text of scalar elements is
converted by a parser chosen from DECODERS using the field's annotation, so
the date and clock-time encodings are handled by the same walk as plain
numbers and strings.

Decoding happens in place. When a payload is malformed, or a value cannot be
converted, the report keeps every field filled before the failure and is
attached to the raised WWODecodeError.
"""

import datetime
import functools
import logging
import re
import types
import typing
from dataclasses import Field, fields, is_dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar
from xml.etree import ElementTree

from wwo_errors import WWODecodeError
from wwo_time import parse_date, parse_time12, parse_time_hmm
from wwo_types import Time12, TimeHMM, UInt

logger = logging.getLogger(__name__)

T = TypeVar("T")

_INT_RE = re.compile(r"[+-]?\d+")
_UINT_RE = re.compile(r"\d+")


def _parse_int(text: str) -> int:
    text = text.strip()
    if not text:
        return 0
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer {text!r}")
    return int(text)


def _parse_uint(text: str) -> int:
    text = text.strip()
    if not text:
        return 0
    if not _UINT_RE.fullmatch(text):
        raise ValueError(f"invalid unsigned integer {text!r}")
    return int(text)


def _parse_float(text: str) -> float:
    text = text.strip()
    return float(text) if text else 0.0


def _parse_str(text: str) -> str:
    return text


# Text parser for each scalar annotation used in wwo_types.
DECODERS: Dict[Any, Callable[[str], Any]] = {
    int: _parse_int,
    UInt: _parse_uint,
    float: _parse_float,
    str: _parse_str,
    datetime.date: parse_date,
    Time12: parse_time12,
    TimeHMM: parse_time_hmm,
}


def celsius_to_fahrenheit(celsius: float) -> int:
    return round(celsius * 9 / 5 + 32)


def fahrenheit_to_celsius(fahrenheit: float) -> int:
    return round((fahrenheit - 32) * 5 / 9)


@functools.lru_cache(maxsize=None)
def _schema(cls: type) -> Tuple[Tuple[Field, Any], ...]:
    """Returns the fields of a dataclass paired with their resolved annotations."""
    hints = typing.get_type_hints(cls)
    return tuple((f, hints[f.name]) for f in fields(cls))


def _element_text(element: ElementTree.Element) -> str:
    """Returns the character data directly inside element, CDATA included."""
    return "".join([element.text or ""] + [child.tail or "" for child in element])


def _optional_arg(hint: Any) -> Optional[Any]:
    """Returns X for Optional[X], or None when hint is not optional."""
    if typing.get_origin(hint) not in (typing.Union, types.UnionType):
        return None
    args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
    return args[0] if len(args) == 1 else None


def _decode_scalar(owner: Any, f: Field, hint: Any, element: ElementTree.Element) -> Any:
    decoder = DECODERS.get(hint)
    if decoder is None:
        raise TypeError(f"{type(owner).__name__}.{f.name}: no decoder for {hint!r}")
    try:
        return decoder(_element_text(element))
    except ValueError as e:
        raise ValueError(f"<{element.tag}> for {type(owner).__name__}.{f.name}: {e}") from e


def _decode_fahrenheit(obj: Any, f: Field, hint: Any, element: ElementTree.Element) -> None:
    """Fills a Fahrenheit field from its Celsius partner, or the reverse.

        The Celsius element wins when present; a payload carrying only the
        Fahrenheit element fills the Celsius partner from it instead.
    """
    celsius_name = f.metadata["celsius"]
    celsius_path = next(cf.metadata["xml"] for cf, _ in _schema(type(obj)) if cf.name == celsius_name)

    if element.find(celsius_path) is not None:
        setattr(obj, f.name, celsius_to_fahrenheit(getattr(obj, celsius_name)))
        return

    child = element.find(f.metadata["xml"])
    if child is not None:
        fahrenheit = _decode_scalar(obj, f, hint, child)
        setattr(obj, f.name, fahrenheit)
        setattr(obj, celsius_name, fahrenheit_to_celsius(fahrenheit))


def decode_into(obj: Any, element: ElementTree.Element) -> None:
    """Fills the dataclass instance obj from element, field by field.

        Fields are assigned as soon as they are decoded, and nested structures
        are attached to obj before being filled, so an exception leaves obj
        holding everything decoded up to that point.

        Args:
            obj: A wwo_types dataclass instance holding zero values.
            element: The payload element corresponding to obj.

        Raises:
            ValueError: If an element's text cannot be converted.
    """
    for f, hint in _schema(type(obj)):
        if f.metadata.get("inline"):
            decode_into(getattr(obj, f.name), element)
            continue

        path = f.metadata.get("xml")
        if path is None:
            continue

        if "celsius" in f.metadata:
            _decode_fahrenheit(obj, f, hint, element)
            continue

        if typing.get_origin(hint) is list:
            item_type = typing.get_args(hint)[0]
            items = getattr(obj, f.name)
            for child in element.findall(path):
                item = item_type()
                items.append(item)
                decode_into(item, child)
            continue

        child = element.find(path)
        if child is None:
            continue

        optional = _optional_arg(hint)
        if optional is not None:
            hint = optional
            if is_dataclass(hint):
                setattr(obj, f.name, hint())

        if is_dataclass(hint):
            decode_into(getattr(obj, f.name), child)
        else:
            setattr(obj, f.name, _decode_scalar(obj, f, hint, child))


def parse_payload(payload: bytes) -> Tuple[Optional[ElementTree.Element], Optional[ElementTree.ParseError]]:
    """Parses payload incrementally, keeping whatever was read before an error.

        Returns:
            A tuple (root, error). root is the document element, possibly
            truncated, or None when no element was read at all. error is the
            syntax error that stopped the parse, or None.
    """
    parser = ElementTree.XMLPullParser(events=("start",))
    root = None
    error = None

    try:
        parser.feed(payload)
        parser.close()
    except ElementTree.ParseError as e:
        error = e

    # Syntax errors raised while feeding are queued behind the events read before them.
    try:
        for _event, element in parser.read_events():
            if root is None:
                root = element
    except ElementTree.ParseError as e:
        error = e

    return root, error


def decode(report_cls: Type[T], payload: bytes) -> T:
    """Decodes a provider payload into a freshly allocated report.

        Args:
            report_cls: One of the report dataclasses from wwo_types.
            payload: The raw XML body returned by the provider.

        Returns:
            The populated report.

        Raises:
            WWODecodeError: If the payload is malformed or a value does not
                match its field. The partially filled report is attached.
    """
    report = report_cls()
    root, error = parse_payload(payload)

    if root is not None:
        try:
            decode_into(report, root)
        except ValueError as e:
            error = error or e

    if error is not None:
        logger.debug("Decoding %s failed: %s", report_cls.__name__, error)
        raise WWODecodeError(error, report) from error

    return report
