"""Trace file reading.

One address per line, either hexadecimal with a 0x/0X prefix or decimal.
Only the leading number of a line is used, so trailing fields such as an
operation column ("0x1000 R") or separators ("4096,") are ignored.
Anything after '#' is a comment; blank lines are ignored. Lines that do
not start with a number are skipped with a warning so one bad entry does
not abort a run.
"""
import io
import re
import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from ..core.errors import MalformedInputError
from ..utils.logging import get_logger

logger = get_logger(__name__)

_HEX = re.compile(r'0[xX]([0-9a-fA-F]+)')
_DEC = re.compile(r'[0-9]+')


def strip_comment(line: str) -> str:
    pos = line.find('#')
    if pos != -1:
        line = line[:pos]
    return line.strip()


def parse_address(token: str, lineno: int = 0, address_bits: Optional[int] = None) -> int:
    """Turn the leading number of a trace token into an unsigned address."""
    if token[:2] in ('0x', '0X'):
        m = _HEX.match(token)
        if m is None:
            raise MalformedInputError(token, lineno)
        value = int(m.group(1), 16)
    else:
        m = _DEC.match(token)
        if m is None:
            if token.startswith('-') and _DEC.match(token, 1):
                raise MalformedInputError(token, lineno, reason="negative address")
            raise MalformedInputError(token, lineno)
        value = int(m.group(0), 10)
    if address_bits is not None and value >> address_bits:
        raise MalformedInputError(token, lineno, reason=f"address wider than {address_bits} bits")
    return value


def iter_addresses(lines: Iterable[str], address_bits: Optional[int] = None) -> Iterator[int]:
    for lineno, raw in enumerate(lines, start=1):
        token = strip_comment(raw)
        if not token:
            continue
        try:
            yield parse_address(token, lineno, address_bits)
        except MalformedInputError as e:
            logger.warning("skipping %s", e)


def open_stdin() -> Iterable[str]:
    buffer = getattr(sys.stdin, 'buffer', None)
    if buffer is None:
        return sys.stdin
    return io.TextIOWrapper(buffer, encoding='utf-8', errors='replace')


def read_trace(source: Union[str, Path, Iterable[str]], address_bits: Optional[int] = None) -> Iterator[int]:
    """Yield addresses from a trace file path or from an iterable of lines.

    Undecodable bytes are replaced, so they end up in comments or in
    lines that are skipped instead of aborting the read.
    """
    if isinstance(source, (str, Path)):
        with open(source, 'r', encoding='utf-8', errors='replace') as fh:
            yield from iter_addresses(fh, address_bits)
    else:
        yield from iter_addresses(source, address_bits)
