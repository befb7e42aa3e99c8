"""Split raw argv into short-flag, long-flag and positional tokens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

SHORT = 'short'
LONG = 'long'
POSITIONAL = 'positional'


@dataclass(frozen=True)
class ArgToken:
    kind: str
    name: str
    value: Optional[str] = None


def tokenize(argv: Sequence[str]) -> list[ArgToken]:
    """
    Classify each argv item without interpreting it.

    ``--name=value`` splits on the first ``=`` only, so values may contain
    ``=``. ``--name`` has no value (``None``), which is distinct from an
    empty value given as ``--name=``. Anything after a single ``-`` is a
    short flag name; a lone ``-`` is positional.
    """
    tokens: list[ArgToken] = []
    for item in argv:
        if item.startswith('--'):
            name, sep, value = item[2:].partition('=')
            tokens.append(ArgToken(LONG, name, value if sep else None))
        elif item.startswith('-') and len(item) > 1:
            tokens.append(ArgToken(SHORT, item[1:]))
        else:
            tokens.append(ArgToken(POSITIONAL, item))
    return tokens
