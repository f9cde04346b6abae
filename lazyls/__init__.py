"""Public package surface for lazyls.

Exports ``main`` for programmatic CLI invocation.
The formatting core lives in ``lazyls.listing``, ``lazyls.sorting``,
``lazyls.colors`` and ``lazyls.layout``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
