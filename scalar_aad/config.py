"""
Engine Configuration

Shared settings for the backward engine, with a context manager to
override them for a block of code (mirrors `use_tape`).
"""

from contextlib import contextmanager
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class EngineConfig:
    """
    Settings read by `backward` on every call.

    Attributes:
        seed: Adjoint planted at the output(s), d(output)/d(output)
        skip_zero_adjoints: Skip the local rule of nodes whose adjoint in the
            current pass is exactly zero. Faster on sparse graphs, but a
            zero adjoint times an infinite partial is then dropped instead of
            becoming nan.
    """
    seed: float = 1.0
    skip_zero_adjoints: bool = False


_active = EngineConfig()


def get_config() -> EngineConfig:
    """Return the active engine configuration."""
    return _active


@contextmanager
def use_config(**overrides):
    """
    Temporarily replace fields of the active configuration:
        with use_config(skip_zero_adjoints=True):
            backward(y)
    """
    global _active
    prev = _active
    try:
        _active = replace(prev, **overrides)
        yield _active
    finally:
        _active = prev
