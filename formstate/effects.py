"""Effect descriptions returned by the transition function.

An effect is inert data describing work for the caller to do: persist an
object, fetch one, log something. ``transition`` only ever *returns* effects;
running them is the job of an executor such as ``formstate.runtime.run_effect``
or one supplied by the caller.

Callers are free to define their own Effect subclasses (an HTTP request
description, say) and run them with a custom executor.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple


class Effect:
    """Base class for all effect descriptions."""


@dataclass(frozen=True)
class NoEffect(Effect):
    """The empty effect. Running it does nothing."""


NONE = NoEffect()
"""Shared instance returned by every transition that requests no work."""


@dataclass(frozen=True)
class Callback(Effect):
    """Run a zero-argument callable and treat its result as the completion.

    The callable returns the event to dispatch next (e.g. ``Display`` with
    the object echoed by a server) or ``None`` when there is nothing to
    report.

    Attributes:
        run: The callable to invoke
        description: Optional label used in logs

    Examples:
        >>> from formstate.events import Display
        >>> effect = Callback(lambda: Display({"id": 1}), description="save")
        >>> effect.run()
        Display(object={'id': 1})
    """
    run: Callable[[], Any]
    description: Optional[str] = None


@dataclass(frozen=True)
class Batch(Effect):
    """Several effects to run in order.

    Attributes:
        effects: The member effects
    """
    effects: Tuple[Effect, ...] = ()

    def __post_init__(self):
        if not isinstance(self.effects, tuple):
            object.__setattr__(self, "effects", tuple(self.effects))


def is_none(effect: Effect) -> bool:
    """Check whether an effect requests no work at all.

    Examples:
        >>> is_none(NONE)
        True
        >>> is_none(Batch((NONE, NONE)))
        True
    """
    if isinstance(effect, NoEffect):
        return True
    if isinstance(effect, Batch):
        return all(is_none(e) for e in effect.effects)
    return False


def flatten(effect: Effect) -> Tuple[Effect, ...]:
    """Expand nested batches into the ordered leaf effects, dropping empty ones.

    Examples:
        >>> first, second = Callback(lambda: 1), Callback(lambda: 2)
        >>> flatten(Batch((first, Batch((NONE, second))))) == (first, second)
        True
        >>> flatten(NONE)
        ()
    """
    if isinstance(effect, Batch):
        return tuple(leaf for member in effect.effects for leaf in flatten(member))
    if isinstance(effect, NoEffect):
        return ()
    return (effect,)


def batch(*effects: Effect) -> Effect:
    """Combine effects, flattening nested batches and dropping empty ones.

    Returns NONE when nothing remains and the sole member when only one does.

    Examples:
        >>> batch(NONE, NONE) is NONE
        True
        >>> cb = Callback(lambda: None)
        >>> batch(NONE, cb) is cb
        True
    """
    remaining = tuple(leaf for e in effects for leaf in flatten(e))
    if not remaining:
        return NONE
    if len(remaining) == 1:
        return remaining[0]
    return Batch(remaining)


__all__ = [
    "Effect",
    "NoEffect",
    "NONE",
    "Callback",
    "Batch",
    "is_none",
    "flatten",
    "batch",
]
