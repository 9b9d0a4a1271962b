"""FormRuntime: a reference driver for the form state machine.

The transition function is pure; something still has to hold the current
state, apply events one at a time, run the returned effects and feed their
completions back in. FormRuntime does exactly that for a single form
instance:

- Keeps the one authoritative FormState
- Serializes dispatch through a queue, so events raised while an effect or
  listener runs are applied after the current one, never against a stale state
- Executes effects with a pluggable executor (``run_effect`` by default)
- Turns executor exceptions into Fail events
- Records every transition and notifies subscribed listeners

Usage:
    >>> from formstate.effects import Callback
    >>> from formstate.events import Create, Edit, Save
    >>> from formstate.state_machine import FormConfig
    >>> from formstate.validation import FunctionValidator
    >>> saved = []
    >>> config = FormConfig(
    ...     default={"name": "Ada"},
    ...     update=lambda obj, field: dict(obj, **{field: obj[field].upper()}),
    ...     validator=FunctionValidator(lambda obj: []),
    ...     save=lambda valid: Callback(lambda: saved.append(valid.value)),
    ... )
    >>> runtime = FormRuntime(config)
    >>> runtime.dispatch(Create())
    Displaying(object={'name': 'Ada'})
    >>> runtime.dispatch(Edit("name"))
    Editing(object={'name': 'ADA'}, errors=())
    >>> runtime.dispatch(Save())
    Editing(object={'name': 'ADA'}, errors=())
    >>> saved
    [{'name': 'ADA'}]
"""

from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Deque, Dict, List, Optional
import logging
import threading

from formstate.effects import Callback, Effect, NoEffect, flatten
from formstate.errors import UnsupportedEffectError
from formstate.events import Fail, FormEvent, describe
from formstate.state_machine import FormConfig, transition
from formstate.types import FormState, StateKind, Unloaded

logger = logging.getLogger(__name__)

Executor = Callable[[Effect], Optional[FormEvent]]
"""Runs an effect and returns its completion event, if any."""


@dataclass(frozen=True)
class Transition:
    """Record of one applied event.

    Attributes:
        previous: State before the event
        event: The event applied
        state: State after the event
        effect: Effect returned alongside the new state
        ts: UTC timestamp when the transition was applied
    """
    previous: FormState
    event: FormEvent
    state: FormState
    effect: Effect
    ts: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Summarize the transition for logs and debugging output."""
        return {
            "from": describe(self.previous),
            "event": describe(self.event),
            "to": describe(self.state),
            "effect": type(self.effect).__name__,
            "ts": self.ts.isoformat(),
        }


TransitionListener = Callable[[Transition], None]
"""Type alias for transition listener callbacks.

Listeners are called synchronously after the state is stored and before the
effect runs. Exceptions they raise are logged and do not reach the caller.
"""


class TransitionEmitter:
    """Dispatches Transition records to subscribed listeners.

    Features:
    - Kind-specific subscriptions (called when the *new* state has that kind)
    - Wildcard subscriptions (called for every transition)
    - Synchronous dispatch in registration order
    - Error isolation (a failing listener does not affect the others)
    """

    def __init__(self):
        self._listeners: Dict[StateKind, List[TransitionListener]] = {}
        self._any_listeners: List[TransitionListener] = []

    def on(self, kind: StateKind, listener: TransitionListener) -> None:
        """Subscribe to transitions that land in a specific state kind."""
        self._listeners.setdefault(kind, []).append(listener)

    def on_any(self, listener: TransitionListener) -> None:
        """Subscribe to every transition."""
        self._any_listeners.append(listener)

    def off(self, kind: StateKind, listener: TransitionListener) -> None:
        if listener in self._listeners.get(kind, []):
            self._listeners[kind].remove(listener)

    def off_any(self, listener: TransitionListener) -> None:
        if listener in self._any_listeners:
            self._any_listeners.remove(listener)

    def emit(self, record: Transition) -> None:
        """Call kind-specific listeners, then wildcard listeners."""
        listeners = list(self._listeners.get(record.state.kind, [])) + list(self._any_listeners)
        for listener in listeners:
            try:
                listener(record)
            except Exception:
                logger.warning(
                    "Transition listener %r failed for %s",
                    listener,
                    record.to_dict(),
                    exc_info=True,
                )

    def listener_count(self, kind: Optional[StateKind] = None) -> int:
        """Count listeners for one kind, or all listeners (wildcards included)."""
        if kind is not None:
            return len(self._listeners.get(kind, []))
        return len(self._any_listeners) + sum(len(ls) for ls in self._listeners.values())


def run_effect(effect: Effect) -> Optional[FormEvent]:
    """Default executor for the bundled effect types.

    Args:
        effect: The effect to run

    Returns:
        The completion event, or None when there is nothing to dispatch.

    Raises:
        UnsupportedEffectError: If the effect is not a bundled leaf type.
            A Batch has one completion per member, so it is rejected here;
            ``FormRuntime`` flattens batches and runs each leaf separately.
    """
    if isinstance(effect, NoEffect):
        return None
    if isinstance(effect, Callback):
        return effect.run()
    raise UnsupportedEffectError(effect)


class FormRuntime:
    """Drives one form instance through the lifecycle state machine.

    Attributes:
        config: Hooks for this form type

    Examples:
        >>> from formstate.events import Request
        >>> from formstate.state_machine import FormConfig
        >>> from formstate.validation import FunctionValidator
        >>> config = FormConfig(
        ...     default={},
        ...     update=lambda obj, field: obj,
        ...     validator=FunctionValidator(lambda obj: []),
        ...     save=lambda valid: NoEffect(),
        ... )
        >>> runtime = FormRuntime(config)
        >>> runtime.dispatch(Request())
        Loading()
        >>> len(runtime.history())
        1
    """

    def __init__(
        self,
        config: FormConfig,
        state: Optional[FormState] = None,
        executor: Executor = run_effect,
    ):
        """Initialize the runtime.

        Args:
            config: Hooks for this form type
            state: Starting state, Unloaded when omitted
            executor: Callable that runs effects and returns completion events
        """
        self.config = config
        self._state: FormState = state if state is not None else Unloaded()
        self._executor = executor
        self._queue: Deque[FormEvent] = deque()
        self._lock = threading.RLock()
        self._draining = False
        self._history: List[Transition] = []
        self.emitter = TransitionEmitter()

    @property
    def state(self) -> FormState:
        """The current authoritative state."""
        return self._state

    def dispatch(self, event: FormEvent) -> FormState:
        """Apply an event and everything it triggers.

        When called from inside an effect or listener, the event is queued
        and applied once the current one has finished; the call then returns
        the state as it stands at that moment.

        Args:
            event: The event to apply

        Returns:
            The current state once the queue has been drained
        """
        with self._lock:
            self._queue.append(event)
            if self._draining:
                return self._state
            self._draining = True
            try:
                while self._queue:
                    self._apply(self._queue.popleft())
            except BaseException:
                # Queued completions were computed against a state the failed event never produced
                self._queue.clear()
                raise
            finally:
                self._draining = False
            return self._state

    def _apply(self, event: FormEvent) -> None:
        previous = self._state
        state, effect = transition(self.config, event, previous)
        self._state = state

        record = Transition(
            previous=previous,
            event=event,
            state=state,
            effect=effect,
            ts=datetime.now(timezone.utc),
        )
        self._history.append(record)
        logger.debug("Form transition %s", record.to_dict())
        self.emitter.emit(record)

        for leaf in flatten(effect):
            self._execute(leaf)

    def _execute(self, effect: Effect) -> None:
        try:
            completion = self._executor(effect)
        except Exception as exc:
            logger.exception("Effect %s failed", type(effect).__name__)
            self._queue.append(Fail(str(exc) or type(exc).__name__))
            return
        if completion is not None:
            self._queue.append(completion)

    def history(self) -> List[Transition]:
        """All transitions applied so far, oldest first."""
        return list(self._history)

    def subscribe(self, listener: TransitionListener) -> None:
        """Call ``listener`` after every transition."""
        self.emitter.on_any(listener)

    def subscribe_to(self, kind: StateKind, listener: TransitionListener) -> None:
        """Call ``listener`` after transitions into states of ``kind``."""
        self.emitter.on(kind, listener)

    def unsubscribe(self, listener: TransitionListener, kind: Optional[StateKind] = None) -> None:
        """Remove a listener added with ``subscribe`` or ``subscribe_to``."""
        if kind is None:
            self.emitter.off_any(listener)
        else:
            self.emitter.off(kind, listener)


__all__ = [
    "FormRuntime",
    "Transition",
    "TransitionEmitter",
    "TransitionListener",
    "Executor",
    "run_effect",
]
