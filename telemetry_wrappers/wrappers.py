"""Timed function definitions.

``deftimed`` turns a function into one that measures each call and emits a
metric event once the call returns::

    @deftimed(["a", "b"])
    def add(a, b):
        return a + b

    add(1, 2)  # -> 3, emits ("a", "b") with {"call": <microseconds>} and {}

Without a metric name the channel defaults to ``("timing", <function name>)``.
Metadata may be a static mapping or a callable whose parameters are named
after the wrapped function's parameters; the callable runs after every
successful call and receives that call's argument values::

    @deftimed(["a", "b"], metadata=lambda a: {"a": a})
    def add(a, b):
        return a + b

``deftimedp`` does the same for module-private functions. Calls that raise
emit nothing; the exception reaches the caller untouched.
"""
from __future__ import annotations

import functools
import inspect
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, TypeVar, Union

from .core.errors import DefinitionError
from .core.schemas import CALL_MEASUREMENT, DEFAULT_MARKER, Channel
from .telemetry import events
from .telemetry.logging import get_logger
from .telemetry.metrics import Timer, tc

F = TypeVar("F", bound=Callable[..., Any])

MetricName = Optional[Sequence[str]]
MetadataSpec = Union[None, Mapping[str, Any], Callable[..., Mapping[str, Any]]]
_MetadataBuilder = Callable[[Tuple[Any, ...], Dict[str, Any]], Dict[str, Any]]

_PASSABLE = (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)


def resolve_channel(metric_name: MetricName, name: Optional[str]) -> Channel:
    """Return the channel for ``metric_name``, defaulting to ``("timing", name)``."""
    if isinstance(metric_name, (str, bytes)):
        raise DefinitionError(
            f"metric name must be a sequence of segments, not a single {type(metric_name).__name__}"
        )
    if metric_name is None:
        segments: Tuple[Any, ...] = ()
    else:
        try:
            segments = tuple(metric_name)
        except TypeError:
            raise DefinitionError(
                f"metric name must be a sequence of segments, got {type(metric_name).__name__}"
            ) from None
    if not segments:
        if not name:
            raise DefinitionError("cannot derive a default metric name for a callable without __name__")
        return (DEFAULT_MARKER, name)
    for seg in segments:
        if not isinstance(seg, str) or not seg:
            raise DefinitionError(f"metric name segments must be non-empty strings, got {seg!r}")
    return segments


def _static_metadata(values: Mapping[str, Any]) -> _MetadataBuilder:
    frozen = dict(values)

    def build(args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Dict[str, Any]:
        return dict(frozen)

    return build


def _metadata_builder(func: Callable[..., Any], metadata: MetadataSpec) -> _MetadataBuilder:
    if metadata is None:
        return _static_metadata({})
    if isinstance(metadata, Mapping):
        return _static_metadata(metadata)
    if not callable(metadata):
        raise DefinitionError(
            f"metadata must be a mapping or a callable, got {type(metadata).__name__}"
        )

    try:
        fsig = inspect.signature(func)
        msig = inspect.signature(metadata)
    except (TypeError, ValueError) as e:
        raise DefinitionError(f"cannot inspect signature for metadata binding: {e}") from e

    takes_all = False
    wanted = []
    for p in msig.parameters.values():
        if p.kind is inspect.Parameter.VAR_KEYWORD:
            takes_all = True
        elif p.kind is inspect.Parameter.POSITIONAL_ONLY and p.default is inspect.Parameter.empty:
            raise DefinitionError(f"metadata parameter {p.name!r} is positional-only")
        elif p.kind in _PASSABLE:
            wanted.append(p.name)
    unknown = [n for n in wanted if n not in fsig.parameters]
    if unknown:
        raise DefinitionError(
            f"metadata refers to {', '.join(unknown)} which "
            f"{'is' if len(unknown) == 1 else 'are'} not a parameter of {getattr(func, '__qualname__', func)!r}"
        )

    def build(args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Dict[str, Any]:
        bound = fsig.bind(*args, **kwargs)
        bound.apply_defaults()
        values = bound.arguments
        if takes_all:
            out = metadata(**values)
        else:
            out = metadata(**{n: values[n] for n in wanted})
        if not isinstance(out, Mapping):
            raise TypeError(f"metadata callable must return a mapping, got {type(out).__name__}")
        return dict(out)

    return build


def _is_async(func: Callable[..., Any]) -> bool:
    """True for ``async def`` functions and objects with an ``async def __call__``."""
    if inspect.iscoroutinefunction(func):
        return True
    if inspect.isfunction(func) or inspect.ismethod(func):
        return False
    return inspect.iscoroutinefunction(getattr(func, "__call__", None))


def wrap_timed(func: F, metric_name: MetricName = (), metadata: MetadataSpec = None) -> F:
    """Return ``func`` wrapped so each successful call emits its duration.

    The wrapper keeps the name, docstring, annotations and signature of
    ``func``. Coroutine functions get an async wrapper that times the whole
    await.
    """
    if not callable(func):
        raise DefinitionError(f"cannot time a non-callable {type(func).__name__}")
    name = getattr(func, "__name__", None)
    channel = resolve_channel(metric_name, name)
    build_metadata = _metadata_builder(func, metadata)

    if _is_async(func):

        @functools.wraps(func)
        async def timed_async(*args, **kwargs):  # noqa: ANN002, ANN003, ANN202
            with Timer(channel[-1]) as t:
                result = await func(*args, **kwargs)
            events.emit(channel, {CALL_MEASUREMENT: t.elapsed_us}, build_metadata(args, kwargs))
            return result

        wrapper: Callable[..., Any] = timed_async
    else:

        @functools.wraps(func)
        def timed(*args, **kwargs):  # noqa: ANN002, ANN003, ANN202
            elapsed_us, result = tc(func, *args, **kwargs)
            events.emit(channel, {CALL_MEASUREMENT: elapsed_us}, build_metadata(args, kwargs))
            return result

        wrapper = timed

    wrapper.__telemetry_channel__ = channel  # type: ignore[attr-defined]
    get_logger(__name__).debug(
        "timed %s on channel %s",
        getattr(func, "__qualname__", name or repr(func)),
        ".".join(channel),
    )
    return wrapper  # type: ignore[return-value]


def _module_exports(func: Callable[..., Any]) -> Optional[Dict[str, Any]]:
    """Globals of the module defining ``func`` when it is a module-level def.

    ``func`` is usually a timed wrapper, whose own ``__globals__`` belong to
    this module; the defining module is the one of the innermost wrapped
    function.
    """
    qualname = getattr(func, "__qualname__", "")
    if "." in qualname or "<" in qualname:
        return None
    g = getattr(inspect.unwrap(func), "__globals__", None)
    if not isinstance(g, dict) or "__all__" not in g:
        return None
    return g


def _export(func: F) -> F:
    g = _module_exports(func)
    if g is not None:
        names = g["__all__"]
        if func.__name__ not in names:
            if isinstance(names, list):
                names.append(func.__name__)
            else:
                g["__all__"] = type(names)([*names, func.__name__])
    return func


def _hide(func: F) -> F:
    g = _module_exports(func)
    if g is not None:
        names = g["__all__"]
        if func.__name__ in names:
            if isinstance(names, list):
                names[:] = [n for n in names if n != func.__name__]
            else:
                g["__all__"] = type(names)(n for n in names if n != func.__name__)
    return func


def _require_private(func: Callable[..., Any]) -> None:
    name = getattr(func, "__name__", "")
    if not name.startswith("_"):
        raise DefinitionError(
            f"deftimedp requires a private name (leading underscore), got {name!r}; use deftimed instead"
        )


def _bare_only(func: Callable[..., Any], metadata: MetadataSpec, entry: str) -> None:
    if metadata is not None:
        raise DefinitionError(
            f"{entry} got a function and metadata together; use @{entry}(metric_name, metadata) "
            f"as a decorator or wrap_timed({getattr(func, '__name__', 'func')}, metric_name, metadata)"
        )


def deftimed(metric_name: Union[MetricName, Callable[..., Any]] = (), metadata: MetadataSpec = None):  # noqa: ANN201
    """Define a timed, exported function.

    Usable bare (``@deftimed``) or with arguments
    (``@deftimed(["a", "b"], metadata={...})``). When the defining module
    declares ``__all__`` the function's name is added to it.
    """
    if callable(metric_name):
        _bare_only(metric_name, metadata, "deftimed")
        return _export(wrap_timed(metric_name))

    def decorate(func: F) -> F:
        return _export(wrap_timed(func, metric_name, metadata))  # type: ignore[arg-type]

    return decorate


def deftimedp(metric_name: Union[MetricName, Callable[..., Any]] = (), metadata: MetadataSpec = None):  # noqa: ANN201
    """Define a timed, module-private function.

    Same as ``deftimed`` but the function must have a leading-underscore
    name and is kept out of the module's ``__all__``.
    """
    if callable(metric_name):
        _bare_only(metric_name, metadata, "deftimedp")
        _require_private(metric_name)
        return _hide(wrap_timed(metric_name))

    def decorate(func: F) -> F:
        _require_private(func)
        return _hide(wrap_timed(func, metric_name, metadata))  # type: ignore[arg-type]

    return decorate
