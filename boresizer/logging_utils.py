from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Sequence, Set, TypeVar, cast

import numpy as np

from .model import Circle, Point

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 160
_repr.maxstring = 80
_repr.maxlist = 6
_repr.maxdict = 6


def _circle_repr(circle: Circle) -> str:
    pos = circle.coordinates
    return f"{circle.name}(d={circle.diameter:.6g} @ {pos.x:.4g},{pos.y:.4g})"


def _safe_repr(value: Any, *, max_items: int = 4, max_length: int = 400) -> str:
    if isinstance(value, Circle):
        return _circle_repr(value)
    if isinstance(value, Point):
        return f"({value.x:.6g}, {value.y:.6g})"

    if isinstance(value, np.ndarray):
        summary = f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype})"
        if 0 < value.size <= max_items:
            summary += f", values={_repr.repr(value.tolist())}"
        return summary

    if isinstance(value, (list, tuple)):
        circles = [item for item in value if isinstance(item, Circle)]
        if circles and len(circles) == len(value) and len(value) > max_items:
            names = sorted({c.name for c in circles})
            return f"<{len(value)} circles: {', '.join(names[:max_items])}{', ...' if len(names) > max_items else ''}>"
        items = [_safe_repr(item) for item in value[:max_items]]
        if len(value) > max_items:
            items.append(f"... (+{len(value) - max_items})")
        open_br, close_br = ("(", ")") if isinstance(value, tuple) else ("[", "]")
        return f"{open_br}{', '.join(items)}{close_br}"

    rendered = _repr.repr(value)
    if len(rendered) > max_length:
        return rendered[:max_length] + "... (truncated)"
    return rendered


def _format_arguments(args: Sequence[Any], kwargs: MutableMapping[str, Any]) -> str:
    parts = []
    if args:
        parts.append("args=[" + ", ".join(_safe_repr(arg) for arg in args) + "]")
    if kwargs:
        parts.append("kwargs={" + ", ".join(f"{key}={_safe_repr(val)}" for key, val in kwargs.items()) + "}")
    return ", ".join(parts) if parts else "no-args"


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that emits DEBUG logs on entry, exit and failure."""

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        qualname = name or getattr(func, "__qualname__", getattr(func, "__name__", "<callable>"))

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            logger.debug("Entering %s (%s)", qualname, _format_arguments(args, kwargs))
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.debug("Exception in %s", qualname, exc_info=True)
                raise
            if log_result:
                logger.debug("Exiting %s -> %s", qualname, _safe_repr(result))
            else:
                logger.debug("Exiting %s", qualname)
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Wrap the public module-level functions of ``namespace`` with DEBUG tracing.

    Private helpers (leading underscore) and names listed in ``skip`` are left
    alone so that tight inner loops stay unwrapped.
    """

    module_name = namespace.get("__name__")
    if not isinstance(module_name, str):
        module_name = None
    logger = logger or logging.getLogger(module_name or __name__)
    skip_set: Set[str] = set(skip or [])

    for attr, value in list(namespace.items()):
        if attr in skip_set or attr.startswith("_"):
            continue
        if inspect.isfunction(value) and getattr(value, "__module__", None) == module_name:
            namespace[attr] = debug_log_call(logger, name=attr)(value)


__all__ = ["debug_log_call", "apply_debug_logging"]
