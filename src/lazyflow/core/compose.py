"""Function composition and partial application.

Operators are curried so pipelines read left-to-right without lambdas:

    >>> double_odds = pipe(filter(lambda n: n % 2), map(lambda n: n * 2))
    >>> await to_list(double_odds(range(1, 5)))
    [2, 6, 10]

A curried function runs once every parameter without a default is bound,
positionally or by keyword. An explicit arity counts positional arguments
instead, for functions taking *args.
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")

__all__ = ["Curried", "curry", "compose", "pipe", "identity"]

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def identity(value: T) -> T:
    return value


def _required_names(signature: inspect.Signature) -> frozenset[str]:
    """Parameters that must be bound before the call can happen."""
    return frozenset(
        name for name, param in signature.parameters.items()
        if param.kind not in _VARIADIC and param.default is inspect.Parameter.empty
    )


class Curried(Generic[R]):
    """Partial application wrapper.

    Each call merges its arguments with the ones already held. Once every
    required parameter of the wrapped function is bound, by position or by
    keyword, the function is invoked; otherwise a new Curried holding the
    accumulated arguments is returned. Arguments the signature rejects
    (unknown keywords, too many positionals) trigger the call so the function
    raises its own TypeError.

    With an explicit ``arity`` the signature is not consulted: the call
    happens once that many positional arguments are held.

    Example:
        >>> add3 = Curried(lambda a, b, c: a + b + c)
        >>> add3(1)(2)(3), add3(1, c=3)(2), add3(a=1, b=2, c=3)
        (6, 6, 6)
    """

    def __init__(
        self,
        fn: Callable[..., R],
        arity: int | None = None,
        args: tuple[Any, ...] = (),
        kwargs: dict[str, Any] | None = None,
    ) -> None:
        self._fn = fn
        self._explicit_arity = arity
        self._signature = inspect.signature(fn) if arity is None else None
        self._required = _required_names(self._signature) if self._signature is not None else frozenset()
        self._args = args
        self._kwargs = kwargs or {}
        functools.update_wrapper(self, fn)

    @property
    def arity(self) -> int:
        return self._explicit_arity if self._explicit_arity is not None else len(self._required)

    @property
    def pending(self) -> int:
        """Required arguments still missing before the call happens."""
        return self._missing(self._args, self._kwargs)

    def _missing(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> int:
        if self._signature is None:
            return max(0, self.arity - len(args))
        try:
            bound = self._signature.bind_partial(*args, **kwargs)
        except TypeError:
            return 0
        return len(self._required - bound.arguments.keys())

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        collected = (*self._args, *args)
        merged = {**self._kwargs, **kwargs}
        if not self._missing(collected, merged):
            return self._fn(*collected, **merged)
        return Curried(self._fn, self._explicit_arity, collected, merged)

    def __repr__(self) -> str:
        name = getattr(self._fn, "__qualname__", repr(self._fn))
        return f"Curried({name}, arity={self.arity}, pending={self.pending})"


def curry(fn: Callable[..., R] | None = None, *, arity: int | None = None) -> Any:
    """Curry a function; usable as ``@curry`` or ``@curry(arity=n)``."""
    if fn is None:
        return lambda f: Curried(f, arity)
    return Curried(fn, arity)


def compose(*fns: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Compose right-to-left: ``compose(f, g)(x) == f(g(x))``."""
    def composed(value: Any) -> Any:
        return functools.reduce(lambda acc, fn: fn(acc), reversed(fns), value)
    return composed


def pipe(*fns: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Compose left-to-right: ``pipe(f, g)(x) == g(f(x))``."""
    return compose(*reversed(fns))
