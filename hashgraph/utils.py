import contextlib
import math
import operator
import os
import sys
from collections.abc import Callable, Iterable, Iterator
from decimal import Decimal
from itertools import combinations
from numbers import Complex, Number
from typing import IO, Any, TypeVar

from colorama import Fore, Style
from more_itertools import UnequalIterablesError, zip_equal


__all__ = [
    "bright_green",
    "bright_yellow",
    "Logger",
    "identityfunc",
    "iequal",
    "no_color_context",
    "is_nan",
    "maxmin",
]


T = TypeVar("T")


def bright_green(s: str) -> str:
    """
    Augment a string, so that when printed to console, the string is displayed in bright green color.
    """

    if "NO_COLOR" in os.environ:
        return s

    return Style.BRIGHT + Fore.GREEN + s + Style.RESET_ALL  # type: ignore


def bright_yellow(s: str) -> str:
    """
    Augment a string, so that when printed to console, the string is displayed in bright yellow color.
    """

    if "NO_COLOR" in os.environ:
        return s

    return Style.BRIGHT + Fore.YELLOW + s + Style.RESET_ALL  # type: ignore


class Logger:
    """
    A lightweight logger.

    It's just a thin wrapper over the builtin print function, except that it prints
    strings with order numbers prepended.
    """

    def __init__(self, enabled: bool = True) -> None:
        self._count = 1
        self._enabled = enabled

    __slots__ = ("_count", "_enabled")

    def log(self, s: str, file: IO = None) -> None:
        if not self._enabled:
            return

        if file is None:
            file = sys.stdout

        print(bright_green(str(self._count) + ". ") + s, file=file)
        self._count += 1


def identityfunc(input: T) -> T:
    """ An identity function """
    return input


def iequal(
    *iterables: Iterable,
    equal: Callable[[Any, Any], bool] = operator.eq,
    strict: bool = False,
) -> bool:

    zip_func = zip_equal if strict else zip

    try:
        for elements in zip_func(*iterables):
            for e1, e2 in combinations(elements, 2):
                if not equal(e1, e2):
                    return False
        return True

    except UnequalIterablesError:
        return False


@contextlib.contextmanager
def no_color_context() -> Iterator[None]:
    """
    Return a context manager. Within the context, the environment variable $NO_COLOR is set.
    Utilities supporting the NO_COLOR movement (https://no-color.org/) should automatically adjust their color output behavior.
    """

    orig_value = os.environ.get("NO_COLOR", None)
    os.environ["NO_COLOR"] = "true"

    try:
        yield
    finally:
        if orig_value is None:
            del os.environ["NO_COLOR"]
        else:
            os.environ["NO_COLOR"] = orig_value


def is_nan(x: Any) -> bool:
    """ Try best effort to detect NaN """

    if isinstance(x, Decimal):
        return x.is_nan()
    elif isinstance(x, Complex):
        return math.isnan(x.real) or math.isnan(x.imag)
    elif isinstance(x, Number):
        return math.isnan(x)  # type: ignore
    else:
        return False


def maxmin(*args, key=identityfunc, default=None):
    """ Mimic the builtin divmod() function """

    if len(args) <= 1:
        max_item = max(*args, key=key, default=default)
        min_item = min(*args, key=key, default=default)
    else:
        max_item = max(*args, key=key)
        min_item = min(*args, key=key)

    return max_item, min_item
