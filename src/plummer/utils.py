"""
Timing and validation helpers shared by the driver and the command line.
"""

from time import perf_counter
import warnings
from typing import Type
from .config import config

class Timer:
    """
    Wall-clock timer used by ``plummer --time``.

    Prints ``<name>: <seconds> s`` on exit when verbose; the measured
    duration is kept in ``elapsed`` either way.

    Examples
    --------
    >>> with Timer("Integration", verbose=False) as t:
    ...     plummer.run(run_config)
    >>> t.elapsed > 0
    True
    """
    def __init__(self, name="Integration", verbose=True):
        self.name = name
        self.verbose = verbose
        self.elapsed = None

    def __enter__(self):
        self._start = perf_counter()
        return self

    def __exit__(self, *args):
        self.elapsed = perf_counter() - self._start
        if self.verbose:
            print(f"{self.name}: {self.elapsed:.6f} s")

def validation_error(message: str, error_class: Type[Exception] = ValueError):
    """
    Report a failed runtime check.

    Raises error_class when config.STRICT_VALIDATION is set, otherwise
    issues a RuntimeWarning pointing at the caller. evolve() uses this for
    the opt-in non-finite state check with FloatingPointError.

    Parameters
    ----------
    message : str
        Description of the failed check
    error_class : Type[Exception], optional
        Exception raised in strict mode. Default: ValueError
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    warnings.warn(message, RuntimeWarning, stacklevel=2)
