"""
Global Configuration for Plummer Package
========================================

This module provides package-wide settings that users can modify to control
numerical tolerances, validation behavior, logging and default plotting options.

These are package settings, not run parameters. The inputs of a single
integration (mass, scale length, initial conditions, time stepping) are read
from a run configuration file, see :mod:`plummer.config_reader`.

Examples
--------
View current configuration:

>>> import plummer
>>> print(plummer.config)

Modify settings:

>>> plummer.config.CHECK_FINITE = True  # Report non-finite states during a run
>>> plummer.config.DEFAULT_TRAJ_COLOR = 'black'

Reset to defaults:

>>> plummer.config.reset()

Temporarily modify settings:

>>> with plummer.temp_config(CHECK_FINITE=True, STRICT_VALIDATION=False):
...     # Non-finite states now produce warnings for this block only
...     plummer.evolve(state, params)
"""

from dataclasses import dataclass, fields
from contextlib import contextmanager


@dataclass
class PlummerSettings:
    """
    Global configuration for Plummer package.

    Attributes
    ----------
    EQUALITY_RTOL : float
        Relative tolerance for floating-point equality of vectors.
        Default: 1e-12
    EQUALITY_ATOL : float
        Absolute tolerance for floating-point equality of vectors.
        Default: 1e-14
    STRICT_VALIDATION : bool
        If True, validation failures raise exceptions.
        If False, validation failures issue warnings.
        Default: True
    CHECK_FINITE : bool
        If True, the simulation driver checks the particle state after every
        step and reports NaN or Inf through validation_error.
        If False, non-finite values propagate silently into the output.
        Default: False
    LOG_LEVEL : str
        Level used by the command line entry point when configuring logging.
        Default: 'WARNING'
    DEFAULT_TRAJ_COLOR : str
        Default color for trajectory lines in plots.
        Default: 'red'
    DEFAULT_TRAJ_COLOR_ADD : str
        Default color for trajectories added to an existing plot.
        Default: 'blue'
    DEFAULT_BODY_COLOR : str
        Default color for the Plummer core sphere in plots.
        Default: 'lightblue'
    DEFAULT_BODY_OPACITY : float
        Default opacity for the Plummer core sphere (0.0 to 1.0).
        Default: 0.4
    """

    # Numerical tolerance for equality comparisons
    EQUALITY_RTOL: float = 1e-12
    EQUALITY_ATOL: float = 1e-14

    # Validation behavior
    STRICT_VALIDATION: bool = True
    CHECK_FINITE: bool = False

    # Logging
    LOG_LEVEL: str = 'WARNING'

    # Plotting defaults
    DEFAULT_TRAJ_COLOR: str = 'red'
    DEFAULT_TRAJ_COLOR_ADD: str = 'blue'
    DEFAULT_BODY_COLOR: str = 'lightblue'
    DEFAULT_BODY_OPACITY: float = 0.4

    def reset(self):
        """
        Reset all configuration values to package defaults.

        Examples
        --------
        >>> import plummer
        >>> plummer.config.CHECK_FINITE = True  # Modify
        >>> plummer.config.reset()  # Back to defaults
        >>> plummer.config.CHECK_FINITE
        False
        """
        defaults = PlummerSettings()
        for field in fields(self):
            setattr(self, field.name, getattr(defaults, field.name))

    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["PlummerSettings:"]
        lines.append("  Numerical Tolerances:")
        lines.append(f"    EQUALITY_RTOL = {self.EQUALITY_RTOL}")
        lines.append(f"    EQUALITY_ATOL = {self.EQUALITY_ATOL}")
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        lines.append(f"    CHECK_FINITE = {self.CHECK_FINITE}")
        lines.append(f"    LOG_LEVEL = '{self.LOG_LEVEL}'")
        lines.append("  Plotting:")
        lines.append(f"    DEFAULT_TRAJ_COLOR = '{self.DEFAULT_TRAJ_COLOR}'")
        lines.append(f"    DEFAULT_TRAJ_COLOR_ADD = '{self.DEFAULT_TRAJ_COLOR_ADD}'")
        lines.append(f"    DEFAULT_BODY_COLOR = '{self.DEFAULT_BODY_COLOR}'")
        lines.append(f"    DEFAULT_BODY_OPACITY = {self.DEFAULT_BODY_OPACITY}")
        return "\n".join(lines)


# Global configuration instance
config = PlummerSettings()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.

    Configuration is automatically restored when the context exits,
    even if an exception occurs.

    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.

    Examples
    --------
    >>> import plummer
    >>> with plummer.temp_config(CHECK_FINITE=True):
    ...     plummer.evolve(state, params)
    >>> # Original config restored here
    >>> plummer.config.CHECK_FINITE
    False

    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    valid = [field.name for field in fields(config)]
    for key in kwargs:
        if key not in valid:
            raise AttributeError(
                f"PlummerSettings has no attribute '{key}'. "
                f"Valid attributes: {valid}"
            )

    old_values = {key: getattr(config, key) for key in kwargs}
    try:
        for key, value in kwargs.items():
            setattr(config, key, value)
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
