"""
Run Configuration Files
=======================

Reader for flat ``key=value`` run configuration files and the typed
RunConfig record built from them.

File format
-----------
- One ``key=value`` pair per line; all whitespace is removed first
- Empty lines and lines starting with the comment prefix are skipped
- The line is split at the first divider; a later key overrides an earlier one

Example::

    # Plummer sphere
    M = 1.0
    a = 1.0
    # initial conditions (phi polar, theta azimuthal, rates for v_phi/v_theta)
    r0 = 1.0
    phi0 = 1.5707963267948966
    theta0 = 0.0
    v_r0 = 0.0
    v_phi0 = 0.0
    v_theta0 = 0.5946035575013605
    # integration
    end_time = 100.0
    time_step = 0.01
    output_step = 0.1
    output_file = orbit.txt
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Union
from .simulation import RunParameters
from .system import PlummerSystem
from .vectors import SphericalVector3


class ConfigError(ValueError):
    """Raised for unreadable files, malformed lines, missing keys or bad values."""


class ConfigReader:
    """
    Parse a ``key=value`` configuration file into a string mapping.

    Parameters
    ----------
    path : str or Path
        Configuration file
    divider : str, optional
        Separator between key and value (default: '=')
    commenter : str, optional
        Prefix marking a comment line (default: '#')

    Raises
    ------
    ConfigError
        If the file cannot be read or a line has no divider
    """
    def __init__(self, path: Union[str, Path], divider: str = '=',
                 commenter: str = '#'):
        self._path = Path(path)
        self._divider = divider
        self._commenter = commenter
        try:
            text = self._path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(
                f"Cannot open the configure file: {self._path}"
            ) from exc
        self._map = self._parse(text)

    def _parse(self, text: str) -> Dict[str, str]:
        values = {}
        for lineno, raw in enumerate(text.splitlines(), start=1):
            line = ''.join(raw.split())
            if not line or line.startswith(self._commenter):
                continue
            key, sep, value = line.partition(self._divider)
            if not sep or not key:
                raise ConfigError(
                    f"{self._path}:{lineno}: expected "
                    f"'key{self._divider}value', got {raw.strip()!r}"
                )
            values[key] = value
        return values

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, dtype=str):
        """
        Return the value for key converted with dtype.

        Raises
        ------
        ConfigError
            If the key is missing or the value cannot be converted
        """
        if key not in self._map:
            raise ConfigError(
                f"Invalid key for configure file {self._path}: '{key}'"
            )
        value = self._map[key]
        try:
            return dtype(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(
                f"Cannot parse value {value!r} of key '{key}' "
                f"as {getattr(dtype, '__name__', dtype)}"
            ) from exc

    def keys(self):
        return self._map.keys()

    def __contains__(self, key):
        return key in self._map

    def __len__(self):
        return len(self._map)

    def __repr__(self):
        return f"ConfigReader('{self._path}', {len(self)} keys)"


@dataclass(frozen=True)
class RunConfig:
    """
    Every input of one run, read once from a configuration file.

    Attributes
    ----------
    M, a : float
        Plummer mass and scale length
    r0, phi0, theta0 : float
        Initial spherical position (phi polar, theta azimuthal)
    v_r0, v_phi0, v_theta0 : float
        Initial radial speed and angular rates
    end_time, time_step, output_step : float
        Time stepping and output cadence
    output_file : str
        Snapshot file name
    """
    M: float
    a: float
    r0: float
    phi0: float
    theta0: float
    v_r0: float
    v_phi0: float
    v_theta0: float
    end_time: float
    time_step: float
    output_step: float
    output_file: str

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "RunConfig":
        """Read and convert every required key from a configuration file."""
        return cls.from_reader(ConfigReader(path))

    @classmethod
    def from_reader(cls, reader: ConfigReader) -> "RunConfig":
        values = {}
        for field in fields(cls):
            dtype = str if field.name == 'output_file' else float
            values[field.name] = reader.get(field.name, dtype)
        return cls(**values)

    def system(self) -> PlummerSystem:
        return PlummerSystem(M=self.M, a=self.a)

    def initial_position(self) -> SphericalVector3:
        return SphericalVector3(self.r0, self.phi0, self.theta0)

    def initial_velocity(self) -> SphericalVector3:
        return SphericalVector3(self.v_r0, self.v_phi0, self.v_theta0)

    def run_parameters(self) -> RunParameters:
        return RunParameters(end_time=self.end_time,
                             time_step=self.time_step,
                             output_interval=self.output_step,
                             output_file=self.output_file)
