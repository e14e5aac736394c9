'''Test-particle integration in a Plummer potential
PlummerSystem class definition and acceleration law'''

import numpy as np
from dataclasses import dataclass
from typing import Optional
from .vectors import CartesianVector3

# Gravitational constant in natural units. Callers working in other unit
# systems rescale M, a and time before integrating.
G = 1.0


def acceleration(position: CartesianVector3, M: float, a: float) -> CartesianVector3:
    """
    Plummer-softened gravitational acceleration at a position.

    Computes d = sqrt(x^2 + y^2 + z^2 + a^2) and returns -G M position / d^3.

    Parameters
    ----------
    position : CartesianVector3
        Position of the test particle
    M : float
        Total mass of the Plummer sphere
    a : float
        Plummer scale length (softening). a = 0 gives a point mass.

    Returns
    -------
    CartesianVector3
        Acceleration vector. Non-finite (NaN) when d = 0, i.e. at the origin
        with a = 0; no exception is raised in that case.
    """
    p = position.to_numpy()
    x, y, z = p
    with np.errstate(divide='ignore', invalid='ignore'):
        d = np.sqrt(x * x + y * y + z * z + np.float64(a) * a)
        acc = -G * M * p / (d * d * d)
    return CartesianVector3._wrap(acc)


@dataclass(frozen=True)
class PlummerSystem:
    """
    Immutable parameters of a Plummer sphere.

    The density profile is rho(r) = 3M / (4 pi a^3) (1 + r^2/a^2)^(-5/2),
    giving the softened potential Phi(r) = -G M / sqrt(r^2 + a^2).

    Attributes
    ----------
    M : float
        Total mass [natural units]
    a : float
        Scale length [natural units]; a = 0 recovers a point mass and is
        singular at the origin
    name : str, optional
        Label for plots and summaries
    """
    M: float
    a: float
    name: Optional[str] = None

    def __post_init__(self):
        #Validate parameters
        if not self.M > 0:
            raise ValueError(f"Mass must be positive, got {self.M}")
        if not self.a >= 0:
            raise ValueError(f"Scale length must be non-negative, got {self.a}")

    def acceleration(self, position: CartesianVector3) -> CartesianVector3:
        """Acceleration of a test particle at position in this system."""
        return acceleration(position, self.M, self.a)

    def __str__(self):
        label = f"'{self.name}'" if self.name else "unnamed"
        return f"Plummer sphere {label}: M = {self.M:.6g}, a = {self.a:.6g}"
