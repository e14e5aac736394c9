'''Test-particle integration in a Plummer potential
ParticleState class definition'''

import numpy as np
from .system import PlummerSystem
from .vectors import CartesianVector3, SphericalVector3, to_cartesian


class ParticleState:
    """
    Phase-space state of a single test particle in a Plummer system.

    The state is mutable: the integrator replaces position and velocity
    once per step and the simulation driver advances time. Use copy() to
    keep an independent snapshot.

    Parameters
    ----------
    system : PlummerSystem
        The Plummer sphere the particle moves in
    position : CartesianVector3 or array_like
        Cartesian position
    velocity : CartesianVector3 or array_like
        Cartesian velocity
    time : float, optional
        Current time (default: 0.0)
    """
    def __init__(self, system: PlummerSystem, position, velocity, time: float = 0.0):
        if not isinstance(system, PlummerSystem):
            raise TypeError(f"system must be PlummerSystem, got {type(system)}")
        self.system = system
        self.position = self._as_vector(position)
        self.velocity = self._as_vector(velocity)
        self.time = float(time)

    @classmethod
    def from_spherical(cls, system: PlummerSystem, position: SphericalVector3,
                       velocity: SphericalVector3, time: float = 0.0) -> "ParticleState":
        """
        Create a state from spherical initial conditions.

        Parameters
        ----------
        position : SphericalVector3
            (r, phi, theta) with phi polar and theta azimuthal
        velocity : SphericalVector3
            (v_r, v_phi, v_theta) as radial speed and angular rates
        """
        cart_pos, cart_vel = to_cartesian(position, velocity)
        return cls(system, cart_pos, cart_vel, time)

    @staticmethod
    def _as_vector(value) -> CartesianVector3:
        if isinstance(value, CartesianVector3):
            return value
        return CartesianVector3.from_numpy(value)

    def copy(self) -> "ParticleState":
        # Vectors are immutable, sharing them is safe
        return ParticleState(self.system, self.position, self.velocity, self.time)

    def to_numpy(self) -> np.ndarray:
        """State as [t, x, y, z, vx, vy, vz]."""
        return np.concatenate([[self.time], self.position.to_numpy(),
                               self.velocity.to_numpy()])

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.to_numpy())))

    def __eq__(self, other):
        if not isinstance(other, ParticleState):
            return NotImplemented
        return (self.system == other.system and self.time == other.time
                and self.position == other.position
                and self.velocity == other.velocity)

    __hash__ = None

    def __repr__(self):
        return (f"ParticleState(t={self.time!r}, position={self.position!r}, "
                f"velocity={self.velocity!r})")
