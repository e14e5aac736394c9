'''Test-particle integration in a Plummer potential
Vector class definitions and coordinate conversion'''

import numpy as np
from .config import config


class _Vector3:
    """
    Immutable 3-component real vector stored as a read-only float64 array.

    Subclasses only name the components; a given instance is either
    Cartesian or spherical, never both.
    """
    _LABELS = ('c0', 'c1', 'c2')

    # numpy scalars defer to our reflected operators instead of
    # broadcasting over the vector as a sequence
    __array_ufunc__ = None

    def __init__(self, c0=0.0, c1=0.0, c2=0.0):
        self._components = np.array([c0, c1, c2], dtype=float)
        self._components.flags.writeable = False

    @classmethod
    def from_numpy(cls, array):
        """
        Create a vector from an array-like of shape (3,).

        Raises
        ------
        ValueError
            If the input does not hold exactly three components
        """
        array = np.asarray(array, dtype=float)
        if array.shape != (3,):
            raise ValueError(f"{cls.__name__} requires shape (3,), "
                             f"got {array.shape}")
        return cls(*array)

    def to_numpy(self) -> np.ndarray:
        """Return a writeable copy of the components."""
        return self._components.copy()

    def __array__(self, dtype=None, copy=None):
        return self._components.astype(dtype or float, copy=True)

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        return 3

    def __getitem__(self, key):
        return self._components[key]

    def __iter__(self):
        return iter(self._components)

    def __eq__(self, other):
        #Check equality with tolerance
        if not isinstance(other, type(self)):
            return NotImplemented
        return bool(np.allclose(self._components, other._components,
                                rtol=config.EQUALITY_RTOL,
                                atol=config.EQUALITY_ATOL))

    __hash__ = None

    def __repr__(self):
        values = ", ".join(f"{label}={float(value)!r}"
                           for label, value in zip(self._LABELS, self._components))
        return f"{type(self).__name__}({values})"


class CartesianVector3(_Vector3):
    """
    Cartesian vector (x, y, z) with componentwise arithmetic.

    Used for the particle position, velocity and acceleration.
    """
    _LABELS = ('x', 'y', 'z')

    def __init__(self, x=0.0, y=0.0, z=0.0):
        super().__init__(x, y, z)

    @classmethod
    def _wrap(cls, array):
        vec = cls.__new__(cls)
        array.flags.writeable = False
        vec._components = array
        return vec

    @property
    def x(self) -> float:
        return float(self._components[0])

    @property
    def y(self) -> float:
        return float(self._components[1])

    @property
    def z(self) -> float:
        return float(self._components[2])

    def norm(self) -> float:
        """Euclidean length."""
        return float(np.sqrt(np.dot(self._components, self._components)))

    def dot(self, other: "CartesianVector3") -> float:
        return float(np.dot(self._components, other._components))

    # ========== ARITHMETIC ==========
    def __add__(self, other):
        if not isinstance(other, CartesianVector3):
            return NotImplemented
        return CartesianVector3._wrap(self._components + other._components)

    def __sub__(self, other):
        if not isinstance(other, CartesianVector3):
            return NotImplemented
        return CartesianVector3._wrap(self._components - other._components)

    def __neg__(self):
        return CartesianVector3._wrap(-self._components)

    def __mul__(self, scalar):
        if isinstance(scalar, _Vector3):
            return NotImplemented
        return CartesianVector3._wrap(self._components * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        if isinstance(scalar, _Vector3):
            return NotImplemented
        with np.errstate(divide='ignore', invalid='ignore'):
            return CartesianVector3._wrap(self._components / np.float64(scalar))


class SphericalVector3(_Vector3):
    """
    Spherical coordinates (r, phi, theta).

    phi is the polar angle measured from +z and theta the azimuthal angle
    measured from +x. For velocities the same labels hold the radial
    speed and the angular rates (v_r, dphi/dt, dtheta/dt).
    """
    _LABELS = ('r', 'phi', 'theta')

    def __init__(self, r=0.0, phi=0.0, theta=0.0):
        super().__init__(r, phi, theta)

    @property
    def r(self) -> float:
        return float(self._components[0])

    @property
    def phi(self) -> float:
        return float(self._components[1])

    @property
    def theta(self) -> float:
        return float(self._components[2])


# ========== COORDINATE CONVERSION ==========
def to_cartesian(position: SphericalVector3, velocity: SphericalVector3):
    """
    Convert a spherical position and velocity to Cartesian.

    Uses x = r cos(theta) sin(phi), y = r sin(theta) sin(phi), z = r cos(phi),
    so phi is polar and theta azimuthal. The velocity is mapped through the
    Jacobian of that transform, with velocity.phi and velocity.theta taken
    as angular rates.

    Parameters
    ----------
    position : SphericalVector3
        (r, phi, theta)
    velocity : SphericalVector3
        (v_r, v_phi, v_theta)

    Returns
    -------
    tuple of CartesianVector3
        (position, velocity)
    """
    r, phi, theta = position._components
    v_r, v_phi, v_theta = velocity._components

    cos_theta = np.cos(theta)
    sin_theta = np.sin(theta)
    cos_phi = np.cos(phi)
    sin_phi = np.sin(phi)

    x = r * cos_theta * sin_phi
    y = r * sin_theta * sin_phi
    z = r * cos_phi

    vx = cos_theta * sin_phi * v_r - r * sin_theta * sin_phi * v_theta + r * cos_theta * cos_phi * v_phi
    vy = sin_theta * sin_phi * v_r + r * sin_phi * cos_theta * v_theta + r * sin_theta * cos_phi * v_phi
    vz = cos_phi * v_r - r * sin_phi * v_phi

    return CartesianVector3(x, y, z), CartesianVector3(vx, vy, vz)


def to_spherical(position: CartesianVector3, velocity: CartesianVector3):
    """
    Inverse of to_cartesian.

    Angles follow the same convention (phi polar in [0, pi], theta azimuthal
    in (-pi, pi]). At the origin both angles are reported as 0. Angular rates
    on the polar axis and all rates at the origin are non-finite.
    """
    x, y, z = position._components
    vx, vy, vz = velocity._components

    with np.errstate(divide='ignore', invalid='ignore'):
        r = np.sqrt(x * x + y * y + z * z)
        rho = np.sqrt(x * x + y * y)
        if r > 0:
            phi = np.arccos(np.clip(z / r, -1.0, 1.0))
        else:
            phi = 0.0
        theta = np.arctan2(y, x)

        v_r = (x * vx + y * vy + z * vz) / r
        v_phi = (z * v_r / r - vz) / rho
        v_theta = (x * vy - y * vx) / (rho * rho)

    return SphericalVector3(r, phi, theta), SphericalVector3(v_r, v_phi, v_theta)
