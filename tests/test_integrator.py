"""
Test suite for the leapfrog integrator.

Tests cover:
- Drift and kick building blocks
- Drift-kick-drift ordering of a step
- Time is left to the caller
- Determinism and time reversibility
- Long-term energy behaviour on a bound orbit
"""

import pytest
import numpy as np
from plummer import (G, PlummerSystem, ParticleState, SphericalVector3,
                     CartesianVector3, acceleration, drift, kick, step)


def specific_energy(state):
    """Kinetic plus Plummer potential energy per unit mass."""
    sys = state.system
    r2 = state.position.dot(state.position)
    return 0.5 * state.velocity.dot(state.velocity) - G * sys.M / np.sqrt(r2 + sys.a**2)


def circular_state(M=1.0, a=1.0, r=1.0):
    """Particle on a circular orbit in the x-y plane, built from spherical input."""
    v_circ = np.sqrt(G * M * r**2 / (r**2 + a**2) ** 1.5)
    return ParticleState.from_spherical(
        PlummerSystem(M=M, a=a),
        SphericalVector3(r, np.pi / 2, 0.0),
        SphericalVector3(0.0, 0.0, v_circ / r),
    )


def euler_step(state, dt):
    acc = state.system.acceleration(state.position)
    state.position = state.position + state.velocity * dt
    state.velocity = state.velocity + acc * dt


class TestBuildingBlocks:
    """Test drift and kick."""

    def test_drift(self):
        state = ParticleState(PlummerSystem(1.0, 1.0), [1.0, 2.0, 3.0], [0.5, -1.0, 2.0])
        drift(state, 0.2)
        assert state.position == CartesianVector3(1.1, 1.8, 3.4)
        assert state.velocity == CartesianVector3(0.5, -1.0, 2.0)

    def test_kick(self):
        sys = PlummerSystem(2.0, 0.5)
        state = ParticleState(sys, [1.0, 0.0, 0.0], [0.0, 1.0, 0.0])
        acc = acceleration(CartesianVector3(1.0, 0.0, 0.0), 2.0, 0.5)
        kick(state, 0.1)
        assert state.velocity == CartesianVector3(0.0, 1.0, 0.0) + acc * 0.1
        assert state.position == CartesianVector3(1.0, 0.0, 0.0)


class TestStep:
    """Test a full drift-kick-drift step."""

    def test_matches_manual_sequence(self):
        sys = PlummerSystem(1.0, 0.3)
        p0 = CartesianVector3(0.7, -0.2, 0.4)
        v0 = CartesianVector3(0.1, 0.9, -0.3)
        dt = 0.05

        p_half = p0 + v0 * (0.5 * dt)
        v1 = v0 + acceleration(p_half, 1.0, 0.3) * dt
        p1 = p_half + v1 * (0.5 * dt)

        state = ParticleState(sys, p0, v0)
        step(state, dt)
        assert np.array_equal(state.position.to_numpy(), p1.to_numpy())
        assert np.array_equal(state.velocity.to_numpy(), v1.to_numpy())

    def test_returns_same_object(self):
        state = circular_state()
        assert step(state, 0.01) is state

    def test_time_not_advanced(self):
        state = circular_state()
        state.time = 3.5
        step(state, 0.01)
        assert state.time == 3.5

    def test_deterministic(self):
        """Two steps from identical input give identical output."""
        first = circular_state()
        second = first.copy()
        step(first, 0.01)
        step(second, 0.01)
        assert np.array_equal(first.to_numpy(), second.to_numpy())

    def test_copy_is_independent(self):
        state = circular_state()
        snapshot = state.copy()
        step(state, 0.1)
        assert snapshot.position == circular_state().position

    def test_time_reversible(self):
        """Stepping forward then backward recovers the start."""
        state = ParticleState(PlummerSystem(1.0, 0.5), [1.0, 0.2, -0.3], [0.1, 0.6, 0.2])
        start = state.to_numpy()
        for _ in range(50):
            step(state, 0.02)
        for _ in range(50):
            step(state, -0.02)
        assert np.allclose(state.to_numpy(), start, rtol=1e-10, atol=1e-10)

    def test_free_particle_far_away(self):
        """Far from the sphere the particle moves in a straight line."""
        state = ParticleState(PlummerSystem(1e-12, 1.0), [1e3, 0.0, 0.0], [0.0, 1.0, 0.0])
        step(state, 2.0)
        assert np.allclose(state.position.to_numpy(), [1e3, 2.0, 0.0])


class TestEnergy:
    """Test long-term energy behaviour."""

    def test_circular_orbit_energy_conserved(self):
        state = circular_state(M=1.0, a=1.0, r=1.0)
        e0 = specific_energy(state)
        worst = 0.0
        for _ in range(1000):
            step(state, 0.01)
            worst = max(worst, abs((specific_energy(state) - e0) / e0))
        assert worst < 1e-4

    def test_eccentric_orbit_energy_bounded(self):
        sys = PlummerSystem(M=1.0, a=0.5)
        state = ParticleState(sys, [1.0, 0.0, 0.0], [0.0, 0.5, 0.1])
        e0 = specific_energy(state)
        energies = []
        for _ in range(5000):
            step(state, 0.005)
            energies.append(specific_energy(state))
        errors = np.abs((np.array(energies) - e0) / e0)
        assert errors.max() < 1e-2
        # No secular growth: the late error is not much larger than the early one
        assert errors[-1000:].max() < 5 * errors[:1000].max() + 1e-6

    def test_euler_drifts_where_leapfrog_does_not(self):
        euler = circular_state()
        leap = circular_state()
        e0 = specific_energy(euler)
        for _ in range(1000):
            euler_step(euler, 0.01)
            step(leap, 0.01)
        assert abs((specific_energy(euler) - e0) / e0) > 1e-3
        assert abs((specific_energy(leap) - e0) / e0) < 1e-4

    def test_circular_radius_maintained(self):
        state = circular_state(M=1.0, a=1.0, r=1.0)
        for _ in range(1000):
            step(state, 0.01)
        assert state.position.norm() == pytest.approx(1.0, rel=1e-3)
