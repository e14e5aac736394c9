"""
Second-order symplectic (leapfrog) integrator for a test particle.

A step is split drift-kick-drift: half a step of free motion, a full
velocity update with the acceleration evaluated at the midpoint position,
then the remaining half step of free motion with the updated velocity. The
scheme is time-reversible and symplectic, so the energy error of a bound
orbit stays bounded instead of drifting secularly.

The functions mutate the ParticleState they are given and never touch
state.time; advancing time is the caller's job.
"""

from .particle import ParticleState


def drift(state: ParticleState, dt: float) -> ParticleState:
    """Advance position by dt at constant velocity."""
    state.position = state.position + state.velocity * dt
    return state


def kick(state: ParticleState, dt: float) -> ParticleState:
    """Advance velocity by dt using the acceleration at the current position."""
    acc = state.system.acceleration(state.position)
    state.velocity = state.velocity + acc * dt
    return state


def step(state: ParticleState, dt: float) -> ParticleState:
    """
    Advance the particle by one fixed time step.

    Parameters
    ----------
    state : ParticleState
        Particle to advance (modified in place)
    dt : float
        Time step

    Returns
    -------
    ParticleState
        The same state object, for chaining
    """
    hdt = 0.5 * dt
    drift(state, hdt)
    kick(state, dt)
    drift(state, hdt)
    return state
