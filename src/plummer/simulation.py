'''Test-particle integration in a Plummer potential
Simulation driver: run parameters and the time loop'''

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union, TYPE_CHECKING
from .config import config
from .integrator import step
from .output import SnapshotWriter
from .particle import ParticleState
from .utils import validation_error
if TYPE_CHECKING:
    from .config_reader import RunConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunParameters:
    """
    Immutable parameters of one integration run.

    Attributes
    ----------
    end_time : float
        The loop stops once the particle time reaches this value
    time_step : float
        Fixed integration step, must be positive
    output_interval : float
        Minimum time between two snapshots, must be positive
    output_file : str or Path
        Snapshot file, truncated at the start of the run
    """
    end_time: float
    time_step: float
    output_interval: float
    output_file: Union[str, Path]

    def __post_init__(self):
        #Validate parameters
        if not self.time_step > 0:
            raise ValueError(f"Time step must be positive, got {self.time_step}")
        if not self.output_interval > 0:
            raise ValueError(f"Output interval must be positive, "
                             f"got {self.output_interval}")


def _report_non_finite(state: ParticleState, what: str) -> bool:
    if state.is_finite():
        return False
    validation_error(
        f"Particle state {what} at t={state.time}: "
        f"position={state.position}, velocity={state.velocity}",
        FloatingPointError
    )
    return True


def evolve(state: ParticleState, params: RunParameters) -> None:
    """
    Integrate a particle until params.end_time, writing snapshots.

    Each loop iteration first writes a snapshot if state.time has reached
    the output cursor, then advances the particle by one step and the time
    by time_step. When a snapshot is written the cursor moves to
    state.time + output_interval, so when time_step does not divide
    output_interval the output times drift from multiples of the interval.

    Parameters
    ----------
    state : ParticleState
        Particle to integrate (modified in place)
    params : RunParameters
        Run parameters

    Raises
    ------
    OutputError
        If the output file cannot be opened; no step is taken in that case
    FloatingPointError
        If config.CHECK_FINITE and config.STRICT_VALIDATION are set and the
        state is non-finite at the start or becomes non-finite after a step
    """
    # Fail before touching the state if the sink is unusable
    with SnapshotWriter(params.output_file) as writer:
        logger.info("Integrating %s from t=%g to t=%g with dt=%g",
                    state.system, state.time, params.end_time, params.time_step)
        next_output_time = 0.0
        reported = config.CHECK_FINITE and _report_non_finite(state, "is non-finite")
        while state.time < params.end_time:
            if state.time >= next_output_time:
                writer.write(state)
                logger.debug("Snapshot at t=%r", state.time)
                next_output_time = state.time + params.output_interval

            step(state, params.time_step)
            state.time += params.time_step

            # Report once; NaN stays NaN for the rest of the run
            if config.CHECK_FINITE and not reported:
                reported = _report_non_finite(state, "became non-finite")
        logger.info("Wrote %d snapshots to %s", writer.count, writer.path)


def run(run_config: "RunConfig") -> ParticleState:
    """
    Run a full integration described by a RunConfig.

    Converts the spherical initial conditions, builds the particle state
    and run parameters, and calls evolve().

    Returns
    -------
    ParticleState
        The final state of the particle
    """
    state = ParticleState.from_spherical(run_config.system(),
                                         run_config.initial_position(),
                                         run_config.initial_velocity())
    logger.debug("Initial Cartesian state: %r", state)
    evolve(state, run_config.run_parameters())
    return state
