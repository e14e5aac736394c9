'''Test-particle integration in a Plummer potential
Trajectory class definition'''

import numpy as np
import pandas as pd
import plotly.graph_objects as go
from pathlib import Path
from typing import Optional, Union
from .config import config
from .output import COLUMNS
from .particle import ParticleState
from .system import PlummerSystem

class Trajectory:
    """
    A sequence of snapshots of a test particle.

    Usually loaded from an output file written by evolve(); the time,
    position and velocity columns are held as read-only numpy arrays.

    Attributes:
        times: Snapshot times, shape (n,)
        positions: Cartesian positions, shape (n, 3)
        velocities: Cartesian velocities, shape (n, 3)
        system: Plummer system the particle moved in (optional)
    """
    # ========== CONSTRUCTION ==========
    def __init__(self, times, positions, velocities,
                 system: Optional[PlummerSystem] = None):
        # Copies, so freezing them leaves the caller's arrays untouched
        times = np.array(times, dtype=float).reshape(-1)
        positions = np.array(positions, dtype=float).reshape(-1, 3)
        velocities = np.array(velocities, dtype=float).reshape(-1, 3)
        if not (len(times) == len(positions) == len(velocities)):
            raise ValueError(
                f"Column lengths differ: {len(times)} times, "
                f"{len(positions)} positions, {len(velocities)} velocities"
            )
        for array in (times, positions, velocities):
            array.flags.writeable = False
        self._times = times
        self._positions = positions
        self._velocities = velocities
        self._system = system

    @classmethod
    def from_file(cls, path: Union[str, Path],
                  system: Optional[PlummerSystem] = None) -> "Trajectory":
        """
        Load a snapshot file written by evolve().

        Parameters:
            path: Output file with 'time x y z vx vy vz' lines
            system: Plummer system to attach (needed for state_at)
        """
        try:
            df = pd.read_csv(path, sep=r'\s+', header=None,
                             names=list(COLUMNS), dtype=float)
        except pd.errors.EmptyDataError:
            df = pd.DataFrame(columns=list(COLUMNS), dtype=float)
        return cls.from_dataframe(df, system=system)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame,
                       system: Optional[PlummerSystem] = None) -> "Trajectory":
        """Create a Trajectory from a DataFrame with the output columns."""
        missing = [col for col in COLUMNS if col not in df.columns]
        if missing:
            raise ValueError(f"DataFrame is missing columns: {missing}")
        return cls(df['time'].to_numpy(),
                   df[['x', 'y', 'z']].to_numpy(),
                   df[['vx', 'vy', 'vz']].to_numpy(),
                   system=system)

    # ========== PROPERTY ACCESS ==========
    @property
    def system(self) -> Optional[PlummerSystem]:
        return self._system

    @property
    def times(self) -> np.ndarray:
        return self._times

    @property
    def positions(self) -> np.ndarray:
        return self._positions

    @property
    def velocities(self) -> np.ndarray:
        return self._velocities

    @property
    def t0(self):
        return float(self._times[0]) if len(self) else None

    @property
    def tf(self):
        return float(self._times[-1]) if len(self) else None

    @property
    def duration(self):
        """Time spanned by the snapshots."""
        return self.tf - self.t0 if len(self) else 0.0

    # ========== UTILITY METHODS ==========
    def state_at(self, index: int) -> ParticleState:
        """
        Rebuild the particle state of one snapshot.

        Raises:
            ValueError: If no system is attached
            IndexError: If index is out of range
        """
        if self._system is None:
            raise ValueError("Trajectory has no system; pass system= to rebuild states")
        return ParticleState(self._system, self._positions[index],
                             self._velocities[index], self._times[index])

    def radii(self) -> np.ndarray:
        """Distance from the centre of the Plummer sphere at each snapshot."""
        return np.linalg.norm(self._positions, axis=1)

    def speeds(self) -> np.ndarray:
        return np.linalg.norm(self._velocities, axis=1)

    def to_dataframe(self) -> pd.DataFrame:
        """
        Export trajectory to pandas DataFrame.

        Returns:
            DataFrame with columns time, x, y, z, vx, vy, vz
        """
        data = {
            'time': self._times,
            'x': self._positions[:, 0],
            'y': self._positions[:, 1],
            'z': self._positions[:, 2],
            'vx': self._velocities[:, 0],
            'vy': self._velocities[:, 1],
            'vz': self._velocities[:, 2],
        }
        return pd.DataFrame(data)

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        return len(self._times)

    def __getitem__(self, index) -> ParticleState:
        return self.state_at(index)

    def __repr__(self):
        return (f"Trajectory(n={len(self)}, t0={self.t0}, tf={self.tf}, "
                f"system={self._system!r})")

    # ========== PLOTTING ==========
    def plot_3d(self, show_core: bool = True,
                traj_color: Optional[str] = None,
                body_color: Optional[str] = None,
                body_opacity: Optional[float] = None) -> go.Figure:
        """
        Create 3D plot of the orbit with an optional Plummer core sphere.

        Parameters:
            show_core: Draw a sphere of radius a at the origin (default: True).
                Skipped when no system is attached or a = 0.
            traj_color: Color of trajectory line (default: config.DEFAULT_TRAJ_COLOR)
            body_color: Color of core sphere (default: config.DEFAULT_BODY_COLOR)
            body_opacity: Opacity of core sphere (default: config.DEFAULT_BODY_OPACITY)

        Returns:
            Plotly Figure object
        """
        traj_color = traj_color or config.DEFAULT_TRAJ_COLOR
        body_color = body_color or config.DEFAULT_BODY_COLOR
        if body_opacity is None:
            body_opacity = config.DEFAULT_BODY_OPACITY

        fig = go.Figure()

        if show_core and self._system is not None and self._system.a > 0:
            self._add_sphere_to_plot(
                fig,
                center=(0, 0, 0),
                radius=self._system.a,
                color=body_color,
                opacity=body_opacity,
                name="Plummer core (r = a)"
            )

        fig.add_trace(go.Scatter3d(
            x=self._positions[:, 0],
            y=self._positions[:, 1],
            z=self._positions[:, 2],
            mode='lines',
            line=dict(color=traj_color, width=3),
            name='Trajectory',
            hovertemplate='x: %{x:.6f}<br>y: %{y:.6f}<br>z: %{z:.6f}<extra></extra>'
        ))

        title = 'Orbit in Plummer Potential'
        if self._system is not None:
            title += f' (M={self._system.M:g}, a={self._system.a:g})'
        fig.update_layout(
            scene=dict(
                xaxis_title='X',
                yaxis_title='Y',
                zaxis_title='Z',
                aspectmode='data'
            ),
            title=title,
            showlegend=True
        )

        return fig

    def _add_sphere_to_plot(self, fig, center, radius, color, opacity, name):
        """Helper to add a sphere to the plot at specified center."""
        u = np.linspace(0, 2 * np.pi, 30)
        v = np.linspace(0, np.pi, 20)

        x = center[0] + radius * np.outer(np.cos(u), np.sin(v))
        y = center[1] + radius * np.outer(np.sin(u), np.sin(v))
        z = center[2] + radius * np.outer(np.ones(np.size(u)), np.cos(v))

        fig.add_trace(go.Surface(
            x=x, y=y, z=z,
            colorscale=[[0, color], [1, color]],
            showscale=False,
            opacity=opacity,
            name=name,
            hoverinfo='name'
        ))

    def add_to_plot(self, fig: go.Figure, color: Optional[str] = None,
                    name: Optional[str] = None, **kwargs) -> go.Figure:
        """
        Add this trajectory to an existing Plotly figure.

        Parameters:
            fig: Existing Plotly Figure object
            color: Color of trajectory line (default: config.DEFAULT_TRAJ_COLOR_ADD)
            name: Legend name for this trajectory (default: 'Trajectory N')
            **kwargs: Additional arguments passed to Scatter3d

        Returns:
            Updated Plotly Figure object (same object, modified in place)
        """
        color = color or config.DEFAULT_TRAJ_COLOR_ADD

        # Default name if not provided
        if name is None:
            n_existing = sum(1 for trace in fig.data if isinstance(trace, go.Scatter3d))
            name = f'Trajectory {n_existing + 1}'

        fig.add_trace(go.Scatter3d(
            x=self._positions[:, 0],
            y=self._positions[:, 1],
            z=self._positions[:, 2],
            mode='lines',
            line=dict(color=color, width=3),
            name=name,
            hovertemplate='x: %{x:.4f}<br>y: %{y:.4f}<br>z: %{z:.4f}<extra></extra>',
            **kwargs
        ))

        return fig
