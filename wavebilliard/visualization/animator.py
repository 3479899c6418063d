from typing import Optional, List, Any
import numpy as np
import plotly.graph_objects as go

from wavebilliard.config import FieldFamily
from wavebilliard.simulation import Frame, Simulation


class PhysicsAnimator:
    """
    Interactive visualization of a billiard simulation.

    Runs the frame loop and generates a Plotly heatmap animation with
    probe markers.

    Parameters
    ----------
    simulation : Simulation
        Configured simulation.
    n_frames : int
        Number of frames to produce.

    Attributes
    ----------
    history : list of np.ndarray
        Displayed field of each frame, NaN outside the billiard.
    time_steps : list of int
        Corresponding frame numbers.
    x_axis, y_axis : np.ndarray
        Coordinate arrays for plotting.
    """

    def __init__(self, simulation: Simulation, n_frames: int) -> None:
        self.simulation = simulation
        self.n_frames = n_frames

        self.history: List[np.ndarray] = []
        self.time_steps: List[int] = []

        self.x_axis = simulation.geometry.x
        self.y_axis = simulation.geometry.y

    def render(self, frame: Frame) -> np.ndarray:
        """
        Displayed values of one frame.

        Wave fields show ``phi``, Schrödinger fields the probability density
        ``phi² + psi²``; both divided by the frame's scale.
        """
        if self.simulation.config.family == FieldFamily.SCHRODINGER:
            values = (frame.phi**2 + frame.psi**2) / frame.scale
        else:
            values = frame.phi / frame.scale
        values = np.array(values, dtype=float)
        values[~frame.mask.inside] = np.nan
        return values

    def run(self) -> None:
        """Execute the simulation and store the displayed field history."""
        for frame in self.simulation.run(self.n_frames):
            self.history.append(self.render(frame))
            self.time_steps.append(frame.time_index)

    def create_animation(
        self,
        skip_frames: int = 1,
        skip_spatial: int = 4,
        filename: Optional[str] = None
    ) -> Optional[go.Figure]:
        """
        Generate an interactive Plotly animation.

        Parameters
        ----------
        skip_frames : int, default=1
            Temporal subsampling factor.
        skip_spatial : int, default=4
            Spatial subsampling factor.
        filename : str, optional
            If provided, saves the animation as an HTML file.

        Returns
        -------
        go.Figure or None
            Plotly figure with animation controls, or None if no data.
        """
        if not self.history:
            print("No data! Run .run() first.")
            return None

        display_data = self.history[::skip_frames]
        s_slice = slice(None, None, skip_spatial)

        stack = np.array(display_data)
        if np.all(np.isnan(stack)):
            global_min, global_max = -1.0, 1.0
            print("Warning: No cell inside the billiard.")
        else:
            global_min = float(np.nanmin(stack))
            global_max = float(np.nanmax(stack))
            if global_max == global_min:
                global_max += 1.0
                global_min -= 1.0
                print("Warning: Simulation appears to be flat (min == max).")
            else:
                print(f"Dynamic Scale Found: [{global_min:.2e}, {global_max:.2e}]")

        print(f'Animating {len(display_data)} frames (Spatial stride: {skip_spatial})...')

        def process(frame: np.ndarray) -> np.ndarray:
            # heatmap rows are y
            return frame[s_slice, s_slice].T

        x_plot = self.x_axis[s_slice]
        y_plot = self.y_axis[s_slice]

        initial_data: List[Any] = [go.Heatmap(
            x=x_plot, y=y_plot, z=process(display_data[0]),
            colorscale='RdBu', zmin=global_min, zmax=global_max,
            name="Field"
        )]

        probes = self.simulation.probes
        if probes:
            initial_data.append(go.Scatter(
                x=[p.pos[0] for p in probes], y=[p.pos[1] for p in probes],
                mode="markers", name="Probe",
                marker=dict(color='black', size=10, symbol='x')
            ))

        frames: List[go.Frame] = []
        for i, raw_frame in enumerate(display_data):
            frames.append(go.Frame(data=[go.Heatmap(z=process(raw_frame))], traces=[0], name=f"f{i}"))

        g = self.simulation.geometry
        layout_settings = go.Layout(
            title=f"{self.simulation.stepper.name} billiard (Range: {global_min:.2e} to {global_max:.2e})",
            xaxis=dict(title="x", range=[g.xmin, g.xmax]),
            yaxis=dict(title="y", range=[g.ymin, g.ymax], scaleanchor="x"),
            template="plotly_white"
        )

        updatemenus = [dict(
            type="buttons", showactive=False,
            x=0.1, y=0, xanchor="right", yanchor="top", pad=dict(t=0, r=10),
            buttons=[
                dict(label="▶ Play", method="animate",
                     args=[None, dict(frame=dict(duration=40, redraw=True), fromcurrent=True)]),
                dict(label="|| Pause", method="animate",
                     args=[[None], dict(frame=dict(duration=0, redraw=False), mode="immediate", transition=dict(duration=0))])
            ]
        )]

        layout_settings.updatemenus = updatemenus
        fig = go.Figure(data=initial_data, layout=layout_settings)
        fig.frames = frames

        if filename:
            fig.write_html(filename)
            print(f"Animation saved to {filename}")

        return fig
