"""
Matplotlib frame plots of a scene's current node positions.

Used as the headless "render now" collaborator: `plot_frame` draws one frame,
`FrameRecorder` saves frames as PNG files while a transition runs.
"""

from __future__ import annotations

import os
from typing import Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from morph_core.compiler import NodeRecord  # noqa: E402
from morph_core.context import SceneContext  # noqa: E402
from morph_core.transform import rotation_matrix  # noqa: E402

NODE_COLOR = (50 / 255, 50 / 255, 1.0, 0.6)


def plot_frame(context: SceneContext, path: Optional[str] = None, ax=None, title: str = "", limit: float = 2500.0):
    """Draw node positions and facing directions on a 3D axis.

    Args:
        context: Scene to draw
        path: Save the figure as PNG here when given
        ax: Existing 3D axis to draw into; a new figure is created otherwise
        title: Optional axis title
        limit: Half-width of the plotted cube

    Returns:
        The matplotlib axis drawn into
    """
    fig = None
    if ax is None:
        fig = plt.figure(figsize=(8, 8))
        ax = fig.add_subplot(111, projection="3d")

    if context.node_count:
        pts = np.array([t.position for t in context.current])
        # scene z is depth; plot it on the horizontal axis so y stays up
        ax.scatter(pts[:, 0], pts[:, 2], pts[:, 1], s=40, color=NODE_COLOR, depthshade=False)
        facing = np.array([rotation_matrix(t.orientation)[:, 2] for t in context.current]) * (limit * 0.05)
        ax.quiver(pts[:, 0], pts[:, 2], pts[:, 1], facing[:, 0], facing[:, 2], facing[:, 1], color="grey", linewidth=0.8)
        for i, p in enumerate(pts):
            rec = context.record(i)
            label = rec.symbol if isinstance(rec, NodeRecord) else str(i + 1)
            ax.text(p[0], p[2], p[1], label, fontsize=7)

    ax.set_xlim(-limit, limit)
    ax.set_ylim(-limit, limit)
    ax.set_zlim(-limit, limit)
    ax.set_xlabel("x")
    ax.set_ylabel("z")
    ax.set_zlabel("y")
    if title:
        ax.set_title(title)

    if path:
        (fig if fig is not None else ax.figure).savefig(path, dpi=80)
    if fig is not None:
        plt.close(fig)
    return ax


class FrameRecorder:
    """Clock hook saving every `every`-th frame of a scene to `directory`."""

    def __init__(self, context: SceneContext, directory: str, every: int = 1, prefix: str = "frame"):
        if every < 1:
            raise ValueError("every must be at least 1")
        self.context = context
        self.directory = directory
        self.every = every
        self.prefix = prefix
        self.frames_seen = 0
        self.saved = []
        os.makedirs(directory, exist_ok=True)

    def save(self, title: str = "") -> str:
        path = os.path.join(self.directory, f"{self.prefix}_{len(self.saved):05d}.png")
        plot_frame(self.context, path, title=title)
        self.saved.append(path)
        return path

    def __call__(self, dt_ms: float) -> None:
        if self.frames_seen % self.every == 0:
            self.save()
        self.frames_seen += 1
