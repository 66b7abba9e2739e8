"""Pygame viewer for formica snapshots.

Draws one ``Snapshot`` per frame: the pheromone grid as a translucent
overlay, matrix trails as lines whose width follows pheromone strength,
nodes, ants and (for the tour variant) the best route.  The engine steps
at a fixed tick rate while the display refreshes at the frame rate.

The viewer is read-only: it never edits the simulation and only reacts
to the window being closed.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np
import pygame

if TYPE_CHECKING:
    from formica.simulation.engine import SimulationEngine
    from formica.simulation.snapshot import Snapshot

from formica.colony.ant import Task

# Colour palette
_BG = (30, 20, 10)
_DEPOT = (180, 120, 60)
_NODE_EMPTY = (90, 90, 90)
_NODE_LABEL = (230, 230, 230)
_EDGE = (120, 160, 255)
_BEST = (255, 90, 90)
_TEXT = (200, 200, 200)

_ANT_COLOURS: dict[Task, tuple[int, int, int]] = {
    Task.EXPLORING: (100, 150, 255),
    Task.SEARCHING: (100, 200, 100),
    Task.CARRYING: (255, 200, 50),
}

# Node fill (dark green -> bright green by richness)
_FOOD_LO = np.array([20, 60, 10], dtype=np.float64)
_FOOD_HI = np.array([50, 200, 30], dtype=np.float64)

# Grid pheromone colour (cyan glow)
_TRAIL_COLOUR = (0, 180, 255)


class PygameRenderer:
    """Renders a SimulationEngine into a Pygame window.

    Attributes:
        engine: The simulation engine to visualise.
        ticks_per_second: Engine steps per real-time second.
        screen: The Pygame display surface.
    """

    def __init__(
        self,
        engine: SimulationEngine,
        ticks_per_second: float = 10.0,
    ) -> None:
        """Initialise the renderer.

        Args:
            engine: The simulation engine to render.
            ticks_per_second: Simulation ticks per real-time second.
        """
        self.engine = engine
        self.ticks_per_second = ticks_per_second
        self._tick_accumulator = 0.0

        self._world_w = int(engine.environment.width)
        self._world_h = int(engine.environment.height)
        self._panel_width = 220

        pygame.init()
        self.screen = pygame.display.set_mode(
            (self._world_w + self._panel_width, self._world_h),
        )
        pygame.display.set_caption("formica")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True

    def run(self, fps: int = 30) -> None:
        """Main loop: handle the close event, step the engine, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            dt = self.clock.tick(fps) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
            self._tick_accumulator += self.ticks_per_second * dt
            steps = int(self._tick_accumulator)
            self._tick_accumulator -= steps
            for _ in range(steps):
                self.engine.step()
            self.draw(self.engine.snapshot())

        pygame.quit()

    def draw(self, snap: Snapshot) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        if snap.grid is not None:
            self._draw_grid(snap)
        self._draw_edges(snap)
        if snap.best_route is not None:
            self._draw_best_route(snap)
        self._draw_nodes(snap)
        self._draw_ants(snap)
        self._draw_info_panel(snap)
        pygame.display.flip()

    def _draw_grid(self, snap: Snapshot) -> None:
        """Draw grid pheromone as a translucent overlay."""
        grid = snap.grid
        assert grid is not None
        max_val = float(grid.max()) if grid.size else 0.0
        if max_val <= 0:
            return

        cs = snap.grid_cell_size
        size = max(1, int(round(cs)))
        overlay = pygame.Surface((self._world_w, self._world_h), pygame.SRCALPHA)
        rows, cols = np.nonzero(grid > 0.01)
        for r, c in zip(rows, cols, strict=True):
            alpha = int(min(grid[r, c] / max_val, 1.0) * 120)
            pygame.draw.rect(
                overlay,
                (*_TRAIL_COLOUR, alpha),
                (int(c * cs), int(r * cs), size, size),
            )
        self.screen.blit(overlay, (0, 0))

    def _draw_edges(self, snap: Snapshot) -> None:
        """Draw matrix trails, thicker where pheromone is stronger.

        For the foraging variant index 0 is the depot.
        """
        matrix = snap.matrix
        n = matrix.shape[0]
        if n < 2:
            return
        points = [(v.x, v.y) for v in snap.nodes]
        if snap.depot is not None:
            points = [(snap.depot.x, snap.depot.y), *points]
        off_diagonal = matrix[~np.eye(n, dtype=bool)]
        max_val = float(off_diagonal.max())
        if max_val <= 0:
            return
        for i in range(min(n, len(points))):
            for j in range(i + 1, min(n, len(points))):
                strength = matrix[i, j] / max_val
                if strength < 0.05:
                    continue
                width = max(1, int(strength * 5))
                pygame.draw.line(self.screen, _EDGE, points[i], points[j], width)

    def _draw_best_route(self, snap: Snapshot) -> None:
        route = snap.best_route
        assert route is not None
        points = [
            (snap.nodes[i].x, snap.nodes[i].y) for i in route if i < len(snap.nodes)
        ]
        if len(points) > 1:
            pygame.draw.lines(self.screen, _BEST, False, points, 3)

    def _draw_nodes(self, snap: Snapshot) -> None:
        """Draw the depot and every node, green by remaining resource."""
        if snap.depot is not None:
            centre = (int(snap.depot.x), int(snap.depot.y))
            pygame.draw.circle(self.screen, _DEPOT, centre, 12)
        for node in snap.nodes:
            centre = (int(node.x), int(node.y))
            if node.capacity > 0:
                t = node.amount / node.capacity
                colour = (_FOOD_LO + t * (_FOOD_HI - _FOOD_LO)).astype(int).tolist()
                radius = 6 + int(6 * t)
            else:
                colour = _NODE_EMPTY
                radius = 6
            pygame.draw.circle(self.screen, colour, centre, radius)
            label = self.font.render(str(node.node_id), True, _NODE_LABEL)
            self.screen.blit(label, (centre[0] + 8, centre[1] - 8))

    def _draw_ants(self, snap: Snapshot) -> None:
        """Draw each ant as a small coloured dot."""
        for ant in snap.ants:
            colour = _ANT_COLOURS.get(ant.task, (200, 200, 200))
            pygame.draw.circle(self.screen, colour, (int(ant.x), int(ant.y)), 3)

    def _draw_info_panel(self, snap: Snapshot) -> None:
        """Draw a stats panel on the right side of the window."""
        panel_x = self._world_w + 10
        y = 10
        stats = snap.stats

        lines = [
            f"Variant: {snap.variant}",
            f"Tick: {snap.tick}",
            f"Speed: {self.ticks_per_second:.1f} t/s",
            stats.state.upper(),
            "",
            f"Nodes: {stats.node_count}",
            f"Ants: {stats.ant_count}",
        ]
        if snap.variant == "tour":
            best = "-"
            if math.isfinite(stats.best_distance):
                best = f"{stats.best_distance:.1f}"
            lines += [
                f"Generation: {stats.generation}",
                f"Best: {best}",
            ]
        else:
            task_counts: dict[str, int] = {}
            for ant in snap.ants:
                name = ant.task.name
                task_counts[name] = task_counts.get(name, 0) + 1
            lines.append(f"Delivered: {stats.delivered:.1f}")
            lines.append("")
            for task_name, count in sorted(task_counts.items()):
                lines.append(f"  {task_name}: {count}")

        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18
