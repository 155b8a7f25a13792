from numbers import Integral

from route_sim.domain.entities.geography import Point, Pt, to_point
from route_sim.domain.entities.graph import GraphModel
from route_sim.domain.mechanics.mechanics_geospace import haversine_km

# Bulawayo city centre, the planner's default map view
DEFAULT_CENTER = Point(-20.15, 28.5833)
DEFAULT_GRID_SIZE = 15
DEFAULT_CELL_SIZE = 0.005


class GridGraphGenerator:
    """
    Synthetic N x N lattice over a lat/lng box, used when no road graph exists.

    Node ids are row-major (row * N + col). Each node links to its right and
    bottom neighbours, so the lattice is 4-connected with 2N(N-1) edges.
    """

    def generate(
        self,
        center: Pt = DEFAULT_CENTER,
        grid_size: int = DEFAULT_GRID_SIZE,
        cell_size: float = DEFAULT_CELL_SIZE,
    ) -> GraphModel:
        if isinstance(grid_size, bool) or not isinstance(grid_size, Integral):
            raise ValueError(f"grid_size must be an integer, got {grid_size!r}")
        if grid_size < 1:
            raise ValueError(f"grid_size must be >= 1, got {grid_size}")
        if cell_size <= 0:
            raise ValueError(f"cell_size must be > 0, got {cell_size}")
        c = to_point(center)
        n = int(grid_size)
        G = GraphModel()
        for row in range(n):
            for col in range(n):
                G.add_node(
                    row * n + col,
                    Point(c.lat + (row - n / 2) * cell_size, c.lng + (col - n / 2) * cell_size),
                )
        for row in range(n):
            for col in range(n):
                u = row * n + col
                pu = G.node_point(u)
                if col < n - 1:
                    G.add_edge(u, u + 1, haversine_km(pu, G.node_point(u + 1)))
                if row < n - 1:
                    G.add_edge(u, u + n, haversine_km(pu, G.node_point(u + n)))
        return G
