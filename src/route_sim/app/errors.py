# route_sim/app/errors.py


class InvalidRequestError(ValueError):
    """Request rejected before any solver ran (bad node id, start == end, unknown algorithm)."""


class ScaleLimitError(ValueError):
    """Node count exceeds the ceiling configured for an exponential algorithm."""

    def __init__(self, algorithm: str, nodes: int, limit: int):
        super().__init__(f"{algorithm} is limited to {limit} nodes, graph has {nodes}")
        self.algorithm, self.nodes, self.limit = algorithm, nodes, limit
