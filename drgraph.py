"""Seeded bucket-sampled dependency graph used to produce replication witnesses."""
from params import DEFAULT_GRAPH_SEED  # default sampling seed
from transcript import Blake2bTranscript  # deterministic parent sampling


class Graph:  # DAG over n nodes where every node has exactly m parents.
    def __init__(self, n, m, seed=DEFAULT_GRAPH_SEED):
        n, m = int(n), int(m)
        if n < 2:
            raise ValueError("graph needs at least 2 nodes")
        if m < 1:
            raise ValueError("degree must be >= 1")
        self.n = n
        self.m = m
        self.seed = bytes(seed)
        self._parents = [self._sample(node) for node in range(n)]

    def _sample(self, node):  # Node 0 points at itself; node v > 0 draws from [0, v).
        if node == 0:
            return [0] * self.m
        t = Blake2bTranscript.new(b"drgporep_graph")
        t.append_bytes(b"seed", self.seed)
        t.append_u64(b"node", node)
        return [t.challenge_index(node) for _ in range(self.m)]

    def size(self): return self.n

    def degree(self): return self.m

    def parents(self, node):  # Ordered parent list; order feeds the KDF.
        node = int(node)
        if not 0 <= node < self.n:
            raise IndexError("node out of range")
        return list(self._parents[node])
