from dataclasses import dataclass  # proof container

from field import Fr  # leaf values and node hashes
from params import LEAF_SIZE  # default leaf width
from pedersen import hash_leaf, hash_node  # leaf/node commitments


class MerkleProof:  # Authentication path from a leaf hash to the root.
    def __init__(self, leaf, path, root):  # path: [(sibling, cur_is_right)] from the leaf level upward.
        self.leaf = leaf
        self.path = [(s, bool(r)) for s, r in path]
        self._root = root

    def root(self): return self._root

    def __len__(self): return len(self.path)

    def index(self):  # Leaf index encoded by the direction bits (little-endian).
        return sum(int(is_right) << i for i, (_, is_right) in enumerate(self.path))

    def compute_root(self):  # Fold the path over the leaf hash.
        cur = self.leaf
        for level, (sibling, is_right) in enumerate(self.path):
            cur = hash_node(level, sibling, cur) if is_right else hash_node(level, cur, sibling)
        return cur

    def validate(self): return self.compute_root() == self._root

    def validate_data(self, value, lambda_=LEAF_SIZE): return hash_leaf(value, lambda_) == self.leaf  # Leaf hash matches data.

    def as_options(self): return list(self.path)  # Circuit-facing [(sibling, cur_is_right)].


@dataclass(frozen=True)
class DataProof:  # A leaf value plus its inclusion proof.
    data: Fr
    proof: MerkleProof

    def validate(self, lambda_=LEAF_SIZE):
        return self.proof.validate() and self.proof.validate_data(self.data, lambda_)


class MerkleTree:  # Binary Merkle tree over Pedersen leaf commitments; odd levels duplicate their last node.
    def __init__(self, values, lambda_=LEAF_SIZE):
        values = list(values)
        if not values:
            raise ValueError("tree must have at least one leaf")
        self.lambda_ = int(lambda_)
        self.values = [v if isinstance(v, Fr) else Fr(v) for v in values]
        self.levels = [[hash_leaf(v, self.lambda_) for v in self.values]]
        level = self.levels[0]
        while len(level) > 1:
            depth = len(self.levels) - 1
            nxt = []
            for i in range(0, len(level), 2):
                left = level[i]
                right = level[i + 1] if i + 1 < len(level) else left
                nxt.append(hash_node(depth, left, right))
            self.levels.append(nxt)
            level = nxt

    def __len__(self): return len(self.values)

    def height(self): return len(self.levels) - 1  # Path length of every proof.

    def root(self): return self.levels[-1][0]

    def gen_proof(self, index):  # Build the authentication path for leaf `index`.
        index = int(index)
        if not 0 <= index < len(self.values):
            raise IndexError("leaf index out of range")
        path = []
        idx = index
        for layer in self.levels[:-1]:
            sib = idx ^ 1
            sibling = layer[sib] if sib < len(layer) else layer[idx]
            path.append((sibling, idx & 1 == 1))
            idx //= 2
        return MerkleProof(self.levels[0][index], path, self.root())

    def gen_data_proof(self, index): return DataProof(self.values[int(index)], self.gen_proof(index))
