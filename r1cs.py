"""Rank-1 constraint-system substrate: variables, linear combinations, and assembly backends.

A constraint `(a, b, c)` asserts `<a, z> * <b, z> = <c, z>` where `z` is the full
assignment (inputs then aux). Backends differ only in whether witness thunks are run.
"""
from dataclasses import dataclass  # hashable variable handles
from enum import StrEnum  # assembly mode tag

from field import Fr  # BLS12-381 scalar field

INPUT = "input"  # Public input column.
AUX = "aux"  # Private witness column.


class SynthesisError(Exception):  # Raised when circuit assembly cannot proceed.
    pass


class AssignmentMissing(SynthesisError):  # A witness value was required but not supplied.
    pass


class ShapeError(SynthesisError):  # Inputs do not fit the requested circuit shape.
    pass


class DivisionByZero(SynthesisError):  # A witness computation divided by zero.
    pass


class AssemblyMode(StrEnum):  # Whether allocation evaluates witness thunks.
    ShapeOnly = "shape_only"
    Witnessed = "witnessed"


@dataclass(frozen=True, slots=True)
class Variable:  # Column handle: (kind, index).
    kind: str
    index: int


ONE = Variable(INPUT, 0)  # Constant-one input column.


def assigned(value):  # Unwrap an optional witness value or raise AssignmentMissing.
    if value is None:
        raise AssignmentMissing("assignment missing")
    return value


def _coeff(c):  # Normalize an int/bool/Fr coefficient to Fr.
    return c if isinstance(c, Fr) else Fr(int(c))


class LC:  # Linear combination sum(coeff_i * var_i).
    __slots__ = ("terms",)

    def __init__(self, terms=()):  # terms: iterable of (Variable, Fr|int).
        self.terms = tuple((v, _coeff(c)) for v, c in terms)

    zero = classmethod(lambda cls: cls())  # Empty combination.

    @classmethod
    def of(cls, var, coeff=1):  # Single-term combination.
        return cls(((var, coeff),))

    @staticmethod
    def _lift(other):  # Accept LC or bare Variable on either side of +/-.
        if isinstance(other, LC):
            return other
        if isinstance(other, Variable):
            return LC.of(other)
        raise TypeError("expected LC or Variable")

    def __add__(self, other):
        out = LC()
        out.terms = self.terms + LC._lift(other).terms
        return out

    def __sub__(self, other):
        out = LC()
        out.terms = self.terms + tuple((v, -c) for v, c in LC._lift(other).terms)
        return out

    def evaluate(self, lookup):  # Evaluate with lookup(Variable) -> Fr.
        out = Fr.zero()
        for var, coeff in self.terms:
            out += lookup(var) * coeff
        return out


def _check_name(name):  # Path segments must not contain the separator.
    name = str(name)
    if "/" in name:
        raise ValueError(f"name {name!r} must not contain '/'")
    return name


class ConstraintSystem:  # Allocation/enforcement surface shared by every backend.
    mode = AssemblyMode.Witnessed

    one = ONE

    def alloc(self, name, value_fn): raise NotImplementedError  # Allocate an aux variable.

    def alloc_input(self, name, value_fn): raise NotImplementedError  # Allocate a public input.

    def enforce(self, name, a, b, c): raise NotImplementedError  # Add constraint a * b = c.

    def num_inputs(self): raise NotImplementedError

    def num_constraints(self): raise NotImplementedError

    def namespace(self, name): return Namespace(self, _check_name(name))  # Scoped view with a path prefix.


class Namespace(ConstraintSystem):  # Path-prefixed view onto a root constraint system; holds no state of its own.
    def __init__(self, root, path):
        self.root = root
        self.path = path
        self.mode = root.mode

    def _full(self, name): return f"{self.path}/{_check_name(name)}"

    def alloc(self, name, value_fn): return self.root.alloc(self._full(name), value_fn)

    def alloc_input(self, name, value_fn): return self.root.alloc_input(self._full(name), value_fn)

    def enforce(self, name, a, b, c): self.root.enforce(self._full(name), a, b, c)

    def num_inputs(self): return self.root.num_inputs()

    def num_constraints(self): return self.root.num_constraints()

    def namespace(self, name): return Namespace(self.root, self._full(name))


def as_fr(value):  # Witness thunks may return bool/int/Fr.
    if isinstance(value, Fr):
        return value
    if isinstance(value, bool):
        return Fr.one() if value else Fr.zero()
    return Fr(int(value))


class TestConstraintSystem(ConstraintSystem):  # Witnessed backend that records values and checks satisfaction.
    __test__ = False  # not a pytest test class
    mode = AssemblyMode.Witnessed

    def __init__(self):
        self.inputs = [(Fr.one(), "ONE")]  # (value, path)
        self.aux = []  # (value, path)
        self.constraints = []  # (a, b, c, path)
        self._paths = {"ONE": ONE}  # path -> Variable, or None for constraints

    def _claim(self, path):  # Reserve a unique path.
        if path in self._paths:
            raise ValueError(f"path {path!r} already exists")

    def alloc(self, name, value_fn):
        self._claim(name)
        value = as_fr(value_fn())
        var = Variable(AUX, len(self.aux))
        self.aux.append((value, name))
        self._paths[name] = var
        return var

    def alloc_input(self, name, value_fn):
        self._claim(name)
        value = as_fr(value_fn())
        var = Variable(INPUT, len(self.inputs))
        self.inputs.append((value, name))
        self._paths[name] = var
        return var

    def enforce(self, name, a, b, c):
        self._claim(name)
        self._paths[name] = None
        self.constraints.append((a, b, c, name))

    def value(self, var):  # Current assignment of a variable.
        return (self.inputs if var.kind == INPUT else self.aux)[var.index][0]

    def which_is_unsatisfied(self):  # Path of the first violated constraint, or None.
        for a, b, c, path in self.constraints:
            if a.evaluate(self.value) * b.evaluate(self.value) != c.evaluate(self.value):
                return path
        return None

    def is_satisfied(self): return self.which_is_unsatisfied() is None

    def num_inputs(self): return len(self.inputs)  # Includes ONE.

    def num_aux(self): return len(self.aux)

    def num_constraints(self): return len(self.constraints)

    def public_inputs(self): return [v for v, _ in self.inputs[1:]]  # Verifier vector (ONE excluded).

    def get_input(self, index, path):  # Input value at index, checking it was allocated at `path`.
        value, actual = self.inputs[index]
        if actual != path:
            raise KeyError(f"input {index} is {actual!r}, expected {path!r}")
        return value

    def _var(self, path):
        var = self._paths.get(path)
        if var is None:
            raise KeyError(f"no variable at {path!r}")
        return var

    def get(self, path): return self.value(self._var(path))  # Value of the variable allocated at `path`.

    def set(self, path, value):  # Overwrite a recorded assignment (tamper testing).
        var = self._var(path)
        table = self.inputs if var.kind == INPUT else self.aux
        table[var.index] = (as_fr(value), table[var.index][1])


class ShapeConstraintSystem(ConstraintSystem):  # Shape-only backend: counts columns and rows, never runs thunks.
    mode = AssemblyMode.ShapeOnly

    def __init__(self):
        self.n_inputs = 1  # ONE
        self.n_aux = 0
        self.constraints = []  # (a, b, c) shapes

    def alloc(self, name, value_fn):
        var = Variable(AUX, self.n_aux)
        self.n_aux += 1
        return var

    def alloc_input(self, name, value_fn):
        var = Variable(INPUT, self.n_inputs)
        self.n_inputs += 1
        return var

    def enforce(self, name, a, b, c): self.constraints.append((a, b, c))

    def num_inputs(self): return self.n_inputs

    def num_aux(self): return self.n_aux

    def num_constraints(self): return len(self.constraints)
