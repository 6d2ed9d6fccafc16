"""In-circuit gadgets and the DRG-PoRep circuit."""
from circuit.boolean import AllocatedBit, Boolean, bytes_into_boolean_vec, field_into_allocated_bits_le, field_into_boolean_vec_le
from circuit.drgporep import DrgPoRepCircuit, drgporep, drgporep_public_inputs
from circuit.edwards import EdwardsPoint
from circuit.kdf import kdf
from circuit.lookup import lookup3_xy
from circuit.multipack import compute_multipacking, pack_into_inputs
from circuit.num import AllocatedNum
from circuit.pedersen_hash import pedersen_hash
from circuit.por import por_public_inputs, proof_of_retrievability
from circuit.sloth import decode
