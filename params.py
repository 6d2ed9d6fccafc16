"""Protocol constants shared by the reference scheme and the circuit, plus the debug log sink."""
import json  # NDJSON debug log encoding
import os  # env-var lookup
import time  # timestamps for debug logs

LEAF_SIZE = 32  # Bytes per data/replica leaf (lambda).
IDENTITY_SIZE = 32  # Bytes of prover identity.
PARENT_BITS_WIDTH = 256  # Fixed width of each KDF input block (identity and every parent).
SLOTH_DEFAULT_ROUNDS = 1  # Sloth rounds used by both replicate and the decode circuit.
PEDERSEN_WINDOW_BITS = 3  # Bits consumed per lookup window.
PEDERSEN_SEGMENT_WINDOWS = 63  # Windows per generator; keeps every segment scalar below r_J.
DEFAULT_GRAPH_SEED = b"drgporep-bucket-graph"  # Seed for the reference dependency graph.

DEBUG_LOG_ENV = "DRGPOREP_DEBUG_LOG"  # When set, path of the NDJSON debug sink.


def debug_log_path():  # Current debug sink path, or None when tracing is off.
    return os.environ.get(DEBUG_LOG_ENV) or None


def dbg(location, message, data):  # write one NDJSON debug log line.
    path = debug_log_path()
    if path is None:
        return
    now_ms = int(time.time() * 1000)
    payload = {
        "id": f"log_{now_ms}_{location}",
        "timestamp": now_ms,
        "location": str(location),
        "message": str(message),
        "data": dict(data),
    }
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(payload, separators=(",", ":"), default=str) + "\n")
