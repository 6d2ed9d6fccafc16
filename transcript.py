import hashlib  # blake2b hash primitive

class Blake2bTranscript:  # Fiat-Shamir transcript: absorb labelled messages, squeeze 32-byte blocks.
    def __init__(self, label):  # Initialize transcript state from domain label.
        label_b = self._label_word(label.encode() if isinstance(label, str) else bytes(label))
        self.state = hashlib.blake2b(label_b, digest_size=32).digest()
        self.n_rounds = 0

    new = classmethod(lambda cls, label: cls(label))  # Constructor alias.

    @staticmethod
    def _label_word(label_b):  # Encode label as 32-byte right-padded word.
        if len(label_b) > 32:
            raise ValueError("label must be <= 32 bytes")
        return label_b + b"\x00" * (32 - len(label_b))

    def _round_tag(self):  # Encode the 32-byte round tag (zero28 || be_u32(n_rounds)).
        return b"\x00" * 28 + int(self.n_rounds).to_bytes(4, "big")

    def _absorb(self, payload):  # Update state := H(state || round_tag || payload), increment round.
        h = hashlib.blake2b(digest_size=32)
        h.update(self.state)
        h.update(self._round_tag())
        h.update(payload)
        self.state = h.digest()
        self.n_rounds += 1

    def _challenge_block32(self):  # Draw 32 bytes: rand := H(state || round_tag), then state := rand.
        h = hashlib.blake2b(digest_size=32)
        h.update(self.state)
        h.update(self._round_tag())
        rand = h.digest()
        self.state = rand
        self.n_rounds += 1
        return rand

    def append_label(self, label):  # Append fixed-size label word (one absorb).
        self._absorb(self._label_word(label.encode() if isinstance(label, str) else bytes(label)))

    def append_bytes(self, label, data):  # Append labelled bytes with u64 length prefix (two absorbs).
        data_b = bytes(data)
        self.append_label(label)
        self._absorb(len(data_b).to_bytes(8, "big") + data_b)

    def append_u64(self, label, x):  # Append labelled u64 (two absorbs).
        self.append_label(label)
        self._absorb(int(x).to_bytes(8, "big"))

    def append_scalar(self, label, fr):  # Append labelled Fr as 32 little-endian bytes (two absorbs).
        self.append_label(label)
        self._absorb(fr.to_bytes_le())

    def challenge_bytes(self, n):  # Draw n bytes using ceil(n/32) blocks.
        n = int(n)
        out = bytearray()
        while len(out) < n:
            out += self._challenge_block32()
        return bytes(out[:n])

    def challenge_u128(self): return int.from_bytes(self.challenge_bytes(16), "little")

    def challenge_index(self, n):  # Draw an index in [0, n); 128-bit draw keeps modulo bias negligible.
        n = int(n)
        if n <= 0:
            raise ValueError("index range must be positive")
        return self.challenge_u128() % n
