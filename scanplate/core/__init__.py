"""Core cart primitives: identity keys, money math, storage and errors."""
