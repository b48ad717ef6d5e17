"""Core trust evaluation and capability gating for TrustGate."""
