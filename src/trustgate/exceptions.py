"""TrustGate exception hierarchy.

All public exceptions inherit from TrustGateError, giving callers a single
base class to catch when they want to handle any TrustGate-specific failure
without swallowing unrelated errors.

Note that uncertainty about an author is never an exception: unknown or
unreachable trust data lowers the score instead. Only structurally invalid
input reaches the caller as an error.
"""


class TrustGateError(Exception):
    """Base exception for all TrustGate errors."""


class EnvelopeError(TrustGateError):
    """Raised when a signed envelope is structurally invalid.

    Covers a missing content hash, a missing author key, and objects
    that are not envelopes at all. This is the only error that
    ``TrustEvaluator.evaluate`` lets escape.
    """


class ConfigError(TrustGateError):
    """Raised for invalid trust configuration.

    Covers non-descending thresholds, negative cache TTLs, out-of-range
    staking tier scores, and unreadable or malformed config files.
    """


class ProviderError(TrustGateError):
    """Raised by provider adapters when trust data cannot be fetched.

    Covers transport failures and malformed responses. The evaluator
    catches it and scores the affected factor as 0.
    """
