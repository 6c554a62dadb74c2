"""
Exceptions raised by the oracle engine.

Every failure is a rejected operation: checks run before any mutation,
so an exception always means the oracle state is unchanged.
"""


class OracleError(Exception):
    """Base exception for oracle errors"""
    pass


class AuthError(OracleError):
    """Raised when a capability does not authorize the operation"""
    pass


class OwnerMismatch(AuthError):
    """Raised when an owner capability is not bound to the target oracle"""
    pass


class ValidatorMismatch(AuthError):
    """Raised when a validator capability is not bound to the target oracle"""
    pass


class EmptyAggregation(OracleError):
    """Raised when a fold is attempted with no pending observations"""
    pass


class TimestampRegression(OracleError):
    """Raised when a timestamp is earlier than the oracle's last update"""
    pass


class InvalidObservation(OracleError, ValueError):
    """Raised when an observation value is not a non-negative integer"""
    pass


class UnknownOracle(OracleError, KeyError):
    """Raised when no oracle is registered under the given identity"""
    pass
