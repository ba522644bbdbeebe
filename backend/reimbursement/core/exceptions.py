"""
Error taxonomy for the reimbursement engine.

Warnings (missing vehicle, failed toll learning) are not exceptions: they
travel with the result as ``EngineWarning`` objects, see
``reimbursement.schemas.warning``.
"""


class ReimbursementError(Exception):
    """Base class for engine errors."""


class ValidationFailure(ReimbursementError, ValueError):
    """Malformed input to a public function. Nothing has been computed or written."""


class ExternalFailure(ReimbursementError):
    """A read or write against the data store failed."""
