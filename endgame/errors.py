"""
errors.py
Exception raised when an internal codec precondition is broken.
"""


class ContractViolation(AssertionError):
    """
    An internal precondition of the codec does not hold.

    Raised explicitly instead of via ``assert`` so it also fires under
    ``python -O``. Callers are expected to have validated their data
    already, so this is never caught inside the library.
    """
