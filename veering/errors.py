"""
Errors raised by the veering analysis pipeline.
"""


class InternalInconsistencyError(ValueError):
    """
    A session violated an invariant that upstream recording should guarantee.

    Raised instead of letting a zero denominator, mismatched arrays or a
    NaN/Inf value reach the displayed result.
    """
