"""
Exceptions raised by starcore generation.
"""


class GenerationError(Exception):
    """Raised when system or surface synthesis breaks an invariant"""
    pass
