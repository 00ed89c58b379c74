from .circuit import Circuit
from .types import TickReport

__all__ = ["Circuit", "TickReport"]
