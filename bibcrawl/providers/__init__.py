from .base import Provider
from .dblp import DBLP

__all__ = ["Provider", "DBLP"]
