"""Service modules"""
from .lens import Lens

__all__ = ["Lens"]
