from .draws import Draws
from .metadata import FitMetadata

__all__ = ["Draws", "FitMetadata"]
