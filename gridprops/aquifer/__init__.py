"""Numerical aquifer connection geometry."""

from .face_dir import FaceDir, neighbor_inside_and_active
from .numerical_connections import NumAquiferCon, NumericalAquiferConnections

__all__ = [
    'FaceDir',
    'neighbor_inside_and_active',
    'NumAquiferCon',
    'NumericalAquiferConnections',
]
