from .logger import setup_logger, set_log_level
from .distance_matrix import DistanceMatrix
from .exceptions import (
    DistanceMatrixError,
    OutOfRange,
    UnknownIdentifier,
    DuplicateIdentifier,
    InvalidCoordinate,
    MatrixNotBuilt,
)

__all__ = [
    'setup_logger', 'set_log_level', 'DistanceMatrix',
    'DistanceMatrixError', 'OutOfRange', 'UnknownIdentifier',
    'DuplicateIdentifier', 'InvalidCoordinate', 'MatrixNotBuilt',
]
