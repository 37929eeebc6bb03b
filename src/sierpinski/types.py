import numpy as np

VERTS = np.typing.NDArray[np.float64]  # (4, 3)
POSITIONS = np.typing.NDArray[np.float64]  # (N, 3)
COLORS = np.typing.NDArray[np.float64]  # (N, 3)
WEIGHTS = np.typing.NDArray[np.float64]  # (4,) or (N, 4)
CHOICES = np.typing.NDArray[np.int64]
VIEW = np.typing.NDArray[np.float64]
PROJ = np.typing.NDArray[np.float32]
