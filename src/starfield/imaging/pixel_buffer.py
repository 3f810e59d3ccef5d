"""Read-only brightness view over a decoded image.

The engine never decodes image files. An external loader hands over either
a numpy array, a flat row-major sample sequence plus dimensions, or an
xarray image, and ``PixelBuffer`` reduces each sample to one scalar
brightness: the mean of its color channels (alpha ignored), in the
sample's own range (0-255 for 8-bit data).
"""

import logging
from typing import Optional, Sequence, Union

import numpy as np
import xarray as xr

from starfield.errors import InvalidInput

__all__ = ['PixelBuffer']

logger = logging.getLogger(__name__)

_BAND_DIMS = ("band", "channel", "rgb")


class PixelBuffer:
    """Immutable ``width x height`` brightness buffer.

    Parameters
    ----------
    data : array-like
        ``(height, width)`` grayscale, ``(height, width, C)`` with C in
        1..4 (gray, gray+alpha, RGB, RGBA), or a flat row-major sequence
        when ``width`` and ``height`` are given.
    width, height : int, optional
        Required for flat input, checked against the array shape otherwise.
    channels : int, optional
        Samples per pixel for flat input (default 4, RGBA).

    Raises
    ------
    InvalidInput
        If either dimension is zero, the data does not fit the dimensions,
        or any sample is NaN or infinite.

    Examples
    --------
    >>> rgba = [255, 255, 255, 255] * 9
    >>> buf = PixelBuffer(rgba, width=3, height=3, channels=4)
    >>> buf.sample(1, 1)
    255.0
    """

    def __init__(self, data: Union[np.ndarray, Sequence[float]],
                 width: Optional[int] = None, height: Optional[int] = None,
                 channels: Optional[int] = None):
        arr = np.asarray(data)

        if arr.ndim == 1:
            if width is None or height is None:
                raise InvalidInput("Flat pixel data requires width and height")
            channels = 4 if channels is None else channels
            if width <= 0 or height <= 0:
                raise InvalidInput(f"Buffer dimensions must be positive, got {width}x{height}")
            if arr.size != width * height * channels:
                raise InvalidInput(
                    f"Flat buffer has {arr.size} samples, expected "
                    f"{width}x{height}x{channels}={width * height * channels}"
                )
            arr = arr.reshape(height, width, channels)

        if arr.ndim not in (2, 3):
            raise InvalidInput(f"Pixel data must be 2D or 3D, got {arr.ndim} dims")

        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise InvalidInput(f"Buffer dimensions must be positive, got {arr.shape[1]}x{arr.shape[0]}")

        if width is not None and arr.shape[1] != width:
            raise InvalidInput(f"width={width} does not match data width {arr.shape[1]}")
        if height is not None and arr.shape[0] != height:
            raise InvalidInput(f"height={height} does not match data height {arr.shape[0]}")

        self._brightness = self._to_brightness(arr)
        if not np.isfinite(self._brightness).all():
            raise InvalidInput("Pixel data contains NaN or infinite samples")
        self._brightness.flags.writeable = False
        self.height, self.width = self._brightness.shape

    @staticmethod
    def _to_brightness(arr: np.ndarray) -> np.ndarray:
        """Mean of color channels; alpha (4th or 2nd channel) is ignored."""
        if arr.ndim == 2:
            return arr.astype(np.float64)

        n_channels = arr.shape[2]
        if n_channels in (1, 2):
            return arr[..., 0].astype(np.float64)
        if n_channels in (3, 4):
            return arr[..., :3].astype(np.float64).mean(axis=2)
        raise InvalidInput(f"Unsupported channel count {n_channels}, expected 1-4")

    @classmethod
    def from_dataarray(cls, da: xr.DataArray) -> "PixelBuffer":
        """Build from an image DataArray with dims ``(y, x)`` plus optional band dim."""
        band_dims = [d for d in da.dims if d in _BAND_DIMS]
        if band_dims:
            da = da.transpose("y", "x", band_dims[0])
        else:
            da = da.transpose("y", "x")
        return cls(da.values)

    @classmethod
    def from_dataset(cls, ds: xr.Dataset, var: str = "image") -> "PixelBuffer":
        """Build from one image variable of a Dataset."""
        return cls.from_dataarray(ds[var])

    @property
    def shape(self) -> tuple:
        return (self.height, self.width)

    @property
    def brightness(self) -> np.ndarray:
        """Read-only ``(height, width)`` float64 brightness map."""
        return self._brightness

    def sample(self, x: float, y: float) -> float:
        """Brightness at ``(x, y)``, coordinates clamped to the buffer bounds."""
        ix = min(max(int(x), 0), self.width - 1)
        iy = min(max(int(y), 0), self.height - 1)
        return float(self._brightness[iy, ix])

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"
