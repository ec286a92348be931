from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(eq=False)
class RasterImage:
    """RGB raster stored as three flat row-major uint8 channels.

    Pixel ``(x, y)`` is at index ``y * width + x`` in every channel.
    """

    width: int
    height: int
    red: np.ndarray
    green: np.ndarray
    blue: np.ndarray

    def __post_init__(self):
        self.width = int(self.width)
        self.height = int(self.height)
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Raster dimensions must be positive, got {self.width}x{self.height}")
        size = self.width * self.height
        for name in ("red", "green", "blue"):
            channel = np.ascontiguousarray(getattr(self, name), dtype=np.uint8).reshape(-1)
            if channel.size != size:
                raise ValueError(
                    f"{name} channel has {channel.size} samples, expected {size}"
                )
            setattr(self, name, channel)

    @classmethod
    def blank(cls, width: int, height: int) -> "RasterImage":
        size = int(width) * int(height)
        return cls(
            width=width,
            height=height,
            red=np.zeros(size, dtype=np.uint8),
            green=np.zeros(size, dtype=np.uint8),
            blue=np.zeros(size, dtype=np.uint8),
        )

    @classmethod
    def filled(cls, width: int, height: int, rgb: Tuple[int, int, int]) -> "RasterImage":
        img = cls.blank(width, height)
        img.red[:], img.green[:], img.blue[:] = rgb
        return img

    @classmethod
    def from_rgb_array(cls, arr: np.ndarray) -> "RasterImage":
        arr = np.asarray(arr)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError(f"Expected an (height, width, 3) array, got shape {arr.shape}")
        height, width = arr.shape[:2]
        arr = arr.astype(np.uint8, copy=False)
        return cls(
            width=width,
            height=height,
            red=arr[:, :, 0].copy(),
            green=arr[:, :, 1].copy(),
            blue=arr[:, :, 2].copy(),
        )

    def to_rgb_array(self) -> np.ndarray:
        return np.stack([self.red, self.green, self.blue], axis=-1).reshape(
            self.height, self.width, 3
        )

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def interior(self) -> slice:
        # every row except the first and the last
        return slice(self.width, max(self.size - self.width, self.width))

    def index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} raster")
        return y * self.width + x

    def pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        i = self.index(x, y)
        return int(self.red[i]), int(self.green[i]), int(self.blue[i])

    def set_pixel(self, x: int, y: int, rgb: Tuple[int, int, int]) -> None:
        i = self.index(x, y)
        self.red[i], self.green[i], self.blue[i] = rgb

    def clone(self) -> "RasterImage":
        return RasterImage(
            width=self.width,
            height=self.height,
            red=self.red.copy(),
            green=self.green.copy(),
            blue=self.blue.copy(),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, RasterImage):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.red, other.red)
            and np.array_equal(self.green, other.green)
            and np.array_equal(self.blue, other.blue)
        )
