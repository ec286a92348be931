"""Plain-text (P3) PPM reading and writing."""

from __future__ import annotations

from pathlib import Path
from typing import List

import numpy as np

from .exceptions import MalformedInputError
from .raster import RasterImage


PPM_TAG = "P3"
MAX_CHANNEL_VALUE = 255


def _strip_comments(text: str) -> List[str]:
    tokens: List[str] = []
    for line in text.splitlines():
        s = line.strip()
        if not s or s.startswith("#"):
            continue
        tokens.extend(s.split())
    return tokens


def _parse_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError as exc:
        raise MalformedInputError(f"Invalid {what} in PPM header: {token!r}") from exc


def decode_image(data: bytes) -> RasterImage:
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError(f"decode_image expects bytes, got {type(data).__name__}")
    text = data.decode("ascii", errors="replace")
    tokens = _strip_comments(text)
    if len(tokens) < 4:
        raise MalformedInputError("Problem reading in ppm image: incomplete header.")
    if tokens[0] != PPM_TAG:
        raise MalformedInputError(f"Problem reading in ppm image: unsupported tag {tokens[0]!r}.")

    width = _parse_int(tokens[1], "width")
    height = _parse_int(tokens[2], "height")
    max_value = _parse_int(tokens[3], "max value")
    if width <= 0 or height <= 0:
        raise MalformedInputError(f"Problem reading in ppm image: size {width}x{height}.")
    if not 0 < max_value <= MAX_CHANNEL_VALUE:
        raise MalformedInputError(f"Unsupported max channel value: {max_value}")

    needed = width * height * 3
    samples = tokens[4:4 + needed]
    if len(samples) < needed:
        raise MalformedInputError(
            f"Problem reading in ppm image: expected {needed} samples, found {len(samples)}."
        )
    try:
        values = np.array([int(s) for s in samples], dtype=np.int64)
    except ValueError as exc:
        raise MalformedInputError("PPM pixel data contains non-integer samples.") from exc
    if values.min() < 0 or values.max() > MAX_CHANNEL_VALUE:
        raise MalformedInputError("PPM pixel data outside the 0..255 range.")

    rgb = values.astype(np.uint8).reshape(-1, 3)
    return RasterImage(
        width=width,
        height=height,
        red=rgb[:, 0].copy(),
        green=rgb[:, 1].copy(),
        blue=rgb[:, 2].copy(),
    )


def encode_image(img: RasterImage) -> bytes:
    header = f"{PPM_TAG}\n{img.width} {img.height}\n{MAX_CHANNEL_VALUE}\n"
    body = "".join(
        f"{r}\t{g}\t{b}\n"
        for r, g, b in zip(img.red.tolist(), img.green.tolist(), img.blue.tolist())
    )
    return (header + body).encode("ascii")


def read_ppm(path: str | Path) -> RasterImage:
    return decode_image(Path(path).read_bytes())


def write_ppm(img: RasterImage, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(encode_image(img))
    return path
