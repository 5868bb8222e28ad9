"""Codec configuration.

This module provides the CodecConfig dataclass shared by the read/write entry
points and the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

Compression = Literal["none", "gzip", "zlib", "auto"]

COMPRESSIONS: tuple[str, ...] = ("none", "gzip", "zlib", "auto")


@dataclass
class CodecConfig:
    """Options for reading and writing tag streams.

    Attributes:
        compression: Stream transform applied around the codec (default "none").
            - "none": raw, uncompressed stream
            - "gzip": gzip-framed stream (the usual choice for standalone files)
            - "zlib": zlib-framed stream (the usual choice inside region files)
            - "auto": detect gzip/zlib/none from the first two bytes (read only)

        compress_level: Compression level 0-9 used when writing (default 9).

        max_depth: Maximum container nesting depth, or None for no limit
            (default None). The root Compound is depth 0.

    Examples:
        ```python
        from nbtcodec import CodecConfig, load

        # Level files are gzip-framed
        root = load("level.dat", config=CodecConfig(compression="gzip"))

        # Refuse pathologically deep trees from untrusted input
        config = CodecConfig(compression="auto", max_depth=512)
        ```
    """

    compression: Compression = "none"
    compress_level: int = 9
    max_depth: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.compression not in COMPRESSIONS:
            raise ValueError(
                f"compression must be one of {', '.join(COMPRESSIONS)}, got {self.compression!r}"
            )

        if not 0 <= self.compress_level <= 9:
            raise ValueError(f"compress_level must be 0-9, got {self.compress_level}")

        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1 or None, got {self.max_depth}")


def resolve_config(
    compression: Optional[Compression], config: Optional[CodecConfig]
) -> CodecConfig:
    """Merge an explicit compression argument into a (possibly default) config."""
    if config is None:
        config = CodecConfig()
    if compression is not None and compression != config.compression:
        config = CodecConfig(
            compression=compression,
            compress_level=config.compress_level,
            max_depth=config.max_depth,
        )
    return config
