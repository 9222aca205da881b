"""
termstag - Colored block art rendering of still and animated images in the terminal
"""

from .color import Color, TRANSPARENT
from .tile_grid import TileGrid
from .pixel_buffer import PixelBuffer
from .sampler import PixelSampler, CropRect, CropTypes, clamp_crop
from .source import SourceMode, resolve_source, fetch_bytes, decode_bytes
from .frame import StaticFrame, MEMORY_SOURCE
from .animation import AnimationSequence
from .surface import TerminalSurface, AnsiSurface, BlessedSurface
from .compositor import (
    TerminalCompositor,
    clamp_frame_index,
    normalize_frame_range,
    render_to_string,
)
from .config import Settings, settings
from .exceptions import (
    TermstagError,
    AcquisitionError,
    DecodeError,
    EmptyAnimationError,
    FrameNotLoadedError,
)

__all__ = [
    # Data model
    "Color",
    "TRANSPARENT",
    "TileGrid",
    "StaticFrame",
    "MEMORY_SOURCE",
    "AnimationSequence",
    # Sampling
    "PixelSampler",
    "CropRect",
    "CropTypes",
    "clamp_crop",
    # Sources
    "PixelBuffer",
    "SourceMode",
    "resolve_source",
    "fetch_bytes",
    "decode_bytes",
    # Terminal output
    "TerminalSurface",
    "AnsiSurface",
    "BlessedSurface",
    "TerminalCompositor",
    "clamp_frame_index",
    "normalize_frame_range",
    "render_to_string",
    # Configuration
    "Settings",
    "settings",
    # Errors
    "TermstagError",
    "AcquisitionError",
    "DecodeError",
    "EmptyAnimationError",
    "FrameNotLoadedError",
]

__version__ = "0.1.0"
