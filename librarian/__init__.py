"""Verify media files with ffmpeg and copy them with checksum validation."""

__version__ = "0.1.0"