"""PixelWords — FastAPI backend (server mode).

This package exposes the image-to-words pipeline over HTTP.
The core pipeline (core/) runs without it; the CLI uses it directly.
"""
