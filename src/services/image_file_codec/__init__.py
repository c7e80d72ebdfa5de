"""
Image File Codec Service - LSB file embedding

Hides a whole file (name and bytes) inside an RGBA image:
- One byte spread over the least significant bits of two pixels
- Self-describing frame header with name and data lengths
- Capacity estimation and refusal before any pixel is touched
- Pillow based loading/saving, CLI and HTTP front ends
"""

__version__ = "1.0.0"
__author__ = "img-fu Team"
