"""
Exception classes for the image file codec
"""


class SteganographyError(ValueError):
    """Base class for codec failures."""
    pass


class BoundsError(SteganographyError):
    """A pixel index fell outside the image."""
    def __init__(self, index, width, height, message=""):
        self.index = index
        self.width = width
        self.height = height
        self.message = message or f"Pixel index {index} out of bounds for {width}x{height} image"
        super().__init__(self.message)


class CapacityError(SteganographyError):
    """Image too small for the payload"""
    def __init__(self, required, available, message=""):
        self.required = required
        self.available = available
        self.message = message or f"Image is too small to fit the data: need {required}, have {available}"
        super().__init__(self.message)


class EncodingError(SteganographyError):
    """Recovered file name is not valid UTF-8"""
    pass
