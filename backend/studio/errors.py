"""
Export failures. Each one is local to a single export call.
"""
from typing import Any, Dict


class ExportError(Exception):
    """Base class for export failures"""
    code = "EXPORT_FAILED"
    default_message = "Failed to export image."

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}


class NoImageLoaded(ExportError):
    """Raised when an export is attempted without a source image"""
    code = "NO_IMAGE_LOADED"
    default_message = "Upload an image first."


class DecodeFailure(ExportError):
    """Raised when the source image bytes cannot be decoded"""
    code = "DECODE_FAILURE"
    default_message = "Could not decode the source image."


class SurfaceUnavailable(ExportError):
    """Raised when the export surface cannot be allocated"""
    code = "SURFACE_UNAVAILABLE"
    default_message = "Could not create the drawing surface."


class EncodeFailure(ExportError):
    """Raised when the finished surface cannot be encoded"""
    code = "ENCODE_FAILURE"
    default_message = "Unable to export image."
