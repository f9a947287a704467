"""Statement intake and image conversion."""
from .models import InputFile, ImagePart
from .converter import DocumentConverter

__all__ = ["InputFile", "ImagePart", "DocumentConverter"]
