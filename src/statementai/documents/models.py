"""Data models for document intake and conversion."""
import base64
from dataclasses import dataclass


PDF_MIME_TYPE = "application/pdf"


@dataclass(frozen=True)
class InputFile:
    """A user-selected statement file held in memory."""
    name: str
    content: bytes
    mime_type: str

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == PDF_MIME_TYPE

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


@dataclass(frozen=True)
class ImagePart:
    """One image sent inline to the model."""
    mime_type: str
    data: bytes
    source: str = ""

    def to_base64(self) -> str:
        """Base64 text of the image, without any data-URL prefix."""
        return base64.b64encode(self.data).decode("ascii")
