"""Statement file to image conversion."""
import io
from typing import Iterable, List

import pdfplumber
import pypdf
from PIL import Image

from .models import InputFile, ImagePart
from statementai.utils.logger import get_logger, set_source_context
from statementai.utils.exceptions import DocumentError

logger = get_logger()

PDF_BASE_DPI = 72
JPEG_MIME_TYPE = "image/jpeg"


class DocumentConverter:
    """Converts PDFs and images into inline image parts for the model."""

    def __init__(self, zoom: float = 2.0, jpeg_quality: int = 80):
        """
        Initialize document converter.

        Args:
            zoom: Page render scale relative to 72 DPI
            jpeg_quality: JPEG quality (1-100) for rendered pages
        """
        self.zoom = zoom
        self.jpeg_quality = jpeg_quality

    @property
    def resolution(self) -> float:
        return PDF_BASE_DPI * self.zoom

    def convert(self, files: Iterable[InputFile]) -> List[ImagePart]:
        """
        Convert every file into image parts, in order.

        Args:
            files: Accepted statement files

        Returns:
            Image parts; PDFs contribute one part per page

        Raises:
            DocumentError: If any file fails to convert
        """
        parts: List[ImagePart] = []

        try:
            for input_file in files:
                set_source_context(input_file.name)
                if input_file.is_pdf:
                    parts.extend(self.pdf_to_images(input_file))
                elif input_file.is_image:
                    parts.append(self.image_to_part(input_file))
                else:
                    logger.warning(f"Skipping unsupported file type {input_file.mime_type}")
        finally:
            set_source_context(None)

        return parts

    def image_to_part(self, input_file: InputFile) -> ImagePart:
        """Pass an image through unchanged."""
        if not input_file.content:
            raise DocumentError(f"Image file is empty: {input_file.name}")

        logger.debug(f"Passing through image {input_file.name} ({len(input_file.content)} bytes)")
        return ImagePart(
            mime_type=input_file.mime_type,
            data=input_file.content,
            source=input_file.name
        )

    def pdf_to_images(self, input_file: InputFile) -> List[ImagePart]:
        """
        Rasterize every page of a PDF as JPEG.

        Args:
            input_file: PDF file

        Returns:
            One JPEG image part per page

        Raises:
            DocumentError: If the PDF cannot be opened or rendered
        """
        page_count = self._count_pages(input_file)
        logger.info(f"Rendering {page_count} pages from {input_file.name} at {self.resolution:.0f} DPI")

        parts = []
        try:
            with pdfplumber.open(io.BytesIO(input_file.content)) as pdf:
                for i, page in enumerate(pdf.pages, 1):
                    page_image = page.to_image(resolution=self.resolution)
                    jpeg = self._encode_jpeg(page_image.original)
                    parts.append(ImagePart(
                        mime_type=JPEG_MIME_TYPE,
                        data=jpeg,
                        source=f"{input_file.name}#page={i}"
                    ))
                    logger.debug(f"Page {i} rendered to {len(jpeg)} bytes")
        except DocumentError:
            raise
        except Exception as e:
            logger.error(f"PDF rendering failed for {input_file.name}: {e}")
            raise DocumentError(f"Failed to render PDF {input_file.name}: {e}")

        return parts

    def _count_pages(self, input_file: InputFile) -> int:
        """Open the PDF with pypdf to reject unreadable or locked files early."""
        try:
            reader = pypdf.PdfReader(io.BytesIO(input_file.content))
            # Owner-locked statements open with an empty user password
            if reader.is_encrypted and reader.decrypt("") == pypdf.PasswordType.NOT_DECRYPTED:
                raise DocumentError(f"PDF is password protected: {input_file.name}")
            page_count = len(reader.pages)
        except DocumentError:
            raise
        except Exception as e:
            raise DocumentError(f"Failed to open PDF {input_file.name}: {e}")

        if page_count == 0:
            raise DocumentError(f"PDF has no pages: {input_file.name}")
        return page_count

    def _encode_jpeg(self, image: Image.Image) -> bytes:
        buffer = io.BytesIO()
        image.convert("RGB").save(buffer, format="JPEG", quality=self.jpeg_quality)
        return buffer.getvalue()
