"""Core processing flow: files -> images -> Gemini -> analysis result.

Every step is awaited in sequence. Any failure ends the run with status
``error`` and the message kept for display; there are no partial results.
"""
import asyncio
from enum import Enum
from typing import Callable, List, Optional, Sequence

from statementai.config.manager import Config
from statementai.documents.converter import DocumentConverter
from statementai.documents.intake import accept_files
from statementai.documents.models import InputFile
from statementai.llm.models import AnalysisResult
from statementai.llm.statement_analyzer import StatementAnalyzer
from statementai.utils.logger import get_logger
from statementai.utils.exceptions import DocumentError

logger = get_logger()

NO_IMAGE_DATA_MESSAGE = "No valid image data could be extracted."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred during processing."


class ProcessingStatus(str, Enum):
    IDLE = "idle"
    CONVERTING = "converting"
    ANALYZING = "analyzing"
    COMPLETE = "complete"
    ERROR = "error"


StatusCallback = Callable[[ProcessingStatus], None]


class AnalysisPipeline:
    """Orchestrates the flow: intake -> conversion -> Gemini -> summary."""

    def __init__(
        self,
        config: Config,
        analyzer: Optional[StatementAnalyzer] = None,
        converter: Optional[DocumentConverter] = None
    ):
        self.config = config
        self.converter = converter or DocumentConverter(
            zoom=config.render_zoom,
            jpeg_quality=config.jpeg_quality
        )
        self._analyzer = analyzer
        self.status = ProcessingStatus.IDLE
        self.result: Optional[AnalysisResult] = None
        self.error: Optional[str] = None
        self._listeners: List[StatusCallback] = []

    @property
    def analyzer(self) -> StatementAnalyzer:
        # Created on first use so a missing key fails inside run(), not at construction
        if self._analyzer is None:
            self._analyzer = StatementAnalyzer(
                api_key=self.config.gemini_api_key,
                model_name=self.config.model_name
            )
        return self._analyzer

    @property
    def is_busy(self) -> bool:
        return self.status in (ProcessingStatus.CONVERTING, ProcessingStatus.ANALYZING)

    def on_status_change(self, callback: StatusCallback) -> None:
        self._listeners.append(callback)

    async def run(self, files: Sequence[InputFile]) -> AnalysisResult:
        """
        Analyze one upload.

        Args:
            files: User-selected files; unsupported types are skipped

        Returns:
            AnalysisResult

        Raises:
            StatementAIError: Any conversion, configuration or model failure
        """
        self.result = None
        self.error = None

        try:
            self._set_status(ProcessingStatus.CONVERTING)
            # Rendering runs in a worker thread so the event loop stays responsive
            parts = await asyncio.to_thread(self.converter.convert, accept_files(files))
            if not parts:
                raise DocumentError(NO_IMAGE_DATA_MESSAGE)

            self._set_status(ProcessingStatus.ANALYZING)
            result = await self.analyzer.analyze(parts)
        except Exception as e:
            self.error = str(e) or UNEXPECTED_ERROR_MESSAGE
            logger.error(f"Analysis failed: {self.error}")
            self._set_status(ProcessingStatus.ERROR)
            raise

        self.result = result
        self._set_status(ProcessingStatus.COMPLETE)
        logger.info(f"Analysis complete: {len(result.transactions)} transactions found")
        return result

    def _set_status(self, status: ProcessingStatus) -> None:
        logger.debug(f"Status: {self.status.value} -> {status.value}")
        self.status = status
        for callback in self._listeners:
            callback(status)
