"""Bank statement transaction extraction using Gemini structured output."""
import re
import json
from decimal import Decimal
from typing import List, Optional, Sequence

from google import genai
from pydantic import BaseModel, Field, ValidationError

from .models import Transaction, TransactionType, AnalysisResult
from .aggregator import Aggregator
from .request import EXTRACTION_PROMPT, build_contents, build_config
from statementai.documents.models import ImagePart
from statementai.utils.logger import get_logger
from statementai.utils.exceptions import ConfigError, LLMError, ResponseParseError

logger = get_logger()

PARSE_FAILURE_MESSAGE = "Failed to parse the analysis results."


class TransactionSchema(BaseModel):
    """Pydantic schema for one returned transaction."""
    date: str = Field(description="Transaction date in YYYY-MM-DD format")
    description: str = Field(description="Transaction description")
    amount: float = Field(description="Signed amount, negative for debits", allow_inf_nan=False)
    type: str = Field(description="Credit or Debit")
    notes: Optional[str] = Field(default=None, description="References, inferred category or details")


class TransactionsResponse(BaseModel):
    """Pydantic schema for the model reply."""
    transactions: List[TransactionSchema]


class StatementAnalyzer:
    """Sends statement images to Gemini and normalizes the returned transactions."""

    def __init__(self, api_key: str, model_name: str, client: Optional[genai.Client] = None):
        """
        Initialize statement analyzer.

        Args:
            api_key: Google AI API key
            model_name: Gemini model to call
            client: Pre-built client, mainly for tests

        Raises:
            ConfigError: If no API key is given and no client is supplied
        """
        if client is None:
            if not api_key:
                raise ConfigError("API key is missing in environment variables")
            client = genai.Client(api_key=api_key)

        self.client = client
        self.model_name = model_name
        self.aggregator = Aggregator()

        logger.debug(f"Statement analyzer initialized with {self.model_name}")

    async def analyze(self, parts: Sequence[ImagePart]) -> AnalysisResult:
        """
        Extract transactions from statement images in a single request.

        Args:
            parts: Page and image parts, in upload order

        Returns:
            AnalysisResult with transactions and summary totals

        Raises:
            LLMError: If the request fails or returns nothing
            ResponseParseError: If the reply cannot be parsed
        """
        logger.info(f"Sending {len(parts)} images to {self.model_name}")

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=build_contents(parts, EXTRACTION_PROMPT),
                config=build_config()
            )
        except Exception as e:
            logger.error(f"Gemini request failed: {e}")
            raise LLMError(f"Gemini request failed: {e}")

        text = response.text
        if not text:
            raise LLMError("No response from Gemini")

        logger.debug(f"Raw response (first 500 chars): {text[:500]}")

        transactions = self.parse_transactions(text)
        summary = self.aggregator.summarize(transactions)

        logger.info(f"Extracted {len(transactions)} transactions")
        return AnalysisResult(transactions=transactions, summary=summary)

    def parse_transactions(self, response_text: str) -> List[Transaction]:
        """Parse the JSON reply into transactions; any failure is one generic error."""
        try:
            data = json.loads(self._strip_code_fences(response_text))
            validated = TransactionsResponse.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Failed to parse Gemini response: {e}")
            logger.debug(f"Response text: {response_text[:500]}")
            raise ResponseParseError(PARSE_FAILURE_MESSAGE)

        return [self._create_transaction(item) for item in validated.transactions]

    @staticmethod
    def _create_transaction(item: TransactionSchema) -> Transaction:
        return Transaction(
            date=item.date,
            description=item.description,
            amount=Decimal(str(item.amount)),
            type=TransactionType.coerce(item.type),
            notes=item.notes or ""
        )

    @staticmethod
    def _strip_code_fences(text: str) -> str:
        """Remove a ```json ... ``` wrapper if the model added one."""
        cleaned = text.strip()
        if cleaned.startswith("```"):
            cleaned = re.sub(r"^```(?:json)?", "", cleaned).strip()
        if cleaned.endswith("```"):
            cleaned = cleaned[:-3].strip()
        return cleaned
