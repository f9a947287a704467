"""Gemini request construction for bank statement extraction."""
from typing import List, Sequence

from google.genai import types

from statementai.documents.models import ImagePart

EXTRACTION_PROMPT = """
You are an expert financial data analyst.
Analyze the provided images of a bank statement.
Extract every single transaction row found in the document.

For each transaction, extract:
1. Date (YYYY-MM-DD format). If the year is missing, assume the current year or infer from context headers.
2. Description (Clean up the text, remove excessive whitespace or codes).
3. Amount (Number. Ensure withdrawals/debits are negative and deposits/credits are positive).
4. Type (Strictly "Credit" or "Debit").
5. Notes (Any extra reference numbers, categories inferred, or details).

Return ONLY a JSON object containing an array of transactions.
"""

TRANSACTION_FIELDS_REQUIRED = ["date", "description", "amount", "type"]


def build_response_schema() -> types.Schema:
    """Schema for {"transactions": [{date, description, amount, type, notes}]}."""
    transaction = types.Schema(
        type=types.Type.OBJECT,
        properties={
            "date": types.Schema(type=types.Type.STRING),
            "description": types.Schema(type=types.Type.STRING),
            "amount": types.Schema(type=types.Type.NUMBER),
            "type": types.Schema(type=types.Type.STRING, enum=["Credit", "Debit"]),
            "notes": types.Schema(type=types.Type.STRING),
        },
        required=TRANSACTION_FIELDS_REQUIRED
    )

    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "transactions": types.Schema(type=types.Type.ARRAY, items=transaction)
        }
    )


def build_contents(parts: Sequence[ImagePart], prompt: str = EXTRACTION_PROMPT) -> List[types.Part]:
    """All images inline, followed by the instruction text."""
    contents = [
        types.Part.from_bytes(data=part.data, mime_type=part.mime_type)
        for part in parts
    ]
    contents.append(types.Part.from_text(text=prompt))
    return contents


def build_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=build_response_schema()
    )
