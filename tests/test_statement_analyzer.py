"""Tests for Gemini request building and response parsing."""
import json
import unittest
from decimal import Decimal
from types import SimpleNamespace

from statementai.documents.models import ImagePart
from statementai.llm.models import TransactionType
from statementai.llm.request import EXTRACTION_PROMPT, build_contents, build_config, build_response_schema
from statementai.llm.statement_analyzer import StatementAnalyzer, PARSE_FAILURE_MESSAGE
from statementai.utils.exceptions import ConfigError, LLMError, ResponseParseError


class FakeModels:
    """Stands in for client.aio.models."""

    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error:
            raise self.error
        return SimpleNamespace(text=self.text)


def fake_client(models: FakeModels):
    return SimpleNamespace(aio=SimpleNamespace(models=models))


SAMPLE_REPLY = json.dumps({
    "transactions": [
        {"date": "2024-03-01", "description": "Salary ACME", "amount": 2500, "type": "Credit", "notes": "Ref 991"},
        {"date": "2024-03-02", "description": "Coffee", "amount": -4.5, "type": "Debit"},
        {"date": "2024-03-02", "description": "Refund", "amount": "12.25", "type": "credit", "notes": None},
    ]
})


class TestRequestBuilding(unittest.TestCase):
    """Test request contents and schema."""

    def test_images_come_first_then_prompt(self):
        parts = [
            ImagePart(mime_type="image/jpeg", data=b"\xff\xd8page1"),
            ImagePart(mime_type="image/png", data=b"\x89PNGimg"),
        ]

        contents = build_contents(parts)

        self.assertEqual(len(contents), 3)
        self.assertEqual(contents[0].inline_data.mime_type, "image/jpeg")
        self.assertEqual(contents[0].inline_data.data, b"\xff\xd8page1")
        self.assertEqual(contents[1].inline_data.mime_type, "image/png")
        self.assertEqual(contents[2].text, EXTRACTION_PROMPT)

    def test_response_schema(self):
        schema = build_response_schema()
        item = schema.properties["transactions"].items

        self.assertEqual(item.required, ["date", "description", "amount", "type"])
        self.assertEqual(item.properties["type"].enum, ["Credit", "Debit"])
        self.assertIn("notes", item.properties)

    def test_config_requests_json(self):
        config = build_config()

        self.assertEqual(config.response_mime_type, "application/json")
        self.assertIsNotNone(config.response_schema)


class TestResponseParsing(unittest.TestCase):
    """Test StatementAnalyzer.parse_transactions."""

    def setUp(self):
        self.analyzer = StatementAnalyzer(api_key="", model_name="test-model", client=fake_client(FakeModels()))

    def test_parse_and_coerce(self):
        transactions = self.analyzer.parse_transactions(SAMPLE_REPLY)

        self.assertEqual(len(transactions), 3)
        self.assertEqual(transactions[0].type, TransactionType.CREDIT)
        self.assertEqual(transactions[0].amount, Decimal("2500.0"))
        self.assertEqual(transactions[0].notes, "Ref 991")
        self.assertEqual(transactions[1].amount, Decimal("-4.5"))
        self.assertEqual(transactions[1].notes, "")

    def test_anything_but_credit_is_debit(self):
        transactions = self.analyzer.parse_transactions(SAMPLE_REPLY)

        # lower-case "credit" is not "Credit"
        self.assertEqual(transactions[2].type, TransactionType.DEBIT)
        self.assertEqual(transactions[2].amount, Decimal("12.25"))
        self.assertEqual(transactions[2].notes, "")

    def test_code_fenced_reply(self):
        fenced = "```json\n" + SAMPLE_REPLY + "\n```"

        self.assertEqual(len(self.analyzer.parse_transactions(fenced)), 3)

    def test_invalid_json_is_generic_error(self):
        with self.assertRaises(ResponseParseError) as ctx:
            self.analyzer.parse_transactions("{not json")

        self.assertEqual(str(ctx.exception), PARSE_FAILURE_MESSAGE)

    def test_missing_transactions_key(self):
        with self.assertRaises(ResponseParseError):
            self.analyzer.parse_transactions('{"rows": []}')

    def test_missing_required_field(self):
        reply = json.dumps({"transactions": [{"date": "2024-01-01", "amount": 1, "type": "Credit"}]})

        with self.assertRaises(ResponseParseError):
            self.analyzer.parse_transactions(reply)

    def test_non_numeric_amount(self):
        reply = json.dumps({"transactions": [
            {"date": "2024-01-01", "description": "x", "amount": "ten", "type": "Debit"}
        ]})

        with self.assertRaises(ResponseParseError):
            self.analyzer.parse_transactions(reply)


class TestAnalyze(unittest.IsolatedAsyncioTestCase):
    """Test the single model call."""

    async def test_analyze_returns_result_with_summary(self):
        models = FakeModels(text=SAMPLE_REPLY)
        analyzer = StatementAnalyzer(api_key="", model_name="test-model", client=fake_client(models))
        parts = [ImagePart(mime_type="image/jpeg", data=b"jpeg")]

        result = await analyzer.analyze(parts)

        self.assertEqual(len(models.calls), 1)
        self.assertEqual(models.calls[0]["model"], "test-model")
        self.assertEqual(len(result.transactions), 3)
        # totals follow the amount sign, not the returned type
        self.assertEqual(result.summary.total_income, Decimal("2512.25"))
        self.assertEqual(result.summary.total_expense, Decimal("4.5"))
        self.assertEqual(result.summary.net, Decimal("2507.75"))

    async def test_empty_reply(self):
        analyzer = StatementAnalyzer(api_key="", model_name="m", client=fake_client(FakeModels(text="")))

        with self.assertRaises(LLMError) as ctx:
            await analyzer.analyze([ImagePart(mime_type="image/png", data=b"x")])

        self.assertIn("No response", str(ctx.exception))

    async def test_network_failure_is_llm_error(self):
        models = FakeModels(error=ConnectionError("connection reset"))
        analyzer = StatementAnalyzer(api_key="", model_name="m", client=fake_client(models))

        with self.assertRaises(LLMError):
            await analyzer.analyze([ImagePart(mime_type="image/png", data=b"x")])

        # one attempt only
        self.assertEqual(len(models.calls), 1)

    def test_missing_api_key(self):
        with self.assertRaises(ConfigError):
            StatementAnalyzer(api_key="", model_name="m")


if __name__ == "__main__":
    unittest.main()
