"""HTTP API: upload statements, get analysis JSON, export CSV."""
from decimal import Decimal
from typing import Callable, List, Optional

from fastapi import APIRouter, FastAPI, File, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel

from statementai.config.manager import Config, ConfigManager
from statementai.config.settings import get_settings
from statementai.documents.intake import from_upload
from statementai.llm.models import Transaction, TransactionType
from statementai.orchestrator.processor import AnalysisPipeline
from statementai.report.charts import daily_flow, cumulative_balance
from statementai.report.table import TransactionTable, export_file_name
from statementai.utils.logger import get_logger
from statementai.utils.exceptions import (
    StatementAIError,
    ConfigError,
    DocumentError,
    LLMError,
    ValidationError
)

logger = get_logger()

PipelineFactory = Callable[[Config], AnalysisPipeline]


class TransactionIn(BaseModel):
    date: str
    description: str
    amount: float
    type: str
    notes: str = ""

    def to_transaction(self) -> Transaction:
        return Transaction(
            date=self.date,
            description=self.description,
            amount=Decimal(str(self.amount)),
            type=TransactionType.coerce(self.type),
            notes=self.notes
        )


class ExportRequest(BaseModel):
    transactions: List[TransactionIn]
    type: str = "All"
    search: str = ""


def _status_code_for(error: StatementAIError) -> int:
    if isinstance(error, (ConfigError, DocumentError, ValidationError)):
        return 400
    if isinstance(error, LLMError):
        return 502
    return 500


def _load_config() -> Config:
    manager = ConfigManager()
    config = manager.load_config()
    is_valid, message = manager.validate_config(config)
    if not is_valid:
        raise ConfigError(message)
    return config


def create_router(pipeline_factory: PipelineFactory) -> APIRouter:
    router = APIRouter(prefix="/api/v1", tags=["Statement Analysis"])

    @router.post("/analyze")
    async def analyze(files: List[UploadFile] = File(...)):
        try:
            inputs = [
                from_upload(upload.filename or "upload", await upload.read(), upload.content_type)
                for upload in files
            ]
            pipeline = pipeline_factory(_load_config())
            result = await pipeline.run(inputs)
        except StatementAIError as e:
            raise HTTPException(status_code=_status_code_for(e), detail=str(e))

        flows = daily_flow(result.transactions)
        payload = result.to_dict()
        payload["daily_flow"] = [flow.to_dict() for flow in flows]
        payload["balance_trend"] = [point.to_dict() for point in cumulative_balance(flows)]
        return payload

    @router.post("/export")
    async def export(request: ExportRequest):
        try:
            table = TransactionTable(
                [item.to_transaction() for item in request.transactions],
                type_filter=request.type,
                search=request.search
            )
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=str(e))

        return Response(
            content=table.to_csv(),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{export_file_name()}"'}
        )

    return router


def create_app(pipeline_factory: Optional[PipelineFactory] = None) -> FastAPI:
    """Build the API; tests pass a factory that wires in a fake analyzer."""
    settings = get_settings()
    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.include_router(create_router(pipeline_factory or AnalysisPipeline))

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "message": f"{settings.app_name} API is running"}

    return app
