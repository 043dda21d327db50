"""
Financial Statement Extraction
Sends uploaded financial statements to the ``analyze-tax-docs`` Supabase edge
function and maps the extracted figures onto a ``BusinessInput``.

Extracted values are treated exactly like manually entered ones; any field
the extraction could not find defaults to zero.
"""

import json
import logging
from dataclasses import dataclass

import httpx

from taxbuddy.core.tax_rules.cit import BusinessInput

logger = logging.getLogger(__name__)

AUDITED_STATEMENT = "auditedStatement"
MAX_PAYLOAD_BYTES = 8 * 1024 * 1024


class ExtractionError(Exception):
    pass


class InvalidUpload(ExtractionError):
    pass


@dataclass
class UploadedDocument:
    type: str
    name: str
    data: str  # base64-encoded PDF


@dataclass
class ExtractionResult:
    company_name: str | None = None
    annual_turnover: float | None = None
    net_profit_before_tax: float | None = None
    total_fixed_assets: float | None = None
    depreciation: float | None = None
    fines_penalties: float | None = None
    capital_allowances: float | None = None
    confidence_score: float | None = None
    extraction_summary: str | None = None

    @classmethod
    def from_payload(cls, payload: dict) -> "ExtractionResult":
        def number(key: str) -> float | None:
            value = payload.get(key)
            if value is None or value == "":
                return None
            try:
                return float(value)
            except (TypeError, ValueError):
                logger.warning("Ignoring non-numeric extracted value for %s: %r", key, value)
                return None

        return cls(
            company_name=payload.get("company_name"),
            annual_turnover=number("annual_turnover"),
            net_profit_before_tax=number("net_profit_before_tax"),
            total_fixed_assets=number("total_fixed_assets"),
            depreciation=number("depreciation"),
            fines_penalties=number("fines_penalties"),
            capital_allowances=number("capital_allowances"),
            confidence_score=number("confidence_score"),
            extraction_summary=payload.get("extraction_summary"),
        )

    def to_business_input(self) -> BusinessInput:
        return BusinessInput(
            turnover=max(self.annual_turnover or 0.0, 0.0),
            assets=max(self.total_fixed_assets or 0.0, 0.0),
            profit_before_tax=max(self.net_profit_before_tax or 0.0, 0.0),
            depreciation=max(self.depreciation or 0.0, 0.0),
            fines_penalties=max(self.fines_penalties or 0.0, 0.0),
            capital_allowances=max(self.capital_allowances or 0.0, 0.0),
        )


class DocumentExtractor:
    """
    Client for the document analysis edge function.
    """

    def __init__(
        self,
        supabase_url: str,
        api_key: str,
        function_name: str = "analyze-tax-docs",
        timeout: float = 60.0,
        max_payload_bytes: int = MAX_PAYLOAD_BYTES,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint = f"{supabase_url.rstrip('/')}/functions/v1/{function_name}"
        self.api_key = api_key
        self.timeout = timeout
        self.max_payload_bytes = max_payload_bytes
        self._transport = transport

    def build_payload(self, documents: list[UploadedDocument]) -> dict:
        if not any(doc.type == AUDITED_STATEMENT for doc in documents):
            raise InvalidUpload("Please upload the Audited Financial Statement")

        payload = {
            "pdfs": [{"type": doc.type, "name": doc.name, "data": doc.data} for doc in documents]
        }
        if len(json.dumps(payload)) > self.max_payload_bytes:
            raise InvalidUpload("Files are too large. Please upload smaller PDFs.")
        return payload

    async def analyze(self, documents: list[UploadedDocument]) -> ExtractionResult:
        payload = self.build_payload(documents)
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "apikey": self.api_key,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Document extraction request failed: %s", e)
            raise ExtractionError("Failed to analyze documents.") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ExtractionError(f"Invalid extraction response (HTTP {response.status_code})") from e
        if not isinstance(data, dict):
            raise ExtractionError(f"Invalid extraction response (HTTP {response.status_code})")

        if response.status_code != 200 or data.get("error"):
            message = data.get("error")
            logger.error("Document extraction failed (HTTP %s): %s", response.status_code, message)
            if message and "API Key not configured" in message:
                raise ExtractionError("AI service not configured.")
            raise ExtractionError(message or "Failed to analyze documents.")

        logger.info("Extracted financial data from %d document(s)", len(documents))
        return ExtractionResult.from_payload(data)
