"""
Document extraction API routes.
Pre-fills the business calculator from uploaded financial statements.
"""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Depends

from taxbuddy.api.deps import get_current_user_id, get_document_extractor
from taxbuddy.core.extraction import DocumentExtractor, ExtractionError, InvalidUpload, UploadedDocument
from taxbuddy.schemas.schemas import ExtractionRequest

router = APIRouter()


@router.post("/analyze")
async def analyze_documents(
    data: ExtractionRequest,
    user_id: str = Depends(get_current_user_id),
    extractor: DocumentExtractor = Depends(get_document_extractor),
):
    """Extract turnover, assets, profit and adjustments from financial statements."""
    documents = [UploadedDocument(type=d.type, name=d.name, data=d.data) for d in data.documents]
    try:
        extraction = await extractor.analyze(documents)
    except InvalidUpload as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ExtractionError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return {
        "extraction": asdict(extraction),
        "business_input": asdict(extraction.to_business_input()),
    }
