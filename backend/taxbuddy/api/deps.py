"""
Shared API dependencies.
Provides reusable FastAPI dependencies for authentication, storage and
document extraction.
"""

import logging

from fastapi import HTTPException, Header, Depends
from supabase import create_client

from taxbuddy.config import get_settings
from taxbuddy.core.extraction import DocumentExtractor
from taxbuddy.core.store import CalculationStore

logger = logging.getLogger(__name__)
settings = get_settings()


def get_supabase():
    """Get a Supabase client instance."""
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


def get_supabase_admin():
    """Get Supabase client with service role key (bypasses RLS for server-side operations)."""
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)


async def get_current_user(authorization: str = Header(...)):
    """
    Validate Supabase JWT token and return the authenticated user.
    Use as a FastAPI dependency: Depends(get_current_user)
    """
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header")

    token = authorization.replace("Bearer ", "")
    supabase = get_supabase()

    try:
        user_response = supabase.auth.get_user(token)
        if not user_response or not user_response.user:
            raise HTTPException(status_code=401, detail="Invalid or expired token")
        return user_response.user
    except HTTPException:
        raise
    except Exception as e:
        logger.warning("Token validation failed: %s", e)
        raise HTTPException(status_code=401, detail=f"Authentication failed: {str(e)}")


async def get_current_user_id(user=Depends(get_current_user)) -> str:
    """Extract the Supabase user ID string from the authenticated user."""
    return str(user.id)


def get_calculation_store(user=Depends(get_current_user)) -> CalculationStore:
    """Saved calculation storage; only handed out to authenticated callers."""
    return CalculationStore(get_supabase_admin(), table=settings.CALCULATIONS_TABLE)


def get_document_extractor() -> DocumentExtractor:
    return DocumentExtractor(
        supabase_url=settings.SUPABASE_URL,
        api_key=settings.SUPABASE_KEY,
        function_name=settings.EXTRACTION_FUNCTION,
        timeout=settings.EXTRACTION_TIMEOUT,
        max_payload_bytes=settings.EXTRACTION_MAX_PAYLOAD_BYTES,
    )
