"""
API routes for AI-assisted menu copy.
"""
from fastapi import APIRouter, Depends, HTTPException

from app.core.llm_client import LLMClient, get_llm_client
from app.core.logging import get_logger
from app.db.schema import EnhanceDescriptionRequest, EnhanceDescriptionResponse

logger = get_logger("api.routes_ai")
router = APIRouter(prefix="/api/ai", tags=["AI"])


@router.post("/enhanceDescription", response_model=EnhanceDescriptionResponse)
async def enhance_description(
    request: EnhanceDescriptionRequest,
    llm: LLMClient = Depends(get_llm_client)
):
    """
    Rewrite a menu item's description with the configured LLM.

    - **name**: Item name
    - **oldDescription**: Current description
    - **brandVoice**: Optional tone hint (defaults to "generic")

    Provider failures are returned as 500 with the provider's message.
    """
    try:
        new_description = await llm.enhance_description(
            request.name,
            request.old_description,
            request.brand_voice
        )
    except Exception as e:
        logger.error(f"Error enhancing description: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return EnhanceDescriptionResponse(new_description=new_description)
