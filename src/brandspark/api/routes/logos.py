"""Stateless logo routes: one request in, images out."""

import logging

from fastapi import APIRouter, HTTPException, status

from ...agents.base import DataUrlFormatError, LogoServiceError
from ...models.logo import LogoVariant
from ...services.downloads import download_filename
from ..dependencies import LogoAgentDep
from ..schemas import (
    EnhanceLogoRequest,
    EnhanceLogoResponse,
    GenerateLogosRequest,
    GenerateLogosResponse,
)
from ..security import RateLimitDep

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/logos/generate", response_model=GenerateLogosResponse)
async def generate_logos(request: GenerateLogosRequest, agent: LogoAgentDep, _: RateLimitDep):
    """Generate logo variants for a brand."""
    try:
        logos = await agent.generate_logos(request.brand_name, request.prompt)
    except LogoServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to generate logos. {e}",
        ) from e

    return GenerateLogosResponse(
        brand_name=request.brand_name,
        logos=[
            LogoVariant(
                index=i,
                data_url=logo,
                filename=download_filename(request.brand_name, i),
            )
            for i, logo in enumerate(logos, 1)
        ],
    )


@router.post("/logos/enhance", response_model=EnhanceLogoResponse)
async def enhance_logo(request: EnhanceLogoRequest, agent: LogoAgentDep, _: RateLimitDep):
    """Edit an existing logo following a change description."""
    try:
        enhanced = await agent.enhance_logo(request.image, request.prompt)
    except DataUrlFormatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except LogoServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to enhance logo. {e}",
        ) from e

    return EnhanceLogoResponse(
        original=request.image,
        enhanced=enhanced,
        filename=download_filename("", 1),
    )
