from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from urllist.config.logging_config import get_logger
from urllist.core.config import settings
from urllist.exceptions import BatchSizeException, InvalidURLException, MissingURLException
from urllist.models.metadata_model import (
    BatchMetadataRequest,
    InvalidateResponse,
    LinkMetadataResponse,
    URLStateResponse,
)
from urllist.services.container import get_metadata_service
from urllist.services.exceptions import InvalidURLError
from urllist.services.metadata_service import MetadataService

logger = get_logger(__name__)

router = APIRouter()


def _require_url(url: Optional[str]) -> str:
    if url is None or not url.strip():
        raise MissingURLException()
    return url


@router.get("", response_model=LinkMetadataResponse)
async def get_metadata(
    url: Optional[str] = Query(None, description="URL to build a preview for"),
    service: MetadataService = Depends(get_metadata_service),
):
    """
    Preview metadata for one URL. Unreachable pages are answered with a
    preview built from the URL itself.
    """
    url = _require_url(url)
    logger.info(f"Received metadata request for: {url}")
    try:
        metadata = await service.resolve(url)
    except InvalidURLError:
        raise InvalidURLException(url)
    return metadata.to_dict()


@router.post("/batch", response_model=List[URLStateResponse])
async def get_metadata_batch(
    request: BatchMetadataRequest,
    service: MetadataService = Depends(get_metadata_service),
):
    """Resolve every URL of a collection; one entry per URL, in request order"""
    size = len(request.urls)
    if size == 0 or size > settings.batch_max_urls:
        raise BatchSizeException(size, settings.batch_max_urls)

    logger.info(f"Received batch metadata request for {size} URLs")
    states = await service.resolve_all(request.urls)
    return [state.to_dict() for state in states]


@router.delete("", response_model=InvalidateResponse)
async def invalidate_metadata(
    url: Optional[str] = Query(None),
    service: MetadataService = Depends(get_metadata_service),
):
    url = _require_url(url)
    invalidated = service.invalidate(url)
    return {"url": url, "invalidated": invalidated}
