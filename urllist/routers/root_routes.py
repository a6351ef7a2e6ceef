from fastapi import APIRouter, Depends

from urllist.services.cache_service import CacheInterface
from urllist.services.container import container

router = APIRouter()


@router.get("/")
async def root():
    return {"message": "URL List metadata service is running"}


@router.get("/health")
async def health(cache: CacheInterface = Depends(lambda: container.get_service(CacheInterface))):
    return {"status": "ok", "cache_size": len(cache)}
