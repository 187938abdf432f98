"""
API endpoints for live channel listings and live source metadata.
"""
import time
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from loguru import logger

from app.api.dependencies import get_refresh_coordinator, get_source_store
from app.core.providers.config_store import ConfigStore
from app.models.api import LiveChannelsResponse, LiveSourceResponse
from app.services.refresh_coordinator import RefreshCoordinator


router = APIRouter()


@router.get("/live/channels", response_model=LiveChannelsResponse)
async def get_live_channels(
    source: Optional[str] = Query(default=None, description="Live source key"),
    coordinator: RefreshCoordinator = Depends(get_refresh_coordinator),
):
    """
    Returns the channel listing of a live source.

    Serves the cached listing while it is fresh, otherwise fetches and
    parses the source playlist first.

    Args:
        source: Key of the configured live source.
        coordinator: The service handling cache lookup and refresh.

    Returns:
        LiveChannelsResponse: The source reference, its channels and whether
        they came from the cache.
    """
    logger.info(f"Incoming live channels request for source: {source}")

    start_time = time.perf_counter()
    result = await coordinator.get_channels(source)
    duration = time.perf_counter() - start_time
    logger.info(
        f"Live channels for '{source}' served in {duration:.2f}s (cached={result.cached})"
    )
    return LiveChannelsResponse.from_result(result)


@router.get("/live/sources", response_model=List[LiveSourceResponse])
async def list_live_sources(
    config_store: ConfigStore = Depends(get_source_store),
):
    """
    Lists configured live sources in their stored order.

    Args:
        config_store: The live source config store.

    Returns:
        A list of LiveSourceResponse objects.
    """
    configs = await config_store.get_live_configs()
    return [LiveSourceResponse.from_config(config) for config in configs]
