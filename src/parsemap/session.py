from __future__ import annotations

from typing import Optional

from .client import ParsemapClient
from .config import Settings, load_settings
from .service import AnnotationService


def setup(
    settings: Optional[Settings] = None,
    client: Optional[ParsemapClient] = None,
) -> AnnotationService:
    """Build an AnnotationService talking to the zone store.

    Nothing is cached at module level; callers own the returned service and
    close its client when done.
    """
    settings = settings or load_settings()
    client = client or ParsemapClient(
        base_url=settings.base_url,
        api_key=settings.api_key,
        timeout=settings.timeout,
    )
    return AnnotationService(zones=client, points=client, config=settings.clustering)
