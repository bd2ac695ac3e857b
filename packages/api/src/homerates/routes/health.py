# This project was developed with assistance from AI tools.
"""Health check routes."""

import logging

from fastapi import APIRouter

from .. import __version__
from ..core.config import settings
from ..schemas.health import HealthItem
from ..services.errors import KnowledgeDataError
from ..services.knowledge import get_knowledge

logger = logging.getLogger(__name__)

router = APIRouter()


def _knowledge_item() -> HealthItem:
    try:
        data = get_knowledge(settings.KNOWLEDGE_PATH)
    except (OSError, KnowledgeDataError) as exc:
        logger.warning("Knowledge dataset unavailable: %s", exc)
        return HealthItem(name="Knowledge", status="unhealthy", message=str(exc))
    return HealthItem(
        name="Knowledge",
        status="healthy",
        message=f"{len(data['zip_to_county'])} ZIPs, "
        f"{len(data['county_tax_rates'])} county tax rates",
    )


@router.get("/", response_model=list[HealthItem])
async def health() -> list[HealthItem]:
    """API and knowledge dataset status."""
    return [
        HealthItem(name="API", status="healthy", message="Running", version=__version__),
        _knowledge_item(),
    ]
