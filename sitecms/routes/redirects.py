from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from sitecms.database import get_db
from sitecms.schemas.i18n import RedirectResponse
from sitecms.services.redirect_service import list_active_redirects

redirects_router = APIRouter(prefix="/api/v1/redirects", tags=["Redirects"])


@redirects_router.get("", response_model=list[RedirectResponse])
async def list_redirects(db: AsyncSession = Depends(get_db)) -> list[RedirectResponse]:
    """Active redirects, oldest first, for the front end's redirect table."""
    redirects = await list_active_redirects(db)
    return [RedirectResponse(source=r.source, destination=r.destination, permanent=r.permanent) for r in redirects]
