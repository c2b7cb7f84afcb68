from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from legalhub.application.services.company_service import get_company, list_companies, update_company_profile
from legalhub.domain.actor import ActorContext
from legalhub.domain.payloads import CompanyProfilePayload
from legalhub.infrastructure.db.session import get_db
from legalhub.interfaces.api.deps import get_locale, require_actor

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("", status_code=status.HTTP_200_OK)
def list_companies_endpoint(
    locale: str = Depends(get_locale),
    db: Session = Depends(get_db),
) -> dict:
    return {"items": list_companies(db, locale)}


@router.patch("/profile", status_code=status.HTTP_200_OK)
def update_profile(
    payload: CompanyProfilePayload,
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(require_actor),
) -> dict:
    return update_company_profile(db, ctx, payload)


@router.get("/{slug}", status_code=status.HTTP_200_OK)
def get_company_by_slug(
    slug: str,
    locale: str = Depends(get_locale),
    db: Session = Depends(get_db),
) -> dict:
    return get_company(db, slug, locale)
