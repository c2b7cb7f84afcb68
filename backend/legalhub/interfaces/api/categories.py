from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from legalhub.application.services.category_service import (
    create_category,
    delete_category,
    list_categories,
    serialize_category,
)
from legalhub.domain.actor import ActorContext
from legalhub.domain.payloads import CategoryCreatePayload
from legalhub.infrastructure.db.session import get_db
from legalhub.interfaces.api.deps import get_actor_context, get_locale, require_actor

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", status_code=status.HTTP_200_OK)
def list_categories_endpoint(
    locale: str = Depends(get_locale),
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(get_actor_context),
) -> dict:
    return {"items": list_categories(db, ctx, locale)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_category_endpoint(
    payload: CategoryCreatePayload,
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(require_actor),
) -> dict:
    return serialize_category(create_category(db, ctx, payload))


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category_endpoint(
    category_id: UUID,
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(require_actor),
) -> Response:
    delete_category(db, ctx, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
