import logging
from dataclasses import dataclass
from uuid import UUID

from legalhub.core.errors import ConflictError, ForbiddenError
from legalhub.domain.actor import ActorContext
from legalhub.domain.models.category import Category, CategoryType
from legalhub.domain.models.post import PostStatus
from legalhub.domain.models.specialist_profile import SpecialistProfile
from legalhub.domain.models.user import UserRole
from legalhub.domain.ownership import OwnedBy, Ownership, Unclaimed
from legalhub.infrastructure.observability.metrics import record_access_denial

logger = logging.getLogger(__name__)

CONTENT_AUTHOR_ROLES = (UserRole.SUPER_ADMIN, UserRole.COMPANY, UserRole.SPECIALIST)
ADOPTING_ROLES = (UserRole.COMPANY, UserRole.SPECIALIST)


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    adopt: bool = False


ALLOW = AccessDecision(allowed=True)
DENY = AccessDecision(allowed=False)


def decide_post_write(ctx: ActorContext, ownership: Ownership, company_id: UUID | None) -> AccessDecision:
    if ctx.actor is None:
        return DENY
    if ctx.has_role(UserRole.SUPER_ADMIN):
        return ALLOW
    if isinstance(ownership, OwnedBy) and ownership.user_id == ctx.actor.user_id:
        return ALLOW
    if (
        ctx.has_role(UserRole.COMPANY)
        and company_id is not None
        and ctx.company_id is not None
        and ctx.company_id == company_id
    ):
        return ALLOW
    if isinstance(ownership, Unclaimed) and ctx.has_role(*ADOPTING_ROLES):
        return AccessDecision(allowed=True, adopt=True)
    return DENY


def decide_post_read(
    ctx: ActorContext, ownership: Ownership, company_id: UUID | None, status: str
) -> AccessDecision:
    if status == PostStatus.PUBLISHED.value:
        return ALLOW
    decision = decide_post_write(ctx, ownership, company_id)
    return AccessDecision(allowed=decision.allowed)


def enforce(decision: AccessDecision, *, operation: str, ctx: ActorContext) -> AccessDecision:
    if not decision.allowed:
        record_access_denial(operation)
        logger.info("access_denied operation=%s user_id=%s role=%s", operation, ctx.user_id, ctx.role)
        raise ForbiddenError()
    return decision


def require_roles(ctx: ActorContext, *roles: UserRole, operation: str) -> None:
    if not ctx.has_role(*roles):
        enforce(DENY, operation=operation, ctx=ctx)


def check_category_attachable(category: Category, effective_company_id: UUID | None) -> None:
    if category.type == CategoryType.GLOBAL.value:
        return
    if category.type == CategoryType.COMPANY.value:
        if effective_company_id is not None and category.company_id == effective_company_id:
            return
        raise ConflictError(
            "You cannot use categories that belong to another company",
            error_code="category_company_mismatch",
            field="category_ids",
        )
    raise ConflictError("Unsupported category type", error_code="category_type_unsupported", field="category_ids")


def can_manage_company(ctx: ActorContext, company_id: UUID) -> bool:
    if ctx.has_role(UserRole.SUPER_ADMIN):
        return True
    return ctx.has_role(UserRole.COMPANY) and ctx.company_id is not None and ctx.company_id == company_id


def can_manage_category(ctx: ActorContext, category: Category) -> bool:
    if ctx.has_role(UserRole.SUPER_ADMIN):
        return True
    if category.type != CategoryType.COMPANY.value:
        return False
    return can_manage_company(ctx, category.company_id)


def can_edit_specialist_profile(ctx: ActorContext, profile: SpecialistProfile) -> bool:
    if ctx.actor is None:
        return False
    if ctx.has_role(UserRole.SUPER_ADMIN):
        return True
    if ctx.has_role(UserRole.SPECIALIST):
        return bool(ctx.actor.email) and profile.contact_email == ctx.actor.email
    if ctx.has_role(UserRole.COMPANY) and profile.company_id is not None:
        return ctx.company_id == profile.company_id
    return False
