from uuid import UUID

from sqlalchemy.orm import Session

from legalhub.domain.models.audit_log import AuditLog


def log_audit_event(
    db: Session,
    *,
    action: str,
    company_id: UUID | None = None,
    actor_id: UUID | None = None,
    metadata: dict | None = None,
) -> None:
    db.add(
        AuditLog(
            company_id=company_id,
            actor_id=actor_id,
            action=action,
            metadata_json=metadata or {},
        )
    )
