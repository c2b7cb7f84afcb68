from legalhub.domain.models.audit_log import AuditLog
from legalhub.domain.models.category import Category, CategoryTranslation
from legalhub.domain.models.company import Company, CompanyTranslation
from legalhub.domain.models.post import Post, PostCategory, PostTranslation
from legalhub.domain.models.practice_area import PracticeArea, PracticeAreaTranslation, Service, ServiceTranslation
from legalhub.domain.models.specialist_profile import SpecialistProfile, SpecialistProfileTranslation
from legalhub.domain.models.user import User

__all__ = [
    "AuditLog",
    "Category",
    "CategoryTranslation",
    "Company",
    "CompanyTranslation",
    "Post",
    "PostCategory",
    "PostTranslation",
    "PracticeArea",
    "PracticeAreaTranslation",
    "Service",
    "ServiceTranslation",
    "SpecialistProfile",
    "SpecialistProfileTranslation",
    "User",
]
