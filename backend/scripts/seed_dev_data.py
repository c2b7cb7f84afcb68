from sqlalchemy import select

from legalhub.application.services.slug_service import slugify
from legalhub.core.security import create_access_token
from legalhub.domain.models.category import Category, CategoryTranslation, CategoryType
from legalhub.domain.models.company import Company, CompanyTranslation
from legalhub.domain.models.post import AuthorType, Post, PostCategory, PostStatus, PostTranslation
from legalhub.domain.models.practice_area import PracticeArea, PracticeAreaTranslation, Service
from legalhub.domain.models.specialist_profile import SpecialistProfile, SpecialistProfileTranslation
from legalhub.domain.models.user import User, UserRole
from legalhub.infrastructure.db.session import SessionLocal


DEFAULT_COMPANY_NAME = "Legal Partners Tbilisi"
DEFAULT_COMPANY_SLUG = "legal-partners-tbilisi"


def seed_dev_data() -> None:
    with SessionLocal() as db:
        existing_company = db.execute(select(Company).where(Company.slug == DEFAULT_COMPANY_SLUG)).scalar_one_or_none()
        if existing_company is not None:
            print(f"Seed exists: company_id={existing_company.id}")
            return

        company = Company(
            slug=DEFAULT_COMPANY_SLUG,
            name=DEFAULT_COMPANY_NAME,
            short_desc="იურიდიული მომსახურება ბიზნესისთვის",
            city="Tbilisi",
            email="office@legalpartners.local",
        )
        db.add(company)
        db.flush()
        db.add(
            CompanyTranslation(
                company_id=company.id,
                locale="en",
                name=DEFAULT_COMPANY_NAME,
                slug=DEFAULT_COMPANY_SLUG,
                short_desc="Legal services for business",
            )
        )

        admin = User(email="admin@legalhub.local", name="Platform Admin", role=UserRole.SUPER_ADMIN.value)
        owner = User(
            email="owner@legalpartners.local",
            name="Company Owner",
            role=UserRole.COMPANY.value,
            company_id=company.id,
        )
        specialist_user = User(email="nino@legalpartners.local", name="Nino Beridze", role=UserRole.SPECIALIST.value)
        db.add_all([admin, owner, specialist_user])
        db.flush()

        profile = SpecialistProfile(
            slug=slugify("Nino Beridze"),
            name="ნინო ბერიძე",
            role="Partner",
            contact_email=specialist_user.email,
            company_id=company.id,
            languages=["ka", "en"],
            specializations=["Tax law", "Corporate law"],
            credentials={"education": ["Tbilisi State University"]},
        )
        db.add(profile)
        db.flush()
        db.add(
            SpecialistProfileTranslation(
                specialist_profile_id=profile.id,
                locale="en",
                name="Nino Beridze",
                slug="nino-beridze",
                specializations=["Tax law", "Corporate law", "M&A"],
            )
        )

        area = PracticeArea(slug="tax-law", title="საგადასახადო სამართალი")
        db.add(area)
        db.flush()
        db.add(PracticeAreaTranslation(practice_area_id=area.id, locale="en", title="Tax Law", slug="tax-law"))
        db.add(Service(practice_area_id=area.id, slug="tax-disputes", title="საგადასახადო დავები"))

        news = Category(name="News", slug="news", type=CategoryType.GLOBAL.value)
        firm_updates = Category(
            name="Firm updates",
            slug="firm-updates",
            type=CategoryType.COMPANY.value,
            company_id=company.id,
        )
        db.add_all([news, firm_updates])
        db.flush()
        db.add(CategoryTranslation(category_id=news.id, locale="ka", name="სიახლეები", slug="siakhleebi"))

        post = Post(
            title="საგადასახადო კანონის ცვლილებები",
            slug=slugify("საგადასახადო კანონის ცვლილებები"),
            body="<p>მიმოხილვა</p>",
            status=PostStatus.PUBLISHED.value,
            author_type=AuthorType.SPECIALIST.value,
            author_id=specialist_user.id,
            company_id=company.id,
            locale="ka",
        )
        db.add(post)
        db.flush()
        db.add(PostTranslation(post_id=post.id, locale="en", title="Tax Law Changes", slug="tax-law-changes"))
        db.add(PostCategory(post_id=post.id, category_id=news.id))

        db.commit()

        print("Created dev seed data:")
        print(f"- company_id: {company.id}")
        print(f"- admin_token: {create_access_token(admin.id, admin.role, email=admin.email)}")
        print(f"- company_token: {create_access_token(owner.id, owner.role, company_id=company.id, email=owner.email)}")
        print(
            "- specialist_token: "
            f"{create_access_token(specialist_user.id, specialist_user.role, email=specialist_user.email)}"
        )
        print(f"- post_id: {post.id}")


if __name__ == "__main__":
    seed_dev_data()
