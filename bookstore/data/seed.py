# bookstore/data/seed.py
from bookstore.data.database import SessionLocal, init_db
from bookstore.domain.enums import RoleName
from bookstore.domain.schemas import UserRegistrationRequest
from bookstore.repos.user_repo import UserRepo
from bookstore.services.user_service import UserService
from bookstore.utils.settings import ADMIN_EMAIL, ADMIN_PASSWORD
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


def seed():
    """Role ADMIN/USER oraz opcjonalne konto admina z ADMIN_EMAIL/ADMIN_PASSWORD."""
    db = SessionLocal()
    try:
        repo = UserRepo(db)
        for role in RoleName:
            repo.get_or_create_role(role.value)
        repo.commit()

        if not ADMIN_EMAIL or not ADMIN_PASSWORD:
            return
        if repo.get_by_email(ADMIN_EMAIL):
            return

        UserService(db).register(
            UserRegistrationRequest(
                email=ADMIN_EMAIL,
                password=ADMIN_PASSWORD,
                repeat_password=ADMIN_PASSWORD,
                first_name="Admin",
                last_name="Admin",
                shipping_address="-",
            ),
            roles=(RoleName.ADMIN, RoleName.USER),
        )
        logger.info(f"Utworzono konto admina {ADMIN_EMAIL}")
    finally:
        db.close()


if __name__ == "__main__":
    init_db()
    seed()
