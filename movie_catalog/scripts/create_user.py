"""
Create a user (e.g. the first admin). Run from project root:
  python -m movie_catalog.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m movie_catalog.scripts.create_user "Site Admin" admin@example.com 'S3cure!pass' ADMIN
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from movie_catalog.core.database import SessionLocal
from movie_catalog.core.security import hash_password
from movie_catalog.models.user import User, UserRole
from movie_catalog.schemas.users import UserForm
from movie_catalog.services.accounts import find_by_email

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a movie catalog user.")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="Strong password (8+ chars, mixed case, digit, symbol)")
    parser.add_argument(
        "role", nargs="?", default=UserRole.USER.value, choices=[r.value for r in UserRole]
    )
    args = parser.parse_args(argv)

    try:
        form = UserForm(name=args.name, email=args.email, password=args.password, role=args.role)
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"{field}: {err['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        if find_by_email(db, form.email) is not None:
            print(f"User '{form.email}' already exists.", file=sys.stderr)
            return 1
        user = User(
            name=form.name,
            email=form.email,
            password=hash_password(form.password),
            role=form.role.value,
        )
        db.add(user)
        db.commit()
        logger.info("Created user id=%s email=%s role=%s", user.id, form.email, form.role.value)
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
