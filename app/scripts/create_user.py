"""
Create a user out of band (e.g. first admin). Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user admin admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.security import (
    BCRYPT_MAX_BYTES,
    USERNAME_MAX_LEN,
    hash_password,
    password_fits_bcrypt,
)
from app.services.credential_store import CredentialStore, DuplicateEmailError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Review API user.")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Unique email")
    parser.add_argument("password", help=f"Password (1-{BCRYPT_MAX_BYTES} bytes in UTF-8)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not args.password or not password_fits_bcrypt(args.password):
        print(f"Password must be 1-{BCRYPT_MAX_BYTES} bytes.", file=sys.stderr)
        return 1

    settings = get_settings()
    email = settings.normalize_email(args.email.strip())

    db = SessionLocal()
    try:
        store = CredentialStore(db)
        if store.find_by_email(email) is not None:
            print(f"User with email '{email}' already exists.", file=sys.stderr)
            return 1
        try:
            store.insert(
                username=username,
                email=email,
                password_hash=hash_password(args.password, rounds=settings.BCRYPT_ROUNDS),
                role=args.role,
            )
        except DuplicateEmailError:
            print(f"User with email '{email}' already exists.", file=sys.stderr)
            return 1
        print(f"Created user '{username}' <{email}> with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
