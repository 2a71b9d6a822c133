"""
Create the first admin account if the users file has none. Run from project root:
  python -m app.scripts.create_admin [--username admin] [--password PASSWORD] [--email EMAIL]
Without --password a random one is generated and printed once.
"""
import argparse
import logging
import secrets
import sys

from app.core.config import get_settings
from app.core.errors import ConflictError
from app.core.logging import configure_logging
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    hash_password,
)
from app.services.users import UserStore

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the initial admin account (no-op if one exists).")
    parser.add_argument("--username", default="admin", help="Username (1-255 chars)")
    parser.add_argument("--password", help="Password (8-128 chars); generated when omitted")
    parser.add_argument("--email", default="", help="Contact email")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    password = args.password or secrets.token_urlsafe(12)
    if len(password) < PASSWORD_MIN_LEN or len(password) > PASSWORD_MAX_LEN:
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    store = UserStore(settings.users_path)
    if store.has_admin():
        print(f"An admin account already exists in {settings.users_path}. Skipping.")
        return 0
    try:
        store.add(
            username,
            args.email.strip(),
            hash_password(password, rounds=settings.BCRYPT_ROUNDS),
            role="admin",
        )
    except ConflictError as e:
        print(e.message, file=sys.stderr)
        return 1
    except OSError:
        logger.exception("Could not write %s", settings.users_path)
        return 1

    print(f"Created admin '{username}' in {settings.users_path}.")
    if not args.password:
        print(f"Generated password: {password}")
        print("Store it now and change it after first login.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
