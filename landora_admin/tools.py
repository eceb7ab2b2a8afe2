"""
Operator helpers for the admin gate secrets.

    landora-admin hash-password     # bcrypt hash for ADMIN_PASSWORD
    landora-admin generate-secret   # random value for ADMIN_AUTH_SECRET
"""

import argparse
import getpass
import secrets
import sys

from landora_admin.services.passwords import DEFAULT_ROUNDS, hash_password


def generate_secret(nbytes: int = 48) -> str:
    return secrets.token_urlsafe(nbytes)


def _cmd_hash_password(args) -> int:
    password = getpass.getpass("Admin password: ")
    if not password:
        print("Password must not be empty.", file=sys.stderr)
        return 1
    if getpass.getpass("Repeat password: ") != password:
        print("Passwords do not match.", file=sys.stderr)
        return 1
    print(hash_password(password, rounds=args.rounds))
    return 0


def _cmd_generate_secret(args) -> int:
    print(generate_secret(args.bytes))
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="landora-admin", description=__doc__.strip().splitlines()[0])
    sub = parser.add_subparsers(dest="command", required=True)

    p_hash = sub.add_parser("hash-password", help="print a bcrypt hash for ADMIN_PASSWORD")
    p_hash.add_argument("--rounds", type=int, default=DEFAULT_ROUNDS)
    p_hash.set_defaults(func=_cmd_hash_password)

    p_secret = sub.add_parser("generate-secret", help="print a random ADMIN_AUTH_SECRET")
    p_secret.add_argument("--bytes", type=int, default=48)
    p_secret.set_defaults(func=_cmd_generate_secret)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
