"""CLI tool for admin operations.

Usage:
    python -m lending_identity.cli create-user
"""

import sys
import getpass

from sqlmodel import Session

from lending_identity.database import engine, create_db_and_tables
from lending_identity.models.user import User
from lending_identity.services.auth import hash_password
from lending_identity.services.store import CredentialStore
from lending_identity.services.wallet import NonceGenerator, challenge_message, normalize_address


def create_user():
    """Create a verified user that can log in with password or wallet 2FA."""
    create_db_and_tables()

    email = input("Email: ").strip()
    if not email:
        print("Email cannot be empty.")
        sys.exit(1)
    name = input("Name: ").strip()
    wallet_address = input("Wallet address (optional): ").strip() or None
    if wallet_address:
        wallet_address = normalize_address(wallet_address)

    with Session(engine) as session:
        store = CredentialStore(session)
        if store.find_user_by_email(email):
            print(f"User '{email}' already exists.")
            sys.exit(1)
        if wallet_address and store.find_user_by_wallet(wallet_address):
            print(f"Wallet '{wallet_address}' is already registered.")
            sys.exit(1)

    password = getpass.getpass("Password: ")
    password_confirm = getpass.getpass("Confirm password: ")
    if password != password_confirm:
        print("Passwords do not match.")
        sys.exit(1)

    nonce = NonceGenerator().generate()
    user = User(
        email=email,
        name=name,
        hashed_password=hash_password(password),
        wallet_address=wallet_address,
        nonce=nonce,
        is_email_verified=True,
    )

    with Session(engine) as session:
        user = CredentialStore(session).create_user(user)

    print(f"\nUser '{email}' created successfully (id {user.id}).")
    if wallet_address:
        print("\nFirst wallet login must sign:")
        print(f"  {challenge_message(nonce)}")


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m lending_identity.cli <command>")
        print("Commands: create-user")
        sys.exit(1)

    command = sys.argv[1]
    if command == "create-user":
        create_user()
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
