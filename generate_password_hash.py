#!/usr/bin/env python3
"""
Password Hash Generator
Generates the bcrypt ADMIN_PASSWORD_HASH used by the gallery admin login.
"""
import getpass

from photogallery.utils.auth import hash_password


def main():
    """Prompt for the admin password twice and print the .env line."""
    print("=" * 60)
    print("Gallery Admin Password Hash Generator")
    print("=" * 60)
    print()

    password = getpass.getpass("Enter admin password: ")
    if not password:
        print("\nError: Password cannot be empty")
        return

    password_confirm = getpass.getpass("Confirm password: ")
    if password != password_confirm:
        print("\nError: Passwords do not match")
        return

    print("\nGenerating hash...")
    hashed = hash_password(password)

    print("\nCopy this line to your .env file:\n")
    print(f"ADMIN_PASSWORD_HASH={hashed}")
    print()
    print("Keep this hash secret and never commit it to version control!")


if __name__ == "__main__":
    main()
