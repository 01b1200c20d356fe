# scripts/setup/hash_password.py
"""
Print the ADMIN_PASSWORD_HASH value for a password.
Usage: python scripts/setup/hash_password.py [password]
"""

import sys
import os
import getpass
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from portal.services.admin_service import hash_password


def main():
    password = sys.argv[1] if len(sys.argv) > 1 else getpass.getpass("Admin password: ")
    if not password:
        print("❌ Empty password")
        sys.exit(1)
    print(f"ADMIN_PASSWORD_HASH={hash_password(password)}")


if __name__ == "__main__":
    main()
