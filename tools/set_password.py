# FILE: tools/set_password.py
"""
Set the shared memories password (stored hashed in <DATA_DIR>/password.json)

Usage: python -m tools.set_password [--data-dir DIR]
"""
import argparse
import getpass
import sys

from backend.config import get_settings
from backend.services.auth import PASSWORD_RESOURCE, hash_password
from backend.services.record_store import RecordStore


def set_password(plain: str, data_dir: str) -> bool:
    """Hash plain and overwrite the password resource"""
    store = RecordStore(data_dir)
    return store.write(PASSWORD_RESOURCE, {"password_hash": hash_password(plain)})


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Set the shared memories password")
    parser.add_argument("--data-dir", default=None, help="Data directory (default: DATA_DIR setting)")
    args = parser.parse_args(argv)
    
    data_dir = args.data_dir or get_settings().data_dir
    
    plain = getpass.getpass("New password: ")
    if not plain:
        print("✗ Password must not be empty")
        return 1
    if getpass.getpass("Repeat password: ") != plain:
        print("✗ Passwords do not match")
        return 1
    
    if not set_password(plain, data_dir):
        print(f"✗ Could not write {PASSWORD_RESOURCE}.json in {data_dir}")
        return 1
    
    print(f"✓ Password updated in {data_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
