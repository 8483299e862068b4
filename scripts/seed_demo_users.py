#!/usr/bin/env python3
"""
Demo User Seeding Script
Creates demo users for all 3 roles (plus sample questions and warehouses)
with consistent credentials for testing
"""


import sys
import os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from krishi import create_app
from krishi.config import Config
from krishi.seed import seed_demo_data, DEMO_USERS, DEMO_PASSWORD


class SeedConfig(Config):
    # Seed explicitly below instead of during app start-up
    SEED_DEMO_DATA = False


def seed_demo_users():
    app = create_app(SeedConfig)

    with app.app_context():
        include_records = app.config['STORAGE_BACKEND'] == 'sql'
        result = seed_demo_data(include_records=include_records)
        if result['skipped']:
            print("❌ Demo users already exist. Skipping seeding.")
            return

        print("✅ Demo users created successfully!\n")
        print("=" * 60)
        print("DEMO LOGIN CREDENTIALS")
        print("=" * 60)
        print(f"Password for all users: {DEMO_PASSWORD}\n")

        for user_data in DEMO_USERS:
            print(f"🔐 {user_data['role'].title()}")
            print(f"   Name: {user_data['name']}")
            print(f"   Email: {user_data['email']}")
            print(f"   Password: {DEMO_PASSWORD}\n")

        print("=" * 60)
        if include_records:
            print("\n🌾 Sample questions and warehouses added for the demo accounts.")
        print("\n✨ All demo users ready for testing!")


if __name__ == '__main__':
    seed_demo_users()
