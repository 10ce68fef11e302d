#!/usr/bin/env python3
"""
Checks that the Supabase credentials in the environment (or .env) can reach
the waitlist table.

Usage:
    python -m elevenfortyfour.scripts.check_connection
"""

import asyncio
import os
import sys

from dotenv import load_dotenv

from elevenfortyfour.config.constants import DEFAULT_WAITLIST_TABLE, JWT_INVALID_CODE, UNDEFINED_TABLE_CODE
from elevenfortyfour.core.models.waitlist import ConnectionReport
from elevenfortyfour.core.services.waitlist_store import WaitlistStore

PUBLISHABLE_KEY_PREFIX = "sb_publishable_"


def describe_key(key: str) -> str:
    if key.startswith(PUBLISHABLE_KEY_PREFIX):
        return "✅ New publishable key format"
    return "⚠️  Legacy or unknown format"


def diagnose(report: ConnectionReport) -> str:
    if report.ok:
        return "✅ Successfully connected to Supabase! Your credentials are correct."
    if report.code == UNDEFINED_TABLE_CODE:
        return "💡 The waitlist table doesn't exist yet. Create it with a unique constraint on email."
    if report.code == JWT_INVALID_CODE or "JWT" in (report.message or ""):
        return (
            "💡 This looks like an authentication error. Your key might be expired or incorrect; "
            "get a fresh key from your Supabase dashboard."
        )
    return "💡 Check that the project is active, the URL is correct and row level security allows inserts."


async def run_check(url: str, key: str, table: str) -> ConnectionReport:
    store = await WaitlistStore.connect(url, key, table=table)
    return await store.check_connection()


def main() -> int:
    load_dotenv()
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_KEY") or os.getenv("SUPABASE_ANON_KEY")
    table = os.getenv("WAITLIST_TABLE", DEFAULT_WAITLIST_TABLE)

    print("🔍 Testing Supabase Connection...\n")
    if not url or not key:
        print("❌ SUPABASE_URL and SUPABASE_KEY (or SUPABASE_ANON_KEY) must be set")
        return 1

    print(f"SUPABASE_URL: {url}")
    print(f"SUPABASE_KEY: {key[:30]}...")
    print(f"Key format: {describe_key(key)}\n")

    try:
        report = asyncio.run(run_check(url, key, table))
    except Exception as e:
        print(f"❌ Unexpected error: {e}\n")
        print("💡 Make sure the project is not paused, you are online and SUPABASE_URL is correct.")
        return 1

    if not report.ok:
        print("❌ Connection failed with error:")
        print(f"   Code: {report.code}")
        print(f"   Message: {report.message}")
        print(f"   Details: {report.details}\n")
    print(diagnose(report))
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
