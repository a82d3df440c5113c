"""
Create a profile with prepaid credits for local testing.

    python init_profile.py --email demo@example.com --credits 3
"""
import argparse
import asyncio

from roomgen.core.container import build_container


async def create_profile(email: str | None, credits: int) -> None:
    container = build_container()
    try:
        await container.init_infrastructure()
        account = await container.ledger.open_account(email=email, credits=credits)
        print(f"Profile created: {account.user_id} ({account.credits} credits)")
    finally:
        await container.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a profile with credits")
    parser.add_argument("--email", default=None)
    parser.add_argument("--credits", type=int, default=3)
    args = parser.parse_args()
    asyncio.run(create_profile(args.email, args.credits))


if __name__ == "__main__":
    main()
