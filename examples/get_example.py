"""
WA Tax Rate Lookup Example

Looks up the Space Needle's address with debug logging enabled.
"""

import asyncio
import logging
import os
import sys

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import wataxrate


async def main():
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        result = await wataxrate.get("400 Broad St", "Seattle", "98109")
    finally:
        await wataxrate.close_default_client()

    print("=" * 60)
    if result.ok:
        info = result.value
        print(f"✓ Location code: {info.loccode}")
        print(f"  Rate: {info.rate}")
        print(f"  Code: {info.code.name}")
        if info.taxrate:
            print(f"  State: {info.taxrate.staterate}  Local: {info.taxrate.localrate}")
    else:
        print(f"✗ Lookup failed: {result.error!r}")


if __name__ == "__main__":
    asyncio.run(main())
