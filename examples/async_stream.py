#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import os

from laakhay.archive import astream


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream a generated archive from asyncio")
    p.add_argument("files", nargs="?", type=int, default=3)
    p.add_argument("size", nargs="?", type=int, default=1024 * 1024)
    p.add_argument("chunk_size", nargs="?", type=int, default=256 * 1024)
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    entries = [
        {"path": f"random/{i}.bin", "source": [os.urandom(args.size)], "options": {"codec": "deflate"}}
        for i in range(args.files)
    ]

    print(f"{'Fragment':>8} | {'Bytes':>10}")
    print("-" * 21)
    index = 0
    async for fragment in astream(entries, chunk_size=args.chunk_size, gzip=True):
        print(f"{index:>8} | {len(fragment):>10}")
        index += 1


if __name__ == "__main__":
    asyncio.run(main())
