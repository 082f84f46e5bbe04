#!/usr/bin/env python3
from __future__ import annotations

import argparse
from collections.abc import Iterator
from pathlib import Path

from laakhay.archive import UNBOUNDED, Codec, stream


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream a directory into a ZIP file in fixed chunks")
    p.add_argument("directory", type=Path)
    p.add_argument("output", type=Path)
    p.add_argument("--chunk-size", type=int, default=1024 * 1024)
    p.add_argument("--unbounded", action="store_true", help="write encoder output as is")
    p.add_argument("--store", action="store_true", help="store members uncompressed")
    p.add_argument("--gzip-level", type=int, default=None)
    return p.parse_args()


def read_file(path: Path, size: int = 64 * 1024) -> Iterator[bytes]:
    with path.open("rb") as f:
        while block := f.read(size):
            yield block


def main() -> None:
    args = parse_args()
    entries = (
        {"path": path.relative_to(args.directory).as_posix(), "source": read_file(path)}
        for path in sorted(args.directory.rglob("*"))
        if path.is_file()
    )

    fragments = stream(
        entries,
        chunk_size=UNBOUNDED if args.unbounded else args.chunk_size,
        gzip={"level": args.gzip_level} if args.gzip_level is not None else False,
        default_codec=Codec.STORE if args.store else Codec.DEFLATE,
    )

    count = 0
    total = 0
    with args.output.open("wb") as out:
        for fragment in fragments:
            out.write(fragment)
            count += 1
            total += len(fragment)

    print("=" * 50)
    print(f"Output     : {args.output}")
    print(f"Fragments  : {count}")
    print(f"Bytes      : {total}")
    print("=" * 50)


if __name__ == "__main__":
    main()
