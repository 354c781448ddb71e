#!/usr/bin/env python3
"""
Push local media files to the content server's upload endpoint.

The public role needs the upload permission first (``python seed.py --grant-uploads``).

Example:
    python scripts/upload_media.py \
        --server http://127.0.0.1:1337 \
        --folder /articles \
        cms-server/data/uploads/*.jpg
"""

from __future__ import annotations

import argparse
import mimetypes
import sys
from pathlib import Path
from typing import Any, Optional

import httpx


def media_parts(paths: list[Path]) -> list[tuple[str, tuple[str, bytes, str]]]:
    parts = []
    for path in paths:
        if not path.is_file():
            raise SystemExit(f"not a file: {path}")
        content_type, _ = mimetypes.guess_type(path.name)
        parts.append(("files", (path.name, path.read_bytes(), content_type or "application/octet-stream")))
    return parts


def upload_media(
    client: httpx.Client,
    paths: list[Path],
    folder: Optional[str] = None,
    caption: Optional[str] = None,
    alternative_text: Optional[str] = None,
) -> list[dict[str, Any]]:
    form = {"folderPath": folder, "caption": caption, "alternativeText": alternative_text}
    print(f"[api] uploading {len(paths)} file(s) to {client.base_url}api/upload")
    response = client.post(
        "/api/upload",
        data={key: value for key, value in form.items() if value},
        files=media_parts(paths),
    )
    if response.status_code != 201:
        raise SystemExit(f"upload failed: {response.status_code} {response.text}")
    return response.json()


def main() -> None:
    parser = argparse.ArgumentParser(description="Upload media files to the content server")
    parser.add_argument("files", nargs="+", type=Path, help="files to upload")
    parser.add_argument("--server", default="http://127.0.0.1:1337", help="content server base URL")
    parser.add_argument("--folder", default=None, help="folder path stored on the uploaded files")
    parser.add_argument("--caption", default=None, help="caption applied to every file")
    parser.add_argument("--alt", dest="alternative_text", default=None, help="alternative text for every file")
    parser.add_argument("--timeout", type=float, default=120.0, help="request timeout in seconds")
    args = parser.parse_args()

    with httpx.Client(base_url=args.server.rstrip("/") + "/", timeout=args.timeout) as client:
        try:
            uploaded = upload_media(client, args.files, args.folder, args.caption, args.alternative_text)
        except httpx.HTTPError as exc:
            raise SystemExit(f"cannot reach {args.server}: {exc}") from exc

    print(f"[done] {len(uploaded)} file(s) stored")
    for record in uploaded:
        print(f"  #{record['id']}\t{record['name']}\t{record['url']}")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit("upload aborted")
