"""
Import the example content once.

Runs the same seeding the server performs at startup, for databases where
``SEED__ENABLED`` is turned off. ``--grant-uploads`` additionally opens the
upload endpoints to anonymous callers (needed by ``scripts/upload_media.py``).
"""
import argparse
import asyncio
import sys

from app.core.config import get_settings
from app.core.container import get_container
from app.core.logging import configure_logging
from app.domain.permissions import UPLOAD_PERMISSIONS
from app.domain.permissions.service import PermissionService
from app.infrastructure.database.session import dispose_engine, init_db, session_scope
from app.domain.seed import seed_example_app


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import the example content once")
    parser.add_argument(
        "--grant-uploads",
        action="store_true",
        help="Allow anonymous calls to the upload endpoints",
    )
    return parser.parse_args(argv)


async def grant_uploads() -> list[str]:
    async with session_scope() as session:
        granted = await PermissionService.with_session(session).grant(UPLOAD_PERMISSIONS)
        await session.commit()
    return granted


async def main(argv=None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)
    await init_db()

    container = get_container()
    try:
        async with session_scope() as session:

            async def build():
                return container.seed_orchestrator(session)

            report = await seed_example_app(build)
        if args.grant_uploads:
            granted = await grant_uploads()
            print(f"Upload permissions granted: {', '.join(granted) or 'already present'}")
    finally:
        await container.aclose()
        await dispose_engine()

    if report is None:
        return 1
    if not report.seeded:
        print("Seed data has already been imported, nothing to do")
        return 0

    print("=" * 50)
    print("Seed data imported")
    for model, count in sorted(report.created.items()):
        print(f"{model}: {count}")
    if report.failed:
        print(f"skipped entries: {len(report.failed)}")
    print("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
