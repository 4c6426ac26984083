import argparse
import asyncio
from collections.abc import Sequence
from pathlib import Path

from docingest.config.settings import Settings
from docingest.documents.normalizer import normalize
from docingest.layer import IngestionLayer, build_ingestion_layer
from docingest.logging.logger import Log
from docingest.upload.models import UploadFile

DUPLICATE_ACTIONS = ("cancel", "override")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docingest", description="Manage documents in an organization."
    )
    commands = parser.add_subparsers(dest="command", required=True)

    upload = commands.add_parser("upload", help="upload files into a folder")
    upload.add_argument("folder_id")
    upload.add_argument("paths", nargs="+", type=Path)
    upload.add_argument("--view-scope", default=None, help="folder id currently on screen")
    upload.add_argument(
        "--on-duplicate",
        choices=DUPLICATE_ACTIONS,
        default="cancel",
        help="what to do when a file already exists (default: cancel)",
    )

    remove = commands.add_parser("delete", help="delete a document")
    remove.add_argument("document_id")

    listing = commands.add_parser("list", help="list documents")
    listing.add_argument("--folder-id", default=None)
    listing.add_argument("--folder-name", default=None)
    return parser


async def run(args: argparse.Namespace, layer: IngestionLayer, organization_id: str) -> int:
    """Execute one parsed command against ``layer``; returns the exit code."""
    if args.command == "upload":
        files = [UploadFile.from_path(path) for path in args.paths]
        conflict = await layer.coordinator.upload_batch(
            files, folder_id=args.folder_id, view_scope_id=args.view_scope
        )
        if conflict is None:
            return 0
        if args.on_duplicate == "override":
            outcome = await layer.conflicts.force_override()
            return 0 if outcome.success else 1
        layer.conflicts.cancel()
        return 1

    if args.command == "delete":
        listing = await layer.documents.list_all(organization_id)
        document = next(
            (doc for doc in listing.documents if doc.id == args.document_id),
            None,
        ) or normalize({"id": args.document_id})
        outcome = await layer.remover.delete(document)
        return 0 if outcome.success else 1

    if args.folder_name:
        result = await layer.folders.resolve(organization_id, args.folder_id, args.folder_name)
    else:
        result = await layer.documents.list_all(organization_id)
    for document in result.documents:
        print(f"{document.id}\t{document.folder_name}\t{document.name}\t{document.size_bytes}")
    Log.info(f"{result.total} document(s)")
    return 0


async def _main(argv: Sequence[str] | None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    layer = build_ingestion_layer(settings)
    try:
        return await run(args, layer, settings.organization_id)
    finally:
        await layer.aclose()


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: load settings -> build the ingestion layer -> run one command."""
    return asyncio.run(_main(argv))


if __name__ == "__main__":
    raise SystemExit(main())
