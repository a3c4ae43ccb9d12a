"""Command-line interface for granola2md."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel

from granola2md.client import GranolaClient
from granola2md.documents import (
    document_detail,
    event_results,
    is_meeting,
    note_result,
    panel_results,
    summarize_document,
    transcript_result,
    transcript_results,
)
from granola2md.exceptions import DocumentNotFoundError, Granola2mdError
from granola2md.markdown import convert_document_to_markdown
from granola2md.schemas import ListResponse, SearchResponse

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    """argparse type for ``--limit``: an integer of at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="granola2md", description="Render Granola notes as Markdown."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    convert = commands.add_parser("convert", help="Convert a ProseMirror JSON file to Markdown")
    convert.add_argument("file", nargs="?", default="-", help="JSON file, or - for stdin")

    list_cmd = commands.add_parser("list", help="List documents")
    list_cmd.add_argument("--limit", type=positive_int, default=50)

    for name, help_text in (
        ("search", "Search notes by title or content"),
        ("transcripts", "Search meeting transcripts"),
        ("panels", "Search document panels"),
        ("events", "Search calendar events"),
    ):
        search = commands.add_parser(name, help=help_text)
        search.add_argument("query")
        search.add_argument("--limit", type=positive_int, default=10)

    get = commands.add_parser("get", help="Get a document by id")
    get.add_argument("id")

    transcript = commands.add_parser("transcript", help="Get a meeting transcript by id")
    transcript.add_argument("id")

    return parser


def read_tree(file: str) -> object:
    if file == "-":
        return json.load(sys.stdin)
    return json.loads(Path(file).read_text(encoding="utf-8"))


async def run_command(args: argparse.Namespace, client: GranolaClient) -> BaseModel:
    """Execute an API-backed subcommand and return its response model."""
    if args.command == "list":
        docs = (await client.get_all_documents())[: args.limit]
        return ListResponse(
            count=len(docs), documents=[summarize_document(doc) for doc in docs]
        )

    if args.command == "search":
        docs = await client.search_documents(args.query, args.limit)
        results = [note_result(doc) for doc in docs]
    elif args.command == "transcripts":
        docs = await client.search_documents(args.query, args.limit)
        results = transcript_results(docs, limit=args.limit)
    elif args.command == "panels":
        docs = await client.search_documents(args.query, args.limit)
        results = panel_results(docs, limit=args.limit)
    elif args.command == "events":
        docs = await client.get_all_documents()
        results = event_results(docs, args.query, limit=args.limit)
    elif args.command == "get":
        doc = await client.get_document_by_id(args.id)
        if doc is None:
            raise DocumentNotFoundError(f"Document with id {args.id} not found")
        return document_detail(doc)
    elif args.command == "transcript":
        doc = await client.get_document_by_id(args.id)
        if doc is None or not is_meeting(doc):
            raise DocumentNotFoundError(f"Transcript with id {args.id} not found")
        return transcript_result(doc, limit=None)
    else:
        raise ValueError(f"Unknown command: {args.command}")

    return SearchResponse(query=args.query, count=len(results), results=results)


async def _run_with_client(args: argparse.Namespace) -> BaseModel:
    async with GranolaClient() as client:
        return await run_command(args, client)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "convert":
        try:
            tree = read_tree(args.file)
        except (OSError, ValueError) as exc:
            print(json.dumps({"error": str(exc)}))
            return 1
        print(convert_document_to_markdown(tree))
        return 0

    try:
        response = asyncio.run(_run_with_client(args))
    except Granola2mdError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(json.dumps({"error": str(exc)}))
        return 1

    print(response.model_dump_json(indent=2, by_alias=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
