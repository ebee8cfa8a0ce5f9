"""
2Chat Chat Checker - Command Line
=================================

Browse WhatsApp groups and export their chat history from a terminal.

    python run_cli.py                          # interactive: pick a group, export it
    python run_cli.py groups +6580910054
    python run_cli.py history WAG-1234 --max-pages 3 --export
    python run_cli.py search +6580910054 --title team --export
    python run_cli.py search-all --title team
    python run_cli.py diagnose +6580910054     # why does a group return 422?
    python run_cli.py check-config
"""

import sys
import json
import logging
import argparse
from datetime import datetime, timezone
from typing import List, Optional

from chat_checker.application import SearchOrchestrator
from chat_checker.application.assembler import (
    fetch_result_record,
    groups_payload,
    history_payload,
    search_all_payload,
    search_payload,
)
from chat_checker.domain import ErrorKind, FetchResult, Group, is_valid_phone_number
from chat_checker.domain.validation import INVALID_PHONE_MESSAGE
from chat_checker.infrastructure.config import Settings, get_settings
from chat_checker.infrastructure.export import JsonExporter, sanitize_label
from chat_checker.infrastructure.twochat import TwoChatClient, TwoChatError

logger = logging.getLogger(__name__)

DIAGNOSIS_HINTS = {
    ErrorKind.INVALID_REQUEST: [
        "This usually means the group UUID is invalid or inaccessible",
        "Possible causes:",
        "  1. The group was deleted or you were removed",
        "  2. The UUID format is incorrect",
        "  3. Your API key doesn't have permission for this group",
        "  4. The group is too old and messages are not accessible",
        "Try testing with a different group or check your API permissions",
    ],
    ErrorKind.AUTH: [
        "Authentication failed",
        "Check API_KEY in your .env file",
        "Verify the API key is valid and active",
    ],
    ErrorKind.NOT_FOUND: [
        "Phone number or group not found",
        "Verify the phone number is connected to 2Chat",
        "Check if the number format is correct",
    ],
    ErrorKind.ACCESS_DENIED: [
        "Access denied",
        "Your API key may not have permission for this resource",
    ],
}


def build_orchestrator(settings: Settings) -> SearchOrchestrator:
    return SearchOrchestrator(TwoChatClient(), max_workers=settings.search.max_workers)


def build_exporter(settings: Settings) -> JsonExporter:
    return JsonExporter(settings.export_dir)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _dump(payload) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def print_groups(groups: List[Group]) -> None:
    for index, group in enumerate(groups, start=1):
        created = group.created_at.isoformat() if group.created_at else "unknown"
        print(f"{index}. {group.name or 'Unnamed Group'}")
        print(f"   UUID: {group.uuid}")
        print(f"   Subject: {group.subject or 'No subject'}")
        print(f"   Size: {group.size} participants")
        print(f"   Created: {created}")
        print("")


def print_result(result: FetchResult) -> None:
    name = result.group.name or "Unnamed Group"
    if result.ok:
        print(f"   {name}: {result.messages_count} messages")
    else:
        print(f"   {name}: {result.error_kind.error_type} - {result.error_message}")


def _check_phone(phone_number: str) -> bool:
    if not phone_number:
        print("Phone number is required")
        return False
    if not is_valid_phone_number(phone_number):
        print(INVALID_PHONE_MESSAGE)
        return False
    return True


# ── Interactive ────────────────────────────────────────────────

def browse(orchestrator: SearchOrchestrator, exporter: JsonExporter, settings: Settings) -> int:
    """Pick a phone number and a group, then export its history."""

    print("\n" + "=" * 60)
    print("   2Chat Chat Checker")
    print("=" * 60 + "\n")

    try:
        phone_number = input("Enter phone number (international format, e.g., +1234567890): ").strip()
        if not _check_phone(phone_number):
            return 1

        print(f"\nFetching groups for {phone_number}...")
        groups = orchestrator.list_groups(phone_number)
        if not groups:
            print("No groups found for this phone number")
            return 1

        print(f"\nFound {len(groups)} group(s):\n")
        print_groups(groups)

        choice = input('Enter group number to get chat history (or "all" for all groups): ').strip()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGoodbye!")
        return 0
    except TwoChatError as e:
        print(f"Error: {e.message}")
        return 1

    try:
        return export_choice(orchestrator, exporter, settings, phone_number, groups, choice)
    except KeyboardInterrupt:
        print("\n\nGoodbye!")
        return 0


def export_choice(
    orchestrator: SearchOrchestrator,
    exporter: JsonExporter,
    settings: Settings,
    phone_number: str,
    groups: List[Group],
    choice: str,
) -> int:
    """Fetch the chosen group (or "all") and export it."""
    if choice.lower() == "all":
        print("\nFetching chat history for all groups...")
        results = []
        for group in groups:
            result = orchestrator.fetch_group(group, settings.search.all_groups_max_pages, phone_number)
            print_result(result)
            results.append(result)

        payload = {
            "phoneNumber": phone_number,
            "timestamp": _now(),
            "results": [fetch_result_record(r) for r in results],
        }
        info = exporter.export(payload, "all-groups-chat-history")
    else:
        try:
            index = int(choice) - 1
        except ValueError:
            index = -1
        if not 0 <= index < len(groups):
            print("Invalid group number")
            return 1

        group = groups[index]
        print(f"\nFetching chat history for: {group.name or 'Unnamed Group'}")
        result = orchestrator.fetch_group(group, settings.search.default_max_pages, phone_number)
        print_result(result)
        if not result.ok:
            return 1

        payload = dict(fetch_result_record(result), timestamp=_now())
        info = exporter.export(payload, "chat-history", group.uuid)

    print(f"\nChat history exported to: {info.path}")
    return 0


# ── Commands ───────────────────────────────────────────────────

def cmd_groups(args, orchestrator: SearchOrchestrator, exporter: JsonExporter, settings: Settings) -> int:
    if not _check_phone(args.phone_number):
        return 1
    groups = orchestrator.list_groups(args.phone_number)
    if args.json:
        _dump(groups_payload(args.phone_number, groups))
        return 0

    print(f"\nFound {len(groups)} group(s) for {args.phone_number}:\n")
    print_groups(groups)
    return 0


def cmd_history(args, orchestrator: SearchOrchestrator, exporter: JsonExporter, settings: Settings) -> int:
    max_pages = args.max_pages if args.max_pages is not None else settings.search.default_max_pages
    messages = orchestrator.aggregator.aggregate(args.group_uuid, max_pages)
    payload = history_payload(args.group_uuid, messages)

    if args.json:
        _dump(payload)
    else:
        print(f"Found {len(messages)} messages in {args.group_uuid}")
    if args.export:
        info = exporter.export(payload, "chat-history", args.group_uuid)
        print(f"Chat history exported to: {info.path}")
    return 0


def cmd_search(args, orchestrator: SearchOrchestrator, exporter: JsonExporter, settings: Settings) -> int:
    if not _check_phone(args.phone_number):
        return 1
    max_pages = args.max_pages if args.max_pages is not None else settings.search.default_max_pages
    results = orchestrator.search_number(args.phone_number, args.title, max_pages)
    payload = search_payload(args.phone_number, args.title, results)

    if args.json:
        _dump(payload)
    else:
        print(f"\n{len(results)} matching group(s) for {args.phone_number}:")
        for result in results:
            print_result(result)
    if args.export:
        label = sanitize_label(args.title or "all-groups")
        info = exporter.export(payload, "search-results", label)
        print(f"Search results exported to: {info.path}")
    return 0


def cmd_search_all(args, orchestrator: SearchOrchestrator, exporter: JsonExporter, settings: Settings) -> int:
    max_pages = args.max_pages if args.max_pages is not None else settings.search.default_max_pages
    numbers = settings.search.predefined_numbers
    search_result = orchestrator.search(numbers, args.title, max_pages)
    payload = search_all_payload(search_result, args.title)

    if args.json:
        _dump(payload)
    else:
        print(f"\nSearched {search_result.targets_searched} numbers: "
              f"{len(search_result.results)} groups, {len(search_result.failures)} numbers failed")
        for result in search_result.results:
            print_result(result)
        for failure in search_result.failures:
            print(f"   {failure.phone_number}: {failure.error_kind.error_type} - {failure.error_message}")
    if args.export:
        label = sanitize_label(args.title or "all-groups")
        info = exporter.export(payload, "search-all-numbers", label)
        print(f"Search results exported to: {info.path}")
    return 0


def _print_hints(kind: ErrorKind) -> None:
    hints = DIAGNOSIS_HINTS.get(kind)
    if not hints:
        return
    print(f"\n{kind.value} analysis:")
    for hint in hints:
        print(f"   - {hint}")


def cmd_diagnose(args, orchestrator: SearchOrchestrator, exporter: JsonExporter, settings: Settings) -> int:
    """List groups, then probe page 0 of the first group."""
    phone_number = args.phone_number
    if phone_number is None:
        try:
            phone_number = input("Enter phone number (international format, e.g., +1234567890): ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nDebug session ended")
            return 0
    if not _check_phone(phone_number):
        return 1

    print("\nStep 1: Testing group listing...")
    print("=" * 50)
    try:
        groups = orchestrator.list_groups(phone_number)
    except TwoChatError as e:
        print(f"Error listing groups: {e.message}")
        _print_hints(e.kind)
        return 1

    print(f"Successfully listed {len(groups)} groups")
    if not groups:
        print("No groups found for this phone number - message fetching cannot be tested")
        return 1
    print_groups(groups)

    group = groups[0]
    print(f"\nStep 2: Testing message fetching for \"{group.name or 'Unnamed Group'}\"...")
    print("=" * 50)
    print(f"Testing with UUID: {group.uuid}")
    try:
        page = orchestrator.source.fetch_message_page(group.uuid, 0)
    except TwoChatError as e:
        print(f"Error fetching messages: {e.message}")
        _print_hints(e.kind)
        return 1

    print(f"Successfully fetched {len(page.messages)} messages from page 0")
    if page.messages:
        sample = page.messages[0]
        print("\nSample message:")
        print(f"   Text: {sample.text or 'No text'}")
        print(f"   From: {sample.sender_phone or 'Unknown'}")
        print(f"   Time: {sample.created_at.isoformat() if sample.created_at else 'Unknown'}")
    return 0


def cmd_check_config(settings: Settings) -> int:
    print("Configuration:")
    print(f"   API Base URL: {settings.twochat.base_url}")
    print(f"   API Key: {'set' if settings.twochat.api_key else 'NOT SET'}")
    print(f"   Server: {settings.server.host}:{settings.server.port} ({settings.server.env})")
    print(f"   Export dir: {settings.export_dir}")
    print(f"   Default max pages: {settings.search.default_max_pages}")
    print(f"   Search workers: {settings.search.max_workers}")
    print(f"   Predefined numbers: {len(settings.search.predefined_numbers)}")

    issues = settings.validate()
    for issue in issues:
        print(f"\n{issue}")
    if settings.has_errors:
        return 1
    if not issues:
        print("\nConfiguration looks good!")
    return 0


COMMANDS = {
    "groups": cmd_groups,
    "history": cmd_history,
    "search": cmd_search,
    "search-all": cmd_search_all,
    "diagnose": cmd_diagnose,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run_cli.py",
        description="Browse WhatsApp groups and chat history via the 2Chat API.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("groups", help="List the groups of a phone number")
    p.add_argument("phone_number")
    p.add_argument("--json", action="store_true")

    p = sub.add_parser("history", help="Fetch a group's chat history")
    p.add_argument("group_uuid")
    p.add_argument("--max-pages", type=int, default=None)
    p.add_argument("--export", action="store_true")
    p.add_argument("--json", action="store_true")

    p = sub.add_parser("search", help="Search one number's groups by title")
    p.add_argument("phone_number")
    p.add_argument("--title", default=None)
    p.add_argument("--max-pages", type=int, default=None)
    p.add_argument("--export", action="store_true")
    p.add_argument("--json", action="store_true")

    p = sub.add_parser("search-all", help="Search every predefined number")
    p.add_argument("--title", default=None)
    p.add_argument("--max-pages", type=int, default=None)
    p.add_argument("--export", action="store_true")
    p.add_argument("--json", action="store_true")

    p = sub.add_parser("diagnose", help="Debug group access errors (e.g. 422)")
    p.add_argument("phone_number", nargs="?", default=None)

    sub.add_parser("check-config", help="Show the effective configuration")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    settings = get_settings()
    if args.command == "check-config":
        return cmd_check_config(settings)

    orchestrator = build_orchestrator(settings)
    exporter = build_exporter(settings)

    if args.command is None:
        return browse(orchestrator, exporter, settings)

    try:
        return COMMANDS[args.command](args, orchestrator, exporter, settings)
    except TwoChatError as e:
        print(f"Error: {e.message}")
        return 1
    except KeyboardInterrupt:
        print("\n\nGoodbye!")
        return 130


if __name__ == "__main__":
    sys.exit(main())
