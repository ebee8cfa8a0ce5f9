"""
Result Assembler - External JSON Shapes
=======================================

Pure projections of domain records into the camelCase payloads served by
the HTTP API, printed by the CLI and written by the exporter.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from ..domain.models import FetchResult, Group, Message, SearchResult, TargetFailure

Record = Dict[str, Any]


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def group_record(group: Group) -> Record:
    return {
        "uuid": group.uuid,
        "name": group.name,
        "subject": group.subject,
        "size": group.size,
        "createdAt": _iso(group.created_at),
    }


def message_record(message: Message) -> Record:
    return {
        "id": message.id,
        "text": message.text,
        "senderPhone": message.sender_phone,
        "senderName": message.sender_display_name,
        "sentBy": message.sent_by,
        "createdAt": _iso(message.created_at),
        "mediaType": message.media_type,
        "mediaUrl": message.media_url,
    }


def fetch_result_record(result: FetchResult) -> Record:
    """Success: group + messages. Failure: group + error details."""
    record: Record = {}
    if result.phone_number is not None:
        record["phoneNumber"] = result.phone_number
    record["group"] = group_record(result.group)

    if result.ok:
        record["messagesCount"] = result.messages_count
        record["messages"] = [message_record(m) for m in result.messages]
    else:
        record["error"] = result.error_message
        record["errorKind"] = result.error_kind.value
        record["errorType"] = result.error_kind.error_type
    return record


def failure_record(failure: TargetFailure) -> Record:
    return {
        "phoneNumber": failure.phone_number,
        "error": failure.error_message,
        "errorKind": failure.error_kind.value,
        "errorType": failure.error_kind.error_type,
    }


def groups_payload(phone_number: str, groups: Sequence[Group]) -> Record:
    return {
        "phoneNumber": phone_number,
        "groupsCount": len(groups),
        "groups": [group_record(g) for g in groups],
    }


def history_payload(group_uuid: str, messages: Sequence[Message]) -> Record:
    return {
        "groupUuid": group_uuid,
        "messagesCount": len(messages),
        "messages": [message_record(m) for m in messages],
    }


def search_payload(phone_number: str, search_term: Optional[str], results: List[FetchResult]) -> Record:
    payload: Record = {
        "phoneNumber": phone_number,
        "searchTerm": search_term,
        "matchingGroupsCount": len(results),
        "results": [fetch_result_record(r) for r in results],
    }
    if not results:
        payload["message"] = "No groups found matching the title"
    return payload


def search_all_payload(result: SearchResult, group_title: Optional[str]) -> Record:
    return {
        "searchType": "all_numbers",
        "numbersSearched": result.targets_searched,
        "numbersWithErrors": len(result.failures),
        "groupTitle": group_title or "all groups",
        "matchingGroupsCount": len(result.results),
        "results": [fetch_result_record(r) for r in result.results],
        "errors": [failure_record(f) for f in result.failures],
    }
