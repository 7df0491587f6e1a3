"""Per-type projection of raw records into SearchableRecord."""

import logging
from typing import Any, Callable, Dict, List, Mapping

from ..models.entity import EntityType
from ..models.record import SearchableRecord
from ..utils.text_processing import TextProcessor

logger = logging.getLogger(__name__)

_text = TextProcessor()

FieldMapping = Callable[[Mapping[str, Any]], Dict[str, Any]]


def _str(value: Any) -> str:
    """Scalar to stripped string; containers and None become empty."""
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return ""
    return str(value).strip()


def _nested(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """Joined related record (e.g. a presentation's school), or an empty mapping."""
    value = raw.get(key)
    return value if isinstance(value, Mapping) else {}


def _tags(*values: Any) -> List[str]:
    return [_str(v) for v in values if _str(v)]


def _tag_list(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return _tags(*value)


def _presentation(raw: Mapping[str, Any]) -> Dict[str, Any]:
    school = _nested(raw, "schools")
    return {
        "title": _text.join_present(_str(school.get("name")) or "School", _str(raw.get("date")), separator=" - "),
        "description": _str(raw.get("notes")) or _str(raw.get("learning_objectives")),
        "content": _text.flatten(raw),
        "tags": _tags(raw.get("status"), raw.get("grade_level"), school.get("city"), school.get("state")),
    }


def _volunteer(raw: Mapping[str, Any]) -> Dict[str, Any]:
    team = _nested(raw, "teams")
    return {
        "title": _str(raw.get("name")) or _str(raw.get("email")),
        "description": _str(raw.get("bio")),
        "content": _text.join_present(raw.get("name"), raw.get("email"), raw.get("bio")),
        "tags": _tags(raw.get("status"), team.get("name")),
    }


def _teacher(raw: Mapping[str, Any]) -> Dict[str, Any]:
    contact = _str(raw.get("contact_name"))
    school = _str(raw.get("school_name"))
    return {
        "title": _text.join_present(contact, school, separator=" - "),
        "description": _str(raw.get("message")),
        "content": _text.join_present(contact, school, raw.get("message")),
        "tags": _tags(raw.get("status"), raw.get("grade_level"), school),
    }


def _school(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "title": _str(raw.get("name")),
        "description": _text.join_present(raw.get("city"), raw.get("state"), separator=", "),
        "content": _text.join_present(raw.get("name"), raw.get("city"), raw.get("state"), raw.get("address")),
        "tags": _tags(raw.get("city"), raw.get("state"), raw.get("district")),
    }


def _event(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "title": _str(raw.get("title")),
        "description": _str(raw.get("description")),
        "content": _text.join_present(raw.get("title"), raw.get("description"), raw.get("type"), raw.get("location")),
        "tags": _tags(raw.get("type"), raw.get("location")),
    }


def _faq(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "title": _str(raw.get("question")),
        "description": _str(raw.get("answer")),
        "content": _text.join_present(raw.get("question"), raw.get("answer")),
        "tags": _tags(raw.get("category")),
    }


def _blog(raw: Mapping[str, Any]) -> Dict[str, Any]:
    body = _str(raw.get("content"))
    return {
        "title": _str(raw.get("title")),
        "description": _text.truncate(body, 200),
        "content": body,
        "tags": _tag_list(raw.get("tags")),
    }


def _resource(raw: Mapping[str, Any]) -> Dict[str, Any]:
    tags = _tag_list(raw.get("tags"))
    return {
        "title": _str(raw.get("title")),
        "description": _str(raw.get("description")),
        "content": _text.join_present(raw.get("title"), raw.get("description"), " ".join(tags)),
        "tags": tags,
    }


def _team(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "title": _str(raw.get("name")),
        "description": _str(raw.get("description")),
        "content": _text.join_present(raw.get("name"), raw.get("description")),
        "tags": _tags(raw.get("status"), raw.get("location")),
    }


FIELD_MAPPINGS: Dict[EntityType, FieldMapping] = {
    EntityType.PRESENTATION: _presentation,
    EntityType.VOLUNTEER: _volunteer,
    EntityType.TEACHER: _teacher,
    EntityType.SCHOOL: _school,
    EntityType.EVENT: _event,
    EntityType.FAQ: _faq,
    EntityType.BLOG: _blog,
    EntityType.RESOURCE: _resource,
    EntityType.TEAM: _team,
}


def normalize(raw: Any, entity_type: EntityType) -> SearchableRecord:
    """
    Project a raw record into the common searchable shape.

    Never raises: fields that are missing or have the wrong shape degrade
    to empty strings and lists. A record with no derivable title gets
    "<Label> <id>" so the title is never empty.

    Args:
        raw: Raw, type-specific record as returned by a provider
        entity_type: Kind of record

    Returns:
        SearchableRecord carrying the raw record in `extra`
    """
    if not isinstance(raw, Mapping):
        logger.debug(f"Non-mapping {entity_type.value} record replaced by an empty one")
        raw = {}

    record_id = _str(raw.get("id"))

    try:
        fields = FIELD_MAPPINGS[entity_type](raw)
    except Exception as e:
        logger.debug(f"Could not map {entity_type.value} record {record_id!r}: {str(e)}")
        fields = {}

    title = _str(fields.get("title")) or _text.join_present(entity_type.label, record_id)

    return SearchableRecord(
        id=record_id,
        entity_type=entity_type,
        title=title,
        description=_str(fields.get("description")),
        content=_str(fields.get("content")),
        tags=list(fields.get("tags") or []),
        extra=dict(raw)
    )
