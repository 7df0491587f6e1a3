"""Input validation and coercion utilities."""

import logging
from dataclasses import replace
from typing import Iterable, List, Mapping, Union

from ..models.entity import EntityType, SortOrder
from ..models.query import SearchOptions
from ..core.exceptions import UnsupportedOptionError, ValidationError

logger = logging.getLogger(__name__)


def coerce_entity_types(values: Iterable[Union[EntityType, str]]) -> List[EntityType]:
    """
    Convert entity type names to EntityType members.
    
    Args:
        values: Members or their string values
        
    Returns:
        De-duplicated list in first-seen order
        
    Raises:
        ValidationError: If a name is not a known entity type
    """
    resolved: List[EntityType] = []
    for value in values:
        try:
            entity_type = EntityType(value)
        except ValueError:
            valid = ", ".join(t.value for t in EntityType)
            raise ValidationError(f"Unknown entity type: {value!r} (expected one of: {valid})")
        if entity_type not in resolved:
            resolved.append(entity_type)
    return resolved


def coerce_sort_order(value: Union[SortOrder, str]) -> SortOrder:
    """
    Convert a sort option to SortOrder.
    
    Raises:
        UnsupportedOptionError: If the value is not relevance, date or title
    """
    try:
        return SortOrder(value)
    except ValueError:
        valid = ", ".join(o.value for o in SortOrder)
        raise UnsupportedOptionError(f"Unrecognized sort option: {value!r} (expected one of: {valid})")


def validate_options(options: SearchOptions) -> SearchOptions:
    """
    Validate search options and return a normalized copy.
    
    Pagination and threshold are clamped to the nearest valid value
    rather than rejected; only option values the pipeline cannot
    interpret raise.
    
    Args:
        options: Caller-supplied options
        
    Returns:
        Options with enums coerced and numeric fields clamped
        
    Raises:
        UnsupportedOptionError: If sort_by is not recognized
        ValidationError: If types or filters cannot be interpreted
    """
    if not isinstance(options, SearchOptions):
        raise ValidationError("Invalid options type")
    
    sort_by = coerce_sort_order(options.sort_by)
    
    types = None
    if options.types is not None:
        if isinstance(options.types, str):
            raise ValidationError("types must be a list of entity type names")
        types = coerce_entity_types(options.types)
    
    if options.filters is not None and not isinstance(options.filters, Mapping):
        raise ValidationError("filters must be a mapping of metadata key to value")
    
    limit = options.limit
    if limit < 1:
        logger.debug(f"Clamping limit {limit} to 1")
        limit = 1
    
    offset = options.offset
    if offset < 0:
        logger.debug(f"Clamping offset {offset} to 0")
        offset = 0
    
    threshold = min(1.0, max(0.0, float(options.fuzzy_threshold)))
    
    return replace(
        options,
        query=(options.query or "").strip(),
        types=types,
        filters=dict(options.filters) if options.filters else None,
        limit=limit,
        offset=offset,
        sort_by=sort_by,
        fuzzy_threshold=threshold
    )
