"""
Builds the relationship id -> target map of a package part.
"""
import logging

from lxml import etree

from ..utils import xml_utils as xu
from ..utils.errors import MissingAttributeError
from ..utils.structures import PartNames


log = logging.getLogger("docxmark")


def parse_relationships(relationships_root: etree._Element) -> dict[str, str]:
    """
    Maps every <Relationship> Id to its Target.

    Raises MissingAttributeError if a relationship lacks `Id` or `Target`.
    A repeated Id overwrites the earlier entry.
    """
    relationships: dict[str, str] = {}
    for rel in relationships_root:
        tag = xu.get_tag_name(rel)
        if not tag:
            continue
        rel_id = xu.get_attr(rel, 'Id')
        if rel_id is None:
            raise MissingAttributeError(tag, 'Id', part=PartNames.DOCUMENT_RELS)
        rel_target = xu.get_attr(rel, 'Target')
        if rel_target is None:
            raise MissingAttributeError(tag, 'Target', part=PartNames.DOCUMENT_RELS)
        if rel_id in relationships:
            log.debug(f"Duplicate relationship id '{rel_id}', keeping the last target.")
        relationships[rel_id] = rel_target
    return relationships
