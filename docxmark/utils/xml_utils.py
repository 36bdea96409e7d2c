from lxml import etree

from .namespaces import Namespaces as NS

# --- Element find helpers ---

def elem_xpath(element: etree._Element, path: str, namespaces=NS.W_MAP) -> list:
    """Helper to run an xpath query with the WordprocessingML prefixes."""
    return element.xpath(path, namespaces=namespaces)  # type: ignore

# --- Conversion helpers ---

def get_tag_name(element: etree._Element) -> str:
    """Returns tag name without a namespace prefix. Comments and PIs return ''."""
    if not isinstance(element.tag, str):
        return ''
    return etree.QName(element.tag).localname


def get_attr(element: etree._Element, name: str) -> str | None:
    """
    Returns the value of the attribute with the given local name.

    Word writes `w:val`, `w:id`, `r:embed`, while the relationships part uses
    plain `Id`/`Target`, so the lookup ignores the namespace.
    """
    value = element.get(name)
    if value is not None:
        return value
    for key, value in element.attrib.items():
        if etree.QName(key).localname == name:
            return str(value)
    return None


def first_child(element: etree._Element) -> etree._Element | None:
    """Returns the first child element, skipping comments and PIs."""
    for child in element:
        if isinstance(child.tag, str):
            return child
    return None
