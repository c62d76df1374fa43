"""Namespace bookkeeping shared by the SpreadsheetML importer and exporter.

ElementTree reports qualified names in Clark notation (``{uri}local``), so every lookup of a spreadsheet element
or attribute goes through the URI the document binds to the ``ss`` prefix rather than through the prefix itself.
"""
from typing import Dict, Iterable, Optional, Tuple
from xml.etree.ElementTree import Element

from attr import Factory, attrs

SPREADSHEET_NS = 'urn:schemas-microsoft-com:office:spreadsheet'
OFFICE_NS = 'urn:schemas-microsoft-com:office:office'
EXCEL_NS = 'urn:schemas-microsoft-com:office:excel'
HTML_NS = 'http://www.w3.org/TR/REC-html40'

SS_PREFIX = 'ss'

# Declaration order used by Excel when it saves a workbook as XML Spreadsheet 2003
WORKBOOK_NAMESPACES = (
    ('', SPREADSHEET_NS),
    ('o', OFFICE_NS),
    ('x', EXCEL_NS),
    (SS_PREFIX, SPREADSHEET_NS),
    ('html', HTML_NS),
)


def qname(uri: Optional[str], local: str) -> str:
    """Build the Clark notation name of `local` in namespace `uri`."""
    if not uri:
        return local
    return f'{{{uri}}}{local}'


def local_name(tag: str) -> str:
    return tag.rpartition('}')[2]


def doc_namespaces(declarations: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """Collect `(prefix, uri)` declarations, as reported by ``start-ns`` events, into a prefix mapping.

    Declarations are reported in document order, so the first binding of a prefix is the outermost one and
    the root element's declarations win over any rebinding further down the tree."""
    result = {}
    for prefix, uri in declarations:
        result.setdefault(prefix, uri)
    return result


@attrs(auto_attribs=True, frozen=True)
class NamespaceMap(object):
    """Prefix to URI mapping of one document, plus the resolved spreadsheet namespace used for lookups."""
    prefixes: Dict[str, str] = Factory(dict)

    @property
    def ss(self) -> str:
        return self.prefixes.get(SS_PREFIX) or self.prefixes.get('') or SPREADSHEET_NS

    def tag(self, local: str) -> str:
        """Qualified element name of `local` in the spreadsheet namespace."""
        return qname(self.ss, local)

    def attr(self, element: Element, local: str, default: Optional[str] = None) -> Optional[str]:
        """Value of the spreadsheet-qualified attribute `local` of `element`, e.g. ``ss:Index``."""
        return element.get(qname(self.ss, local), default)

    def find(self, element: Element, local: str) -> Optional[Element]:
        return element.find(self.tag(local))

    def findall(self, element: Element, local: str):
        return element.findall(self.tag(local))
