"""Row/cell codec for Excel's XML Spreadsheet 2003 format (SpreadsheetML), letting spreadsheets edited in Excel be
imported as rows of string cells through `xml_import` and rows of cells be exported back through `xml_export`,
or as an .xlsx workbook through `xlsx_export`, with `registry` picking the importer or exporter by a type token
such as ``'xml'``."""

from . import base, errors, namespaces, registry, xlsx_export, xml_export, xml_import

from .registry import init_export, init_import
from .xlsx_export import XlsxExport
from .xml_export import XmlExport, dumps
from .xml_import import XmlImport, load

__all__ = [
    'base', 'errors', 'namespaces', 'registry', 'xlsx_export', 'xml_export', 'xml_import',
    'init_export', 'init_import', 'XlsxExport', 'XmlExport', 'XmlImport', 'dumps', 'load'
]
