from typing import Callable, Dict

from .base import ExcelExport, ExcelImport
from .errors import UnknownFormatError
from .xlsx_export import XlsxExport
from .xml_export import XmlExport
from .xml_import import XmlImport

IMPORTERS: Dict[str, Callable[..., ExcelImport]] = {
    'xml': XmlImport,
}

EXPORTERS: Dict[str, Callable[..., ExcelExport]] = {
    'xml': XmlExport,
    'xlsx': XlsxExport,
}


def _resolve(registry, type_, kind):
    token = str(type_).strip().lower()
    try:
        return registry[token]
    except KeyError as e:
        raise UnknownFormatError(
            f'There is no {kind} for type {type_!r}, known types are: {", ".join(sorted(registry))}',
            value=type_
        ) from e


def init_import(type_: str, **kwargs) -> ExcelImport:
    """Create the importer registered under `type_`, e.g. ``init_import('xml')``."""
    return _resolve(IMPORTERS, type_, 'importer')(**kwargs)


def init_export(type_: str, **kwargs) -> ExcelExport:
    """Create the exporter registered under `type_`, e.g. ``init_export('xlsx', worksheet_name='Report')``."""
    return _resolve(EXPORTERS, type_, 'exporter')(**kwargs)
