import logging
from typing import Iterable, List, Sequence
from xml.sax.saxutils import escape, quoteattr

from attr import attrib, attrs

from .base import ExcelExport, Scalar, row_to_cells
from .namespaces import WORKBOOK_NAMESPACES

logger = logging.getLogger(__name__)

DEFAULT_WORKSHEET_NAME = 'Table1'

XML_PROLOG = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<?mso-application progid="Excel.Sheet"?>\n'
)
TABLE_SUFFIX = '</Table></Worksheet></Workbook>\n'

# A literal CR would be normalized to LF by any XML parser
CELL_ENTITIES = {"\r": "&#13;"}


def workbook_prefix(worksheet_name: str = DEFAULT_WORKSHEET_NAME) -> str:
    """Everything that precedes the first row: prolog, Workbook with its namespaces, Worksheet and opening Table."""
    declarations = '\n'.join(
        f'    xmlns{prefix and ":" + prefix}="{uri}"'
        for prefix, uri in WORKBOOK_NAMESPACES
    )
    return (
        f'{XML_PROLOG}'
        f'<Workbook\n{declarations}>\n'
        f'<Worksheet ss:Name={quoteattr(worksheet_name)}>\n'
        f'<Table>\n'
    )


def row_markup(cells: Iterable[str]) -> str:
    line = ['<Row>']
    for cell in cells:
        line.append(f'<Cell><Data ss:Type="String">{escape(cell, CELL_ENTITIES)}</Data></Cell>\n')
    line.append('</Row>\n')
    return ''.join(line)


@attrs(auto_attribs=True)
class XmlExport(ExcelExport):
    """Exporter producing Excel's XML Spreadsheet 2003 format with a single worksheet of string cells.

    Every row is turned into markup as soon as it is set, so the exporter only ever holds the text of the
    rows written so far. :func:`show` can be called any number of times.
    """
    worksheet_name: str = DEFAULT_WORKSHEET_NAME
    rows_num: int = attrib(init=False, default=0)
    _datas: List[str] = attrib(init=False, factory=list, repr=False)

    def set_row(self, row: Sequence[Scalar]) -> None:
        cells = row_to_cells(row, self.rows_num + 1)
        self._datas.append(row_markup(cells))
        self.rows_num += 1

    def show(self) -> str:
        logger.debug("Rendering worksheet %r with %d rows", self.worksheet_name, self.rows_num)
        return ''.join([workbook_prefix(self.worksheet_name), *self._datas, TABLE_SUFFIX])


def dumps(rows: Iterable[Sequence[Scalar]], worksheet_name: str = DEFAULT_WORKSHEET_NAME) -> str:
    """Render `rows` as a complete XML Spreadsheet 2003 document."""
    export = XmlExport(worksheet_name)
    for row in rows:
        export.set_row(row)
    return export.show()
