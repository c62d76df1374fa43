import logging
from io import BytesIO, StringIO
from typing import List, Tuple, Union
from warnings import warn
from xml.etree.ElementTree import Element, ParseError, iterparse

from attr import attrib, attrs

from .base import EXCEL_COL_MAX, ExcelImport, Row
from .errors import MalformedDocumentError, RowOutOfRangeError, StructureError
from .namespaces import NamespaceMap, doc_namespaces, local_name

logger = logging.getLogger(__name__)

WorksheetSelector = Union[None, str, int]


def parse_document(source: Union[str, bytes]) -> Tuple[Element, NamespaceMap]:
    """Parse `source` into its root element and the namespace mapping declared by the document.

    CDATA sections come back as ordinary character data, so quoted and unquoted cell text read the same."""
    stream = BytesIO(source) if isinstance(source, bytes) else StringIO(source)
    declarations = []
    root = None

    try:
        for event, item in iterparse(stream, events=('start-ns', 'start')):
            if event == 'start-ns':
                declarations.append(item)
            elif root is None:
                root = item
    except ParseError as e:
        line, column = e.position
        raise MalformedDocumentError(f'Document is not well-formed XML: {e}', line, column) from e

    return root, NamespaceMap(doc_namespaces(declarations))


@attrs(auto_attribs=True)
class XmlImport(ExcelImport):
    """Importer for Excel's XML Spreadsheet 2003 format.

    Rows are decoded lazily on :func:`get_row`; after :func:`load_string` only the row elements of the
    selected worksheet and the document's namespace mapping are kept around.

    Parameters:
        worksheet:
            Which worksheet to read. None picks the first one, a string picks the worksheet by its ``ss:Name``
            and an integer picks it by its zero-based position in the workbook.
    """
    worksheet: WorksheetSelector = None
    rows_num: int = attrib(init=False, default=0)
    sheet_names: List[str] = attrib(init=False, factory=list)
    _source: List[Element] = attrib(init=False, factory=list, repr=False)
    _ns: NamespaceMap = attrib(init=False, factory=NamespaceMap, repr=False)

    def load_string(self, source: Union[str, bytes]) -> 'XmlImport':
        root, ns = parse_document(source)

        worksheets = ns.findall(root, 'Worksheet')
        if not worksheets:
            raise StructureError('Document has no Worksheet', element=local_name(root.tag))

        worksheet = self._select_worksheet(worksheets, ns)
        table = ns.find(worksheet, 'Table')
        if table is None:
            raise StructureError('Worksheet has no Table', element='Worksheet', value=ns.attr(worksheet, 'Name'))

        self.sheet_names = [ns.attr(sheet, 'Name', '') for sheet in worksheets]
        self._source = ns.findall(table, 'Row')
        self._ns = ns
        self.rows_num = len(self._source)

        logger.debug(
            "Loaded worksheet %r with %d rows, spreadsheet namespace %s",
            ns.attr(worksheet, 'Name'), self.rows_num, ns.ss
        )
        return self

    def _select_worksheet(self, worksheets: List[Element], ns: NamespaceMap) -> Element:
        selector = self.worksheet

        if selector is None:
            if len(worksheets) > 1:
                warn(f"Document has {len(worksheets)} worksheets, only the first one will be read.")
            return worksheets[0]

        if isinstance(selector, str):
            for worksheet in worksheets:
                if ns.attr(worksheet, 'Name') == selector:
                    return worksheet
            raise StructureError(f'Worksheet {selector!r} does not exist', element='Worksheet', value=selector)

        if isinstance(selector, bool) or not isinstance(selector, int):
            raise StructureError(
                f'Worksheet must be selected by name or position, got {type(selector).__name__}',
                element='Worksheet',
                value=selector
            )

        if 0 <= selector < len(worksheets):
            return worksheets[selector]
        raise StructureError(
            f'Worksheet #{selector} does not exist, document has {len(worksheets)} worksheets',
            element='Worksheet',
            value=selector
        )

    def get_row(self, num: int) -> Row:
        if isinstance(num, bool) or not isinstance(num, int):
            raise RowOutOfRangeError(f'Row ({num!r}) is not a row number', num, self.rows_num)
        if num > self.rows_num or num <= 0:
            raise RowOutOfRangeError(f'Row ({num}) does not exist', num, self.rows_num)

        return self._row_to_list(self._source[num - 1], num)

    def _row_to_list(self, row: Element, row_num: int) -> Row:
        ns = self._ns
        result = []

        for cell in ns.findall(row, 'Cell'):
            # Excel leaves out runs of empty cells; the next cell then states its column in ss:Index
            index = ns.attr(cell, 'Index')
            if index is not None:
                col_num = self._column_num(index, row_num, len(result))
                result.extend([''] * (col_num - 1 - len(result)))

            # Data may be prefixed and may wrap html formatting such as <B> or <Font>
            data = ns.find(cell, 'Data')
            result.append('' if data is None else ''.join(data.itertext()))

        return result

    @staticmethod
    def _column_num(index: str, row_num: int, filled: int) -> int:
        try:
            col_num = int(index)
        except ValueError as e:
            raise StructureError(
                'Cell has a non-integer Index', row_num=row_num, col_num=filled + 1, element='Cell', value=index
            ) from e

        if col_num <= filled:
            raise StructureError(
                f'Cell Index {col_num} does not advance past column {filled}',
                row_num=row_num,
                col_num=filled + 1,
                element='Cell',
                value=index
            )

        if col_num > EXCEL_COL_MAX:
            raise StructureError(
                f'Cell Index {col_num} is past the last Excel column {EXCEL_COL_MAX}',
                row_num=row_num,
                col_num=filled + 1,
                element='Cell',
                value=index
            )
        return col_num


def load(source: Union[str, bytes], worksheet: WorksheetSelector = None) -> Tuple[XmlImport, int]:
    """Parse `source` and return the lazy row sequence along with the number of rows in it."""
    rows = XmlImport(worksheet).load_string(source)
    return rows, rows.rows_num
