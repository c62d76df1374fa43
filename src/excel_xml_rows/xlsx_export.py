import logging
from io import BytesIO
from typing import Optional, Sequence

from attr import attrib, attrs
from xlsxwriter import Workbook
from xlsxwriter.worksheet import Worksheet

from .base import ExcelExport, Scalar, row_to_cells
from .errors import ExportClosedError, InvalidRowError
from .xml_export import DEFAULT_WORKSHEET_NAME

logger = logging.getLogger(__name__)


@attrs(auto_attribs=True)
class XlsxExport(ExcelExport):
    """Exporter producing an Office Open XML workbook (.xlsx) through XlsxWriter.

    Rows are streamed to XlsxWriter in ``constant_memory`` mode, which only accepts rows in increasing
    order and so fits the append-only exporter contract. :func:`show` finalizes the workbook, after which
    no more rows can be set."""
    worksheet_name: str = DEFAULT_WORKSHEET_NAME
    rows_num: int = attrib(init=False, default=0)
    _dump: BytesIO = attrib(init=False, factory=BytesIO, repr=False)
    wb: Workbook = attrib(init=False, repr=False)
    ws: Worksheet = attrib(init=False, repr=False)
    _result: Optional[bytes] = attrib(init=False, default=None, repr=False)

    def __attrs_post_init__(self):
        self.wb = Workbook(self._dump, {'constant_memory': True})
        self.ws = self.wb.add_worksheet(self.worksheet_name)

    def set_row(self, row: Sequence[Scalar]) -> None:
        if self._result is not None:
            raise ExportClosedError('Workbook has already been shown, no more rows can be set')

        row_num = self.rows_num + 1
        cells = row_to_cells(row, row_num)

        # Validate the whole row first, XlsxWriter keeps whatever was written before a failing cell
        if row_num > self.ws.xls_rowmax:
            raise InvalidRowError(
                f'Write failed because the sheet already holds {self.ws.xls_rowmax} rows', row_num=row_num
            )
        if len(cells) > self.ws.xls_colmax:
            raise InvalidRowError(
                f'Write failed because the row has more than {self.ws.xls_colmax} cells',
                row_num=row_num,
                col_num=self.ws.xls_colmax + 1
            )
        for col, cell in enumerate(cells):
            if len(cell) > self.ws.xls_strmax:
                raise InvalidRowError(
                    'Write failed because the string is longer than 32k characters', row_num=row_num, col_num=col + 1
                )

        for col, cell in enumerate(cells):
            self.ws.write_string(self.rows_num, col, cell)

        self.rows_num += 1

    def show(self) -> bytes:
        if self._result is None:
            logger.debug("Closing xlsx workbook %r with %d rows", self.worksheet_name, self.rows_num)
            self.wb.close()
            self._result = self._dump.getvalue()
        return self._result
