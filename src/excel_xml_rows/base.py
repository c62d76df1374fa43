import re
from abc import abstractmethod
from numbers import Number
from pathlib import Path
from typing import Any, Iterator, List, Optional, Sequence, Union

from .errors import InvalidRowError

Row = List[str]
Scalar = Union[str, Number, bool, None]

# 2^14 is the Excel limit for the amount of columns.
EXCEL_COL_MAX = 2 ** 14

# Characters outside of the XML 1.0 Char production cannot appear in a document, escaped or not
re_xml_illegal = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


class ExcelImport(object):
    """Importers turn a spreadsheet document into rows of string cells, addressed with 1-based row numbers."""
    rows_num: int = 0

    @abstractmethod
    def load_string(self, source: Union[str, bytes]) -> 'ExcelImport':
        """Parse `source` and make its rows available through :func:`get_row`."""
        raise NotImplementedError

    def load_file(self, source_file: Union[str, Path]) -> 'ExcelImport':
        """Read `source_file` from disk and :func:`load_string` its contents."""
        return self.load_string(Path(source_file).read_bytes())

    @abstractmethod
    def get_row(self, num: int) -> Row:
        """Decode the row numbered `num`, counting from 1."""
        raise NotImplementedError

    def rows(self) -> Iterator[Row]:
        for num in range(1, self.rows_num + 1):
            yield self.get_row(num)

    def __iter__(self) -> Iterator[Row]:
        return self.rows()

    def __len__(self) -> int:
        return self.rows_num


class ExcelExport(object):
    """Exporters accumulate rows of cells in call order and produce a complete document on :func:`show`."""
    rows_num: int = 0

    @abstractmethod
    def set_row(self, row: Sequence[Scalar]) -> None:
        """Append `row` after every row set so far."""
        raise NotImplementedError

    @abstractmethod
    def show(self) -> Union[str, bytes]:
        """Produce the complete document."""
        raise NotImplementedError

    def append_row(self, row: Sequence[Scalar]) -> None:
        self.set_row(row)

    def render(self) -> Union[str, bytes]:
        return self.show()


def row_to_cells(row: Any, row_num: Optional[int] = None) -> Row:
    """Validate that `row` is a flat sequence of scalars and convert every cell to its string value.

    `None` becomes the empty string, any other scalar goes through `str`. Text holding control characters that XML 1.0
    forbids is rejected."""
    if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
        raise InvalidRowError(f'Row must be a sequence of cells, got {type(row).__name__}', row_num=row_num, value=row)

    cells = []
    for col_num, cell in enumerate(row, 1):
        if cell is None:
            cells.append('')
        elif isinstance(cell, (str, Number)):
            text = str(cell)
            illegal = re_xml_illegal.search(text)
            if illegal:
                raise InvalidRowError(
                    f"Cell contains character {illegal.group()!r} which is not allowed in XML",
                    row_num=row_num,
                    col_num=col_num,
                    value=cell
                )
            cells.append(text)
        else:
            raise InvalidRowError(
                f'Cell must be a scalar value, got {type(cell).__name__}',
                row_num=row_num,
                col_num=col_num,
                value=cell
            )
    return cells
