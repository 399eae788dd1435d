"""Loader for Excel files (.xlsx, .xls).

Spreadsheets are flattened to comma-delimited text so they reach the
record parser in the same shape as a curve tracer CSV export.
"""

import io
import logging
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from ..exceptions import FileUnreadableError
from .base_loader import BaseLoader

logger = logging.getLogger(__name__)


class XlsxLoader(BaseLoader):
    """Load Excel workbooks exported from curve tracers and analysis tools."""

    def __init__(self,
                 file_path: Union[str, Path],
                 data: Optional[bytes] = None,
                 sheet_name: Optional[str] = None):
        super().__init__(file_path, data)
        self.sheet_name = sheet_name

    def read_text(self) -> str:
        """Convert the selected sheet (first sheet by default) to CSV text.

        The sheet's first row is kept as the header line discarded by the
        parser. Data cells are written as plain numbers, never quoted.

        Raises:
            FileUnreadableError: if the workbook cannot be read
            ImportError: if the Excel engine for this format is not installed
        """
        source = io.BytesIO(self.read_bytes())
        sheet = self.sheet_name if self.sheet_name is not None else 0
        try:
            df = pd.read_excel(source, sheet_name=sheet, header=None, dtype=str)
        except ImportError:
            # Missing engine (openpyxl/xlrd) is an installation problem
            raise
        except Exception as e:
            # openpyxl/xlrd raise a variety of errors for corrupt containers
            raise FileUnreadableError(self.name, f"cannot read spreadsheet ({e})") from e

        # Header text is discarded by the parser but must stay on one unquoted line
        header = df.iloc[:1].replace(r'[,\r\n"]', ' ', regex=True)
        data = self._numeric_rows(df.iloc[1:])

        logger.debug("%s: sheet %r has %d rows", self.name, sheet, len(data) + len(header))
        return pd.concat([header, data]).to_csv(
            index=False, header=False, na_rep='', lineterminator='\n'
        )

    def _numeric_rows(self, rows: pd.DataFrame) -> pd.DataFrame:
        """Coerce data rows to numbers so every cell is written unquoted.

        Text cells (e.g. decimal-comma "1,5") become empty and are then
        handled by the parser's empty-cell rules. Blank rows are dropped.
        """
        rows = rows.dropna(how='all')
        numeric = rows.apply(pd.to_numeric, errors='coerce')

        blanked = int((rows.notna() & numeric.isna()).to_numpy().sum())
        if blanked:
            logger.warning("%s: %d non-numeric cells left empty", self.name, blanked)
        return numeric

    def list_sheets(self) -> List[str]:
        """List all sheet names in Excel file."""
        try:
            xl_file = pd.ExcelFile(io.BytesIO(self.read_bytes()))
        except ImportError:
            raise
        except Exception as e:
            raise FileUnreadableError(self.name, f"cannot read spreadsheet ({e})") from e
        return xl_file.sheet_names
