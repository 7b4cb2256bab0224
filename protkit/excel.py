"""
Publication-ready Excel export.

Writes DataFrames to XLSX with a styled header row, bordered data cells,
auto-sized columns, a frozen header and auto-filters.
"""

import os

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter


HEADER_FILLS = {
    'blue_bg': '4F81BD',
    'green_bg': '4CAF50',
    'dark_grey_bg': '636363',
}

_MAX_COL_WIDTH = 70
_MAX_SHEET_NAME = 31


def _check_header_style(header_style):
    """Raise ValueError for a header style without a fill colour."""
    if header_style not in HEADER_FILLS:
        raise ValueError(
            f"Unknown header style '{header_style}'. "
            f"Choose one of: {', '.join(HEADER_FILLS)}"
        )


def _unique_sheet_names(names):
    """Truncate to Excel's 31 characters and suffix duplicates with _1, _2..."""
    used = set()
    unique = []
    for name in names:
        base = str(name)[:_MAX_SHEET_NAME]
        candidate = base
        n = 0
        # Excel compares sheet names case-insensitively
        while candidate.lower() in used:
            n += 1
            suffix = f"_{n}"
            candidate = base[:_MAX_SHEET_NAME - len(suffix)] + suffix
        used.add(candidate.lower())
        unique.append(candidate)
    return unique


def _column_width(series, header):
    """Width from the longest formatted value, capped for text columns."""
    if pd.api.types.is_numeric_dtype(series):
        lengths = series.map(lambda v: len(f"{v:.10g}") if pd.notna(v) else 0)
        width = (lengths.max() if len(lengths) else 0) * 1.3
    else:
        lengths = series.astype(str).str.len()
        width = (lengths.max() if len(lengths) else 0) * 1.3
        width = min(width, _MAX_COL_WIDTH)
    return max(width, len(str(header)) + 2)


def _style_sheet(ws, df, header_style):
    n_rows, n_cols = df.shape
    if n_cols == 0:
        return

    fill_color = HEADER_FILLS[header_style]
    header_fill = PatternFill(start_color=fill_color, end_color=fill_color, fill_type='solid')
    header_font = Font(bold=True, color='FFFFFF', size=14)
    header_align = Alignment(horizontal='center', vertical='center')

    grey = Side(style='thin', color='808080')
    border = Border(left=grey, right=grey, top=grey, bottom=grey)
    data_font = Font(size=11)

    for cell in ws[1][:n_cols]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = header_align
    ws.row_dimensions[1].height = 20

    for row in ws.iter_rows(min_row=2, max_row=n_rows + 1, max_col=n_cols):
        for cell in row:
            cell.border = border
            cell.font = data_font

    for idx, col in enumerate(df.columns, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = _column_width(df[col], col)

    ws.freeze_panes = 'A2'
    ws.auto_filter.ref = f"A1:{get_column_letter(n_cols)}{n_rows + 1}"


def write_excel_multi(dataframes, file_path, sheet_names=None, header_style='dark_grey_bg'):
    """
    Write several DataFrames to one styled Excel workbook.

    Parameters
    ----------
    dataframes : dict or list of pd.DataFrame
        Tables to write. Dict keys are used as sheet names.
    file_path : str
        Output .xlsx path. Overwritten if it exists.
    sheet_names : list of str, optional
        Sheet names, in order. Missing names default to ``Sheet<i>``.
        Names are cut to 31 characters and duplicates get ``_1``, ``_2``
        suffixes.
    header_style : str, optional
        One of 'blue_bg', 'green_bg', 'dark_grey_bg' (default).

    Returns
    -------
    str
        Path of the written workbook.

    Example
    -------
    >>> write_excel_multi({'Peptides': peptides, 'Proteins': proteins},
    ...                   'res/tables/summary.xlsx', header_style='green_bg')
    """
    _check_header_style(header_style)

    if isinstance(dataframes, dict):
        if sheet_names is None:
            sheet_names = list(dataframes.keys())
        dataframes = list(dataframes.values())

    dataframes = list(dataframes)
    sheet_names = list(sheet_names or [])
    names = _unique_sheet_names([
        sheet_names[i] if i < len(sheet_names) else f"Sheet{i + 1}"
        for i in range(len(dataframes))
    ])

    out_dir = os.path.dirname(file_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    with pd.ExcelWriter(file_path, engine='openpyxl') as writer:
        for name, df in zip(names, dataframes):
            df.to_excel(writer, sheet_name=name, index=False)
            _style_sheet(writer.sheets[name], df, header_style)

    print(f"  > Saved: {os.path.basename(file_path)} ({len(dataframes)} sheet(s))")

    return file_path


def write_excel(df, file_path, sheet_name='Sheet1', header_style='blue_bg'):
    """
    Write a DataFrame to a styled, publication-ready Excel file.

    Parameters
    ----------
    df : pd.DataFrame
        Table to write.
    file_path : str
        Output .xlsx path.
    sheet_name : str, optional
        Worksheet name (default: 'Sheet1').
    header_style : str, optional
        Header colour scheme (default: 'blue_bg').

    Returns
    -------
    str
        Path of the written workbook.
    """
    return write_excel_multi([df], file_path, sheet_names=[sheet_name],
                             header_style=header_style)
