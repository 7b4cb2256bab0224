"""
protkit
=======

Helpers for proteomics data analysis, built around a peptide m/z calculator.

Main Functions
--------------
calculate_mz()        - m/z and total mass of an annotated peptide
calculate_mz_range()  - m/z over a range of charge states
parse_peptide()       - Split a sequence into residues and UniMod ids
strip_modifications() - Remove (UniMod:...) annotations
annotate_mz()         - Add m/z columns to a peptide DataFrame
mz_table()            - Batch m/z for a spreadsheet described by a YAML config
log2_transform()      - Log2 transform selected columns
normalize_zscore()    - Z-score normalize selected columns
make_friendly_names() - Clean column names into identifiers
write_excel()         - Styled single-sheet Excel export
write_excel_multi()   - Styled multi-sheet Excel export
plot_histogram()      - Journal-style histogram
setup_project()       - Create data/, res/, doc/, pub/ folders

Example Workflow
----------------
>>> from protkit import calculate_mz, mz_table
>>>
>>> result = calculate_mz("AC(UniMod:4)EFAGFQC(UniMod:4)QIQFGPHNEQK", 2)
>>> round(result.mz, 4)
1189.5257
>>> data = mz_table('config/peptides.yaml')
"""

from .mass import (
    MODIFICATION_MASSES,
    PROTON_MASS,
    RESIDUE_MASSES,
    InvalidChargeError,
    MassResult,
    UnknownTokenError,
    calculate_mz,
    calculate_mz_range,
    parse_peptide,
    strip_modifications,
)
from .batch import annotate_mz, mz_table
from .transform import log2_transform, normalize_zscore, make_friendly_names
from .excel import write_excel, write_excel_multi
from .plots import plot_histogram
from .utils import setup_project


__version__ = "0.1.0"

__all__ = [
    'MODIFICATION_MASSES',
    'PROTON_MASS',
    'RESIDUE_MASSES',
    'InvalidChargeError',
    'MassResult',
    'UnknownTokenError',
    'calculate_mz',
    'calculate_mz_range',
    'parse_peptide',
    'strip_modifications',
    'annotate_mz',
    'mz_table',
    'log2_transform',
    'normalize_zscore',
    'make_friendly_names',
    'write_excel',
    'write_excel_multi',
    'plot_histogram',
    'setup_project',
]
