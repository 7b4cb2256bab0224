"""
Batch m/z calculation for peptide tables.

Reads a spreadsheet of (modified) peptide sequences and charge states,
computes m/z and peptide mass for every row, and writes the annotated
table as CSV, styled Excel, and an m/z histogram.
"""

import os

import numpy as np
import pandas as pd

from .excel import _check_header_style, write_excel
from .mass import InvalidChargeError, calculate_mz
from .plots import plot_histogram
from .utils import _create_output_dirs, _load_config


def _read_table(input_file):
    """Read an Excel, CSV or TSV table based on its extension."""
    if not os.path.exists(input_file):
        raise FileNotFoundError(f"Input file not found: {input_file}")

    ext = os.path.splitext(input_file)[1].lower()
    if ext in ('.xlsx', '.xls'):
        return pd.read_excel(input_file)
    if ext in ('.tsv', '.txt'):
        return pd.read_csv(input_file, sep='\t')
    return pd.read_csv(input_file)


def annotate_mz(df, sequence_col, charge_col=None, default_charge=2, strict=False):
    """
    Add m/z and peptide mass columns to a peptide table.

    Parameters
    ----------
    df : pd.DataFrame
        Table with one peptide per row. Not modified.
    sequence_col : str
        Column holding annotated peptide sequences.
    charge_col : str, optional
        Column holding charge states. If None, ``default_charge`` is used
        for every row and written to a ``charge`` column, which must
        not already exist.
    default_charge : int, optional
        Charge used when no charge column is given (default: 2).
    strict : bool, optional
        Propagate InvalidChargeError / UnknownTokenError instead of leaving
        NaN or ignoring unknown tokens (default: False).

    Returns
    -------
    pd.DataFrame
        Copy of df with ``mz`` and ``peptide_mass`` columns. Rows with a
        missing sequence or an invalid charge get NaN.

    Example
    -------
    >>> annotated = annotate_mz(df, 'Modified.Sequence', 'Precursor.Charge')
    """
    if sequence_col not in df.columns:
        raise KeyError(f"Sequence column '{sequence_col}' not found in data")
    if charge_col is not None and charge_col not in df.columns:
        raise KeyError(f"Charge column '{charge_col}' not found in data")
    if charge_col is None and 'charge' in df.columns:
        raise ValueError("Data already has a 'charge' column; pass charge_col='charge' to use it")

    out = df.copy()

    if charge_col is None:
        charges = pd.Series(default_charge, index=out.index)
    else:
        charges = out[charge_col]

    mz_values = []
    masses = []

    for sequence, charge in zip(out[sequence_col], charges):
        if pd.isna(sequence):
            mz_values.append(np.nan)
            masses.append(np.nan)
            continue

        try:
            result = calculate_mz(str(sequence), charge, strict=strict)
        except InvalidChargeError:
            if strict:
                raise
            mz_values.append(np.nan)
            masses.append(np.nan)
            continue

        mz_values.append(result.mz)
        masses.append(result.peptide_mass)

    if charge_col is None:
        out['charge'] = default_charge
    out['mz'] = mz_values
    out['peptide_mass'] = masses

    return out


def mz_table(config_path):
    """
    Compute m/z for every peptide in a spreadsheet described by a YAML config.

    This function:
    1. Loads the YAML configuration file
    2. Reads the peptide table (Excel, CSV or TSV)
    3. Calculates m/z and peptide mass per row
    4. Saves the annotated table as CSV (and styled Excel)
    5. Plots the m/z distribution

    Parameters
    ----------
    config_path : str
        Path to YAML configuration file.

    Returns
    -------
    dict
        Dictionary containing:
        - 'df': pd.DataFrame with mz and peptide_mass columns
        - 'config': loaded configuration dictionary
        - 'metadata': summary counts
        - 'output_dirs': paths to output directories

    Example
    -------
    >>> data = mz_table('config/peptides.yaml')
    >>> data['df'][['Modified.Sequence', 'mz']].head()
    """

    print("\n" + "="*80)
    print("PEPTIDE M/Z TABLE")
    print("="*80)

    config = _load_config(config_path)
    if config['output']['excel']:
        _check_header_style(config['output']['header_style'])

    sequence_col = config['data_columns']['sequence']
    charge_col = config['data_columns'].get('charge')
    strict = bool(config['calculation']['strict'])
    default_charge = config['calculation']['default_charge']

    print(f"\n> Configuration loaded")
    print(f"  Experiment: {config.get('experiment', {}).get('name', 'unnamed')}")
    print(f"  Sequence column: {sequence_col}")
    print(f"  Strict mode: {strict}")

    # =========================================================================
    # 1. LOAD PEPTIDE TABLE
    # =========================================================================
    print(f"\n[1/5] Loading peptide table...")

    input_file = config['data_paths']['input_file']
    df = _read_table(input_file)
    print(f"  > Loaded {df.shape[0]} peptides, {df.shape[1]} columns")

    if charge_col is not None and charge_col not in df.columns:
        print(f"  Warning: Charge column '{charge_col}' not found, "
              f"using charge {default_charge} for all peptides")
        charge_col = None

    # =========================================================================
    # 2. CALCULATE M/Z
    # =========================================================================
    print(f"\n[2/5] Calculating m/z...")

    df = annotate_mz(df, sequence_col, charge_col=charge_col,
                     default_charge=default_charge, strict=strict)

    n_invalid = int(df['mz'].isna().sum())
    n_valid = len(df) - n_invalid
    print(f"  > Calculated m/z for {n_valid} peptides")
    if n_invalid > 0:
        print(f"  Warning: {n_invalid} peptides have a missing sequence or invalid charge (left empty)")

    # =========================================================================
    # 3. SAVE CSV
    # =========================================================================
    print(f"\n[3/5] Saving results...")

    output_dir = config['data_paths']['output_dir']
    output_dirs = _create_output_dirs(output_dir)

    csv_path = os.path.join(output_dirs['tables'], 'peptide_mz.csv')
    df.to_csv(csv_path, index=False)
    print(f"  > Saved: peptide_mz.csv")
    print(f"    Location: {output_dirs['tables']}")

    # =========================================================================
    # 4. SAVE EXCEL
    # =========================================================================
    print(f"\n[4/5] Writing Excel report...")

    if config['output']['excel']:
        xlsx_path = os.path.join(output_dirs['tables'], 'peptide_mz.xlsx')
        write_excel(df, xlsx_path, sheet_name='peptide_mz',
                    header_style=config['output']['header_style'])
    else:
        print(f"  Excel output disabled, skipping")

    # =========================================================================
    # 5. M/Z DISTRIBUTION
    # =========================================================================
    print(f"\n[5/5] Plotting m/z distribution...")

    if config['output']['histogram'] and n_valid > 0:
        hist_path = os.path.join(output_dirs['figures'], 'mz_histogram.png')
        plot_histogram(df, 'mz', 'm/z', 'Peptides', 'Precursor m/z distribution', hist_path)
        print(f"  > Saved: mz_histogram.png")
    else:
        print(f"  Histogram disabled or no valid m/z values, skipping")

    # =========================================================================
    # 6. METADATA
    # =========================================================================
    charge_values = df['charge'] if charge_col is None else df[charge_col]
    charge_values = pd.to_numeric(charge_values, errors='coerce').dropna()

    metadata = {
        'n_peptides': len(df),
        'n_valid': n_valid,
        'n_invalid': n_invalid,
        'charge_counts': {
            int(k): int(v) for k, v in charge_values.value_counts().sort_index().items()
            if float(k).is_integer()
        },
        'mz_range': (
            (float(df['mz'].min()), float(df['mz'].max())) if n_valid > 0 else None
        ),
    }

    print("\n" + "="*80)
    print("M/Z TABLE COMPLETE")
    print("="*80)
    print(f"\nPeptides:                {metadata['n_peptides']}")
    print(f"With m/z:                {metadata['n_valid']}")
    if metadata['mz_range'] is not None:
        low, high = metadata['mz_range']
        print(f"m/z range:               {low:.4f} - {high:.4f}")
    print("\n" + "="*80 + "\n")

    return {
        'df': df,
        'config': config,
        'metadata': metadata,
        'output_dirs': output_dirs
    }
